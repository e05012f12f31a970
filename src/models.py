from collections import Counter
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class DisputeStatus(Enum):
    NORMAL = "normal"
    DISPUTED = "disputed"
    RESOLVED = "resolved"
    CHARGED_BACK = "charged_back"


# RESOLVED and CHARGED_BACK are terminal.
ALLOWED_TRANSITIONS = {
    DisputeStatus.NORMAL: {DisputeStatus.DISPUTED},
    DisputeStatus.DISPUTED: {DisputeStatus.RESOLVED, DisputeStatus.CHARGED_BACK},
    DisputeStatus.RESOLVED: set(),
    DisputeStatus.CHARGED_BACK: set(),
}


@dataclass
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class TransactionRecord:
    """History entry for an accepted deposit or withdrawal."""

    transaction_id: int
    client_id: int
    transaction_type: TransactionType
    amount: Decimal
    status: DisputeStatus = DisputeStatus.NORMAL

    def can_transition_to(self, status: DisputeStatus) -> bool:
        return status in ALLOWED_TRANSITIONS[self.status]

    def transition_to(self, status: DisputeStatus) -> None:
        if not self.can_transition_to(status):
            raise ValueError(f"tx {self.transaction_id}: cannot move from {self.status.value} to {status.value}")
        self.status = status


@dataclass
class ClientAccount:
    client_id: int
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")
    locked: bool = False

    @property
    def total(self) -> Decimal:
        return self.available + self.held

    def credit(self, amount: Decimal) -> None:
        self.available += amount

    def debit(self, amount: Decimal) -> None:
        self.available -= amount

    def hold(self, amount: Decimal) -> None:
        self.available -= amount
        self.held += amount

    def release_hold(self, amount: Decimal) -> None:
        self.held -= amount
        self.available += amount

    def remove_held(self, amount: Decimal) -> None:
        self.held -= amount

    def lock(self) -> None:
        self.locked = True

    def is_consistent(self) -> bool:
        """Neither balance has gone negative."""
        return self.available >= 0 and self.held >= 0


class ProcessingStats:
    """Counters for applied and rejected records, rejections grouped by error kind."""

    def __init__(self):
        self.processed = 0
        self.failed = 0
        self.skipped_rows = 0
        self.failures_by_kind: Counter = Counter()

    def record_success(self):
        self.processed += 1

    def record_failure(self, kind: str):
        self.failed += 1
        self.failures_by_kind[kind] += 1

    def record_skipped_row(self):
        self.skipped_rows += 1

    def summary(self) -> str:
        line = f"Processed: {self.processed}, Failed: {self.failed}, Skipped rows: {self.skipped_rows}"
        if self.failures_by_kind:
            breakdown = ", ".join(f"{kind}={count}" for kind, count in sorted(self.failures_by_kind.items()))
            line += f" ({breakdown})"
        return line
