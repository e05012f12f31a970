"""
Rejection errors raised by the ledger engine.

Every error here is per-record: the record is dropped, account state is left
untouched, and the caller is free to carry on with the next record.

    LedgerError (base)
    ├── DuplicateTransactionId  deposit/withdrawal reusing a known tx id
    ├── InvalidAmount           missing, zero or negative amount
    ├── AccountLocked           deposit/withdrawal on a charged-back account
    ├── InsufficientFunds       not enough available funds to move
    ├── UnknownTransaction      dispute/resolve/chargeback for an unknown tx id
    ├── ClientMismatch          referenced tx belongs to another client
    └── InvalidDisputeState     dispute lifecycle step out of order
"""

from decimal import Decimal
from typing import Optional

from models import DisputeStatus, TransactionType


class LedgerError(Exception):
    """Base exception for all rejected records."""

    def __init__(self, client_id: int, transaction_id: int, detail: str):
        self.client_id = client_id
        self.transaction_id = transaction_id
        self.detail = detail
        super().__init__(f"client {client_id}, tx {transaction_id}: {detail}")

    @property
    def kind(self) -> str:
        return type(self).__name__


class DuplicateTransactionId(LedgerError):
    def __init__(self, client_id: int, transaction_id: int):
        super().__init__(client_id, transaction_id, "duplicate transaction id")


class InvalidAmount(LedgerError):
    def __init__(self, client_id: int, transaction_id: int, amount: Optional[Decimal]):
        self.amount = amount
        if amount is None:
            detail = "an amount is required but none was provided"
        else:
            detail = f"amount must be positive, got {amount}"
        super().__init__(client_id, transaction_id, detail)


class AccountLocked(LedgerError):
    def __init__(self, client_id: int, transaction_id: int, transaction_type: TransactionType):
        self.transaction_type = transaction_type
        super().__init__(client_id, transaction_id, f"account is locked, {transaction_type.value} refused")


class InsufficientFunds(LedgerError):
    """
    Attributes:
        requested: The amount the record tried to move out of available.
        available: The available balance at the time of the attempt.
    """

    def __init__(self, client_id: int, transaction_id: int, requested: Decimal, available: Decimal):
        self.requested = requested
        self.available = available
        super().__init__(
            client_id,
            transaction_id,
            f"insufficient funds, wanted={requested} had={available}",
        )


class UnknownTransaction(LedgerError):
    def __init__(self, client_id: int, transaction_id: int):
        super().__init__(client_id, transaction_id, "no such transaction")


class ClientMismatch(LedgerError):
    def __init__(self, client_id: int, transaction_id: int, owner_id: int):
        self.owner_id = owner_id
        super().__init__(client_id, transaction_id, f"transaction belongs to client {owner_id}")


class InvalidDisputeState(LedgerError):
    def __init__(
        self,
        client_id: int,
        transaction_id: int,
        current: DisputeStatus,
        requested: DisputeStatus,
    ):
        self.current = current
        self.requested = requested
        super().__init__(
            client_id,
            transaction_id,
            f"cannot move transaction from {current.value} to {requested.value}",
        )
