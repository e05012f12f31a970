import sys
import os
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import (
    ClientAccount,
    DisputeStatus,
    ProcessingStats,
    Transaction,
    TransactionRecord,
    TransactionType,
)


class TestTransaction:
    def test_create_deposit(self):
        transaction = Transaction(
            transaction_type=TransactionType.DEPOSIT,
            client_id=1,
            transaction_id=1,
            amount=Decimal("100.0"),
        )
        assert transaction.transaction_type == TransactionType.DEPOSIT
        assert transaction.client_id == 1
        assert transaction.transaction_id == 1
        assert transaction.amount == Decimal("100.0")

    def test_create_dispute_no_amount(self):
        transaction = Transaction(
            transaction_type=TransactionType.DISPUTE,
            client_id=1,
            transaction_id=1,
        )
        assert transaction.amount is None


class TestClientAccount:
    def test_default_values(self):
        account = ClientAccount(client_id=1)
        assert account.available == Decimal("0")
        assert account.held == Decimal("0")
        assert account.locked is False

    def test_total_property(self):
        account = ClientAccount(
            client_id=1,
            available=Decimal("100"),
            held=Decimal("50"),
        )
        assert account.total == Decimal("150")

    def test_hold_and_release_keep_total(self):
        account = ClientAccount(client_id=1, available=Decimal("10"))
        account.hold(Decimal("4"))
        assert account.available == Decimal("6")
        assert account.held == Decimal("4")
        assert account.total == Decimal("10")

        account.release_hold(Decimal("4"))
        assert account.available == Decimal("10")
        assert account.held == Decimal("0")

    def test_remove_held_reduces_total(self):
        account = ClientAccount(client_id=1, available=Decimal("10"))
        account.hold(Decimal("4"))
        account.remove_held(Decimal("4"))
        assert account.total == Decimal("6")

    def test_is_consistent(self):
        assert ClientAccount(client_id=1).is_consistent()
        assert not ClientAccount(client_id=1, available=Decimal("-1")).is_consistent()


class TestTransactionRecord:
    def _record(self):
        return TransactionRecord(
            transaction_id=1,
            client_id=1,
            transaction_type=TransactionType.DEPOSIT,
            amount=Decimal("5"),
        )

    def test_starts_normal(self):
        assert self._record().status == DisputeStatus.NORMAL

    def test_forward_transitions(self):
        record = self._record()
        record.transition_to(DisputeStatus.DISPUTED)
        record.transition_to(DisputeStatus.CHARGED_BACK)
        assert record.status == DisputeStatus.CHARGED_BACK

    @pytest.mark.parametrize("terminal", [DisputeStatus.RESOLVED, DisputeStatus.CHARGED_BACK])
    def test_terminal_states_cannot_be_disputed(self, terminal):
        record = self._record()
        record.transition_to(DisputeStatus.DISPUTED)
        record.transition_to(terminal)
        assert not record.can_transition_to(DisputeStatus.DISPUTED)

    def test_out_of_order_transition_raises(self):
        record = self._record()
        with pytest.raises(ValueError):
            record.transition_to(DisputeStatus.RESOLVED)
        assert record.status == DisputeStatus.NORMAL


class TestProcessingStats:
    def test_summary_groups_failures(self):
        stats = ProcessingStats()
        stats.record_success()
        stats.record_failure("InsufficientFunds")
        stats.record_failure("InsufficientFunds")
        stats.record_failure("AccountLocked")

        assert stats.processed == 1
        assert stats.failed == 3
        assert stats.summary() == (
            "Processed: 1, Failed: 3, Skipped rows: 0 (AccountLocked=1, InsufficientFunds=2)"
        )
