import logging
from typing import List

from errors import (
    AccountLocked,
    ClientMismatch,
    DuplicateTransactionId,
    InsufficientFunds,
    InvalidAmount,
    InvalidDisputeState,
    UnknownTransaction,
)
from models import (
    ClientAccount,
    DisputeStatus,
    Transaction,
    TransactionRecord,
    TransactionType,
)
from state_manager import StateManager

logger = logging.getLogger(__name__)


class LedgerEngine:
    """
    Applies transactions to client accounts one at a time, in order.

    apply() raises a LedgerError subclass when a record is rejected. A
    rejected record leaves every balance and dispute status as it was, so the
    caller can log the error and move on to the next record.
    """

    def __init__(self, state: StateManager = None):
        self._state = state if state is not None else StateManager()

    @property
    def state(self) -> StateManager:
        return self._state

    def apply(self, transaction: Transaction) -> None:
        account = self._state.get_or_create_account(transaction.client_id)

        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                self._handle_deposit(account, transaction)
            case TransactionType.WITHDRAWAL:
                self._handle_withdrawal(account, transaction)
            case TransactionType.DISPUTE:
                self._handle_dispute(account, transaction)
            case TransactionType.RESOLVE:
                self._handle_resolve(account, transaction)
            case TransactionType.CHARGEBACK:
                self._handle_chargeback(account, transaction)

    def snapshot(self) -> List[ClientAccount]:
        """
        Current accounts ordered by client id.

        These are the live account objects, not copies; do not mutate them
        between apply() calls.
        """
        accounts = self._state.get_all_accounts()
        return [accounts[client_id] for client_id in sorted(accounts)]

    def _check_new_funds_movement(self, account: ClientAccount, transaction: Transaction) -> None:
        if self._state.has_transaction(transaction.transaction_id):
            raise DuplicateTransactionId(transaction.client_id, transaction.transaction_id)

        if transaction.amount is None or transaction.amount <= 0:
            raise InvalidAmount(transaction.client_id, transaction.transaction_id, transaction.amount)

        if account.locked:
            raise AccountLocked(transaction.client_id, transaction.transaction_id, transaction.transaction_type)

    def _record(self, transaction: Transaction) -> None:
        self._state.store_transaction(
            TransactionRecord(
                transaction_id=transaction.transaction_id,
                client_id=transaction.client_id,
                transaction_type=transaction.transaction_type,
                amount=transaction.amount,
            )
        )

    def _handle_deposit(self, account: ClientAccount, transaction: Transaction) -> None:
        self._check_new_funds_movement(account, transaction)

        self._record(transaction)
        account.credit(transaction.amount)

    def _handle_withdrawal(self, account: ClientAccount, transaction: Transaction) -> None:
        self._check_new_funds_movement(account, transaction)

        if account.available < transaction.amount:
            raise InsufficientFunds(
                transaction.client_id, transaction.transaction_id, transaction.amount, account.available
            )

        self._record(transaction)
        account.debit(transaction.amount)

    def _lookup_disputable(self, transaction: Transaction, target: DisputeStatus) -> TransactionRecord:
        """Find the referenced history entry and check it may move to target."""
        original = self._state.get_transaction(transaction.transaction_id)

        if original is None:
            raise UnknownTransaction(transaction.client_id, transaction.transaction_id)

        if original.client_id != transaction.client_id:
            raise ClientMismatch(transaction.client_id, transaction.transaction_id, original.client_id)

        if not original.can_transition_to(target):
            raise InvalidDisputeState(transaction.client_id, transaction.transaction_id, original.status, target)

        return original

    def _handle_dispute(self, account: ClientAccount, transaction: Transaction) -> None:
        # Withdrawals are disputable too, but only while available still covers the
        # amount: the hold comes out of available either way. A client who withdrew
        # everything cannot dispute that withdrawal; it fails with InsufficientFunds.
        original = self._lookup_disputable(transaction, DisputeStatus.DISPUTED)

        if account.available < original.amount:
            raise InsufficientFunds(
                transaction.client_id, transaction.transaction_id, original.amount, account.available
            )

        account.hold(original.amount)
        original.transition_to(DisputeStatus.DISPUTED)

    def _handle_resolve(self, account: ClientAccount, transaction: Transaction) -> None:
        original = self._lookup_disputable(transaction, DisputeStatus.RESOLVED)

        account.release_hold(original.amount)
        original.transition_to(DisputeStatus.RESOLVED)

    def _handle_chargeback(self, account: ClientAccount, transaction: Transaction) -> None:
        original = self._lookup_disputable(transaction, DisputeStatus.CHARGED_BACK)

        account.remove_held(original.amount)
        account.lock()
        original.transition_to(DisputeStatus.CHARGED_BACK)
        logger.info(f"Client {account.client_id} locked after chargeback of tx {original.transaction_id}")
