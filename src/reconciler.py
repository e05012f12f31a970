import logging
from typing import Dict, Iterable

from csv_source import read_transactions_from_file
from errors import ClientMismatch, LedgerError
from ledger_engine import LedgerEngine
from models import ClientAccount, ProcessingStats, Transaction

logger = logging.getLogger(__name__)


class Reconciler:
    """
    Replays a transaction log against a LedgerEngine.
    Rejected records are logged, counted and skipped; processing never stops early.
    """

    def __init__(self, engine: LedgerEngine = None):
        self._engine = engine if engine is not None else LedgerEngine()
        self._stats = ProcessingStats()

    @property
    def engine(self) -> LedgerEngine:
        return self._engine

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> Dict[int, ClientAccount]:
        """Process CSV file and return final account states."""
        logger.info(f"Reconciling {filepath}")
        accounts = self.process_transactions(read_transactions_from_file(filepath, self._stats))
        logger.info(self._stats.summary())
        return accounts

    def process_transactions(self, transactions: Iterable[Transaction]) -> Dict[int, ClientAccount]:
        for transaction in transactions:
            self._apply(transaction)
        return self._engine.state.get_all_accounts()

    def _apply(self, transaction: Transaction) -> None:
        try:
            self._engine.apply(transaction)
        except ClientMismatch as e:
            # Another client's tx id in a dispute means the input itself is corrupt.
            logger.error(f"Rejected {transaction}: {e}")
            self._stats.record_failure(e.kind)
        except LedgerError as e:
            logger.warning(f"Rejected {transaction}: {e}")
            self._stats.record_failure(e.kind)
        else:
            self._stats.record_success()
            account = self._engine.state.get_account(transaction.client_id)
            if not account.is_consistent():
                logger.error(f"Negative balance on client {account.client_id} after {transaction}: {account}")
