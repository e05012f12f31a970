import csv
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterator, Optional, TextIO

from models import ProcessingStats, Transaction, TransactionType

logger = logging.getLogger(__name__)


class RecordParseError(ValueError):
    """A CSV row could not be turned into a Transaction."""


def parse_csv_row(row: Dict[str, Optional[str]]) -> Transaction:
    """Parse CSV row into Transaction."""
    normalized = {k.strip(): (v or "").strip() for k, v in row.items() if k is not None}

    try:
        transaction_type = TransactionType(normalized["type"].lower())
        client_id = int(normalized["client"])
        transaction_id = int(normalized["tx"])
    except KeyError as e:
        raise RecordParseError(f"missing field {e}") from e
    except ValueError as e:
        raise RecordParseError(str(e)) from e

    amount = None
    amount_str = normalized.get("amount", "")
    if amount_str:
        try:
            amount = Decimal(amount_str)
        except InvalidOperation as e:
            raise RecordParseError(f"invalid amount {amount_str!r}") from e
        if not amount.is_finite():
            raise RecordParseError(f"invalid amount {amount_str!r}")

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
    )


def read_transactions(stream: TextIO, stats: Optional[ProcessingStats] = None) -> Iterator[Transaction]:
    """
    Lazily yield transactions from a CSV stream with a `type, client, tx, amount` header.
    Rows that fail to parse are logged and skipped.
    """
    reader = csv.DictReader(stream)
    for row in reader:
        try:
            yield parse_csv_row(row)
        except RecordParseError as e:
            logger.warning(f"Failed to parse row {row}: {e}")
            if stats is not None:
                stats.record_skipped_row()


def read_transactions_from_file(filepath: str, stats: Optional[ProcessingStats] = None) -> Iterator[Transaction]:
    with open(filepath, "r", newline="", encoding="utf-8") as f:
        yield from read_transactions(f, stats)
