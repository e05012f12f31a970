import csv
from decimal import Decimal
from typing import Iterable, List, TextIO, Tuple

from models import ClientAccount

DISPLAY_PRECISION = Decimal("0.0001")
HEADER = ("client", "available", "held", "total", "locked")

SnapshotRow = Tuple[int, str, str, str, str]


def format_amount(value: Decimal) -> str:
    """Format decimal with exactly 4 decimal places."""
    return f"{value.quantize(DISPLAY_PRECISION):f}"


def snapshot_rows(accounts: Iterable[ClientAccount]) -> List[SnapshotRow]:
    return [
        (
            account.client_id,
            format_amount(account.available),
            format_amount(account.held),
            format_amount(account.total),
            str(account.locked).lower(),
        )
        for account in accounts
    ]


def write_report(accounts: Iterable[ClientAccount], stream: TextIO) -> None:
    """Write account snapshot as CSV, one row per account in the given order."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(HEADER)
    writer.writerows(snapshot_rows(accounts))
