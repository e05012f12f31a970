import csv
import logging
import os
import sys

from reconciler import Reconciler
from reporter import write_report

DEFAULT_LOG_LEVEL = "WARNING"


def configure_logging() -> None:
    level_name = os.environ.get("LEDGER_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1:
        print("Usage: python main.py <transactions.csv>", file=sys.stderr)
        return 1

    configure_logging()

    filepath = argv[0]
    reconciler = Reconciler()
    try:
        reconciler.process_file(filepath)
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        print(f"failed to process input file: {e}", file=sys.stderr)
        return 1

    write_report(reconciler.engine.snapshot(), sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
