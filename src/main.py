import csv
import logging
import os
import sys
from typing import Dict, TextIO

from engine import PaymentsEngine
from models import AccountStatus, format_amount

DEFAULT_LOG_LEVEL = "WARNING"
OUTPUT_HEADER = ["client", "available", "held", "total", "locked"]


def configure_logging() -> None:
    """Diagnostics go to stderr; LOG_LEVEL picks the verbosity."""
    level = os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        level = DEFAULT_LOG_LEVEL

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def write_accounts(accounts: Dict[int, AccountStatus], out: TextIO) -> None:
    writer = csv.writer(out, lineterminator="\n")
    writer.writerow(OUTPUT_HEADER)
    for client_id in sorted(accounts.keys()):
        account = accounts[client_id]
        writer.writerow([
            client_id,
            format_amount(account.available),
            format_amount(account.held),
            format_amount(account.total),
            str(account.locked).lower(),
        ])


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    # Only the first argument is used; extras are ignored.
    if not argv:
        print("Usage: payments-ledger <input.csv>", file=sys.stderr)
        return 1

    configure_logging()

    engine = PaymentsEngine()
    try:
        accounts = engine.process_file(argv[0])
    except (OSError, csv.Error, UnicodeDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    write_accounts(accounts, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
