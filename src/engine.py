import csv
import logging
import re
from decimal import Decimal
from typing import Dict, Iterable, Iterator, List, Optional

from models import AccountStatus, ProcessingStats, Transaction, TransactionType
from processor import TransactionProcessor
from state import LedgerState

logger = logging.getLogger(__name__)

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1

# Plain digits only: no exponents, digit separators, NaN or Infinity.
ID_PATTERN = re.compile(r"\+?[0-9]+")
AMOUNT_PATTERN = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)")


class PaymentsEngine:
    """
    Feeds transactions, in arrival order, to the owning client's ledger and
    summarizes every client once the stream is exhausted.
    """

    def __init__(self):
        self._state = LedgerState()
        self.stats = ProcessingStats()
        self._processor = TransactionProcessor(self._state, self.stats)

    def process_file(self, filepath: str) -> Dict[int, AccountStatus]:
        """Process CSV file and return final account states."""
        logger.info(f"Processing {filepath}")
        with open(filepath, "r", newline="", encoding="utf-8") as f:
            return self.process_transactions(self._read_transactions(f))

    def process_transactions(self, transactions: Iterable[Transaction]) -> Dict[int, AccountStatus]:
        for transaction in transactions:
            self._processor.process_transaction(transaction)

        logger.info(f"Processing complete. {self.stats}")
        return self._summarize()

    def _summarize(self) -> Dict[int, AccountStatus]:
        """Round every client's balances and drop the client from the run."""
        return {client.client_id: client.account.rounded() for client in self._state.drain_clients()}

    def _read_transactions(self, lines: Iterable[str]) -> Iterator[Transaction]:
        """Decode CSV rows; malformed rows are logged and skipped."""
        reader = csv.reader(lines)
        header: Optional[List[str]] = None

        for row in reader:
            if not any(field.strip() for field in row):
                continue

            if header is None:
                header = [name.strip().lower() for name in row]
                continue

            transaction = self._parse_csv_row(header, row, reader.line_num)
            if transaction is None:
                self.stats.record_skipped_row()
            else:
                yield transaction

    def _parse_csv_row(self, header: List[str], row: List[str], line_num: int) -> Optional[Transaction]:
        """Parse CSV row into Transaction. Short rows leave trailing columns absent."""
        normalized = {name: value.strip() for name, value in zip(header, row)}

        try:
            transaction_type = TransactionType(normalized["type"].lower())
            client_id = parse_id(normalized["client"], MAX_CLIENT_ID)
            transaction_id = parse_id(normalized["tx"], MAX_TRANSACTION_ID)
        except (KeyError, ValueError) as e:
            logger.warning(f"Failed to parse row {line_num} {row}: {e}")
            return None

        return Transaction(
            transaction_type=transaction_type,
            client_id=client_id,
            transaction_id=transaction_id,
            amount=parse_amount(normalized.get("amount", ""), line_num),
        )


def parse_id(value: str, maximum: int) -> int:
    if not ID_PATTERN.fullmatch(value):
        raise ValueError(f"invalid id {value!r}")

    parsed = int(value)
    if not 0 <= parsed <= maximum:
        raise ValueError(f"id {parsed} out of range 0..{maximum}")
    return parsed


def parse_amount(value: str, line_num: int) -> Optional[Decimal]:
    """An unparseable amount is logged and treated as missing."""
    if not value:
        return None

    if not AMOUNT_PATTERN.fullmatch(value):
        logger.warning(f"Failed to parse amount {value!r} on row {line_num}")
        return None

    return Decimal(value)
