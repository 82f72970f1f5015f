from dataclasses import dataclass, replace
from decimal import Decimal, ROUND_HALF_EVEN, localcontext
from enum import Enum
from typing import Optional

FOUR_PLACES = Decimal("0.0001")


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class ProcessingResult(Enum):
    SUCCESS = "success"
    REJECTED = "rejected"


@dataclass
class Transaction:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class StoredTransaction:
    """Deposit or withdrawal kept in a client's history for later disputes."""

    transaction_id: int
    transaction_type: TransactionType
    amount: Optional[Decimal]
    is_disputed: bool = False

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "StoredTransaction":
        return cls(
            transaction_id=transaction.transaction_id,
            transaction_type=transaction.transaction_type,
            amount=transaction.amount,
        )

    def __repr__(self) -> str:
        return f"StoredTransaction({self.transaction_type.value}, tx={self.transaction_id}, amount={self.amount}, disputed={self.is_disputed})"


def round_amount(value: Decimal) -> Decimal:
    """Round to 4 decimal places (banker's rounding) and strip trailing zeros."""
    with localcontext() as ctx:
        # Room for every integer digit plus the 4 fractional places.
        ctx.prec = max(ctx.prec, value.adjusted() + 5)
        rounded = value.quantize(FOUR_PLACES, rounding=ROUND_HALF_EVEN)
        if rounded.is_zero():
            return Decimal("0")
        return rounded.normalize()


def format_amount(value: Decimal) -> str:
    """Plain notation, never exponent form (normalize turns 100 into 1E+2)."""
    return f"{value:f}"


@dataclass
class AccountStatus:
    client_id: int
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")
    total: Decimal = Decimal("0")
    locked: bool = False

    # Every mutation keeps total == available + held.

    def credit(self, amount: Decimal) -> None:
        self.available += amount
        self.total += amount

    def debit(self, amount: Decimal) -> None:
        self.available -= amount
        self.total -= amount

    def hold(self, amount: Decimal) -> None:
        self.available -= amount
        self.held += amount

    def release_hold(self, amount: Decimal) -> None:
        self.held -= amount
        self.available += amount

    def add_held(self, amount: Decimal) -> None:
        self.held += amount
        self.total += amount

    def remove_held(self, amount: Decimal) -> None:
        self.held -= amount
        self.total -= amount

    def lock(self) -> None:
        self.locked = True

    def rounded(self) -> "AccountStatus":
        return replace(
            self,
            available=round_amount(self.available),
            held=round_amount(self.held),
            total=round_amount(self.total),
        )


class ProcessingStats:
    """Counters for tracking processing statistics."""

    def __init__(self):
        self.processed = 0
        self.failed = 0
        self.skipped_rows = 0

    def record_success(self):
        self.processed += 1

    def record_failure(self):
        self.failed += 1

    def record_skipped_row(self):
        self.skipped_rows += 1

    def __repr__(self) -> str:
        return f"Processed: {self.processed}, Failed: {self.failed}, Skipped rows: {self.skipped_rows}"
