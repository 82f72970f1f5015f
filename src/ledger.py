import logging
from typing import Dict, Optional

from models import AccountStatus, ProcessingResult, StoredTransaction, Transaction, TransactionType

logger = logging.getLogger(__name__)


class Client:
    """
    One client's balances and deposit/withdrawal history.
    Handlers never raise on bad input: they log, leave state untouched
    and return REJECTED.
    """

    def __init__(self, client_id: int):
        self.account = AccountStatus(client_id=client_id)
        self.transactions: Dict[int, StoredTransaction] = {}

    @property
    def client_id(self) -> int:
        return self.account.client_id

    def deposit(self, transaction: Transaction) -> ProcessingResult:
        if transaction.amount is None:
            logger.warning(f"Invalid deposit: no amount for {transaction}")
            return ProcessingResult.REJECTED

        self.account.credit(transaction.amount)
        self._record(transaction)
        return ProcessingResult.SUCCESS

    def withdrawal(self, transaction: Transaction) -> ProcessingResult:
        if transaction.amount is None:
            logger.warning(f"Invalid withdrawal: no amount for {transaction}")
            return ProcessingResult.REJECTED

        # Strict: withdrawing the whole available balance is refused.
        if not self.account.available > transaction.amount:
            logger.warning(f"Invalid withdrawal: not enough funds (available {self.account.available}) for {transaction}")
            return ProcessingResult.REJECTED

        self.account.debit(transaction.amount)
        self._record(transaction)
        return ProcessingResult.SUCCESS

    def dispute(self, transaction: Transaction) -> ProcessingResult:
        disputed = self._find_referenced(transaction, "dispute")
        if disputed is None:
            return ProcessingResult.REJECTED

        match disputed.transaction_type:
            case TransactionType.DEPOSIT:
                self.account.hold(disputed.amount)
            case TransactionType.WITHDRAWAL:
                # The withdrawal already left available and total; hold it again.
                self.account.add_held(disputed.amount)
            case _:
                logger.warning(f"Invalid dispute: bad operation for {transaction}, disputed {disputed}")
                return ProcessingResult.REJECTED

        disputed.is_disputed = True
        return ProcessingResult.SUCCESS

    def resolve(self, transaction: Transaction) -> ProcessingResult:
        disputed = self._find_disputed(transaction, "resolve")
        if disputed is None:
            return ProcessingResult.REJECTED

        # is_disputed stays set after a resolve.
        match disputed.transaction_type:
            case TransactionType.DEPOSIT:
                self.account.release_hold(disputed.amount)
            case TransactionType.WITHDRAWAL:
                self.account.remove_held(disputed.amount)
            case _:
                logger.warning(f"Invalid resolve: bad operation for {transaction}, disputed {disputed}")
                return ProcessingResult.REJECTED

        return ProcessingResult.SUCCESS

    def chargeback(self, transaction: Transaction) -> ProcessingResult:
        disputed = self._find_disputed(transaction, "chargeback")
        if disputed is None:
            return ProcessingResult.REJECTED

        match disputed.transaction_type:
            case TransactionType.DEPOSIT:
                self.account.remove_held(disputed.amount)
            case TransactionType.WITHDRAWAL:
                self.account.release_hold(disputed.amount)
            case _:
                logger.warning(f"Invalid chargeback: bad operation for {transaction}, disputed {disputed}")
                return ProcessingResult.REJECTED

        self.account.lock()
        return ProcessingResult.SUCCESS

    def _record(self, transaction: Transaction) -> None:
        # A reused id replaces the earlier entry.
        self.transactions[transaction.transaction_id] = StoredTransaction.from_transaction(transaction)

    def _find_referenced(self, transaction: Transaction, action: str) -> Optional[StoredTransaction]:
        """Look up the deposit/withdrawal a dispute, resolve or chargeback points at."""
        stored = self.transactions.get(transaction.transaction_id)
        if stored is None:
            logger.warning(f"Invalid {action}: disputed tx not found for {transaction}")
            return None

        if stored.amount is None:
            logger.warning(f"Invalid {action}: no amount for {transaction}, disputed {stored}")
            return None

        return stored

    def _find_disputed(self, transaction: Transaction, action: str) -> Optional[StoredTransaction]:
        stored = self._find_referenced(transaction, action)
        if stored is None:
            return None

        if not stored.is_disputed:
            logger.warning(f"Invalid {action}: transaction not disputed for {transaction}, disputed {stored}")
            return None

        return stored
