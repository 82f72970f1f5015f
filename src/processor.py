from models import Transaction, TransactionType, ProcessingResult, ProcessingStats
from state import LedgerState


class TransactionProcessor:
    """
    Routes each transaction to its owning client's handler.
    Returns ProcessingResult to indicate whether the event was applied.
    """

    def __init__(self, state: LedgerState, stats: ProcessingStats):
        self._state = state
        self._stats = stats

    def process_transaction(self, transaction: Transaction) -> ProcessingResult:
        """
        Process a single transaction.

        Returns:
            SUCCESS: Applied to the client's account
            REJECTED: Rule violation, logged by the handler; state unchanged
        """
        client = self._state.get_or_create_client(transaction.client_id)

        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                result = client.deposit(transaction)
            case TransactionType.WITHDRAWAL:
                result = client.withdrawal(transaction)
            case TransactionType.DISPUTE:
                result = client.dispute(transaction)
            case TransactionType.RESOLVE:
                result = client.resolve(transaction)
            case TransactionType.CHARGEBACK:
                result = client.chargeback(transaction)

        if result == ProcessingResult.SUCCESS:
            self._stats.record_success()
        else:
            self._stats.record_failure()
        return result
