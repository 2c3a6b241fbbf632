"""
Live transaction feed

In-memory, newest-first view of recent transactions that UI-side observers
subscribe to. The repository stays the source of truth; observers that
need a full picture call ``refresh``.
"""

import logging
from decimal import Decimal
from typing import Callable, List

from application.ports.transaction_repository import ITransactionRepository
from domain.entities.transaction import Transaction

logger = logging.getLogger(__name__)

Subscriber = Callable[[Transaction], None]


class TransactionFeed:
    """Newest-first snapshot plus change subscribers"""

    def __init__(self):
        self.transactions: List[Transaction] = []
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback for newly published transactions

        Returns:
            Function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self, transaction: Transaction) -> None:
        """Prepend a transaction and notify subscribers"""
        self.transactions.insert(0, transaction)
        for callback in list(self._subscribers):
            try:
                callback(transaction)
            except Exception:
                logger.exception("Feed subscriber failed for %s", transaction.id)

    async def refresh(self, repository: ITransactionRepository, limit: int = 100) -> None:
        """Replace the snapshot with the latest transactions from the repository"""
        self.transactions = await repository.list(limit=limit)

    def monthly_expenses(self, year: int, month: int) -> Decimal:
        """Sum of debit amounts in the snapshot for a calendar month"""
        return sum(
            (
                tx.amount
                for tx in self.transactions
                if tx.is_debit
                and tx.occurred_at.year == year
                and tx.occurred_at.month == month
            ),
            Decimal("0"),
        )
