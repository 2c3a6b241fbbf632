"""
Application Use Case: Add Manual Transaction
"""

import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

from application.ports.transaction_repository import ITransactionRepository
from application.transaction_feed import TransactionFeed
from domain.entities.transaction import Transaction
from domain.enums import TransactionDirection, TransactionOrigin
from domain.identity import generate_manual_id

logger = logging.getLogger(__name__)

DEFAULT_MANUAL_BANK = "Manual Entry"


class AddManualTransactionUseCase:
    """Record a transaction typed in by the user"""

    def __init__(
        self,
        repository: ITransactionRepository,
        feed: Optional[TransactionFeed] = None,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.repository = repository
        self.feed = feed
        self.clock = clock

    async def execute(
        self,
        amount,
        direction: TransactionDirection,
        occurred_at: datetime,
        description: str,
        bank: Optional[str] = None
    ) -> Transaction:
        """
        Validate and store a manual transaction

        Raises:
            ValueError: If amount is not positive or description is blank
            StorageError: If the repository fails
        """
        try:
            amount = Decimal(str(amount))
        except InvalidOperation:
            raise ValueError(f"Invalid amount: {amount!r}")
        if not amount.is_finite() or amount <= 0:
            raise ValueError("Amount must be positive")
        if not description or not description.strip():
            raise ValueError("Description is required")

        now = self.clock()
        transaction = Transaction(
            id=generate_manual_id(now),
            amount=amount,
            direction=TransactionDirection(direction),
            occurred_at=occurred_at,
            description=description.strip(),
            bank=(bank or "").strip() or DEFAULT_MANUAL_BANK,
            origin=TransactionOrigin.MANUAL,
            created_at=now,
            updated_at=now,
        )

        await self.repository.insert(transaction)
        if self.feed is not None:
            self.feed.publish(transaction)

        logger.info("Manual transaction added: %s", transaction.id)
        return transaction
