"""
Domain Entity: Transaction
Represents a single expense or income record, captured from SMS or entered manually
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict

from domain.enums import TransactionDirection, TransactionOrigin


@dataclass
class Transaction:
    """Transaction record entity

    ``id`` is deterministic for SMS-origin records (see ``domain.identity``)
    and random for manually entered ones.
    """

    id: str
    amount: Decimal
    direction: TransactionDirection
    occurred_at: datetime
    description: str
    bank: str
    origin: TransactionOrigin
    created_at: datetime
    updated_at: datetime

    @property
    def is_credit(self) -> bool:
        return self.direction is TransactionDirection.CREDIT

    @property
    def is_debit(self) -> bool:
        return self.direction is TransactionDirection.DEBIT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dictionary"""
        return {
            "id": self.id,
            "amount": str(self.amount),
            "direction": self.direction.value,
            "occurred_at": self.occurred_at.isoformat(),
            "description": self.description,
            "bank": self.bank,
            "origin": self.origin.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        """Rebuild a transaction from ``to_dict`` output"""
        return cls(
            id=data["id"],
            amount=Decimal(str(data["amount"])),
            direction=TransactionDirection(data["direction"]),
            occurred_at=datetime.fromisoformat(data["occurred_at"]),
            description=data.get("description") or "",
            bank=data.get("bank") or "",
            origin=TransactionOrigin(data["origin"]),
            created_at=datetime.fromisoformat(data["created_at"]),
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )

    @classmethod
    def from_record(cls, row: Any) -> "Transaction":
        """Build from a database row (asyncpg Record or mapping)"""
        return cls(
            id=row["id"],
            amount=Decimal(row["amount"]),
            direction=TransactionDirection(row["direction"]),
            occurred_at=row["occurred_at"],
            description=row["description"] or "",
            bank=row["bank"] or "",
            origin=TransactionOrigin(row["origin"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
