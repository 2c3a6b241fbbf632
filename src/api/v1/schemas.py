"""
API Schemas: Pydantic models for request/response validation
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from domain.entities.transaction import Transaction
from domain.enums import TransactionDirection, TransactionOrigin


class TransactionSchema(BaseModel):
    """Transaction schema"""

    id: str
    amount: Decimal
    direction: TransactionDirection
    occurred_at: datetime
    description: str
    bank: str
    origin: TransactionOrigin
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, transaction: Transaction) -> "TransactionSchema":
        return cls(
            id=transaction.id,
            amount=transaction.amount,
            direction=transaction.direction,
            occurred_at=transaction.occurred_at,
            description=transaction.description,
            bank=transaction.bank,
            origin=transaction.origin,
            created_at=transaction.created_at,
            updated_at=transaction.updated_at
        )


class ManualTransactionRequest(BaseModel):
    """Request schema for manual entry"""

    amount: Decimal = Field(..., gt=0, description="Transaction amount (positive)")
    direction: TransactionDirection = Field(TransactionDirection.DEBIT, description="debit or credit")
    occurred_on: Optional[date] = Field(None, description="Transaction date (default: today)")
    description: str = Field(..., min_length=1, description="What the money was for")
    bank: Optional[str] = Field(None, description="Bank name (default: Manual Entry)")


class MonthlySummaryResponse(BaseModel):
    """Totals for one calendar month"""

    year: int
    month: int
    total_debit: Decimal
    total_credit: Decimal
    transaction_count: int


class AutoConfirmSchema(BaseModel):
    """Auto-confirm preference"""

    enabled: bool


class ReviewActionResponse(BaseModel):
    """Result of rejecting a pending transaction"""

    success: bool
    id: str
    action: str


class HealthResponse(BaseModel):
    """Health check response"""

    status: str
    service: str
    version: str
    architecture: str
    database_status: Optional[str] = None
    sms_listener_active: bool = False


class ErrorResponse(BaseModel):
    """Error response schema"""

    success: bool = False
    error: str
    detail: Optional[str] = None
