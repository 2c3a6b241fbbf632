"""
API Routes: Transactions
"""

from datetime import date, datetime, time
from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from api.v1.schemas import ManualTransactionRequest, MonthlySummaryResponse, TransactionSchema
from api.v1.dependencies import get_manual_use_case, get_repository
from application.ports.transaction_repository import ITransactionRepository
from application.use_cases.add_manual_transaction import AddManualTransactionUseCase


router = APIRouter()


@router.get("/transactions", response_model=List[TransactionSchema])
async def list_transactions(
    limit: int = Query(100, ge=1, le=500, description="Maximum number of results"),
    offset: int = Query(0, ge=0, description="Pagination offset"),
    repository: ITransactionRepository = Depends(get_repository)
):
    """List confirmed transactions, newest first"""
    transactions = await repository.list(limit=limit, offset=offset)
    return [TransactionSchema.from_entity(tx) for tx in transactions]


@router.get("/transactions/{year}/{month}", response_model=List[TransactionSchema])
async def list_transactions_by_month(
    year: int = Path(..., ge=1, le=9999),
    month: int = Path(..., ge=1, le=12),
    repository: ITransactionRepository = Depends(get_repository)
):
    """List confirmed transactions for one calendar month"""
    transactions = await repository.list_by_month(year, month)
    return [TransactionSchema.from_entity(tx) for tx in transactions]


@router.get("/transactions/{year}/{month}/summary", response_model=MonthlySummaryResponse)
async def monthly_summary(
    year: int = Path(..., ge=1, le=9999),
    month: int = Path(..., ge=1, le=12),
    repository: ITransactionRepository = Depends(get_repository)
):
    """Debit/credit totals for one calendar month"""
    transactions = await repository.list_by_month(year, month)

    return MonthlySummaryResponse(
        year=year,
        month=month,
        total_debit=sum((tx.amount for tx in transactions if tx.is_debit), Decimal("0")),
        total_credit=sum((tx.amount for tx in transactions if tx.is_credit), Decimal("0")),
        transaction_count=len(transactions)
    )


@router.post("/transactions", response_model=TransactionSchema, status_code=201)
async def add_manual_transaction(
    request: ManualTransactionRequest,
    use_case: AddManualTransactionUseCase = Depends(get_manual_use_case)
):
    """Record a manually entered transaction"""
    occurred_on = request.occurred_on or date.today()

    try:
        transaction = await use_case.execute(
            amount=request.amount,
            direction=request.direction,
            occurred_at=datetime.combine(occurred_on, time()),
            description=request.description,
            bank=request.bank
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return TransactionSchema.from_entity(transaction)
