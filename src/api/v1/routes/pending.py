"""
API Routes: Pending Transactions (review queue)
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException

from api.v1.schemas import ReviewActionResponse, TransactionSchema
from api.v1.dependencies import get_review_use_case
from application.use_cases.review_pending import ReviewPendingUseCase


router = APIRouter()


@router.get("/pending", response_model=List[TransactionSchema])
async def list_pending(
    use_case: ReviewPendingUseCase = Depends(get_review_use_case)
):
    """List SMS transactions waiting for confirmation"""
    transactions = await use_case.list_pending()
    return [TransactionSchema.from_entity(tx) for tx in transactions]


@router.post("/pending/{transaction_id}/confirm", response_model=TransactionSchema)
async def confirm_pending(
    transaction_id: str,
    use_case: ReviewPendingUseCase = Depends(get_review_use_case)
):
    """Move a pending transaction into the ledger"""
    transaction = await use_case.confirm(transaction_id)
    if transaction is None:
        raise HTTPException(status_code=404, detail=f"No pending transaction {transaction_id}")
    return TransactionSchema.from_entity(transaction)


@router.delete("/pending/{transaction_id}", response_model=ReviewActionResponse)
async def reject_pending(
    transaction_id: str,
    use_case: ReviewPendingUseCase = Depends(get_review_use_case)
):
    """Discard a pending transaction"""
    if not await use_case.reject(transaction_id):
        raise HTTPException(status_code=404, detail=f"No pending transaction {transaction_id}")
    return ReviewActionResponse(success=True, id=transaction_id, action="rejected")
