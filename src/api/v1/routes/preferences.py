"""
API Routes: Preferences
"""

from fastapi import APIRouter, Depends

from api.v1.schemas import AutoConfirmSchema
from api.v1.dependencies import get_auto_confirm_policy
from application.preferences import AutoConfirmPolicy


router = APIRouter()


@router.get("/settings/auto-confirm", response_model=AutoConfirmSchema)
async def get_auto_confirm(
    policy: AutoConfirmPolicy = Depends(get_auto_confirm_policy)
):
    """Whether SMS transactions are confirmed without review"""
    return AutoConfirmSchema(enabled=await policy.is_enabled())


@router.put("/settings/auto-confirm", response_model=AutoConfirmSchema)
async def set_auto_confirm(
    request: AutoConfirmSchema,
    policy: AutoConfirmPolicy = Depends(get_auto_confirm_policy)
):
    """Turn auto-confirm on or off"""
    await policy.set_enabled(request.enabled)
    return AutoConfirmSchema(enabled=request.enabled)
