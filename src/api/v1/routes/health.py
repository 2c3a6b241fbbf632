"""
API Routes: Health Check
"""

from fastapi import APIRouter, Depends

from api.v1.schemas import HealthResponse
from api.v1.dependencies import get_repository, get_message_source
from domain.exceptions import StorageError


router = APIRouter()


async def get_optional_repository():
    """Repository, or the connection error so health can report it"""
    try:
        return await get_repository()
    except StorageError as e:
        return e


@router.get("/health", response_model=HealthResponse)
async def health_check(
    repository=Depends(get_optional_repository)
):
    """Health check endpoint"""

    # Check database health
    if isinstance(repository, StorageError):
        database_status = f"error: {repository}"
    elif await repository.health_check():
        database_status = "connected"
    else:
        database_status = "unreachable"

    message_source = get_message_source()

    return HealthResponse(
        status="healthy" if database_status == "connected" else "degraded",
        service="sms-expense-tracker",
        version="1.0.0",
        architecture="hexagonal",
        database_status=database_status,
        sms_listener_active=message_source is not None and message_source.is_active()
    )
