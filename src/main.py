"""
FastAPI Application: Hexagonal Architecture
Main entry point for the SMS Expense Tracker API
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from api.v1.routes import health, transactions, pending, preferences
from api.v1.dependencies import (
    close_database,
    get_feed,
    get_repository,
    start_sms_capture,
    stop_sms_capture,
)
from api.v1.schemas import ErrorResponse
from config import settings
from domain.exceptions import StorageError


logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)


# Create FastAPI app
app = FastAPI(
    title="SMS Expense Tracker API",
    description="Bank SMS capture, review queue and expense ledger",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    """Backing store failures surface as 503"""
    logger.error("Storage failure on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content=ErrorResponse(error="storage_unavailable", detail=str(exc)).model_dump()
    )


@app.on_event("startup")
async def startup_event():
    """Connect the database, load the feed and start SMS capture"""
    try:
        repository = await get_repository()
        await get_feed().refresh(repository)
        logger.info("Database connected")
    except StorageError as e:
        logger.warning("Database connection failed: %s", e)
        logger.warning("API will start but database operations will fail")
        return

    source = await start_sms_capture()
    if source is not None and source.permission_denied:
        logger.warning("SMS inbox is not readable; only manual entry is available")


@app.on_event("shutdown")
async def shutdown_event():
    """Stop SMS capture and close the connection pool"""
    stop_sms_capture()
    await close_database()
    logger.info("Database connection closed")


# Include routers
app.include_router(health.router, prefix="/api/v1", tags=["Health"])
app.include_router(transactions.router, prefix="/api/v1", tags=["Transactions"])
app.include_router(pending.router, prefix="/api/v1", tags=["Pending"])
app.include_router(preferences.router, prefix="/api/v1", tags=["Settings"])


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "service": "SMS Expense Tracker API",
        "version": "1.0.0",
        "architecture": "Hexagonal (Ports & Adapters)",
        "docs": "/docs",
        "health": "/api/v1/health"
    }


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=True,
        log_level="info"
    )
