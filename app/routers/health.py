from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import logging

from app.core.database import Database, get_database
from app.schemas.base import ResponseBase

router = APIRouter()
logger = logging.getLogger(__name__)

@router.get("/health", response_model=ResponseBase)
async def health_check(database: Database = Depends(get_database)):
    """Health check endpoint."""
    try:
        await database.ping()
    except Exception as e:
        logger.error(f"Database health check failed: {str(e)}")
        return JSONResponse(
            status_code=503,
            content=ResponseBase(success=False, message="Database is unreachable").model_dump(),
        )
    return ResponseBase(success=True, message="Service is healthy")
