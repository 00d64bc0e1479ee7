from typing import Any, Dict
import logging

from fastapi import APIRouter, HTTPException, Request

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=Dict[str, Any])
async def health_check(request: Request):
    """
    Basic health check endpoint.

    Returns:
        dict: Service status and database connectivity
    """
    manager = request.app.state.db_manager
    connection_test = await manager.test_connection()
    if not connection_test:
        logger.error("Health check failed: database unreachable")
        raise HTTPException(status_code=503, detail="Service unavailable")

    return {
        "status": "healthy",
        "database": "connected",
        "pool": manager.get_connection_info(),
        "service": "workout-tracker-api",
    }
