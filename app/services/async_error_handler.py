"""
Error handling utilities for async database operations.

Storage failures are classified once, logged with their detail, and turned
into an opaque HTTP error for the caller. Nothing here retries.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict

from fastapi import HTTPException, status
from sqlalchemy.exc import (
    SQLAlchemyError,
    IntegrityError,
    OperationalError,
    DisconnectionError,
    TimeoutError as SQLTimeoutError,
    DataError,
)
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

INTERNAL_ERROR_DETAIL = "Internal server error"


class AsyncErrorHandler:
    """
    Classifies storage errors for logging and maps them to an HTTP response.

    The category only drives the log message; every storage error reaches the
    client as the same 500 so no schema or constraint detail leaks out.
    """

    ERROR_CATEGORIES = (
        (IntegrityError, "integrity constraint violation"),
        (DataError, "invalid data"),
        (SQLTimeoutError, "connection pool timeout"),
        (DisconnectionError, "connection lost"),
        (OperationalError, "operational failure"),
    )

    @classmethod
    def classify_error(cls, error: Exception) -> Dict[str, Any]:
        """
        Classify a storage error.

        Args:
            error: The exception that occurred

        Returns:
            Dictionary with the category, status_code and client-facing detail
        """
        category = "unexpected database error"
        for exc_type, label in cls.ERROR_CATEGORIES:
            if isinstance(error, exc_type):
                category = label
                break

        return {
            "category": category,
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR,
            "detail": INTERNAL_ERROR_DETAIL,
        }

    @classmethod
    def handle_error(cls, error: Exception, operation_name: str = "database operation") -> HTTPException:
        """
        Log a storage error and build the HTTPException to raise in its place.

        Args:
            error: The exception that occurred
            operation_name: Name of the operation for logging

        Returns:
            HTTPException with an opaque message
        """
        error_info = cls.classify_error(error)
        logger.error(f"{error_info['category'].capitalize()} in {operation_name}: {error}")
        return HTTPException(
            status_code=error_info["status_code"],
            detail=error_info["detail"],
        )


@asynccontextmanager
async def async_transaction(db: AsyncSession, operation_name: str = "database operation"):
    """
    Run a block as one transaction: commit on success, roll back on any error.

    HTTP errors raised inside the block (not found, invalid reference) pass
    through unchanged after the rollback; storage errors are converted with
    ``AsyncErrorHandler.handle_error``.

    Usage:
        async with async_transaction(db, "create workout plan"):
            db.add(plan)
    """
    try:
        yield db
        await db.commit()
    except HTTPException:
        await db.rollback()
        raise
    except SQLAlchemyError as e:
        await db.rollback()
        raise AsyncErrorHandler.handle_error(e, operation_name) from e
    except Exception as e:
        await db.rollback()
        logger.error(f"Transaction for {operation_name} rolled back due to error: {e}")
        raise


async def run_query(db: AsyncSession, stmt, operation_name: str = "database query"):
    """Execute a read statement, converting storage errors like ``async_transaction``."""
    try:
        return await db.execute(stmt)
    except SQLAlchemyError as e:
        raise AsyncErrorHandler.handle_error(e, operation_name) from e
