from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse

from app.core.config import settings
from app.api.router import api_router
from app.db.async_session import AsyncDatabaseManager

logger = logging.getLogger(__name__)

# Request locations are not part of the reported field path
_LOCATION_PREFIXES = {"body", "query", "path", "header"}


def _format_validation_errors(exc: RequestValidationError):
    details = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_PREFIXES]
        details.append({"field": ".".join(loc), "message": error.get("msg", "Invalid value")})
    return details


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report every violated field as a 400 instead of FastAPI's default 422."""
    details = _format_validation_errors(exc)
    logger.info(f"Rejected {request.method} {request.url.path}: {len(details)} validation error(s)")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation error", "details": details},
    )


def create_app(db_manager: Optional[AsyncDatabaseManager] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        db_manager: Storage handle to use. When omitted, one is built from
            settings on startup and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owns_manager = getattr(app.state, "db_manager", None) is None
        if owns_manager:
            app.state.db_manager = AsyncDatabaseManager.from_settings()

        manager = app.state.db_manager
        logger.info("Starting up Workout Tracker API...")
        if await manager.test_connection():
            logger.info("Database connection verified")
        else:
            logger.error("Database connection test failed during startup")

        yield

        logger.info("Shutting down Workout Tracker API...")
        if owns_manager:
            await manager.close()
            app.state.db_manager = None
            logger.info("Database connections closed")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description=settings.PROJECT_DESCRIPTION,
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        docs_url=f"{settings.API_V1_PREFIX}/docs",
        redoc_url=f"{settings.API_V1_PREFIX}/redoc",
        redirect_slashes=False,
        lifespan=lifespan,
    )
    app.state.db_manager = db_manager

    # Custom OpenAPI schema with explicit security scheme
    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=settings.PROJECT_NAME,
            version=settings.VERSION,
            description=settings.PROJECT_DESCRIPTION,
            routes=app.routes,
        )
        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "OAuth2PasswordBearer": {
                "type": "oauth2",
                "flows": {
                    "password": {
                        "tokenUrl": f"{settings.API_V1_PREFIX}/auth/token",
                        "scopes": {}
                    }
                }
            }
        }

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    async def root():
        """Liveness endpoint."""
        return {"status": "ok", "message": "Welcome to Workout Tracker API"}

    return app


app = create_app()
