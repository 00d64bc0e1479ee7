from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import text, event
from sqlalchemy.pool import StaticPool
from typing import AsyncGenerator, Optional, Dict, Any
import logging

from fastapi import Request

from app.core.config import settings
from app.db.base_class import Base

logger = logging.getLogger(__name__)


class AsyncDatabaseManager:
    """
    Owns the async engine, its connection pool and the session factory.

    One instance is built at application startup and handed to request
    handlers through ``app.state``; tests build their own against an
    in-memory SQLite database. Nothing about the pool lives at module level.
    """

    def __init__(
        self,
        database_url: str,
        *,
        echo: bool = False,
        pool_size: Optional[int] = None,
        max_overflow: Optional[int] = None,
        pool_timeout: Optional[int] = None,
        pool_recycle: Optional[int] = None,
        pool_pre_ping: bool = True,
    ):
        if not database_url:
            raise ValueError("Async database URL is not configured")

        # Replace any escaped colons in the URL
        self.database_url = database_url.replace("\\x3a", ":")
        self.is_sqlite = self.database_url.startswith("sqlite")

        engine_kwargs: Dict[str, Any] = {"echo": echo}
        if self.is_sqlite:
            # A single shared connection keeps in-memory databases alive across sessions
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs.update(
                pool_pre_ping=pool_pre_ping,
                pool_size=pool_size or settings.ASYNC_DB_POOL_SIZE,
                max_overflow=max_overflow if max_overflow is not None else settings.ASYNC_DB_MAX_OVERFLOW,
                pool_timeout=pool_timeout or settings.ASYNC_DB_POOL_TIMEOUT,
                pool_recycle=pool_recycle or settings.ASYNC_DB_POOL_RECYCLE,
            )

        logger.info(f"Initializing async database engine with URL: {self.database_url[:50]}...")
        self.async_engine = create_async_engine(self.database_url, **engine_kwargs)
        self._setup_pool_events()

        self.async_session_factory = async_sessionmaker(
            bind=self.async_engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Keep objects accessible after commit
            autoflush=False,
        )

    @classmethod
    def from_settings(cls) -> "AsyncDatabaseManager":
        """Build a manager from the application settings."""
        return cls(
            settings.async_database_url,
            echo=settings.ASYNC_DB_ECHO,
            pool_size=settings.ASYNC_DB_POOL_SIZE,
            max_overflow=settings.ASYNC_DB_MAX_OVERFLOW,
            pool_timeout=settings.ASYNC_DB_POOL_TIMEOUT,
            pool_recycle=settings.ASYNC_DB_POOL_RECYCLE,
            pool_pre_ping=settings.ASYNC_DB_POOL_PRE_PING,
        )

    def _setup_pool_events(self):
        """Set up SQLAlchemy pool events."""

        @event.listens_for(self.async_engine.sync_engine, "connect")
        def on_connect(dbapi_connection, connection_record):
            # SQLite only honours ON DELETE actions with foreign keys switched on
            if self.is_sqlite:
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()
            logger.debug("New database connection established")

        @event.listens_for(self.async_engine.sync_engine, "invalidate")
        def on_invalidate(dbapi_connection, connection_record, exception):
            logger.warning(f"Database connection invalidated: {exception}")

    async def get_async_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Yield a session for one unit of work.

        The session is rolled back on any exception and always closed, which
        returns its connection to the pool on every exit path.
        """
        async with self.async_session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Database error in session: {e}")
                raise
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    async def create_all(self):
        """Create every table known to the declarative metadata."""
        import app.models  # noqa: F401

        async with self.async_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self):
        """Drop every table known to the declarative metadata."""
        async with self.async_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def test_connection(self) -> bool:
        """
        Test the database connection.

        Returns:
            bool: True if connection is successful, False otherwise
        """
        try:
            async with self.async_session_factory() as session:
                await session.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error(f"Database connection test failed: {e}")
            return False

    def get_connection_info(self) -> dict:
        """Get information about the current connection pool."""
        pool = self.async_engine.pool
        try:
            return {
                "pool_size": pool.size(),
                "checked_in": pool.checkedin(),
                "checked_out": pool.checkedout(),
                "overflow": pool.overflow(),
                "status": "initialized",
            }
        except AttributeError:
            # StaticPool and friends expose no counters
            return {
                "status": "initialized",
                "pool_type": type(pool).__name__,
            }

    async def close(self):
        """Dispose of the engine and every pooled connection."""
        await self.async_engine.dispose()
        logger.info("Async database engine disposed successfully")


async def get_async_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency providing one database session per request.

    The manager is looked up on ``request.app.state`` so every handler shares
    the handle constructed at startup.
    """
    manager: AsyncDatabaseManager = request.app.state.db_manager
    async for session in manager.get_async_session():
        yield session
