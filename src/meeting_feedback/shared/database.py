"""
Database session management with async SQLAlchemy.

The DatabaseManager is the process's single connection pool. It is built
once by the application lifespan, stored on ``app.state.db`` and disposed at
shutdown; nothing in this module holds a global engine.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from meeting_feedback.config import Settings
from meeting_feedback.shared.exceptions import StorageError, UniqueViolationError
from meeting_feedback.shared.logging import get_logger

logger = get_logger(__name__)

PG_UNIQUE_VIOLATION = "23505"


class Base(DeclarativeBase):
    """Declarative base for ORM models."""


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate == PG_UNIQUE_VIOLATION:
        return True
    # sqlite3 reports unique failures only through the message text
    return "UNIQUE constraint failed" in str(orig)


def to_storage_error(exc: SQLAlchemyError, operation: str) -> StorageError:
    """Map a SQLAlchemy failure onto the storage error taxonomy."""
    if isinstance(exc, IntegrityError) and _is_unique_violation(exc):
        return UniqueViolationError(
            f"Unique constraint violated during {operation}",
            details={"operation": operation},
        )
    return StorageError(
        f"Storage failure during {operation}",
        details={"operation": operation, "error_type": type(exc).__name__},
    )


class BaseRepository:
    """Executes parameterized statements on a session, translating failures."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @property
    def dialect_name(self) -> str:
        return self._session.get_bind().dialect.name

    def insert(self, model: Any) -> Any:
        """Dialect-specific INSERT supporting ON CONFLICT ... DO UPDATE."""
        name = self.dialect_name
        if name == "postgresql":
            return pg_insert(model)
        if name == "sqlite":
            return sqlite_insert(model)
        raise StorageError(f"Upsert is not supported on dialect {name!r}")

    async def _execute(self, statement: Any, operation: str, params: dict[str, Any] | None = None) -> Any:
        try:
            if params is None:
                return await self._session.execute(statement)
            return await self._session.execute(statement, params)
        except SQLAlchemyError as exc:
            error = to_storage_error(exc, operation)
            logger.error(
                "Statement failed",
                extra={"operation": operation, "error_type": type(exc).__name__, "error": str(exc)},
            )
            raise error from exc


class DatabaseManager:
    """Manages database connections and sessions."""

    def __init__(
        self,
        database_url: str,
        *,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: int = 30,
        **engine_kwargs: Any,
    ) -> None:
        """Initialize database manager.

        Args:
            database_url: SQLAlchemy async database URL.
            echo: Log every statement.
            pool_size: Persistent connections kept in the pool.
            max_overflow: Extra connections allowed under load.
            pool_timeout: Seconds to wait for a free connection.
            engine_kwargs: Passed straight to create_async_engine.
        """
        self._database_url = database_url
        self._engine_kwargs: dict[str, Any] = {"echo": echo, **engine_kwargs}
        if not database_url.startswith("sqlite"):
            self._engine_kwargs.setdefault("pool_pre_ping", True)
            self._engine_kwargs.setdefault("pool_size", pool_size)
            self._engine_kwargs.setdefault("max_overflow", max_overflow)
            self._engine_kwargs.setdefault("pool_timeout", pool_timeout)
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "DatabaseManager":
        return cls(
            settings.database_url,
            echo=settings.debug,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout_seconds,
        )

    @property
    def engine(self) -> AsyncEngine:
        """Get or create the database engine."""
        if self._engine is None:
            self._engine = create_async_engine(self._database_url, **self._engine_kwargs)
            if self._database_url.startswith("sqlite"):
                event.listen(self._engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create the session factory."""
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
        return self._session_factory

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session scope: commit on success, roll back on any error."""
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as exc:
                await session.rollback()
                raise to_storage_error(exc, "commit") from exc
            except Exception:
                await session.rollback()
                raise

    async def verify_connection(self) -> None:
        """Run SELECT 1; raises StorageError when the database is unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as exc:
            logger.error(
                "Database connection check failed",
                extra={"error_type": type(exc).__name__, "error": str(exc)},
            )
            raise StorageError("Database is unreachable") from exc
        logger.info("Database connection check succeeded")

    async def create_all(self) -> None:
        """Create every mapped table (tests and local development)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def close(self) -> None:
        """Close the database engine."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None


def get_database_manager(request: Request) -> DatabaseManager:
    """FastAPI dependency returning the application's DatabaseManager."""
    return request.app.state.db


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    db: DatabaseManager = request.app.state.db
    async with db.session() as session:
        yield session


__all__ = [
    "Base",
    "BaseRepository",
    "DatabaseManager",
    "get_database_manager",
    "get_db_session",
    "to_storage_error",
]
