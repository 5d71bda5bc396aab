"""Database abstraction layer using SQLAlchemy 2.0 async.

Provides the declarative base, engine/session management and startup
initialization (table creation and operator seeding). SQLite via
aiosqlite is the default driver.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from pantry.core.config import Settings, get_settings
from pantry.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """Turn on SQLite foreign key enforcement for every new connection.

    Without it the ON DELETE CASCADE clauses on items and webhooks are
    ignored by SQLite.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


class DatabaseManager:
    """Database connection and session manager."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_sqlite(self) -> bool:
        return self.settings.database_url.startswith("sqlite")

    @property
    def engine(self) -> AsyncEngine:
        """Get or create the database engine."""
        if self._engine is None:
            self._engine = create_async_engine(
                self.settings.database_url,
                echo=self.settings.db_echo,
                pool_size=self.settings.db_pool_size,
                max_overflow=self.settings.db_max_overflow,
                pool_timeout=self.settings.db_pool_timeout,
                connect_args={"check_same_thread": False} if self.is_sqlite else {},
            )
            if self.is_sqlite and self.settings.db_sqlite_foreign_keys:
                enable_sqlite_foreign_keys(self._engine)

            logger.info(
                "Database engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
                pool_size=self.settings.db_pool_size,
            )
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

    async def create_tables(self) -> None:
        """Create all tables that don't exist yet."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created")

    async def drop_tables(self) -> None:
        """Drop all tables. Only use in testing!"""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            logger.warning("Database tables dropped")

    async def disconnect(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session scope that rolls back on error.

        Example:
            async with db.session() as session:
                result = await session.execute(select(CollectionModel))
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def check_connection(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
                return True
        except Exception as e:
            logger.error("Database connection check failed", error=str(e))
            return False


_db_manager: DatabaseManager | None = None


def get_db_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a database session."""
    db = get_db_manager()
    async with db.session() as session:
        yield session


async def init_database() -> None:
    """Initialize the database on startup.

    Creates the SQLite directory if needed, creates missing tables and
    seeds the operator account from settings.
    """
    # Import all models so they are registered with Base.metadata
    from pantry.infrastructure.persistence import models  # noqa: F401

    db = get_db_manager()
    settings = db.settings

    if db.is_sqlite:
        db_path = settings.database_url.split(":///")[-1]
        if db_path and db_path != ":memory:":
            db_dir = Path(db_path).parent
            db_dir.mkdir(parents=True, exist_ok=True)
            logger.info("Database directory ensured", path=str(db_dir))

    if not await db.check_connection():
        raise RuntimeError("Failed to connect to database")

    await db.create_tables()
    await seed_operator(db)


async def seed_operator(db: DatabaseManager) -> None:
    """Create the operator account from settings if it doesn't exist yet."""
    from pantry.infrastructure.auth.password_hasher import hash_password
    from pantry.infrastructure.persistence.models import OperatorModel
    from pantry.infrastructure.persistence.repositories import OperatorRepository
    from pantry.domain.services import generate_id

    settings = db.settings
    if not settings.admin_email or not settings.admin_password:
        logger.debug("Operator credentials not configured, skipping seeding")
        return

    async with db.session() as session:
        repo = OperatorRepository(session)
        if await repo.get_by_email(settings.admin_email) is not None:
            logger.info("Operator already exists", email=settings.admin_email)
            return

        await repo.create(
            OperatorModel(
                id=generate_id(),
                email=settings.admin_email.lower(),
                password_hash=hash_password(settings.admin_password),
            )
        )
        await session.commit()
        logger.info("Operator created from settings", email=settings.admin_email)


async def close_database() -> None:
    await get_db_manager().disconnect()
