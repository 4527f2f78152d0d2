import logging
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base


Base = declarative_base()

logger = logging.getLogger(__name__)


def create_engine(database_url: str) -> AsyncEngine:
    """Create the async engine used for the lifetime of the process.

    Plain ``sqlite://`` URLs are rewritten to use the ``aiosqlite`` driver.
    """
    if database_url.startswith("sqlite://"):
        database_url = database_url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    return create_async_engine(database_url)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create missing tables and seed empty ones.

    Existing tables are left untouched; there are no migrations.
    """
    # Registers the tables on Base.metadata
    from backend.models import appointment, setting, user  # noqa: F401
    from backend.seed import seed_defaults

    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)

    session_factory = create_sessionmaker(engine)
    async with session_factory() as session:
        await seed_defaults(session)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    session_factory = request.app.state.session_factory
    async with session_factory() as db:
        yield db


def store_error_message(exc: SQLAlchemyError) -> str:
    """Return the driver's own message for a failed statement.

    SQLAlchemy wraps DBAPI errors and appends the SQL and parameters to
    ``str(exc)``; callers only get the original text.
    """
    original = getattr(exc, "orig", None)
    if original is not None:
        return str(original)
    return str(exc)
