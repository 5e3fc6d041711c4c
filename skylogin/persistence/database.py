"""SQLite engine creation and schema setup.

Provides the async engine used by the SQLite storage backend.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import StaticPool

from skylogin.persistence.tables import metadata

MEMORY_PATH = ":memory:"


def create_engine(sqlite_path: str, echo: bool = False) -> AsyncEngine:
    """Create async SQLite engine.

    An in-memory database lives in a single shared connection so every
    checkout sees the same tables.

    Args:
        sqlite_path: Database file path, or ":memory:"
        echo: Log SQL statements

    Returns:
        Configured async engine
    """
    if sqlite_path == MEMORY_PATH:
        return create_async_engine(
            "sqlite+aiosqlite://",
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(f"sqlite+aiosqlite:///{sqlite_path}", echo=echo)


async def create_schema(engine: AsyncEngine) -> None:
    """Create the auth_state and auth_session tables if they do not exist."""
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)


async def ping(engine: AsyncEngine) -> None:
    """Run a trivial query; raises if the database is unusable."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
