"""Database handle and session management."""
from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from ..core.config import Settings


class Database:
    """Owns the async engine and session factory for one process.

    Built at application startup and disposed at shutdown; request handlers
    receive sessions through :func:`get_session`.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.sessionmaker = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        connect_args: dict[str, object] = {}
        if settings.database_ssl_required:
            connect_args["ssl"] = True

        engine = create_async_engine(
            settings.database_async_url,
            echo=settings.database_echo,
            pool_pre_ping=True,
            connect_args=connect_args,
        )
        return cls(engine)

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency to provide an async session."""

    database: Database = request.app.state.database
    async with database.sessionmaker() as session:
        yield session
