"""
Async PostgreSQL connection manager.

Wraps psycopg's AsyncConnectionPool so every season unit of a run can
read stats and write its projection without blocking the others.
Rows come back as plain dicts.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()

import psycopg
from psycopg import sql
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from .core.config import Settings, get_settings

logger = logging.getLogger(__name__)


async def _async_check_connection(conn: psycopg.AsyncConnection) -> None:
    """
    Health check callback for the pool.

    Validates that a connection is still alive before handing it out;
    serverless databases close idle connections without notice.
    """
    await conn.execute(sql.SQL("SELECT 1"))


class AsyncPostgresDB:
    """
    Async PostgreSQL database connection manager.

    The pool is created closed; open it with ``await db.open()`` or use the
    instance as an async context manager.
    """

    def __init__(
        self,
        connection_string: Optional[str] = None,
        min_pool_size: int = 1,
        max_pool_size: Optional[int] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()
        self.connection_string = connection_string or settings.db_url
        if not self.connection_string:
            raise ValueError(
                "DATABASE_URL or NEON_DATABASE_URL environment variable required or connection_string must be provided"
            )

        self._max_pool_size = max_pool_size or settings.database_pool_size
        self._min_pool_size = min(min_pool_size, self._max_pool_size)

        self._pool = AsyncConnectionPool(
            self.connection_string,
            min_size=self._min_pool_size,
            max_size=self._max_pool_size,
            kwargs={"row_factory": dict_row},
            check=_async_check_connection,
            timeout=settings.database_pool_timeout,
            max_idle=300,
            max_lifetime=3600,
            open=False,
        )

    async def open(self) -> None:
        """Open the pool and establish min_size connections."""
        await self._pool.open()
        logger.info(
            f"Async DB pool opened (min={self._min_pool_size}, max={self._max_pool_size})"
        )

    async def close(self) -> None:
        """Close the pool."""
        await self._pool.close()
        logger.info("Async DB pool closed")

    async def __aenter__(self) -> "AsyncPostgresDB":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def fetchone(
        self,
        query: str | sql.Composed,
        params: tuple = (),
    ) -> Optional[dict[str, Any]]:
        """Execute a query and fetch one result as a dict."""
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
                row = await cur.fetchone()
                return dict(row) if row else None

    async def fetchall(
        self,
        query: str | sql.Composed,
        params: tuple = (),
    ) -> list[dict[str, Any]]:
        """Execute a query and fetch all results as dicts."""
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
                return [dict(row) for row in await cur.fetchall()]

    async def execute(
        self,
        query: str | sql.Composed,
        params: tuple = (),
    ) -> None:
        """Execute a single statement and commit."""
        async with self._pool.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(query, params)
            await conn.commit()
