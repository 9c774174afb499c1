# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""MySQL async adapter using aiomysql with connection pooling.

Each execute() acquires a connection from the pool, runs exactly one
statement and returns the connection. Connections are autocommit: there is
no transaction spanning statements.

Every connection the pool hands out for the first time is passed through
on_connection(), which pins the session time zone to UTC.
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from collections.abc import Awaitable, Callable
from typing import Any

import aiomysql

from .base import DbAdapter, QueryResult

logger = logging.getLogger(__name__)


class MysqlAdapter(DbAdapter):
    """MySQL adapter over an aiomysql pool.

    The config dict is passed to the pool factory as keyword arguments
    (host, port, user, password, db, minsize, maxsize, charset, ...).
    autocommit defaults to True.

    Pool is created by connect(), or lazily on first execute().
    """

    def __init__(
        self,
        config: dict[str, Any] | None = None,
        pool_factory: Callable[..., Awaitable[Any]] | None = None,
    ):
        self.config = dict(config or {})
        self.pool_factory = pool_factory or aiomysql.create_pool
        self._pool: Any = None
        self._pool_lock = asyncio.Lock()
        self._initialized: weakref.WeakSet[Any] = weakref.WeakSet()

    @property
    def pool(self) -> Any:
        """Underlying pool, None until connect()."""
        return self._pool

    async def connect(self) -> None:
        """Create the pool if not already created."""
        if self._pool is not None:
            return
        async with self._pool_lock:
            if self._pool is not None:
                return
            options = {"autocommit": True, **self.config}
            try:
                self._pool = await self.pool_factory(**options)
            except Exception as e:
                raise ConnectionError(f"MySQL connection failed: {e}") from e
            logger.info(
                "MySQL pool created for %s:%s/%s",
                options.get("host", "localhost"),
                options.get("port", 3306),
                options.get("db", ""),
            )

    async def acquire(self) -> Any:
        """Get a connection from the pool, initializing it on first use."""
        await self.connect()
        conn = await self._pool.acquire()
        if conn in self._initialized:
            return conn
        try:
            await self.on_connection(conn)
        except BaseException as e:
            # cancellation included: the half-initialized connection must not leak
            if isinstance(e, ConnectionError):
                logger.error("Discarding MySQL connection: session initialization failed")
            conn.close()
            self._pool.release(conn)
            raise
        self._initialized.add(conn)
        return conn

    def release(self, conn: Any) -> None:
        """Return a connection to the pool."""
        if self._pool is not None:
            self._pool.release(conn)

    async def execute(self, sql: str) -> QueryResult:
        """Run one statement on a pooled connection."""
        conn = await self.acquire()
        try:
            return await self.run(conn, sql)
        finally:
            self.release(conn)

    async def run(self, conn: Any, sql: str) -> QueryResult:
        """Run one statement on the given connection."""
        logger.debug("SQL: %s", sql)
        async with conn.cursor(aiomysql.DictCursor) as cur:
            await cur.execute(sql)
            rows = list(await cur.fetchall()) if cur.description else []
            return QueryResult(rows=rows, rowcount=cur.rowcount, insert_id=cur.lastrowid)

    async def shutdown(self) -> None:
        """Close the pool (application shutdown)."""
        if self._pool is None:
            return
        self._pool.close()
        await self._pool.wait_closed()
        self._pool = None
        logger.info("MySQL pool closed")
