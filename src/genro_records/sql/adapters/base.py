# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Base executor adapter: one SQL string in, one QueryResult out."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class QueryResult:
    """Outcome of a single statement.

    Attributes:
        rows: Result rows as dicts (empty for statements without a result set).
        rowcount: Rows affected or returned, as reported by the driver.
        insert_id: Identifier assigned by an INSERT (None or 0 otherwise).
    """

    rows: list[dict[str, Any]] = field(default_factory=list)
    rowcount: int = 0
    insert_id: Any = None


class DbAdapter(ABC):
    """Abstract base class for async executor adapters.

    SqlDb only depends on this interface:
    - connect(): create the pool (idempotent)
    - execute(sql): run one statement on a pooled connection
    - shutdown(): close the pool (application shutdown only)

    Connection acquisition is hidden inside execute(); no connection is held
    across statements. Every new pooled connection goes through
    on_connection() before first use, which runs session_init.
    """

    session_init: tuple[str, ...] = ('SET time_zone = "+00:00";',)

    @abstractmethod
    async def connect(self) -> None:
        """Create the connection pool. Calling it again is a no-op."""
        ...

    @abstractmethod
    async def execute(self, sql: str) -> QueryResult:
        """Run one statement and return its result.

        Driver errors (connectivity, syntax, constraints) are raised as is.
        """
        ...

    @abstractmethod
    async def shutdown(self) -> None:
        """Close the connection pool."""
        ...

    @abstractmethod
    async def run(self, conn: Any, sql: str) -> QueryResult:
        """Run one statement on an already acquired connection."""
        ...

    async def on_connection(self, conn: Any) -> None:
        """Prepare a newly established connection for use.

        Raises:
            ConnectionError: If a session statement fails.
        """
        for statement in self.session_init:
            try:
                await self.run(conn, statement)
            except Exception as e:
                raise ConnectionError(f"Session initialization failed: {e}") from e
