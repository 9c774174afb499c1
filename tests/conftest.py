# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Shared fixtures: an in-memory executor adapter that records statements.

FakeAdapter replaces the MySQL pool at the DbAdapter seam. Tests queue the
outcome of the next statements with respond()/fail() and inspect the SQL
text that reached the executor through statements / last_sql.
"""

from __future__ import annotations

from typing import Any

import pytest

from genro_records.sql import DbAdapter, QueryResult, SqlDb


class FakeAdapter(DbAdapter):
    """Executor double returning queued results in order."""

    def __init__(self) -> None:
        self.statements: list[str] = []
        self.outcomes: list[QueryResult | Exception] = []
        self.connect_calls = 0
        self.shutdown_calls = 0

    def respond(
        self, rows: list[dict[str, Any]] | None = None, rowcount: int = 0, insert_id: Any = None
    ) -> None:
        """Queue a successful result for the next statement."""
        rows = list(rows or [])
        self.outcomes.append(
            QueryResult(rows=rows, rowcount=rowcount or len(rows), insert_id=insert_id)
        )

    def fail(self, error: Exception) -> None:
        """Queue an error for the next statement."""
        self.outcomes.append(error)

    @property
    def last_sql(self) -> str:
        return self.statements[-1]

    async def connect(self) -> None:
        self.connect_calls += 1

    async def execute(self, sql: str) -> QueryResult:
        return await self.run(None, sql)

    async def run(self, conn: Any, sql: str) -> QueryResult:
        self.statements.append(sql)
        if not self.outcomes:
            return QueryResult()
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def shutdown(self) -> None:
        self.shutdown_calls += 1


@pytest.fixture
def adapter() -> FakeAdapter:
    """Fresh fake executor."""
    return FakeAdapter()


@pytest.fixture
def db(adapter: FakeAdapter) -> SqlDb:
    """SqlDb wired to the fake executor."""
    return SqlDb(adapter=adapter)
