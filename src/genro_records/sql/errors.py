# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Domain errors raised by the SQL layer.

Only two failures originate here: a malformed ordering direction (caught by
the query builder before any I/O) and a uniqueness violation detected by
SqlDb.find(). Everything the executor raises is propagated unchanged.
"""

from __future__ import annotations

from typing import Any


class RecordsError(Exception):
    """Base class for errors raised by genro-records itself."""


class InvalidOrderError(RecordsError, ValueError):
    """Raised when an ordering direction is not ASC or DESC."""

    def __init__(self, field: str, direction: Any):
        self.field = field
        self.direction = direction
        super().__init__(
            f"Invalid order {direction!r} for field '{field}'. Expected 'ASC' or 'DESC'"
        )


class MultipleRowsFoundError(RecordsError):
    """Raised when find() gets more than one row for a single key."""

    def __init__(self, table: str, pkey: Any = None, count: int = 0):
        self.table = table
        self.pkey = pkey
        self.count = count
        super().__init__("Multiple rows found.")


__all__ = ["RecordsError", "InvalidOrderError", "MultipleRowsFoundError"]
