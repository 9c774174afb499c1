# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""SQL statement composition from criteria, ordering specs and records."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .errors import InvalidOrderError
from .sanitizer import ValueKind, sanitize, value_kind


def quote_identifier(name: str) -> str:
    """Return backtick-quoted identifier; dotted names quote each part.

    Example:
        quote_identifier("demo")        # `demo`
        quote_identifier("shop.items")  # `shop`.`items`
    """
    return ".".join(f"`{part.replace('`', '``')}`" for part in str(name).split("."))


class QueryBuilder:
    """Builds SELECT/INSERT/UPDATE/DELETE text with every literal sanitized.

    Criteria values choose the comparison operator by kind:
        {'name': 'bob'}   -> `name` LIKE 'bob'
        {'age': 42}       -> `age` = 42
        {'deleted': None} -> `deleted` IS NULL

    Ordering specs map fields to 'ASC' or 'DESC' in any case:
        {'created': 'desc', 'id': 'asc'} -> ORDER BY `created` DESC, `id` ASC

    Statements addressing a single record use key_field with '='.
    """

    DIRECTIONS = frozenset({"ASC", "DESC"})

    def __init__(self, key_field: str = "id"):
        self.key_field = key_field

    # -------------------------------------------------------------------------
    # SELECT
    # -------------------------------------------------------------------------

    def build_select(
        self,
        criteria: Mapping[str, Any] | None,
        ordering: Mapping[str, str] | None,
        table: str,
    ) -> str:
        """Compose SELECT with optional WHERE and ORDER BY clauses."""
        # ORDER BY first so a bad direction fails before anything else
        order_sql = self.build_order_by(ordering)
        where_sql = self.build_where(criteria)

        sql = f"SELECT * FROM {quote_identifier(table)}"
        if where_sql:
            sql += f" WHERE {where_sql}"
        if order_sql:
            sql += f" ORDER BY {order_sql}"
        return sql

    def build_select_by_key(self, pkey: Any, table: str) -> str:
        """Compose SELECT for one record by key."""
        return f"SELECT * FROM {quote_identifier(table)} WHERE {self._key_predicate(pkey)}"

    def build_where(self, criteria: Mapping[str, Any] | None) -> str:
        """Join one predicate per criteria entry with AND."""
        if not criteria:
            return ""
        return " AND ".join(self.predicate(field, value) for field, value in criteria.items())

    def predicate(self, field: str, value: Any) -> str:
        """Single comparison; the operator depends on the value kind."""
        column = quote_identifier(field)
        match value_kind(value):
            case ValueKind.NULL:
                return f"{column} IS NULL"
            case ValueKind.STRING:
                return f"{column} LIKE {sanitize(value)}"
            case _:
                return f"{column} = {sanitize(value)}"

    def build_order_by(self, ordering: Mapping[str, str] | None) -> str:
        """Join ORDER BY terms, upper-casing directions.

        Raises:
            InvalidOrderError: If a direction is not ASC/DESC (any case).
        """
        if not ordering:
            return ""
        parts = []
        for field, direction in ordering.items():
            normalized = direction.upper() if isinstance(direction, str) else None
            if normalized not in self.DIRECTIONS:
                raise InvalidOrderError(field, direction)
            parts.append(f"{quote_identifier(field)} {normalized}")
        return ", ".join(parts)

    # -------------------------------------------------------------------------
    # INSERT / UPDATE / DELETE
    # -------------------------------------------------------------------------

    def build_insert(self, table: str, record: Mapping[str, Any]) -> str:
        """Compose INSERT from the record's fields in insertion order."""
        if not record:
            raise ValueError(f"Cannot insert an empty record into '{table}'")
        col_list = ", ".join(quote_identifier(col) for col in record)
        values = ", ".join(sanitize(val) for val in record.values())
        return f"INSERT INTO {quote_identifier(table)} ({col_list}) VALUES ({values})"

    def build_update(self, pkey: Any, table: str, fields: Mapping[str, Any]) -> str:
        """Compose UPDATE of the given fields for one record by key."""
        if not fields:
            raise ValueError(f"No fields to update in '{table}'")
        set_parts = [f"{quote_identifier(col)} = {sanitize(val)}" for col, val in fields.items()]
        return (
            f"UPDATE {quote_identifier(table)} SET {', '.join(set_parts)} "
            f"WHERE {self._key_predicate(pkey)}"
        )

    def build_delete(self, pkey: Any, table: str) -> str:
        """Compose DELETE for one record by key."""
        return f"DELETE FROM {quote_identifier(table)} WHERE {self._key_predicate(pkey)}"

    def build_delete_by(self, field: str, value: Any, table: str) -> str:
        """Compose DELETE for rows matching a single field."""
        return f"DELETE FROM {quote_identifier(table)} WHERE {self.predicate(field, value)}"

    def _key_predicate(self, pkey: Any) -> str:
        return f"{quote_identifier(self.key_field)} = {sanitize(pkey)}"


__all__ = ["QueryBuilder", "quote_identifier"]
