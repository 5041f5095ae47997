# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Chainable query builders.

The builder surface mirrors the familiar table-first style::

    rows = await client.table("profiles").select("id, email").eq("tier", "pro").limit(10)
    row = await client.table("profiles").select().eq("id", user_id).single()
    created = await client.table("chats").insert({"title": "hello"}).execute()

Builders are immutable: every chained call returns a new builder over a
new ModelQueryHandle. Terminal methods return a QueryCall, which resolves
its handle through the executor at most once no matter how many times it
is awaited.
"""

from __future__ import annotations

import asyncio
from collections.abc import Generator, Mapping, Sequence
from typing import Any

from querywatch.enums import (
    EnumFilterOperator,
    EnumQueryOperation,
    EnumQueryResultMode,
)
from querywatch.models import ModelQueryHandle
from querywatch.protocols import ProtocolQueryExecutor, QueryResult


class QueryCall:
    """Awaitable terminal step for one logical query.

    The first await schedules ``executor.resolve(handle)`` as a task;
    later awaits share that task. One QueryCall therefore issues one
    query and produces one observation, however it is awaited.

    Each awaiter waits on a shield of the task: cancelling one awaiter
    leaves the query running for the others.
    """

    __slots__ = ("_executor", "_handle", "_task")

    def __init__(self, executor: ProtocolQueryExecutor, handle: ModelQueryHandle) -> None:
        self._executor = executor
        self._handle = handle
        self._task: asyncio.Future[QueryResult] | None = None

    @property
    def handle(self) -> ModelQueryHandle:
        return self._handle

    @property
    def started(self) -> bool:
        return self._task is not None

    def __await__(self) -> Generator[Any, None, QueryResult]:
        if self._task is None:
            self._task = asyncio.ensure_future(self._executor.resolve(self._handle))
        return asyncio.shield(self._task).__await__()

    def __repr__(self) -> str:
        return (
            f"QueryCall(table={self._handle.table!r}, "
            f"operation={self._handle.operation.value!r}, "
            f"mode={self._handle.mode.value!r})"
        )


class QueryBuilder:
    """Filters, modifiers and terminal steps for one operation.

    Awaiting the builder directly is the same as awaiting ``execute()``.
    """

    __slots__ = ("_executor", "_handle")

    def __init__(self, executor: ProtocolQueryExecutor, handle: ModelQueryHandle) -> None:
        self._executor = executor
        self._handle = handle

    @property
    def handle(self) -> ModelQueryHandle:
        return self._handle

    def _refine(self, handle: ModelQueryHandle) -> QueryBuilder:
        return QueryBuilder(self._executor, handle)

    # Filters

    def eq(self, column: str, value: Any) -> QueryBuilder:
        return self._refine(self._handle.with_filter(column, EnumFilterOperator.EQ, value))

    def neq(self, column: str, value: Any) -> QueryBuilder:
        return self._refine(self._handle.with_filter(column, EnumFilterOperator.NEQ, value))

    def gt(self, column: str, value: Any) -> QueryBuilder:
        return self._refine(self._handle.with_filter(column, EnumFilterOperator.GT, value))

    def gte(self, column: str, value: Any) -> QueryBuilder:
        return self._refine(self._handle.with_filter(column, EnumFilterOperator.GTE, value))

    def lt(self, column: str, value: Any) -> QueryBuilder:
        return self._refine(self._handle.with_filter(column, EnumFilterOperator.LT, value))

    def lte(self, column: str, value: Any) -> QueryBuilder:
        return self._refine(self._handle.with_filter(column, EnumFilterOperator.LTE, value))

    def in_(self, column: str, values: Sequence[Any]) -> QueryBuilder:
        return self._refine(
            self._handle.with_filter(column, EnumFilterOperator.IN, tuple(values))
        )

    def is_(self, column: str, value: bool | None) -> QueryBuilder:
        if value not in (None, True, False):
            raise ValueError("is_() only accepts None, True or False")
        return self._refine(self._handle.with_filter(column, EnumFilterOperator.IS, value))

    # Modifiers

    def select(self, columns: str = "*") -> QueryBuilder:
        """Choose the selected columns, or the RETURNING columns of a write."""
        return self._refine(self._handle.with_columns(columns))

    def order(self, column: str, *, desc: bool = False) -> QueryBuilder:
        return self._refine(self._handle.with_order(column, descending=desc))

    def limit(self, count: int) -> QueryBuilder:
        return self._refine(self._handle.with_limit(count))

    # Terminal steps

    def execute(self) -> QueryCall:
        """Resolve every matching row as a list."""
        return QueryCall(self._executor, self._handle.with_mode(EnumQueryResultMode.MANY))

    def single(self) -> QueryCall:
        """Resolve exactly one row."""
        return QueryCall(self._executor, self._handle.with_mode(EnumQueryResultMode.SINGLE))

    def maybe_single(self) -> QueryCall:
        """Resolve one row or None."""
        return QueryCall(
            self._executor, self._handle.with_mode(EnumQueryResultMode.MAYBE_SINGLE)
        )

    def __await__(self) -> Generator[Any, None, QueryResult]:
        return self.execute().__await__()

    def __repr__(self) -> str:
        return (
            f"QueryBuilder(table={self._handle.table!r}, "
            f"operation={self._handle.operation.value!r})"
        )


class TableQuery:
    """Operation selection for one table."""

    __slots__ = ("_executor", "_table")

    def __init__(self, executor: ProtocolQueryExecutor, table: str) -> None:
        self._executor = executor
        self._table = table

    @property
    def table(self) -> str:
        return self._table

    def _start(self, operation: EnumQueryOperation) -> ModelQueryHandle:
        return self._executor.build_query(self._table, operation)

    def select(self, columns: str = "*") -> QueryBuilder:
        handle = self._start(EnumQueryOperation.SELECT).with_columns(columns)
        return QueryBuilder(self._executor, handle)

    def insert(
        self, rows: Mapping[str, Any] | Sequence[Mapping[str, Any]]
    ) -> QueryBuilder:
        handle = self._start(EnumQueryOperation.INSERT).with_payload(
            rows=_normalize_rows(rows, "insert")
        )
        return QueryBuilder(self._executor, handle)

    def update(self, values: Mapping[str, Any]) -> QueryBuilder:
        if not values:
            raise ValueError("update() requires at least one column value")
        handle = self._start(EnumQueryOperation.UPDATE).with_payload(values=dict(values))
        return QueryBuilder(self._executor, handle)

    def delete(self) -> QueryBuilder:
        return QueryBuilder(self._executor, self._start(EnumQueryOperation.DELETE))

    def upsert(
        self,
        rows: Mapping[str, Any] | Sequence[Mapping[str, Any]],
        *,
        on_conflict: str | Sequence[str] = "id",
    ) -> QueryBuilder:
        """Insert ``rows``, updating existing rows that collide on ``on_conflict``.

        ``on_conflict`` accepts a column name, a comma-separated list, or a
        sequence of column names.
        """
        if isinstance(on_conflict, str):
            conflict_columns = tuple(c.strip() for c in on_conflict.split(",") if c.strip())
        else:
            conflict_columns = tuple(on_conflict)
        if not conflict_columns:
            raise ValueError("upsert() requires at least one conflict column")
        handle = self._start(EnumQueryOperation.UPSERT).with_payload(
            rows=_normalize_rows(rows, "upsert"), on_conflict=conflict_columns
        )
        return QueryBuilder(self._executor, handle)

    def __repr__(self) -> str:
        return f"TableQuery(table={self._table!r})"


def _normalize_rows(
    rows: Mapping[str, Any] | Sequence[Mapping[str, Any]], operation: str
) -> tuple[dict[str, Any], ...]:
    if isinstance(rows, Mapping):
        normalized = (dict(rows),)
    else:
        normalized = tuple(dict(row) for row in rows)
    if not normalized or any(not row for row in normalized):
        raise ValueError(f"{operation}() requires at least one non-empty row")
    return normalized


__all__ = ["QueryBuilder", "QueryCall", "TableQuery"]
