# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""In-memory query executor for unit testing and local development.

Tables are lists of dicts held in memory. Data is NOT persisted and is
lost when the executor is garbage collected.

Semantics match PostgresQueryExecutor for the supported surface: filters
combine with AND, comparisons against NULL never match, writes return the
affected rows projected to the selected columns, and single()/maybe_single()
enforce the same cardinality rules.
"""

from __future__ import annotations

import asyncio
import copy
import operator
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from querywatch.enums import (
    EnumFilterOperator,
    EnumInfraTransportType,
    EnumQueryOperation,
)
from querywatch.errors import ModelInfraErrorContext, QueryExecutionError
from querywatch.executors.util_result_shaping import shape_result
from querywatch.models import ModelQueryFilter, ModelQueryHandle
from querywatch.protocols import QueryResult, QueryRow

_COMPARATORS: dict[EnumFilterOperator, Callable[[Any, Any], bool]] = {
    EnumFilterOperator.EQ: operator.eq,
    EnumFilterOperator.NEQ: operator.ne,
    EnumFilterOperator.GT: operator.gt,
    EnumFilterOperator.GTE: operator.ge,
    EnumFilterOperator.LT: operator.lt,
    EnumFilterOperator.LTE: operator.le,
}


class InMemoryQueryExecutor:
    """Dict-backed ProtocolQueryExecutor.

    Args:
        tables: Initial tables keyed by name. Rows are copied.
        latency_seconds: Artificial delay applied to every resolve().

    Example:
        >>> executor = InMemoryQueryExecutor({"profiles": [{"id": 1, "tier": "pro"}]})
        >>> client = QueryClient(executor)
        >>> await client.table("profiles").select().eq("tier", "pro")
        [{'id': 1, 'tier': 'pro'}]
    """

    def __init__(
        self,
        tables: Mapping[str, Iterable[Mapping[str, Any]]] | None = None,
        *,
        latency_seconds: float = 0.0,
    ) -> None:
        if latency_seconds < 0:
            raise ValueError("latency_seconds must be >= 0")
        self._tables: dict[str, list[QueryRow]] = {
            name: [dict(row) for row in rows] for name, rows in (tables or {}).items()
        }
        self._latency_seconds = latency_seconds
        self.resolve_count = 0

    def create_table(self, name: str, rows: Iterable[Mapping[str, Any]] = ()) -> None:
        """Create (or replace) a table."""
        self._tables[name] = [dict(row) for row in rows]

    def snapshot(self, table: str) -> list[QueryRow]:
        """Return a deep copy of a table's rows."""
        return copy.deepcopy(self._rows(table, None))

    def build_query(
        self, table: str, operation: EnumQueryOperation
    ) -> ModelQueryHandle:
        return ModelQueryHandle(table=table, operation=operation)

    async def resolve(self, handle: ModelQueryHandle) -> QueryResult:
        self.resolve_count += 1
        await asyncio.sleep(self._latency_seconds)

        rows = self._rows(handle.table, handle)
        operation = handle.operation
        if operation is EnumQueryOperation.SELECT:
            affected = self._select(rows, handle)
        elif operation is EnumQueryOperation.INSERT:
            affected = [dict(row) for row in handle.rows]
            rows.extend(affected)
        elif operation is EnumQueryOperation.UPDATE:
            affected = [row for row in rows if _matches(row, handle.filters)]
            for row in affected:
                row.update(handle.values or {})
        elif operation is EnumQueryOperation.DELETE:
            affected = [row for row in rows if _matches(row, handle.filters)]
            rows[:] = [row for row in rows if not _matches(row, handle.filters)]
        else:
            affected = self._upsert(rows, handle)

        return shape_result([_project(row, handle.columns) for row in affected], handle)

    def _rows(self, table: str, handle: ModelQueryHandle | None) -> list[QueryRow]:
        try:
            return self._tables[table]
        except KeyError:
            raise QueryExecutionError(
                f"Relation '{table}' does not exist",
                context=ModelInfraErrorContext(
                    transport_type=EnumInfraTransportType.DATABASE,
                    operation=handle.operation.value if handle else "snapshot",
                    target_name=table,
                ),
            ) from None

    @staticmethod
    def _select(rows: list[QueryRow], handle: ModelQueryHandle) -> list[QueryRow]:
        selected = [row for row in rows if _matches(row, handle.filters)]
        # Apply clauses last-to-first so the first clause is the primary key.
        for clause in reversed(handle.order):
            selected.sort(
                key=lambda row: (row.get(clause.column) is None, row.get(clause.column)),
                reverse=clause.descending,
            )
        if handle.limit is not None:
            selected = selected[: handle.limit]
        return selected

    @staticmethod
    def _upsert(rows: list[QueryRow], handle: ModelQueryHandle) -> list[QueryRow]:
        # Payloads with only conflict columns leave conflicting rows untouched
        # and unreturned (ON CONFLICT DO NOTHING).
        updates = any(c not in handle.on_conflict for row in handle.rows for c in row)
        affected = []
        for incoming in handle.rows:
            key = tuple(incoming.get(c) for c in handle.on_conflict)
            existing = next(
                (row for row in rows if tuple(row.get(c) for c in handle.on_conflict) == key),
                None,
            )
            if existing is None:
                existing = dict(incoming)
                rows.append(existing)
            elif updates:
                existing.update(incoming)
            else:
                continue
            affected.append(existing)
        return affected


def _matches(row: QueryRow, filters: tuple[ModelQueryFilter, ...]) -> bool:
    return all(_matches_one(row, query_filter) for query_filter in filters)


def _matches_one(row: QueryRow, query_filter: ModelQueryFilter) -> bool:
    value = row.get(query_filter.column)
    if query_filter.operator is EnumFilterOperator.IS:
        return value is query_filter.value
    if value is None:
        return False
    if query_filter.operator is EnumFilterOperator.IN:
        return value in query_filter.value
    return bool(_COMPARATORS[query_filter.operator](value, query_filter.value))


def _project(row: QueryRow, columns: str) -> QueryRow:
    names = [c.strip() for c in columns.split(",") if c.strip()]
    if not names or names == ["*"]:
        return dict(row)
    return {name: row.get(name) for name in names}


__all__ = ["InMemoryQueryExecutor"]
