# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol definition for query executors.

A query executor is the capability the query-building surface is written
against: it creates a handle for a (table, operation) pair and resolves a
finished handle into a result. Instrumentation is layered on by wrapping
one executor in another that implements the same protocol, so call sites
never change.

Design Decisions:
    - runtime_checkable: Enables isinstance() conformance checks in wrap()
    - resolve is a coroutine: every terminal step is awaited, so timing is
      written once against a single asynchronous interface
    - Handles are immutable: builders refine them by copying

Implementations:
    - PostgresQueryExecutor: asyncpg-backed executor
    - InMemoryQueryExecutor: dict-backed executor for tests and development
    - TimingQueryExecutor: decorator that records one observation per resolve
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from querywatch.enums import EnumQueryOperation
    from querywatch.models import ModelQueryHandle

QueryRow: TypeAlias = dict[str, Any]
QueryResult: TypeAlias = list[QueryRow] | QueryRow | None


@runtime_checkable
class ProtocolQueryExecutor(Protocol):
    """Protocol for objects that build and resolve table-scoped queries.

    Concurrency Safety:
        Implementations MUST support any number of concurrent resolve()
        calls; no call may observe another call's state.

    Example:
        >>> handle = executor.build_query("profiles", EnumQueryOperation.SELECT)
        >>> rows = await executor.resolve(handle.with_limit(10))
    """

    def build_query(
        self, table: str, operation: EnumQueryOperation
    ) -> ModelQueryHandle:
        """Create the initial handle for an operation on a table.

        Args:
            table: Target table name.
            operation: Operation kind selected on the table.

        Returns:
            A handle in MANY mode with no filters or payload.
        """
        ...

    async def resolve(self, handle: ModelQueryHandle) -> QueryResult:
        """Execute a finished handle.

        Args:
            handle: Query to execute.

        Returns:
            Rows shaped according to ``handle.mode``.

        Raises:
            Whatever the underlying database raises; callers and decorators
            must not rely on a specific type.
        """
        ...


__all__ = ["ProtocolQueryExecutor", "QueryResult", "QueryRow"]
