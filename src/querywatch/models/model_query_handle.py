# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Query Handle Model.

A ModelQueryHandle is the complete, immutable description of one query:
which table, which operation, which rows, and how the result is shaped.
Executors turn a handle into a result; builders refine a handle by
copying it, so a handle shared between two builders never changes under
either of them.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from querywatch.enums import (
    EnumFilterOperator,
    EnumQueryOperation,
    EnumQueryResultMode,
)
from querywatch.models.model_query_filter import ModelQueryFilter, ModelQueryOrder


class ModelQueryHandle(BaseModel):
    """Immutable description of a single query.

    Attributes:
        table: Target table name.
        operation: Operation kind selected on the table.
        columns: Selected columns for reads, RETURNING columns for writes.
        filters: AND-combined predicates (select, update, delete).
        rows: Payload rows for insert and upsert.
        values: Column assignments for update.
        on_conflict: Conflict target columns for upsert.
        order: Ordering clauses for select.
        limit: Maximum number of rows for select.
        mode: Result shaping applied by terminal resolution.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    table: str = Field(..., min_length=1)
    operation: EnumQueryOperation
    columns: str = Field(default="*", min_length=1)
    filters: tuple[ModelQueryFilter, ...] = Field(default=())
    rows: tuple[dict[str, Any], ...] = Field(default=())
    values: dict[str, Any] | None = Field(default=None)
    on_conflict: tuple[str, ...] = Field(default=())
    order: tuple[ModelQueryOrder, ...] = Field(default=())
    limit: int | None = Field(default=None, ge=0)
    mode: EnumQueryResultMode = Field(default=EnumQueryResultMode.MANY)

    def with_filter(
        self, column: str, operator: EnumFilterOperator, value: Any
    ) -> ModelQueryHandle:
        """Return a copy with one more predicate appended."""
        new_filter = ModelQueryFilter(column=column, operator=operator, value=value)
        return self.model_copy(update={"filters": (*self.filters, new_filter)})

    def with_order(self, column: str, descending: bool = False) -> ModelQueryHandle:
        """Return a copy with one more ordering clause appended."""
        clause = ModelQueryOrder(column=column, descending=descending)
        return self.model_copy(update={"order": (*self.order, clause)})

    def with_limit(self, limit: int) -> ModelQueryHandle:
        if limit < 0:
            raise ValueError("limit must be >= 0")
        return self.model_copy(update={"limit": limit})

    def with_columns(self, columns: str) -> ModelQueryHandle:
        return self.model_copy(update={"columns": columns})

    def with_mode(self, mode: EnumQueryResultMode) -> ModelQueryHandle:
        return self.model_copy(update={"mode": mode})

    def with_payload(
        self,
        rows: tuple[dict[str, Any], ...] = (),
        values: dict[str, Any] | None = None,
        on_conflict: tuple[str, ...] = (),
    ) -> ModelQueryHandle:
        """Return a copy carrying the write payload for this operation."""
        return self.model_copy(
            update={
                "rows": tuple(dict(row) for row in rows),
                "values": dict(values) if values is not None else None,
                "on_conflict": tuple(on_conflict),
            }
        )


__all__ = ["ModelQueryHandle"]
