# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Result shaping shared by every concrete executor."""

from __future__ import annotations

from querywatch.enums import EnumInfraTransportType, EnumQueryResultMode
from querywatch.errors import ModelInfraErrorContext, QueryCardinalityError
from querywatch.models import ModelQueryHandle
from querywatch.protocols import QueryResult, QueryRow


def shape_result(rows: list[QueryRow], handle: ModelQueryHandle) -> QueryResult:
    """Apply ``handle.mode`` to the rows a query produced.

    Raises:
        QueryCardinalityError: SINGLE with a row count other than one, or
            MAYBE_SINGLE with more than one row.
    """
    if handle.mode is EnumQueryResultMode.MANY:
        return rows

    row_count = len(rows)
    if row_count == 1:
        return rows[0]
    if row_count == 0 and handle.mode is EnumQueryResultMode.MAYBE_SINGLE:
        return None

    expectation = "exactly one row" if handle.mode is EnumQueryResultMode.SINGLE else "at most one row"
    raise QueryCardinalityError(
        f"Expected {expectation} from '{handle.table}', got {row_count}",
        context=ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.DATABASE,
            operation=handle.operation.value,
            target_name=handle.table,
        ),
        row_count=row_count,
    )


__all__ = ["shape_result"]
