# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
# ruff: noqa: S608
# S608 disabled: identifiers are validated against IDENTIFIER_PATTERN and
# double-quoted before interpolation; every value is bound as $n.
"""Compile a ModelQueryHandle into parameterised PostgreSQL.

Security Note:
    - Table and column names must match ^[a-zA-Z_][a-zA-Z0-9_]*$
    - Values are never interpolated; they are bound as asyncpg parameters
"""

from __future__ import annotations

from typing import Any

from querywatch.enums import (
    EnumFilterOperator,
    EnumInfraTransportType,
    EnumQueryOperation,
)
from querywatch.errors import ModelInfraErrorContext, ProtocolConfigurationError
from querywatch.models import IDENTIFIER_PATTERN, ModelQueryHandle


def quote_identifier(name: str, handle: ModelQueryHandle | None = None) -> str:
    """Validate and double-quote a SQL identifier.

    Raises:
        ProtocolConfigurationError: If ``name`` is not a plain identifier.
    """
    if not IDENTIFIER_PATTERN.match(name):
        raise ProtocolConfigurationError(
            "Invalid SQL identifier",
            context=ModelInfraErrorContext(
                transport_type=EnumInfraTransportType.DATABASE,
                operation=handle.operation.value if handle else "compile_query",
                target_name=handle.table if handle else None,
            ),
            identifier=name,
        )
    return f'"{name}"'


class _Params:
    """Accumulates bound values and hands out $n placeholders."""

    def __init__(self) -> None:
        self.values: list[Any] = []

    def bind(self, value: Any) -> str:
        self.values.append(value)
        return f"${len(self.values)}"


def compile_query(handle: ModelQueryHandle) -> tuple[str, list[Any]]:
    """Return ``(sql, params)`` for ``handle``.

    Tables are left unqualified and resolve on the connection search_path.
    """
    params = _Params()
    target = quote_identifier(handle.table, handle)
    columns = _compile_columns(handle)
    operation = handle.operation

    if operation is EnumQueryOperation.SELECT:
        sql = f"SELECT {columns} FROM {target}"
        sql += _compile_where(handle, params)
        sql += _compile_order(handle)
        if handle.limit is not None:
            sql += f" LIMIT {params.bind(handle.limit)}"
        return sql, params.values

    if operation is EnumQueryOperation.UPDATE:
        if not handle.values:
            raise ProtocolConfigurationError(
                "Update requires at least one column value",
                context=_context(handle),
            )
        assignments = ", ".join(
            f"{quote_identifier(column, handle)} = {params.bind(value)}"
            for column, value in handle.values.items()
        )
        sql = f"UPDATE {target} SET {assignments}"
        sql += _compile_where(handle, params)
        return f"{sql} RETURNING {columns}", params.values

    if operation is EnumQueryOperation.DELETE:
        sql = f"DELETE FROM {target}" + _compile_where(handle, params)
        return f"{sql} RETURNING {columns}", params.values

    # INSERT and UPSERT
    if not handle.rows:
        raise ProtocolConfigurationError(
            f"{operation.value.capitalize()} requires at least one row",
            context=_context(handle),
        )
    insert_columns: list[str] = []
    for row in handle.rows:
        for column in row:
            if column not in insert_columns:
                insert_columns.append(column)
    column_list = ", ".join(quote_identifier(c, handle) for c in insert_columns)
    value_groups = []
    for row in handle.rows:
        placeholders = ", ".join(
            params.bind(row[c]) if c in row else "DEFAULT" for c in insert_columns
        )
        value_groups.append(f"({placeholders})")
    sql = f"INSERT INTO {target} ({column_list}) VALUES {', '.join(value_groups)}"

    if operation is EnumQueryOperation.UPSERT:
        conflict = ", ".join(quote_identifier(c, handle) for c in handle.on_conflict)
        updates = [c for c in insert_columns if c not in handle.on_conflict]
        if updates:
            assignments = ", ".join(
                f"{quote_identifier(c, handle)} = EXCLUDED.{quote_identifier(c, handle)}"
                for c in updates
            )
            sql += f" ON CONFLICT ({conflict}) DO UPDATE SET {assignments}"
        else:
            sql += f" ON CONFLICT ({conflict}) DO NOTHING"

    return f"{sql} RETURNING {columns}", params.values


def _context(handle: ModelQueryHandle) -> ModelInfraErrorContext:
    return ModelInfraErrorContext(
        transport_type=EnumInfraTransportType.DATABASE,
        operation=handle.operation.value,
        target_name=handle.table,
    )


def _compile_columns(handle: ModelQueryHandle) -> str:
    names = [c.strip() for c in handle.columns.split(",") if c.strip()]
    if not names or names == ["*"]:
        return "*"
    return ", ".join(quote_identifier(name, handle) for name in names)


def _compile_where(handle: ModelQueryHandle, params: _Params) -> str:
    if not handle.filters:
        return ""
    predicates = []
    for query_filter in handle.filters:
        column = quote_identifier(query_filter.column, handle)
        operator = query_filter.operator
        if operator is EnumFilterOperator.IN:
            predicates.append(f"{column} = ANY({params.bind(list(query_filter.value))})")
        elif operator is EnumFilterOperator.IS:
            keyword = {None: "NULL", True: "TRUE", False: "FALSE"}.get(query_filter.value)
            if keyword is None:
                raise ProtocolConfigurationError(
                    "IS filters only accept None, True or False",
                    context=_context(handle),
                    column=query_filter.column,
                )
            predicates.append(f"{column} IS {keyword}")
        else:
            predicates.append(f"{column} {operator.value} {params.bind(query_filter.value)}")
    return " WHERE " + " AND ".join(predicates)


def _compile_order(handle: ModelQueryHandle) -> str:
    if not handle.order:
        return ""
    clauses = ", ".join(
        f"{quote_identifier(o.column, handle)} {'DESC' if o.descending else 'ASC'}"
        for o in handle.order
    )
    return f" ORDER BY {clauses}"


__all__ = ["compile_query", "quote_identifier"]
