# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Concrete query executors.

Executors:
    - PostgresQueryExecutor: asyncpg-backed production executor
    - InMemoryQueryExecutor: dict-backed executor for tests (NOT durable)
"""

from querywatch.executors.executor_inmemory import InMemoryQueryExecutor
from querywatch.executors.executor_postgres import PostgresQueryExecutor
from querywatch.executors.util_result_shaping import shape_result
from querywatch.executors.util_sql_compiler import compile_query, quote_identifier

__all__ = [
    "InMemoryQueryExecutor",
    "PostgresQueryExecutor",
    "compile_query",
    "quote_identifier",
    "shape_result",
]
