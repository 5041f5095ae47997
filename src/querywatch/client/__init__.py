# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Query-building surface shared by plain and instrumented clients."""

from querywatch.client.query_builder import QueryBuilder, QueryCall, TableQuery
from querywatch.client.query_client import QueryClient

__all__ = ["QueryBuilder", "QueryCall", "QueryClient", "TableQuery"]
