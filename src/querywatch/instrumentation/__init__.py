# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Query performance instrumentation.

Components:
    - TimingQueryExecutor: executor decorator that times every resolve()
    - wrap: build an instrumented QueryClient over an executor
    - client registry: process-wide "client" and "admin" wrapped clients

Example:
    >>> from querywatch.instrumentation import wrap
    >>> from querywatch.executors import InMemoryQueryExecutor
    >>>
    >>> client = wrap(InMemoryQueryExecutor({"profiles": []}), "client")
    >>> rows = await client.table("profiles").select().eq("tier", "pro")
"""

from querywatch.instrumentation.client_registry import (
    ADMIN_LABEL,
    CLIENT_LABEL,
    close_clients,
    get_admin_client,
    get_client,
    initialize_clients,
)
from querywatch.instrumentation.timing_executor import TimingQueryExecutor
from querywatch.instrumentation.wrapper import wrap

__all__ = [
    "ADMIN_LABEL",
    "CLIENT_LABEL",
    "TimingQueryExecutor",
    "close_clients",
    "get_admin_client",
    "get_client",
    "initialize_clients",
    "wrap",
]
