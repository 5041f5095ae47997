# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""querywatch: query performance instrumentation for async database clients.

Every query issued through a wrapped client is timed and reported as one
observation (client label, table, operation, duration, outcome) to a
metrics collector, the logger and optional sinks. Results and errors reach
the caller exactly as the underlying client produced them.

Example:
    >>> from querywatch import InMemoryQueryExecutor, wrap
    >>>
    >>> client = wrap(InMemoryQueryExecutor({"profiles": []}), "client")
    >>> await client.table("profiles").insert({"id": 1, "tier": "pro"}).execute()
    >>> row = await client.table("profiles").select().eq("id", 1).single()
"""

from querywatch.client import QueryBuilder, QueryCall, QueryClient, TableQuery
from querywatch.enums import EnumQueryOperation, EnumQueryResultMode
from querywatch.errors import (
    InfraConnectionError,
    InfraTimeoutError,
    ProtocolConfigurationError,
    QueryCardinalityError,
    QueryExecutionError,
    RuntimeHostError,
)
from querywatch.executors import InMemoryQueryExecutor, PostgresQueryExecutor
from querywatch.instrumentation import (
    TimingQueryExecutor,
    close_clients,
    get_admin_client,
    get_client,
    initialize_clients,
    wrap,
)
from querywatch.metrics import (
    InMemoryQueryMetricsCollector,
    PrometheusQueryMetricsCollector,
    get_metrics_collector,
    set_metrics_collector,
)
from querywatch.models import (
    ModelPostgresExecutorConfig,
    ModelQueryHandle,
    ModelQueryInterceptorConfig,
    ModelQueryObservation,
)
from querywatch.protocols import (
    ProtocolMetricsCollector,
    ProtocolQueryExecutor,
    ProtocolQueryObservationSink,
)
from querywatch.sinks import InMemoryQueryObservationSink

__version__ = "0.1.0"

__all__ = [
    "EnumQueryOperation",
    "EnumQueryResultMode",
    "InMemoryQueryExecutor",
    "InMemoryQueryMetricsCollector",
    "InMemoryQueryObservationSink",
    "InfraConnectionError",
    "InfraTimeoutError",
    "ModelPostgresExecutorConfig",
    "ModelQueryHandle",
    "ModelQueryInterceptorConfig",
    "ModelQueryObservation",
    "PostgresQueryExecutor",
    "PrometheusQueryMetricsCollector",
    "ProtocolConfigurationError",
    "ProtocolMetricsCollector",
    "ProtocolQueryExecutor",
    "ProtocolQueryObservationSink",
    "QueryBuilder",
    "QueryCall",
    "QueryCardinalityError",
    "QueryClient",
    "QueryExecutionError",
    "RuntimeHostError",
    "TableQuery",
    "TimingQueryExecutor",
    "__version__",
    "close_clients",
    "get_admin_client",
    "get_client",
    "get_metrics_collector",
    "initialize_clients",
    "set_metrics_collector",
    "wrap",
]
