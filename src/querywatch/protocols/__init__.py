# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocols implemented by executors, collectors and sinks."""

from querywatch.protocols.protocol_metrics_collector import ProtocolMetricsCollector
from querywatch.protocols.protocol_query_executor import (
    ProtocolQueryExecutor,
    QueryResult,
    QueryRow,
)
from querywatch.protocols.protocol_query_observation_sink import (
    ProtocolQueryObservationSink,
)

__all__ = [
    "ProtocolMetricsCollector",
    "ProtocolQueryExecutor",
    "ProtocolQueryObservationSink",
    "QueryResult",
    "QueryRow",
]
