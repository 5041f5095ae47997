# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Query metrics collectors."""

from querywatch.metrics.collector_inmemory import (
    FREQUENT_SLOW_QUERY_THRESHOLD,
    FREQUENT_SLOW_QUERY_WINDOW,
    MAX_QUERY_RECORDS,
    RECENT_SLOW_QUERY_LIMIT,
    InMemoryQueryMetricsCollector,
)
from querywatch.metrics.collector_prometheus import PrometheusQueryMetricsCollector
from querywatch.metrics.default_collector import (
    get_metrics_collector,
    reset_metrics_collector,
    set_metrics_collector,
)
from querywatch.metrics.util_metric_key import (
    MetricKeyParts,
    split_metric_key,
)

__all__ = [
    "FREQUENT_SLOW_QUERY_THRESHOLD",
    "FREQUENT_SLOW_QUERY_WINDOW",
    "InMemoryQueryMetricsCollector",
    "MAX_QUERY_RECORDS",
    "MetricKeyParts",
    "PrometheusQueryMetricsCollector",
    "RECENT_SLOW_QUERY_LIMIT",
    "get_metrics_collector",
    "reset_metrics_collector",
    "set_metrics_collector",
    "split_metric_key",
]
