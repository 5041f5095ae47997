# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Prometheus query metrics collector.

Exposes query timings through prometheus_client:

- ``<namespace>_database_queries_total`` counter
- ``<namespace>_database_query_duration_seconds`` histogram

Both are labelled ``client``, ``table`` and ``operation``, parsed from the
``"<client_label>:<table>:<operation>"`` metric key. prometheus_client
metrics are thread-safe, so record() takes no lock of its own.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

from querywatch.metrics.util_metric_key import split_metric_key

logger = logging.getLogger(__name__)

DEFAULT_DURATION_BUCKETS: tuple[float, ...] = (
    0.001,
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
)
METRIC_LABELS = ("client", "table", "operation")


class PrometheusQueryMetricsCollector:
    """Query metrics collector backed by prometheus_client.

    Args:
        registry: Registry to register metrics in. A private registry is
            created when omitted so several collectors can coexist.
        namespace: Metric name prefix.
        buckets: Histogram buckets in seconds.
    """

    content_type = CONTENT_TYPE_LATEST

    def __init__(
        self,
        registry: CollectorRegistry | None = None,
        namespace: str = "querywatch",
        buckets: Sequence[float] = DEFAULT_DURATION_BUCKETS,
    ) -> None:
        self._registry = registry if registry is not None else CollectorRegistry()
        self._namespace = namespace
        self._queries_total = Counter(
            "database_queries_total",
            "Total number of database queries",
            METRIC_LABELS,
            namespace=namespace,
            registry=self._registry,
        )
        self._query_duration = Histogram(
            "database_query_duration_seconds",
            "Time spent resolving database queries",
            METRIC_LABELS,
            namespace=namespace,
            buckets=tuple(buckets),
            registry=self._registry,
        )
        logger.debug(
            "Prometheus query metrics registered", extra={"namespace": namespace}
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def record(self, metric_key: str, value_ms: float) -> None:
        """Count one query and observe its duration."""
        parts = split_metric_key(metric_key)
        labels = {
            "client": parts.client_label,
            "table": parts.table,
            "operation": parts.operation,
        }
        self._queries_total.labels(**labels).inc()
        self._query_duration.labels(**labels).observe(value_ms / 1000.0)

    def get_metrics_text(self) -> str:
        """Return the registry in Prometheus text exposition format."""
        return generate_latest(self._registry).decode("utf-8")


__all__ = [
    "DEFAULT_DURATION_BUCKETS",
    "METRIC_LABELS",
    "PrometheusQueryMetricsCollector",
]
