# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol definition for aggregate query metrics collectors.

Collectors receive one value per resolved query, keyed by
``"<client_label>:<table>:<operation>"``. They are shared process-wide
and must be safe for concurrent use; record() is called on the query's
completion path, so it must be cheap and must not block.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ProtocolMetricsCollector(Protocol):
    """Protocol for query metrics collectors.

    Implementations:
        - InMemoryQueryMetricsCollector: rolling in-process aggregates and alerts
        - PrometheusQueryMetricsCollector: prometheus_client counter and histogram
    """

    def record(self, metric_key: str, value_ms: float) -> None:
        """Record one query duration in milliseconds under ``metric_key``."""
        ...


__all__ = ["ProtocolMetricsCollector"]
