# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Process-wide default metrics collector.

wrap() forwards to this collector unless it is given one explicitly.
"""

from __future__ import annotations

import threading

from querywatch.metrics.collector_inmemory import InMemoryQueryMetricsCollector
from querywatch.protocols import ProtocolMetricsCollector

_collector: ProtocolMetricsCollector | None = None
_collector_lock = threading.Lock()


def get_metrics_collector() -> ProtocolMetricsCollector:
    """Return the process-wide collector, creating an in-memory one on first use."""
    global _collector
    with _collector_lock:
        if _collector is None:
            _collector = InMemoryQueryMetricsCollector()
        return _collector


def set_metrics_collector(collector: ProtocolMetricsCollector) -> None:
    """Replace the process-wide collector.

    Clients wrapped before the call keep the collector they were built with.
    """
    global _collector
    with _collector_lock:
        _collector = collector


def reset_metrics_collector() -> None:
    """Forget the process-wide collector; the next get creates a fresh one."""
    global _collector
    with _collector_lock:
        _collector = None


__all__ = ["get_metrics_collector", "reset_metrics_collector", "set_metrics_collector"]
