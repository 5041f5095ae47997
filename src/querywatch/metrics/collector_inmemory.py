# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""In-memory query metrics collector.

Keeps process-local aggregates of database query timings:

- total query count and rolling average duration
- slow query count (strictly above the slow threshold)
- per metric key count, average, maximum and slow count
- the most recent timings (bounded) for reports and alerting

Reports and alerts are derived on demand; nothing runs in the background.

Thread Safety:
    record() may be called from any number of coroutines or threads; all
    state is guarded by a single lock.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from querywatch.enums import EnumAlertSeverity
from querywatch.models import (
    DEFAULT_SLOW_QUERY_THRESHOLD_MS,
    ModelPerformanceAlert,
    ModelQueryKeyStats,
    ModelQueryMetricsReport,
    ModelQueryTiming,
)

logger = logging.getLogger(__name__)

MAX_QUERY_RECORDS = 500
RECENT_SLOW_QUERY_LIMIT = 10
FREQUENT_SLOW_QUERY_WINDOW = timedelta(minutes=5)
FREQUENT_SLOW_QUERY_THRESHOLD = 10


class _KeyAccumulator:
    __slots__ = ("count", "max_ms", "slow_count", "total_ms")

    def __init__(self) -> None:
        self.count = 0
        self.total_ms = 0.0
        self.max_ms = 0.0
        self.slow_count = 0


class InMemoryQueryMetricsCollector:
    """Rolling in-process query metrics.

    Example:
        >>> collector = InMemoryQueryMetricsCollector()
        >>> collector.record("client:profiles:select", 12.0)
        >>> collector.get_report().queries
        1
    """

    def __init__(
        self,
        slow_query_threshold_ms: float = DEFAULT_SLOW_QUERY_THRESHOLD_MS,
        max_records: int = MAX_QUERY_RECORDS,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if slow_query_threshold_ms < 0:
            raise ValueError("slow_query_threshold_ms must be >= 0")
        if max_records < 1:
            raise ValueError("max_records must be >= 1")
        self._slow_query_threshold_ms = float(slow_query_threshold_ms)
        self._clock = clock or (lambda: datetime.now(UTC))
        self._lock = threading.Lock()
        self._timings: deque[ModelQueryTiming] = deque(maxlen=max_records)
        self._by_key: dict[str, _KeyAccumulator] = {}
        self._queries = 0
        self._average_ms = 0.0
        self._slow_queries = 0

    @property
    def slow_query_threshold_ms(self) -> float:
        return self._slow_query_threshold_ms

    def record(self, metric_key: str, value_ms: float) -> None:
        """Record one query duration."""
        if value_ms < 0:
            raise ValueError("value_ms must be >= 0")
        value_ms = float(value_ms)
        is_slow = value_ms > self._slow_query_threshold_ms
        timing = ModelQueryTiming(
            metric_key=metric_key, duration_ms=value_ms, timestamp=self._clock()
        )

        with self._lock:
            self._queries += 1
            self._average_ms += (value_ms - self._average_ms) / self._queries
            if is_slow:
                self._slow_queries += 1

            accumulator = self._by_key.get(metric_key)
            if accumulator is None:
                accumulator = self._by_key[metric_key] = _KeyAccumulator()
            accumulator.count += 1
            accumulator.total_ms += value_ms
            accumulator.max_ms = max(accumulator.max_ms, value_ms)
            if is_slow:
                accumulator.slow_count += 1

            self._timings.append(timing)

    def get_report(self) -> ModelQueryMetricsReport:
        """Return a snapshot of the collected metrics."""
        with self._lock:
            slow_timings = [
                t for t in self._timings if t.duration_ms > self._slow_query_threshold_ms
            ]
            by_key = {
                key: ModelQueryKeyStats(
                    metric_key=key,
                    count=acc.count,
                    average_ms=acc.total_ms / acc.count,
                    max_ms=acc.max_ms,
                    slow_count=acc.slow_count,
                )
                for key, acc in self._by_key.items()
            }
            return ModelQueryMetricsReport(
                timestamp=self._clock(),
                queries=self._queries,
                average_query_time_ms=self._average_ms,
                slow_queries=self._slow_queries,
                slow_query_threshold_ms=self._slow_query_threshold_ms,
                recent_slow_queries=slow_timings[-RECENT_SLOW_QUERY_LIMIT:],
                by_key=by_key,
            )

    def get_alerts(self, now: datetime | None = None) -> list[ModelPerformanceAlert]:
        """Return alerts derived from recent timings.

        Raises ``frequent_slow_queries`` (critical) when more than
        FREQUENT_SLOW_QUERY_THRESHOLD slow queries were recorded within
        FREQUENT_SLOW_QUERY_WINDOW of ``now``.
        """
        now = now or self._clock()
        window_start = now - FREQUENT_SLOW_QUERY_WINDOW
        with self._lock:
            recent_slow = sum(
                1
                for t in self._timings
                if t.duration_ms > self._slow_query_threshold_ms
                and t.timestamp >= window_start
            )

        alerts: list[ModelPerformanceAlert] = []
        if recent_slow > FREQUENT_SLOW_QUERY_THRESHOLD:
            window_minutes = int(FREQUENT_SLOW_QUERY_WINDOW.total_seconds() // 60)
            alerts.append(
                ModelPerformanceAlert(
                    alert_type="frequent_slow_queries",
                    severity=EnumAlertSeverity.CRITICAL,
                    message=(
                        f"{recent_slow} slow database queries in the last "
                        f"{window_minutes} minutes"
                    ),
                    threshold=f"{FREQUENT_SLOW_QUERY_THRESHOLD} queries",
                )
            )
            logger.warning(
                "Performance alert: frequent slow queries",
                extra={"slow_query_count": recent_slow},
            )
        return alerts

    def reset(self) -> None:
        """Discard every recorded metric."""
        with self._lock:
            self._timings.clear()
            self._by_key.clear()
            self._queries = 0
            self._average_ms = 0.0
            self._slow_queries = 0


__all__ = [
    "FREQUENT_SLOW_QUERY_THRESHOLD",
    "FREQUENT_SLOW_QUERY_WINDOW",
    "InMemoryQueryMetricsCollector",
    "MAX_QUERY_RECORDS",
    "RECENT_SLOW_QUERY_LIMIT",
]
