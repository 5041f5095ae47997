# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for InMemoryQueryMetricsCollector."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

import pytest

from querywatch.enums import EnumAlertSeverity
from querywatch.metrics import (
    FREQUENT_SLOW_QUERY_THRESHOLD,
    InMemoryQueryMetricsCollector,
)
from querywatch.protocols import ProtocolMetricsCollector

KEY = "client:profiles:select"


class MutableClock:
    def __init__(self) -> None:
        self.now = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> MutableClock:
    return MutableClock()


@pytest.fixture
def collector(clock: MutableClock) -> InMemoryQueryMetricsCollector:
    return InMemoryQueryMetricsCollector(clock=clock)


class TestRecording:
    def test_conforms_to_protocol(self, collector: InMemoryQueryMetricsCollector) -> None:
        assert isinstance(collector, ProtocolMetricsCollector)

    def test_empty_report(self, collector: InMemoryQueryMetricsCollector) -> None:
        report = collector.get_report()

        assert report.queries == 0
        assert report.average_query_time_ms == 0.0
        assert report.slow_queries == 0
        assert report.recent_slow_queries == []
        assert report.by_key == {}
        assert report.slow_query_threshold_ms == 500

    def test_rolling_average_and_slow_count(
        self, collector: InMemoryQueryMetricsCollector
    ) -> None:
        for value in (100, 200, 500, 800):
            collector.record(KEY, value)

        report = collector.get_report()

        assert report.queries == 4
        assert report.average_query_time_ms == pytest.approx(400.0)
        assert report.slow_queries == 1

    def test_per_key_stats(self, collector: InMemoryQueryMetricsCollector) -> None:
        collector.record(KEY, 100)
        collector.record(KEY, 700)
        collector.record("admin:plans:update", 40)

        by_key = collector.get_report().by_key

        assert by_key[KEY].count == 2
        assert by_key[KEY].average_ms == pytest.approx(400.0)
        assert by_key[KEY].max_ms == 700
        assert by_key[KEY].slow_count == 1
        assert by_key["admin:plans:update"].count == 1
        assert by_key["admin:plans:update"].slow_count == 0

    def test_negative_value_rejected(self, collector: InMemoryQueryMetricsCollector) -> None:
        with pytest.raises(ValueError, match="value_ms"):
            collector.record(KEY, -1)

    @pytest.mark.parametrize(
        ("kwargs", "message"),
        [
            ({"slow_query_threshold_ms": -1}, "slow_query_threshold_ms"),
            ({"max_records": 0}, "max_records"),
        ],
    )
    def test_invalid_construction(self, kwargs: dict, message: str) -> None:
        with pytest.raises(ValueError, match=message):
            InMemoryQueryMetricsCollector(**kwargs)

    def test_custom_threshold(self, clock: MutableClock) -> None:
        collector = InMemoryQueryMetricsCollector(slow_query_threshold_ms=50, clock=clock)

        collector.record(KEY, 60)

        assert collector.slow_query_threshold_ms == 50
        assert collector.get_report().slow_queries == 1


class TestRecentSlowQueries:
    def test_keeps_last_ten_slow_queries(
        self, collector: InMemoryQueryMetricsCollector
    ) -> None:
        for offset in range(1, 16):
            collector.record(KEY, 500 + offset)
        collector.record(KEY, 20)

        recent = collector.get_report().recent_slow_queries

        assert [t.duration_ms for t in recent] == [float(v) for v in range(506, 516)]
        assert all(t.metric_key == KEY for t in recent)

    def test_history_is_bounded(self, clock: MutableClock) -> None:
        collector = InMemoryQueryMetricsCollector(max_records=5, clock=clock)

        for offset in range(1, 9):
            collector.record(KEY, 600 + offset)

        report = collector.get_report()
        assert report.queries == 8
        assert report.slow_queries == 8
        assert [t.duration_ms for t in report.recent_slow_queries] == [
            604.0,
            605.0,
            606.0,
            607.0,
            608.0,
        ]


class TestAlerts:
    def _record_slow(self, collector: InMemoryQueryMetricsCollector, count: int) -> None:
        for _ in range(count):
            collector.record(KEY, 750)

    def test_no_alert_at_threshold(self, collector: InMemoryQueryMetricsCollector) -> None:
        self._record_slow(collector, FREQUENT_SLOW_QUERY_THRESHOLD)

        assert collector.get_alerts() == []

    def test_alert_above_threshold(
        self,
        collector: InMemoryQueryMetricsCollector,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        self._record_slow(collector, FREQUENT_SLOW_QUERY_THRESHOLD + 1)

        with caplog.at_level(logging.WARNING):
            alerts = collector.get_alerts()

        assert len(alerts) == 1
        assert alerts[0].alert_type == "frequent_slow_queries"
        assert alerts[0].severity is EnumAlertSeverity.CRITICAL
        assert alerts[0].message == "11 slow database queries in the last 5 minutes"
        assert alerts[0].threshold == "10 queries"
        assert any(
            r.getMessage() == "Performance alert: frequent slow queries"
            for r in caplog.records
        )

    def test_old_slow_queries_fall_out_of_window(
        self, collector: InMemoryQueryMetricsCollector, clock: MutableClock
    ) -> None:
        self._record_slow(collector, FREQUENT_SLOW_QUERY_THRESHOLD + 1)

        later = clock.now + timedelta(minutes=6)

        assert collector.get_alerts(now=later) == []

    def test_window_mixes_old_and_new(
        self, collector: InMemoryQueryMetricsCollector, clock: MutableClock
    ) -> None:
        self._record_slow(collector, 6)
        clock.now += timedelta(minutes=4)
        self._record_slow(collector, 6)

        assert len(collector.get_alerts()) == 1

        clock.now += timedelta(minutes=2)
        assert collector.get_alerts() == []

    def test_fast_queries_never_alert(self, collector: InMemoryQueryMetricsCollector) -> None:
        for _ in range(50):
            collector.record(KEY, 10)

        assert collector.get_alerts() == []


class TestReset:
    def test_reset_discards_everything(
        self, collector: InMemoryQueryMetricsCollector
    ) -> None:
        for _ in range(12):
            collector.record(KEY, 900)

        collector.reset()

        report = collector.get_report()
        assert report.queries == 0
        assert report.slow_queries == 0
        assert report.average_query_time_ms == 0.0
        assert report.by_key == {}
        assert report.recent_slow_queries == []
        assert collector.get_alerts() == []
