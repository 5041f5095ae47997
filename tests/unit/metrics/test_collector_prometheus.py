# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for PrometheusQueryMetricsCollector."""

from __future__ import annotations

import pytest
from prometheus_client import CollectorRegistry

from querywatch.executors import InMemoryQueryExecutor
from querywatch.instrumentation import wrap
from querywatch.metrics import PrometheusQueryMetricsCollector
from querywatch.protocols import ProtocolMetricsCollector

LABELS = {"client": "client", "table": "profiles", "operation": "select"}


@pytest.fixture
def registry() -> CollectorRegistry:
    return CollectorRegistry()


@pytest.fixture
def collector(registry: CollectorRegistry) -> PrometheusQueryMetricsCollector:
    return PrometheusQueryMetricsCollector(registry=registry)


class TestPrometheusCollector:
    def test_conforms_to_protocol(self, collector: PrometheusQueryMetricsCollector) -> None:
        assert isinstance(collector, ProtocolMetricsCollector)

    def test_record_counts_and_observes(
        self, collector: PrometheusQueryMetricsCollector, registry: CollectorRegistry
    ) -> None:
        collector.record("client:profiles:select", 250)
        collector.record("client:profiles:select", 750)

        assert registry.get_sample_value("querywatch_database_queries_total", LABELS) == 2.0
        assert registry.get_sample_value(
            "querywatch_database_query_duration_seconds_count", LABELS
        ) == 2.0
        assert registry.get_sample_value(
            "querywatch_database_query_duration_seconds_sum", LABELS
        ) == pytest.approx(1.0)
        assert registry.get_sample_value(
            "querywatch_database_query_duration_seconds_bucket", {**LABELS, "le": "0.5"}
        ) == 1.0

    def test_labels_split_from_key(
        self, collector: PrometheusQueryMetricsCollector, registry: CollectorRegistry
    ) -> None:
        collector.record("admin:plans:update", 5)

        assert registry.get_sample_value(
            "querywatch_database_queries_total",
            {"client": "admin", "table": "plans", "operation": "update"},
        ) == 1.0

    def test_malformed_key_uses_unknown_labels(
        self, collector: PrometheusQueryMetricsCollector, registry: CollectorRegistry
    ) -> None:
        collector.record("select", 5)

        assert registry.get_sample_value(
            "querywatch_database_queries_total",
            {"client": "unknown", "table": "unknown", "operation": "select"},
        ) == 1.0

    def test_custom_namespace(self, registry: CollectorRegistry) -> None:
        collector = PrometheusQueryMetricsCollector(registry=registry, namespace="app")

        collector.record("client:profiles:select", 5)

        assert registry.get_sample_value("app_database_queries_total", LABELS) == 1.0

    def test_private_registries_coexist(self) -> None:
        first = PrometheusQueryMetricsCollector()
        second = PrometheusQueryMetricsCollector()

        first.record("client:profiles:select", 5)

        assert first.registry is not second.registry
        assert second.registry.get_sample_value("querywatch_database_queries_total", LABELS) is None

    def test_metrics_text(self, collector: PrometheusQueryMetricsCollector) -> None:
        collector.record("client:profiles:select", 5)

        text = collector.get_metrics_text()

        assert "querywatch_database_queries_total" in text
        assert 'table="profiles"' in text
        assert collector.content_type.startswith("text/plain")

    @pytest.mark.asyncio
    async def test_wrapped_client_reports_to_prometheus(
        self, collector: PrometheusQueryMetricsCollector, registry: CollectorRegistry
    ) -> None:
        client = wrap(InMemoryQueryExecutor({"profiles": []}), "client", collector=collector)

        await client.table("profiles").select()
        await client.table("profiles").insert({"id": 1})

        assert registry.get_sample_value("querywatch_database_queries_total", LABELS) == 1.0
        assert registry.get_sample_value(
            "querywatch_database_queries_total",
            {"client": "client", "table": "profiles", "operation": "insert"},
        ) == 1.0
