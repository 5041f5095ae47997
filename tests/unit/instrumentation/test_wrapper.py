# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for wrap()."""

from __future__ import annotations

import pytest

from querywatch.client import QueryClient
from querywatch.errors import ProtocolConfigurationError, QueryCardinalityError
from querywatch.executors import InMemoryQueryExecutor
from querywatch.instrumentation import TimingQueryExecutor, wrap
from querywatch.sinks import InMemoryQueryObservationSink
from tests.helpers import FakeClock, RecordingCollector, ScriptedExecutor


class TestWrapValidation:
    def test_rejects_objects_without_executor_surface(self) -> None:
        with pytest.raises(ProtocolConfigurationError) as exc_info:
            wrap(object(), "client")

        assert exc_info.value.context["client_type"] == "object"
        assert exc_info.value.context["operation"] == "wrap"

    def test_rejects_empty_label(self, fake_clock: FakeClock) -> None:
        with pytest.raises(ProtocolConfigurationError, match="client_label"):
            wrap(ScriptedExecutor(fake_clock), "")


class TestWrappedClientShape:
    def test_returns_query_client_over_timing_executor(
        self, profiles_executor: InMemoryQueryExecutor
    ) -> None:
        client = wrap(profiles_executor, "admin")

        assert isinstance(client, QueryClient)
        assert isinstance(client.executor, TimingQueryExecutor)
        assert client.client_label == "admin"
        assert client.executor.client_label == "admin"
        assert client.unwrap() is profiles_executor

    def test_passthrough_reaches_underlying_client(self, fake_clock: FakeClock) -> None:
        client = wrap(ScriptedExecutor(fake_clock), "client")

        assert client.ping() == "pong"

    def test_passthrough_returns_same_bound_behaviour(
        self, profiles_executor: InMemoryQueryExecutor
    ) -> None:
        client = wrap(profiles_executor, "client")

        assert client.snapshot("profiles") == profiles_executor.snapshot("profiles")

    def test_missing_attribute_raises_attribute_error(
        self, profiles_executor: InMemoryQueryExecutor
    ) -> None:
        client = wrap(profiles_executor, "client")

        with pytest.raises(AttributeError):
            client.no_such_capability  # noqa: B018


class TestRewrapping:
    @pytest.mark.asyncio
    async def test_rewrapping_a_client_counts_each_query_once(
        self,
        profiles_executor: InMemoryQueryExecutor,
        recording_collector: RecordingCollector,
    ) -> None:
        first = wrap(profiles_executor, "client", collector=recording_collector)
        second = wrap(first, "admin", collector=recording_collector)

        await second.table("profiles").select()

        assert second.unwrap() is profiles_executor
        assert [key for key, _ in recording_collector.records] == ["admin:profiles:select"]

    @pytest.mark.asyncio
    async def test_rewrapping_a_timing_executor_counts_once(
        self,
        profiles_executor: InMemoryQueryExecutor,
        recording_collector: RecordingCollector,
    ) -> None:
        timing = TimingQueryExecutor(
            profiles_executor, "client", collector=recording_collector
        )
        client = wrap(timing, "admin", collector=recording_collector)

        await client.table("profiles").select()

        assert [key for key, _ in recording_collector.records] == ["admin:profiles:select"]


class TestTransparency:
    """A wrapped client behaves exactly like the unwrapped one."""

    @pytest.mark.asyncio
    async def test_results_match_unwrapped_client(
        self, profiles_executor: InMemoryQueryExecutor
    ) -> None:
        raw = QueryClient(profiles_executor)
        wrapped = wrap(profiles_executor, "client")

        raw_rows = await raw.table("profiles").select("id, email").eq("tier", "pro").order("id")
        wrapped_rows = await (
            wrapped.table("profiles").select("id, email").eq("tier", "pro").order("id")
        )

        assert wrapped_rows == raw_rows
        assert wrapped_rows == [
            {"id": 1, "email": "ada@example.com"},
            {"id": 3, "email": "grace@example.com"},
        ]

    @pytest.mark.asyncio
    async def test_errors_match_unwrapped_client(
        self,
        profiles_executor: InMemoryQueryExecutor,
        observation_sink: InMemoryQueryObservationSink,
    ) -> None:
        raw = QueryClient(profiles_executor)
        wrapped = wrap(profiles_executor, "client", sinks=[observation_sink])

        with pytest.raises(QueryCardinalityError) as raw_error:
            await raw.table("profiles").select().eq("tier", "pro").single()
        with pytest.raises(QueryCardinalityError) as wrapped_error:
            await wrapped.table("profiles").select().eq("tier", "pro").single()

        assert str(wrapped_error.value) == str(raw_error.value)
        assert wrapped_error.value.row_count == raw_error.value.row_count == 2
        assert len(observation_sink) == 1
        assert observation_sink.observations[0].success is False

    @pytest.mark.asyncio
    async def test_writes_through_wrapped_client_are_visible_raw(
        self, profiles_executor: InMemoryQueryExecutor
    ) -> None:
        wrapped = wrap(profiles_executor, "admin")

        created = await wrapped.table("profiles").insert({"id": 4, "tier": "free"})
        row = await QueryClient(profiles_executor).table("profiles").select().eq("id", 4).single()

        assert created == [{"id": 4, "tier": "free"}]
        assert row == {"id": 4, "tier": "free"}
