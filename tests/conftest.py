# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Pytest configuration and shared fixtures for querywatch tests."""

from __future__ import annotations

import inspect
from collections.abc import Iterator

import pytest

from querywatch.executors import InMemoryQueryExecutor
from querywatch.instrumentation import client_registry
from querywatch.metrics import reset_metrics_collector
from querywatch.sinks import InMemoryQueryObservationSink
from tests.helpers import FakeClock, RecordingCollector

# =============================================================================
# Duck Typing Conformance Helpers
# =============================================================================


def assert_has_methods(
    obj: object,
    required_methods: list[str],
    *,
    protocol_name: str | None = None,
) -> None:
    """Assert that an object has all required methods (duck typing conformance).

    Args:
        obj: The object to check for method presence.
        required_methods: List of method names that must be present and callable.
        protocol_name: Optional protocol name for clearer error messages.
    """
    name = protocol_name or obj.__class__.__name__
    for method_name in required_methods:
        assert hasattr(obj, method_name), f"{name} must have '{method_name}' method"
        assert callable(getattr(obj, method_name)), f"{name}.{method_name} must be callable"


def assert_has_async_methods(
    obj: object,
    required_methods: list[str],
    *,
    protocol_name: str | None = None,
) -> None:
    """Assert that an object has all required async methods."""
    name = protocol_name or obj.__class__.__name__
    for method_name in required_methods:
        assert hasattr(obj, method_name), f"{name} must have '{method_name}' method"
        method = getattr(obj, method_name)
        assert inspect.iscoroutinefunction(
            method
        ), f"{name}.{method_name} must be async (coroutine function)"


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recording_collector() -> RecordingCollector:
    return RecordingCollector()


@pytest.fixture
def observation_sink() -> InMemoryQueryObservationSink:
    return InMemoryQueryObservationSink()


@pytest.fixture
def profiles_executor() -> InMemoryQueryExecutor:
    """In-memory executor seeded with a small ``profiles`` table."""
    return InMemoryQueryExecutor(
        {
            "profiles": [
                {"id": 1, "email": "ada@example.com", "tier": "pro", "age": 36},
                {"id": 2, "email": "alan@example.com", "tier": "free", "age": 41},
                {"id": 3, "email": "grace@example.com", "tier": "pro", "age": None},
            ]
        }
    )


@pytest.fixture(autouse=True)
def _isolate_default_collector() -> Iterator[None]:
    """Give every test a fresh process-wide metrics collector."""
    reset_metrics_collector()
    yield
    reset_metrics_collector()


@pytest.fixture
def clean_client_registry() -> Iterator[None]:
    """Empty the process-wide client registry before and after a test."""
    client_registry._clients.clear()
    yield
    client_registry._clients.clear()
