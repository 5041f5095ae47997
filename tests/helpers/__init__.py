# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Test helpers for querywatch unit tests.

Available Utilities:
    Query Doubles:
        - FakeClock: Manually advanced monotonic clock
        - ScriptedExecutor: Executor with scripted latency, result or error
        - RecordingCollector: Collector remembering every record() call
        - ExplodingCollector: Collector whose record() always raises
        - ExplodingSink: Sink whose emit() always raises
        - make_mock_pool: asyncpg pool mock yielding a given connection

    Log Helpers:
        - records_with_message: Filter captured records by message
"""

from tests.helpers.query_doubles import (
    ExplodingCollector,
    ExplodingSink,
    FakeClock,
    RecordingCollector,
    ScriptedExecutor,
    make_mock_pool,
    records_with_message,
)

__all__ = [
    "ExplodingCollector",
    "ExplodingSink",
    "FakeClock",
    "RecordingCollector",
    "ScriptedExecutor",
    "make_mock_pool",
    "records_with_message",
]
