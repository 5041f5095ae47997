# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Query observation sinks.

Sinks:
    - InMemoryQueryObservationSink: bounded in-memory buffer (NOT durable)
"""

from querywatch.sinks.sink_observation_inmemory import InMemoryQueryObservationSink

__all__ = ["InMemoryQueryObservationSink"]
