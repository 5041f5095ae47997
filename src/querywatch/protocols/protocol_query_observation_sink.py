# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Protocol definition for query observation sinks.

Sinks receive the full ModelQueryObservation, unlike collectors which only
see the aggregate key and duration. emit() runs on the query's completion
path and must not block; exceptions raised by a sink are logged by the
interceptor and never reach the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from querywatch.models import ModelQueryObservation


@runtime_checkable
class ProtocolQueryObservationSink(Protocol):
    """Protocol for observation sinks.

    Implementations:
        - InMemoryQueryObservationSink: bounded in-memory buffer
    """

    def emit(self, observation: ModelQueryObservation) -> None:
        """Accept one observation."""
        ...


__all__ = ["ProtocolQueryObservationSink"]
