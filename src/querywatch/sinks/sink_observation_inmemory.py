# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""In-memory query observation sink.

Stores observations in a bounded deque. Observations are NOT persisted;
use it in tests and for in-process diagnostics. When the buffer is full
the oldest observation is evicted.
"""

from __future__ import annotations

import threading
from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from querywatch.models import ModelQueryObservation


class InMemoryQueryObservationSink:
    """Bounded in-memory buffer of query observations.

    Example:
        >>> sink = InMemoryQueryObservationSink(max_size=100)
        >>> client = wrap(executor, "client", sinks=[sink])
        >>> await client.table("profiles").select()
        >>> assert len(sink) == 1
    """

    __slots__ = ("_lock", "_max_size", "_observations")

    def __init__(self, max_size: int = 10000) -> None:
        if max_size < 1:
            raise ValueError("max_size must be >= 1")
        self._max_size = max_size
        self._observations: deque[ModelQueryObservation] = deque(maxlen=max_size)
        self._lock = threading.Lock()

    def emit(self, observation: ModelQueryObservation) -> None:
        with self._lock:
            self._observations.append(observation)

    @property
    def observations(self) -> list[ModelQueryObservation]:
        """Copy of the buffered observations, oldest first."""
        with self._lock:
            return list(self._observations)

    @property
    def max_size(self) -> int:
        return self._max_size

    def clear(self) -> None:
        with self._lock:
            self._observations.clear()

    def __len__(self) -> int:
        return len(self._observations)


__all__ = ["InMemoryQueryObservationSink"]
