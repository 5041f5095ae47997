# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Query Observation Model.

One recorded measurement of a single database operation. Observations are
created when a query's result or error becomes available, forwarded to
the metrics collector, logger and sinks, and never mutated afterwards.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from querywatch.enums import EnumQueryOperation


class ModelQueryObservation(BaseModel):
    """Measurement of one resolved query.

    Attributes:
        client_label: Label of the wrapped client ("client", "admin", ...).
        table: Table the query targeted.
        operation: Operation kind.
        duration_ms: Whole milliseconds between start and completion.
        success: False if the terminal step raised.
        error_message: Message of the raised error, None on success.
        timestamp: UTC time the observation was created.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    client_label: str = Field(..., min_length=1)
    table: str = Field(..., min_length=1)
    operation: EnumQueryOperation
    duration_ms: int = Field(..., ge=0)
    success: bool
    error_message: str | None = Field(default=None)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def metric_key(self) -> str:
        """Aggregate metric key ``"<client_label>:<table>:<operation>"``."""
        return f"{self.client_label}:{self.table}:{self.operation.value}"


__all__ = ["ModelQueryObservation"]
