# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Models returned by the in-memory query metrics collector."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from querywatch.enums import EnumAlertSeverity


class ModelQueryTiming(BaseModel):
    """One recorded timing for a metric key."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    metric_key: str
    duration_ms: float = Field(..., ge=0)
    timestamp: datetime


class ModelQueryKeyStats(BaseModel):
    """Aggregates for a single ``client:table:operation`` key."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    metric_key: str
    count: int = Field(default=0, ge=0)
    average_ms: float = Field(default=0.0, ge=0)
    max_ms: float = Field(default=0.0, ge=0)
    slow_count: int = Field(default=0, ge=0)


class ModelQueryMetricsReport(BaseModel):
    """Point-in-time report of database query metrics."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    timestamp: datetime
    queries: int = Field(default=0, ge=0)
    average_query_time_ms: float = Field(default=0.0, ge=0)
    slow_queries: int = Field(default=0, ge=0)
    slow_query_threshold_ms: float = Field(..., ge=0)
    recent_slow_queries: list[ModelQueryTiming] = Field(default_factory=list)
    by_key: dict[str, ModelQueryKeyStats] = Field(default_factory=dict)


class ModelPerformanceAlert(BaseModel):
    """Alert derived from recent query timings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    alert_type: str
    severity: EnumAlertSeverity
    message: str
    threshold: str


__all__ = [
    "ModelPerformanceAlert",
    "ModelQueryKeyStats",
    "ModelQueryMetricsReport",
    "ModelQueryTiming",
]
