# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Pydantic models for querywatch."""

from querywatch.models.model_postgres_executor_config import (
    IDENTIFIER_PATTERN,
    ModelPostgresExecutorConfig,
)
from querywatch.models.model_query_filter import ModelQueryFilter, ModelQueryOrder
from querywatch.models.model_query_handle import ModelQueryHandle
from querywatch.models.model_query_interceptor_config import (
    DEFAULT_SLOW_QUERY_THRESHOLD_MS,
    ModelQueryInterceptorConfig,
)
from querywatch.models.model_query_metrics import (
    ModelPerformanceAlert,
    ModelQueryKeyStats,
    ModelQueryMetricsReport,
    ModelQueryTiming,
)
from querywatch.models.model_query_observation import ModelQueryObservation

__all__ = [
    "DEFAULT_SLOW_QUERY_THRESHOLD_MS",
    "IDENTIFIER_PATTERN",
    "ModelPerformanceAlert",
    "ModelPostgresExecutorConfig",
    "ModelQueryFilter",
    "ModelQueryHandle",
    "ModelQueryInterceptorConfig",
    "ModelQueryKeyStats",
    "ModelQueryMetricsReport",
    "ModelQueryObservation",
    "ModelQueryOrder",
    "ModelQueryTiming",
]
