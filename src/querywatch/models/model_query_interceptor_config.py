# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Configuration model for the query timing interceptor."""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from querywatch.errors import ModelInfraErrorContext, ProtocolConfigurationError

DEFAULT_SLOW_QUERY_THRESHOLD_MS = 500

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class ModelQueryInterceptorConfig(BaseModel):
    """Interceptor settings.

    Attributes:
        slow_query_threshold_ms: Queries strictly slower than this are logged
            at WARNING.
        log_slow_queries: Disable to keep only failure logging.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    slow_query_threshold_ms: int = Field(default=DEFAULT_SLOW_QUERY_THRESHOLD_MS, ge=0)
    log_slow_queries: bool = Field(default=True)

    @classmethod
    def from_environment(cls) -> ModelQueryInterceptorConfig:
        """Create configuration from environment variables.

        Reads ``QUERYWATCH_SLOW_QUERY_THRESHOLD_MS`` and
        ``QUERYWATCH_LOG_SLOW_QUERIES``; unset variables keep defaults.

        Raises:
            ProtocolConfigurationError: If a variable holds an invalid value.
        """
        context = ModelInfraErrorContext(operation="load_interceptor_config")
        raw_threshold = os.getenv("QUERYWATCH_SLOW_QUERY_THRESHOLD_MS")
        raw_log_slow = os.getenv("QUERYWATCH_LOG_SLOW_QUERIES")

        settings: dict[str, object] = {}
        if raw_threshold is not None:
            try:
                settings["slow_query_threshold_ms"] = int(raw_threshold)
            except ValueError as e:
                raise ProtocolConfigurationError(
                    "QUERYWATCH_SLOW_QUERY_THRESHOLD_MS must be an integer",
                    context=context,
                ) from e
        if raw_log_slow is not None:
            normalized = raw_log_slow.strip().lower()
            if normalized in _TRUTHY:
                settings["log_slow_queries"] = True
            elif normalized in _FALSY:
                settings["log_slow_queries"] = False
            else:
                raise ProtocolConfigurationError(
                    "QUERYWATCH_LOG_SLOW_QUERIES must be a boolean",
                    context=context,
                )

        try:
            return cls(**settings)
        except ValidationError as e:
            raise ProtocolConfigurationError(
                f"Invalid interceptor configuration: {e.error_count()} error(s)",
                context=context,
            ) from e


__all__ = ["DEFAULT_SLOW_QUERY_THRESHOLD_MS", "ModelQueryInterceptorConfig"]
