# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""PostgreSQL executor configuration model.

Security Note:
    The DSN carries credentials and is stored as a SecretStr so it never
    appears in reprs or logs.
"""

from __future__ import annotations

import os
import re

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    ValidationError,
    field_validator,
    model_validator,
)

from querywatch.enums import EnumInfraTransportType
from querywatch.errors import ModelInfraErrorContext, ProtocolConfigurationError

IDENTIFIER_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class ModelPostgresExecutorConfig(BaseModel):
    """Connection and pool settings for PostgresQueryExecutor.

    Attributes:
        dsn: PostgreSQL connection string.
        db_schema: Schema placed first on the search path of every connection.
        pool_min_size: Minimum pooled connections.
        pool_max_size: Maximum pooled connections.
        command_timeout: Per-statement timeout in seconds.
        max_inactive_connection_lifetime: Seconds before idle connections close.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    dsn: SecretStr
    db_schema: str = Field(default="public")
    pool_min_size: int = Field(default=1, ge=0)
    pool_max_size: int = Field(default=10, ge=1)
    command_timeout: float = Field(default=60.0, gt=0)
    max_inactive_connection_lifetime: float = Field(default=300.0, ge=0)

    @field_validator("db_schema")
    @classmethod
    def _validate_schema(cls, value: str) -> str:
        if not IDENTIFIER_PATTERN.match(value):
            raise ValueError(f"db_schema must match {IDENTIFIER_PATTERN.pattern}")
        return value

    @model_validator(mode="after")
    def _validate_pool_bounds(self) -> ModelPostgresExecutorConfig:
        if self.pool_min_size > self.pool_max_size:
            raise ValueError("pool_min_size must not exceed pool_max_size")
        return self

    @classmethod
    def from_environment(cls) -> ModelPostgresExecutorConfig:
        """Create configuration from ``QUERYWATCH_POSTGRES_*`` variables.

        Raises:
            ProtocolConfigurationError: If the DSN is missing or a value is invalid.
        """
        context = ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.DATABASE,
            operation="load_postgres_config",
        )
        dsn = os.getenv("QUERYWATCH_POSTGRES_DSN")
        if not dsn:
            raise ProtocolConfigurationError(
                "QUERYWATCH_POSTGRES_DSN is not set", context=context
            )
        try:
            return cls(
                dsn=SecretStr(dsn),
                db_schema=os.getenv("QUERYWATCH_POSTGRES_SCHEMA", "public"),
                pool_min_size=int(os.getenv("QUERYWATCH_POSTGRES_POOL_MIN_SIZE", "1")),
                pool_max_size=int(os.getenv("QUERYWATCH_POSTGRES_POOL_MAX_SIZE", "10")),
                command_timeout=float(
                    os.getenv("QUERYWATCH_POSTGRES_COMMAND_TIMEOUT", "60.0")
                ),
                max_inactive_connection_lifetime=float(
                    os.getenv("QUERYWATCH_POSTGRES_MAX_INACTIVE_LIFETIME", "300.0")
                ),
            )
        except (ValueError, ValidationError) as e:
            raise ProtocolConfigurationError(
                f"Invalid PostgreSQL configuration: {type(e).__name__}",
                context=context,
            ) from e


__all__ = ["IDENTIFIER_PATTERN", "ModelPostgresExecutorConfig"]
