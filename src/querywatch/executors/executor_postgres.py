# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""PostgreSQL query executor.

Resolves query handles against PostgreSQL through an asyncpg connection
pool. Handles are compiled to parameterised SQL by util_sql_compiler;
rows come back as plain dicts.

Besides the executor protocol, the executor exposes capabilities that
wrapped clients forward untouched: health_check(), call_function(),
transaction(), acquire_connection() and close().

Security Note:
    - The DSN contains credentials - never log the raw value
    - Identifiers are validated, values are always bound parameters
"""

from __future__ import annotations

import logging
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any
from uuid import uuid4

import asyncpg

from querywatch.enums import EnumInfraTransportType, EnumQueryOperation
from querywatch.errors import (
    InfraConnectionError,
    InfraTimeoutError,
    ModelInfraErrorContext,
    QueryExecutionError,
    RuntimeHostError,
)
from querywatch.executors.util_result_shaping import shape_result
from querywatch.executors.util_sql_compiler import compile_query, quote_identifier
from querywatch.models import ModelPostgresExecutorConfig, ModelQueryHandle
from querywatch.protocols import QueryResult, QueryRow

logger = logging.getLogger(__name__)

TARGET_NAME = "postgres_query_executor"


class PostgresQueryExecutor:
    """asyncpg-backed ProtocolQueryExecutor.

    Features:
        - Connection pooling with configurable min/max connections
        - Schema-aware operations via the connection search_path
        - Cardinality enforcement for single()/maybe_single()
        - Driver errors mapped to typed infrastructure errors

    Example:
        >>> executor = PostgresQueryExecutor(ModelPostgresExecutorConfig.from_environment())
        >>> await executor.initialize()
        >>> client = wrap(executor, "admin")
        >>> row = await client.table("profiles").select().eq("id", user_id).single()
        >>> await executor.close()
    """

    def __init__(self, config: ModelPostgresExecutorConfig | None = None) -> None:
        """Initialize the executor.

        Args:
            config: Connection settings; read from the environment when omitted.
        """
        self._config = config or ModelPostgresExecutorConfig.from_environment()
        self._pool: asyncpg.Pool | None = None
        self._initialized = False

    @property
    def config(self) -> ModelPostgresExecutorConfig:
        return self._config

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """Create the connection pool.

        Raises:
            InfraConnectionError: If the database cannot be reached or rejects
                the credentials.
            RuntimeHostError: If pool creation fails for any other reason.
        """
        if self._initialized:
            return

        context = self._context("initialize")
        try:
            self._pool = await asyncpg.create_pool(
                dsn=self._config.dsn.get_secret_value(),
                min_size=self._config.pool_min_size,
                max_size=self._config.pool_max_size,
                command_timeout=self._config.command_timeout,
                max_inactive_connection_lifetime=self._config.max_inactive_connection_lifetime,
                server_settings={"search_path": f"{self._config.db_schema}, public"},
            )
        except asyncpg.InvalidPasswordError as e:
            raise InfraConnectionError(
                "Database authentication failed - check credentials",
                context=context,
            ) from e
        except asyncpg.InvalidCatalogNameError as e:
            raise InfraConnectionError(
                "Database not found - check database name",
                context=context,
            ) from e
        except OSError as e:
            raise InfraConnectionError(
                "Failed to connect to database - check host and port",
                context=context,
            ) from e
        except Exception as e:
            raise RuntimeHostError(
                f"Failed to initialize query executor: {type(e).__name__}",
                context=context,
            ) from e

        self._initialized = True
        logger.info(
            "PostgresQueryExecutor initialized",
            extra={
                "db_schema": self._config.db_schema,
                "pool_min_size": self._config.pool_min_size,
                "pool_max_size": self._config.pool_max_size,
            },
        )

    async def close(self) -> None:
        """Close the pool. Safe to call more than once."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
        self._initialized = False

    @asynccontextmanager
    async def acquire_connection(self) -> AsyncIterator[asyncpg.Connection]:
        """Acquire a pooled connection, initializing the pool on first use."""
        if not self._initialized:
            await self.initialize()
        if self._pool is None:
            raise InfraConnectionError(
                "Connection pool is not available",
                context=self._context("acquire_connection"),
            )
        async with self._pool.acquire() as connection:
            yield connection

    @asynccontextmanager
    async def transaction(
        self,
        isolation: str = "read_committed",
        readonly: bool = False,
        deferrable: bool = False,
    ) -> AsyncIterator[asyncpg.Connection]:
        """Run statements on one connection inside a transaction.

        Usage:
            async with executor.transaction() as conn:
                await conn.execute("UPDATE plans SET active = $1", False)
        """
        async with self.acquire_connection() as connection:
            async with connection.transaction(
                isolation=isolation, readonly=readonly, deferrable=deferrable
            ):
                yield connection

    def build_query(
        self, table: str, operation: EnumQueryOperation
    ) -> ModelQueryHandle:
        return ModelQueryHandle(table=table, operation=operation)

    async def resolve(self, handle: ModelQueryHandle) -> QueryResult:
        """Compile and run ``handle``.

        Raises:
            ProtocolConfigurationError: If the handle contains invalid identifiers.
            QueryExecutionError: If PostgreSQL rejects the statement.
            QueryCardinalityError: If single()/maybe_single() row counts are violated.
            InfraTimeoutError: If the statement exceeds the command timeout.
            InfraConnectionError: If the connection fails.
        """
        sql, params = compile_query(handle)
        records = await self._fetch(sql, params, self._context(handle.operation.value, handle.table))
        rows: list[QueryRow] = [dict(record) for record in records]
        return shape_result(rows, handle)

    async def call_function(self, function_name: str, *args: Any) -> list[QueryRow]:
        """Call a set-returning or scalar PostgreSQL function.

        Args:
            function_name: Function name, resolved on the configured search path.
            *args: Positional arguments bound as parameters.
        """
        name = quote_identifier(function_name)
        placeholders = ", ".join(f"${i + 1}" for i in range(len(args)))
        sql = f"SELECT * FROM {name}({placeholders})"
        records = await self._fetch(sql, list(args), self._context("call_function", function_name))
        return [dict(record) for record in records]

    async def health_check(self) -> dict[str, Any]:
        """Check connectivity and report pool statistics.

        Never raises; failures are reported in the returned dict.
        """
        health_status: dict[str, Any] = {
            "status": "unhealthy",
            "timestamp": time.time(),
            "connection_pool": {},
            "errors": [],
        }
        if not self._initialized or self._pool is None:
            health_status["errors"].append("Query executor not initialized")
            return health_status

        start_time = time.perf_counter()
        try:
            async with self.acquire_connection() as connection:
                current_schema = await connection.fetchval("SELECT current_schema()")
        except Exception as e:
            health_status["errors"].append(f"Health check failed: {type(e).__name__}")
            return health_status

        health_status.update(
            {
                "status": "healthy",
                "response_time_ms": (time.perf_counter() - start_time) * 1000,
                "current_schema": current_schema,
                "connection_pool": {
                    "size": self._pool.get_size(),
                    "min_size": self._pool.get_min_size(),
                    "max_size": self._pool.get_max_size(),
                    "idle_connections": self._pool.get_idle_size(),
                },
            }
        )
        if current_schema != self._config.db_schema:
            health_status["status"] = "degraded"
            health_status["errors"].append(
                f"Expected schema '{self._config.db_schema}', got '{current_schema}'"
            )
        return health_status

    async def _fetch(
        self, sql: str, params: list[Any], context: ModelInfraErrorContext
    ) -> list[asyncpg.Record]:
        try:
            async with self.acquire_connection() as connection:
                return await connection.fetch(sql, *params)
        except asyncpg.QueryCanceledError as e:
            raise _logged(
                InfraTimeoutError(
                    f"Query on '{context.target_name}' was canceled by the server",
                    context=context,
                    timeout_seconds=self._config.command_timeout,
                    sqlstate=e.sqlstate,
                )
            ) from e
        except asyncpg.PostgresConnectionError as e:
            raise _logged(
                InfraConnectionError(
                    f"Database connection lost during query on '{context.target_name}'",
                    context=context,
                    sqlstate=e.sqlstate,
                )
            ) from e
        except asyncpg.PostgresError as e:
            raise _logged(
                QueryExecutionError(
                    f"Query on '{context.target_name}' failed: {type(e).__name__}",
                    context=context,
                    sqlstate=getattr(e, "sqlstate", None),
                )
            ) from e
        except TimeoutError as e:
            raise _logged(
                InfraTimeoutError(
                    f"Query on '{context.target_name}' exceeded timeout",
                    context=context,
                    timeout_seconds=self._config.command_timeout,
                )
            ) from e
        except (OSError, asyncpg.InterfaceError) as e:
            raise _logged(
                InfraConnectionError(
                    f"Connection failed during query on '{context.target_name}'",
                    context=context,
                )
            ) from e

    @staticmethod
    def _context(operation: str, target_name: str = TARGET_NAME) -> ModelInfraErrorContext:
        return ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.DATABASE,
            operation=operation,
            target_name=target_name,
            correlation_id=uuid4(),
        )


def _logged(error: RuntimeHostError) -> RuntimeHostError:
    logger.warning("PostgreSQL query failed", extra=error.to_log_context())
    return error


__all__ = ["PostgresQueryExecutor"]
