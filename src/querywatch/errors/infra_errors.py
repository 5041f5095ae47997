# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Infrastructure-Specific Error Classes.

Error Hierarchy:
    RuntimeHostError (base infrastructure error)
    ├── ProtocolConfigurationError
    ├── InfraConnectionError
    ├── InfraTimeoutError
    └── QueryExecutionError
        └── QueryCardinalityError

All errors:
    - Carry an EnumErrorCode for classification
    - Support proper error chaining with `raise ... from e`
    - Include structured context for debugging
    - Support correlation IDs for request tracking
    - Accept ModelInfraErrorContext for bundled context parameters

These errors are raised by executors and configuration code. The timing
interceptor never raises them on its own behalf; it re-raises whatever the
executor raised, unchanged.
"""

from typing import Optional
from uuid import UUID

from querywatch.enums import EnumErrorCode
from querywatch.errors.model_infra_error_context import ModelInfraErrorContext


class RuntimeHostError(Exception):
    """Base error class for querywatch infrastructure errors.

    Structured Fields (via ModelInfraErrorContext):
        transport_type: Type of transport (db, metrics, runtime)
        operation: Operation being performed
        correlation_id: Request correlation ID for tracking
        target_name: Target resource name

    Example:
        >>> context = ModelInfraErrorContext(
        ...     transport_type=EnumInfraTransportType.DATABASE,
        ...     operation="initialize",
        ...     target_name="postgres_query_executor",
        ... )
        >>> raise RuntimeHostError("Operation failed", context=context, retry_count=3)
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[EnumErrorCode] = None,
        context: Optional[ModelInfraErrorContext] = None,
        **extra_context: object,
    ) -> None:
        """Initialize RuntimeHostError with structured fields.

        Args:
            message: Human-readable error message
            error_code: Error code (defaults to OPERATION_FAILED)
            context: Bundled infrastructure context (transport_type, operation, etc.)
            **extra_context: Additional context information
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or EnumErrorCode.OPERATION_FAILED

        structured_context: dict[str, object] = dict(extra_context)
        self.correlation_id: Optional[UUID] = None
        if context is not None:
            if context.transport_type is not None:
                structured_context["transport_type"] = context.transport_type
            if context.operation is not None:
                structured_context["operation"] = context.operation
            if context.target_name is not None:
                structured_context["target_name"] = context.target_name
            self.correlation_id = context.correlation_id
        self.context = structured_context

    def __str__(self) -> str:
        return f"[{self.error_code.value}] {self.message}"

    def to_log_context(self) -> dict[str, object]:
        """Return a flat dict suitable for ``logger.xxx(..., extra=...)``."""
        log_context: dict[str, object] = {
            "error_code": self.error_code.value,
            "error_message": self.message,
        }
        if self.correlation_id is not None:
            log_context["correlation_id"] = str(self.correlation_id)
        for key, value in self.context.items():
            log_context[key] = getattr(value, "value", value)
        return log_context


class ProtocolConfigurationError(RuntimeHostError):
    """Raised when configuration or protocol conformance validation fails.

    Used for invalid identifiers, objects that do not satisfy an expected
    protocol, unknown client labels, or malformed environment values.

    Example:
        >>> raise ProtocolConfigurationError(
        ...     "Invalid table identifier",
        ...     context=ModelInfraErrorContext(operation="build_query"),
        ...     identifier="users; drop",
        ... )
    """

    def __init__(
        self,
        message: str,
        context: Optional[ModelInfraErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumErrorCode.INVALID_CONFIGURATION,
            context=context,
            **extra_context,
        )


class InfraConnectionError(RuntimeHostError):
    """Raised when a database connection cannot be established or acquired.

    Example:
        >>> context = ModelInfraErrorContext(
        ...     transport_type=EnumInfraTransportType.DATABASE,
        ...     operation="initialize",
        ...     target_name="postgres_query_executor",
        ... )
        >>> raise InfraConnectionError("Failed to connect to PostgreSQL", context=context)
    """

    def __init__(
        self,
        message: str,
        context: Optional[ModelInfraErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumErrorCode.DATABASE_CONNECTION_ERROR,
            context=context,
            **extra_context,
        )


class InfraTimeoutError(RuntimeHostError):
    """Raised when a database operation exceeds its command timeout.

    Example:
        >>> raise InfraTimeoutError(
        ...     "Database query exceeded timeout",
        ...     context=context,
        ...     timeout_seconds=30,
        ... )
    """

    def __init__(
        self,
        message: str,
        context: Optional[ModelInfraErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumErrorCode.TIMEOUT_ERROR,
            context=context,
            **extra_context,
        )


class QueryExecutionError(RuntimeHostError):
    """Raised when the database rejects a query.

    Constraint violations, syntax errors and permission failures reported
    by the server surface as this error, chained to the driver exception.
    """

    def __init__(
        self,
        message: str,
        context: Optional[ModelInfraErrorContext] = None,
        error_code: Optional[EnumErrorCode] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code or EnumErrorCode.DATABASE_QUERY_ERROR,
            context=context,
            **extra_context,
        )


class QueryCardinalityError(QueryExecutionError):
    """Raised when a single-row terminal step matches the wrong number of rows.

    ``single()`` requires exactly one row; ``maybe_single()`` allows zero
    or one.
    """

    def __init__(
        self,
        message: str,
        context: Optional[ModelInfraErrorContext] = None,
        row_count: int = 0,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            context=context,
            error_code=EnumErrorCode.INVALID_RESULT_CARDINALITY,
            row_count=row_count,
            **extra_context,
        )
        self.row_count = row_count


__all__ = [
    "InfraConnectionError",
    "InfraTimeoutError",
    "ProtocolConfigurationError",
    "QueryCardinalityError",
    "QueryExecutionError",
    "RuntimeHostError",
]
