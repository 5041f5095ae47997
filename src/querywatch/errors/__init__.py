# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""querywatch Errors Module.

Exports:
    ModelInfraErrorContext: Configuration model for bundled error context
    RuntimeHostError: Base infrastructure error class
    ProtocolConfigurationError: Configuration and protocol conformance errors
    InfraConnectionError: Database connection errors
    InfraTimeoutError: Database timeout errors
    QueryExecutionError: Errors reported by the database for a query
    QueryCardinalityError: single()/maybe_single() row-count violations

Error Sanitization Guidelines:
    NEVER include in error messages or context:
        - Passwords or full DSNs with credentials
        - Bound query parameter values (may carry PII)

    SAFE to include:
        - Table and column identifiers
        - Operation names (select, insert, initialize)
        - Correlation IDs
        - Error codes and row counts
"""

from querywatch.errors.infra_errors import (
    InfraConnectionError,
    InfraTimeoutError,
    ProtocolConfigurationError,
    QueryCardinalityError,
    QueryExecutionError,
    RuntimeHostError,
)
from querywatch.errors.model_infra_error_context import ModelInfraErrorContext

__all__ = [
    "InfraConnectionError",
    "InfraTimeoutError",
    "ModelInfraErrorContext",
    "ProtocolConfigurationError",
    "QueryCardinalityError",
    "QueryExecutionError",
    "RuntimeHostError",
]
