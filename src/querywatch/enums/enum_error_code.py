# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Error Code Enumeration.

Classifies infrastructure errors raised by querywatch components.
"""

from enum import Enum


class EnumErrorCode(str, Enum):
    """Error codes carried by RuntimeHostError and its subclasses."""

    OPERATION_FAILED = "OPERATION_FAILED"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    DATABASE_CONNECTION_ERROR = "DATABASE_CONNECTION_ERROR"
    DATABASE_QUERY_ERROR = "DATABASE_QUERY_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    INVALID_RESULT_CARDINALITY = "INVALID_RESULT_CARDINALITY"


__all__ = ["EnumErrorCode"]
