# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Filter Operator Enumeration."""

from enum import Enum


class EnumFilterOperator(str, Enum):
    """Comparison operators available to query filters.

    The value is the SQL operator emitted by the PostgreSQL executor.
    """

    EQ = "="
    NEQ = "<>"
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="
    IN = "IN"
    IS = "IS"


__all__ = ["EnumFilterOperator"]
