# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Query Result Mode Enumeration.

Selects how a terminal resolution shapes the rows returned by the database.
"""

from enum import Enum


class EnumQueryResultMode(str, Enum):
    """Result shaping for terminal resolution.

    Attributes:
        MANY: Return every matching row as a list
        SINGLE: Return exactly one row; zero or several rows is an error
        MAYBE_SINGLE: Return one row or None; several rows is an error
    """

    MANY = "many"
    SINGLE = "single"
    MAYBE_SINGLE = "maybe_single"


__all__ = ["EnumQueryResultMode"]
