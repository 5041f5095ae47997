# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Infrastructure Transport Type Enumeration.

Defines the transport types used in error context to identify which
layer an error originated from.
"""

from enum import Enum


class EnumInfraTransportType(str, Enum):
    """Infrastructure transport types.

    Attributes:
        DATABASE: Database connection transport (PostgreSQL, in-memory store)
        RUNTIME: In-process instrumentation layer
    """

    DATABASE = "db"
    RUNTIME = "runtime"


__all__ = ["EnumInfraTransportType"]
