# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Query filter and ordering models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from querywatch.enums import EnumFilterOperator


class ModelQueryFilter(BaseModel):
    """One ``column <operator> value`` predicate.

    Filters on a handle are combined with AND.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    column: str = Field(..., min_length=1, description="Column the predicate applies to")
    operator: EnumFilterOperator = Field(..., description="Comparison operator")
    value: Any = Field(default=None, description="Right-hand operand")


class ModelQueryOrder(BaseModel):
    """Ordering clause for a select."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    column: str = Field(..., min_length=1)
    descending: bool = Field(default=False)


__all__ = ["ModelQueryFilter", "ModelQueryOrder"]
