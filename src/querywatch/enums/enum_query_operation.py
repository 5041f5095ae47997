# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Query Operation Enumeration.

Defines the operation kinds a table-scoped query builder can select.
The value is used verbatim as the last segment of the metric key
``"<client_label>:<table>:<operation>"``.
"""

from enum import Enum


class EnumQueryOperation(str, Enum):
    """Operation kinds supported by the query-building surface.

    Attributes:
        SELECT: Read rows from a table
        INSERT: Insert one or more rows
        UPDATE: Update rows matching the filters
        DELETE: Delete rows matching the filters
        UPSERT: Insert rows, updating on conflict
    """

    SELECT = "select"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    UPSERT = "upsert"

    @property
    def is_write(self) -> bool:
        """Return True for operations that modify rows."""
        return self is not EnumQueryOperation.SELECT


__all__ = ["EnumQueryOperation"]
