# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Performance Alert Severity Enumeration."""

from enum import Enum


class EnumAlertSeverity(str, Enum):
    """Severity of a performance alert raised by the metrics collector."""

    CRITICAL = "critical"


__all__ = ["EnumAlertSeverity"]
