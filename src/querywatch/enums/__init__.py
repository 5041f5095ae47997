# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Enumerations shared across querywatch components."""

from querywatch.enums.enum_alert_severity import EnumAlertSeverity
from querywatch.enums.enum_error_code import EnumErrorCode
from querywatch.enums.enum_filter_operator import EnumFilterOperator
from querywatch.enums.enum_infra_transport_type import EnumInfraTransportType
from querywatch.enums.enum_query_operation import EnumQueryOperation
from querywatch.enums.enum_query_result_mode import EnumQueryResultMode

__all__ = [
    "EnumAlertSeverity",
    "EnumErrorCode",
    "EnumFilterOperator",
    "EnumInfraTransportType",
    "EnumQueryOperation",
    "EnumQueryResultMode",
]
