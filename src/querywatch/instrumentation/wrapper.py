# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""wrap(): instrument a query executor without changing call sites."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import Any

from querywatch.client import QueryClient
from querywatch.enums import EnumInfraTransportType
from querywatch.errors import ModelInfraErrorContext, ProtocolConfigurationError
from querywatch.instrumentation.timing_executor import TimingQueryExecutor
from querywatch.models import ModelQueryInterceptorConfig
from querywatch.protocols import (
    ProtocolMetricsCollector,
    ProtocolQueryExecutor,
    ProtocolQueryObservationSink,
)

logger = logging.getLogger(__name__)


def wrap(
    underlying_client: Any,
    client_label: str,
    *,
    collector: ProtocolMetricsCollector | None = None,
    structured_logger: logging.Logger | logging.LoggerAdapter | None = None,
    sinks: Sequence[ProtocolQueryObservationSink] = (),
    config: ModelQueryInterceptorConfig | None = None,
    clock: Callable[[], float] = time.perf_counter,
) -> QueryClient:
    """Return an instrumented client over ``underlying_client``.

    The returned QueryClient exposes the same query-building surface as
    ``QueryClient(underlying_client)``; every terminal step additionally
    produces one observation labelled ``client_label``. Wrapping an
    already wrapped client re-wraps its underlying client, so no query is
    ever counted twice.

    Args:
        underlying_client: A ProtocolQueryExecutor (or a QueryClient over one).
        client_label: Label for metric keys and log lines.
        collector: Metrics collector; defaults to the process-wide collector.
        structured_logger: Logger for slow and failed queries.
        sinks: Observation sinks.
        config: Interceptor settings.
        clock: Monotonic clock in seconds.

    Raises:
        ProtocolConfigurationError: If ``underlying_client`` is not an
            executor or ``client_label`` is empty.
    """
    if isinstance(underlying_client, QueryClient):
        underlying_client = underlying_client.unwrap()
    if isinstance(underlying_client, TimingQueryExecutor):
        underlying_client = underlying_client.executor

    context = ModelInfraErrorContext(
        transport_type=EnumInfraTransportType.RUNTIME,
        operation="wrap",
        target_name=client_label or None,
    )
    if not isinstance(underlying_client, ProtocolQueryExecutor):
        raise ProtocolConfigurationError(
            "Underlying client must implement build_query() and resolve()",
            context=context,
            client_type=type(underlying_client).__name__,
        )
    if not client_label:
        raise ProtocolConfigurationError("client_label must not be empty", context=context)

    timing = TimingQueryExecutor(
        underlying_client,
        client_label,
        collector=collector,
        structured_logger=structured_logger,
        sinks=sinks,
        config=config,
        clock=clock,
    )
    logger.debug(
        "Wrapped query client",
        extra={
            "client_label": client_label,
            "client_type": type(underlying_client).__name__,
        },
    )
    return QueryClient(
        timing, client_label=client_label, underlying_client=underlying_client
    )


__all__ = ["wrap"]
