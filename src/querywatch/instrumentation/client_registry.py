# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Process-wide wrapped clients.

Applications usually hold two logical connections: the regular client and
a privileged admin client. initialize_clients() wraps each executor under
its label once at startup; request handlers then call get_client() or
get_admin_client().
"""

from __future__ import annotations

import inspect
import logging

from querywatch.client import QueryClient
from querywatch.enums import EnumInfraTransportType
from querywatch.errors import ModelInfraErrorContext, ProtocolConfigurationError
from querywatch.instrumentation.wrapper import wrap
from querywatch.models import ModelQueryInterceptorConfig
from querywatch.protocols import (
    ProtocolMetricsCollector,
    ProtocolQueryExecutor,
    ProtocolQueryObservationSink,
)

logger = logging.getLogger(__name__)

CLIENT_LABEL = "client"
ADMIN_LABEL = "admin"

_clients: dict[str, QueryClient] = {}


def initialize_clients(
    client: ProtocolQueryExecutor | None = None,
    admin: ProtocolQueryExecutor | None = None,
    *,
    collector: ProtocolMetricsCollector | None = None,
    sinks: tuple[ProtocolQueryObservationSink, ...] = (),
    config: ModelQueryInterceptorConfig | None = None,
    **executors: ProtocolQueryExecutor,
) -> dict[str, QueryClient]:
    """Wrap and register executors by label.

    Args:
        client: Executor for the regular client.
        admin: Executor for the privileged client.
        collector: Metrics collector shared by every wrapped client.
        sinks: Observation sinks shared by every wrapped client.
        config: Interceptor settings (defaults to environment configuration).
        **executors: Additional executors keyed by label.

    Returns:
        A copy of the registry after registration.
    """
    resolved_config = config or ModelQueryInterceptorConfig.from_environment()
    labelled: dict[str, ProtocolQueryExecutor] = dict(executors)
    if client is not None:
        labelled[CLIENT_LABEL] = client
    if admin is not None:
        labelled[ADMIN_LABEL] = admin

    for label, executor in labelled.items():
        _clients[label] = wrap(
            executor,
            label,
            collector=collector,
            sinks=sinks,
            config=resolved_config,
        )
    logger.info("Query clients initialized", extra={"labels": sorted(_clients)})
    return dict(_clients)


def get_client(label: str = CLIENT_LABEL) -> QueryClient:
    """Return the wrapped client registered under ``label``.

    Raises:
        ProtocolConfigurationError: If no client is registered under ``label``.
    """
    try:
        return _clients[label]
    except KeyError:
        raise ProtocolConfigurationError(
            f"No query client registered under '{label}'",
            context=ModelInfraErrorContext(
                transport_type=EnumInfraTransportType.RUNTIME,
                operation="get_client",
                target_name=label,
            ),
            registered=sorted(_clients),
        ) from None


def get_admin_client() -> QueryClient:
    return get_client(ADMIN_LABEL)


async def close_clients() -> None:
    """Close every registered client's underlying executor and clear the registry."""
    clients = list(_clients.values())
    _clients.clear()
    for client in clients:
        close = getattr(client.unwrap(), "close", None)
        if close is None:
            continue
        result = close()
        if inspect.isawaitable(result):
            await result


__all__ = [
    "ADMIN_LABEL",
    "CLIENT_LABEL",
    "close_clients",
    "get_admin_client",
    "get_client",
    "initialize_clients",
]
