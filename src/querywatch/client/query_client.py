# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Query client façade.

QueryClient is the object call sites hold. Over a bare executor it is the
plain client; ``wrap()`` returns a QueryClient over a TimingQueryExecutor,
which exposes the identical surface with every query instrumented.

Attributes that are not part of the query-building surface (health checks,
transactions, function calls, ``close``) are forwarded unmodified to the
underlying client.
"""

from __future__ import annotations

from typing import Any

from querywatch.client.query_builder import TableQuery
from querywatch.protocols import ProtocolQueryExecutor


class QueryClient:
    """Table-first query client over a ProtocolQueryExecutor.

    Attributes:
        client_label: Label of the logical connection ("client", "admin").
        executor: Executor every query is resolved through.
        underlying_client: Object non-query attributes are forwarded to.
    """

    def __init__(
        self,
        executor: ProtocolQueryExecutor,
        *,
        client_label: str = "client",
        underlying_client: Any = None,
    ) -> None:
        self._executor = executor
        self._client_label = client_label
        self._underlying_client = (
            underlying_client if underlying_client is not None else executor
        )

    @property
    def client_label(self) -> str:
        return self._client_label

    @property
    def executor(self) -> ProtocolQueryExecutor:
        return self._executor

    @property
    def underlying_client(self) -> Any:
        return self._underlying_client

    def table(self, name: str) -> TableQuery:
        """Return the query builder entry point for ``name``."""
        return TableQuery(self._executor, name)

    def from_(self, name: str) -> TableQuery:
        """Alias of ``table()``."""
        return self.table(name)

    def unwrap(self) -> Any:
        """Return the underlying client without instrumentation."""
        return self._underlying_client

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails.
        if name.startswith("__"):
            raise AttributeError(name)
        underlying = self.__dict__.get("_underlying_client")
        if underlying is None:
            raise AttributeError(name)
        return getattr(underlying, name)

    def __repr__(self) -> str:
        return (
            f"QueryClient(client_label={self._client_label!r}, "
            f"underlying_client={type(self._underlying_client).__name__})"
        )


__all__ = ["QueryClient"]
