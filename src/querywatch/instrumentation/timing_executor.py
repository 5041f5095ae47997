# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Query timing decorator.

TimingQueryExecutor implements ProtocolQueryExecutor by delegating to a
real executor and recording one ModelQueryObservation around every
resolve() call. It is the only place in querywatch where queries are
timed; every terminal step of the query builder funnels into a single
resolve() call, so one logical query yields exactly one observation.

Error Handling:
    - Errors raised by the wrapped executor are re-raised unchanged (same
      object, same type). They are recorded as failed observations.
    - Errors raised while recording (collector, logger, sinks) are logged
      once at ERROR by this module's logger and never reach the caller.

Concurrency:
    The start time lives in the frame of one resolve() call. Concurrent
    queries share no timer state and the decorator takes no locks.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from querywatch.enums import EnumQueryOperation
from querywatch.metrics.default_collector import get_metrics_collector
from querywatch.models import (
    ModelQueryHandle,
    ModelQueryInterceptorConfig,
    ModelQueryObservation,
)
from querywatch.protocols import (
    ProtocolMetricsCollector,
    ProtocolQueryExecutor,
    ProtocolQueryObservationSink,
    QueryResult,
)

logger = logging.getLogger(__name__)


class TimingQueryExecutor:
    """Executor decorator that times and reports every resolved query.

    Attributes:
        client_label: Label used as the first segment of every metric key.
        executor: The wrapped executor.

    Example:
        >>> timed = TimingQueryExecutor(PostgresQueryExecutor(config), "admin")
        >>> handle = timed.build_query("profiles", EnumQueryOperation.SELECT)
        >>> rows = await timed.resolve(handle)
    """

    def __init__(
        self,
        executor: ProtocolQueryExecutor,
        client_label: str,
        *,
        collector: ProtocolMetricsCollector | None = None,
        structured_logger: logging.Logger | logging.LoggerAdapter | None = None,
        sinks: Sequence[ProtocolQueryObservationSink] = (),
        config: ModelQueryInterceptorConfig | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        """Initialize the timing decorator.

        Args:
            executor: Executor that actually runs queries.
            client_label: Label of the logical client ("client", "admin").
            collector: Metrics collector; defaults to the process-wide one.
            structured_logger: Logger for slow and failed query lines.
            sinks: Observation sinks receiving every observation.
            config: Interceptor settings (slow threshold).
            clock: Monotonic clock in seconds.
        """
        self._executor = executor
        self._client_label = client_label
        self._collector = collector if collector is not None else get_metrics_collector()
        self._logger = structured_logger if structured_logger is not None else logger
        self._sinks = tuple(sinks)
        self._config = config or ModelQueryInterceptorConfig()
        self._clock = clock

    @property
    def client_label(self) -> str:
        return self._client_label

    @property
    def executor(self) -> ProtocolQueryExecutor:
        return self._executor

    @property
    def collector(self) -> ProtocolMetricsCollector:
        return self._collector

    @property
    def config(self) -> ModelQueryInterceptorConfig:
        return self._config

    def build_query(
        self, table: str, operation: EnumQueryOperation
    ) -> ModelQueryHandle:
        return self._executor.build_query(table, operation)

    async def resolve(self, handle: ModelQueryHandle) -> QueryResult:
        """Resolve ``handle`` through the wrapped executor and record it.

        Returns:
            The wrapped executor's result, unchanged.

        Raises:
            Exactly the exception the wrapped executor raised.
        """
        start = self._clock()
        try:
            result = await self._executor.resolve(handle)
        except Exception as e:
            self.track_query(
                handle.table, handle.operation, self._elapsed_ms(start), False, e
            )
            raise
        self.track_query(handle.table, handle.operation, self._elapsed_ms(start), True)
        return result

    def track_query(
        self,
        table: str,
        operation: EnumQueryOperation | str,
        duration_ms: int,
        success: bool,
        error: BaseException | None = None,
    ) -> None:
        """Report one resolved query.

        Records ``duration_ms`` under ``"<client_label>:<table>:<operation>"``,
        logs slow queries at WARNING and failed queries at ERROR, and hands
        the observation to every sink. Never raises.
        """
        try:
            observation = ModelQueryObservation(
                client_label=self._client_label,
                table=table,
                operation=EnumQueryOperation(operation),
                duration_ms=duration_ms,
                success=success,
                error_message=str(error) if error is not None else None,
            )
            self._collector.record(observation.metric_key, observation.duration_ms)

            is_slow = observation.duration_ms > self._config.slow_query_threshold_ms
            if not observation.success or (is_slow and self._config.log_slow_queries):
                log = self._logger.error if not observation.success else self._logger.warning
                log(
                    "Database query performance",
                    extra={
                        "table": observation.table,
                        "operation": observation.operation.value,
                        "duration_ms": observation.duration_ms,
                        "success": observation.success,
                        "client_label": observation.client_label,
                        "error": observation.error_message,
                    },
                )

            for sink in self._sinks:
                sink.emit(observation)
        except Exception:
            logger.exception(
                "Error tracking database query",
                extra={
                    "client_label": self._client_label,
                    "table": table,
                    "operation": getattr(operation, "value", operation),
                },
            )

    def _elapsed_ms(self, start: float) -> int:
        return max(0, round((self._clock() - start) * 1000))


__all__ = ["TimingQueryExecutor"]
