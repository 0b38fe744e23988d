# ============================================================================
# TIMED EXECUTOR
# ============================================================================
# STATUS: Infrastructure - Single probe execution under a deadline
# PURPOSE: Race one probe operation against its timeout
# CREATED: 18 OCT 2026
# ============================================================================
"""
Timed Executor

Runs one probe under its deadline and produces exactly one of:
- the probe's ComponentOutcome (settled before the deadline)
- ProbeTimeoutError (deadline elapsed first)
- the probe's own exception (failed before the deadline)

When the deadline wins, the probe task is cancelled but not awaited. A
probe that ignores cancellation keeps running in the background; its
late result is drained and discarded, never delivered.

Sync probe callables run in the default thread pool so they cannot
block the event loop.
"""

import asyncio
import inspect
import time
from typing import Any, Callable

from core.logging import ComponentType, get_logger
from health.core import ComponentOutcome, ProbeDefinition, ProbeOperation, error_message
from health.exceptions import ProbeTimeoutError

logger = get_logger(__name__, ComponentType.EXECUTOR)


async def invoke_probe(operation: ProbeOperation) -> ComponentOutcome:
    """
    Call a probe operation and coerce its result.

    Handles both sync and async operations.
    """
    if inspect.iscoroutinefunction(operation):
        result = await operation()
    else:
        # Run sync operation in thread pool
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, operation)

    # Sync callables may hand back an awaitable (e.g. a lambda wrapping a coroutine)
    if inspect.isawaitable(result):
        result = await result

    return ComponentOutcome.from_result(result)


def _discard_abandoned(task: "asyncio.Future[Any]") -> None:
    """Consume the late result of a timed-out probe."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug(f"Abandoned probe finished with error: {error_message(exc)}")


class TimedExecutor:
    """
    Executes single probes with a per-probe deadline.

    Stateless apart from the clock, so one instance is shared by all
    concurrent aggregation passes.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock

    async def execute(self, definition: ProbeDefinition) -> ComponentOutcome:
        """
        Execute a probe with its timeout.

        Returns:
            The probe's outcome, with responseTimeMillis filled in if absent

        Raises:
            ProbeTimeoutError: If the deadline elapsed first
            Exception: Whatever the probe raised
        """
        start_time = self._clock()
        task = asyncio.ensure_future(invoke_probe(definition.operation))

        try:
            done, _ = await asyncio.wait({task}, timeout=definition.timeout_seconds)
        except asyncio.CancelledError:
            # Caller withdrew; withdraw from the probe as well
            task.cancel()
            task.add_done_callback(_discard_abandoned)
            raise

        if task not in done:
            task.cancel()
            task.add_done_callback(_discard_abandoned)
            logger.warning(
                f"Probe {definition.name} timed out after {definition.timeout_ms}ms"
            )
            raise ProbeTimeoutError(definition.name, definition.timeout_ms)

        duration_ms = (self._clock() - start_time) * 1000
        outcome = task.result()

        logger.debug(
            f"Probe {definition.name}: {outcome.status.value} ({duration_ms:.1f}ms)"
        )
        return outcome.with_response_time(duration_ms)


__all__ = [
    "TimedExecutor",
    "invoke_probe",
]
