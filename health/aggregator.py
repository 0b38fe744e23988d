# ============================================================================
# FAN-OUT AGGREGATOR
# ============================================================================
# STATUS: Infrastructure - Concurrent probe execution
# PURPOSE: Run a set of probes concurrently and collect every outcome
# CREATED: 18 OCT 2026
# ============================================================================
"""
Fan-Out Aggregator

Launches one timed execution per probe, waits for all of them to settle
and never short-circuits on the first failure. A failing or timed-out
probe is normalized into an unhealthy outcome:

    {status: unhealthy, error: <msg>, details: "Check failed: <msg>"}

Every outcome is annotated with the probe's critical flag and timeout.
"""

import asyncio
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from core.logging import ComponentType, get_logger, log_context
from health.core import ComponentOutcome, ProbeDefinition, error_message
from health.exceptions import ProbeTimeoutError
from health.executor import TimedExecutor

logger = get_logger(__name__, ComponentType.AGGREGATOR)


@dataclass(frozen=True)
class ProbeSettlement:
    """How one probe execution settled: an outcome or an error."""
    definition: ProbeDefinition
    outcome: Optional[ComponentOutcome] = None
    error: Optional[BaseException] = None

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def succeeded(self) -> bool:
        """True if the probe returned (whatever status it reported)."""
        return self.error is None

    def to_outcome(self) -> ComponentOutcome:
        """Outcome with failures normalized and policy attached."""
        if self.error is not None:
            outcome = ComponentOutcome.from_exception(self.error)
        else:
            outcome = self.outcome
        return outcome.annotate(
            critical=self.definition.critical,
            timeout_ms=self.definition.timeout_ms,
        )


class FanOutAggregator:
    """
    Runs probe definitions concurrently.

    The definitions passed in are a snapshot; their order only fixes the
    order of the returned results.
    """

    def __init__(self, executor: Optional[TimedExecutor] = None):
        self.executor = executor or TimedExecutor()

    async def settle(
        self,
        definitions: Iterable[ProbeDefinition],
    ) -> List[ProbeSettlement]:
        """Execute all probes and wait for every one to settle."""
        definitions = list(definitions)
        if not definitions:
            return []

        results = await asyncio.gather(
            *(self._execute(definition) for definition in definitions),
            return_exceptions=True,
        )

        settlements = []
        for definition, result in zip(definitions, results):
            if isinstance(result, BaseException):
                settlements.append(ProbeSettlement(definition, error=result))
            else:
                settlements.append(ProbeSettlement(definition, outcome=result))
        return settlements

    async def aggregate(
        self,
        definitions: Iterable[ProbeDefinition],
    ) -> Dict[str, ComponentOutcome]:
        """Execute all probes and return name -> annotated outcome."""
        settlements = await self.settle(definitions)
        return {s.name: s.to_outcome() for s in settlements}

    async def _execute(self, definition: ProbeDefinition) -> ComponentOutcome:
        with log_context(probe=definition.name):
            try:
                return await self.executor.execute(definition)
            except ProbeTimeoutError:
                raise
            except Exception as e:
                logger.error(f"Probe {definition.name} failed: {error_message(e)}")
                raise


__all__ = [
    "ProbeSettlement",
    "FanOutAggregator",
]
