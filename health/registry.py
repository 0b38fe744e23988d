# ============================================================================
# PROBE REGISTRY
# ============================================================================
# STATUS: Infrastructure - Probe registration
# PURPOSE: Register, remove and snapshot probe definitions
# CREATED: 18 OCT 2026
# ============================================================================
"""
Probe Registry

Maps component name to probe definition. Scoped to one HealthChecker
instance; there is no process-wide registry.

All list methods return snapshots, so an aggregation pass never iterates
a collection that a concurrent add/remove is mutating.

Usage:
    registry = ProbeRegistry(default_timeout_ms=3000)

    # Manual registration
    registry.add("db", ping_database, ProbePolicy(timeout_ms=1000))

    # Decorator registration
    @registry.probe("cache", critical=False)
    async def check_cache():
        return {"status": "healthy"}
"""

from typing import Callable, Dict, List, Optional

from core.config.defaults import DEFAULT_PROBE_TIMEOUT_MS
from core.logging import ComponentType, get_logger
from health.core import ProbeDefinition, ProbeOperation, ProbePolicy

logger = get_logger(__name__, ComponentType.REGISTRY)


class ProbeRegistry:
    """
    Registry for probe definitions.

    Insertion order is kept; it fixes the order components appear in
    detailed reports.
    """

    def __init__(self, default_timeout_ms: int = DEFAULT_PROBE_TIMEOUT_MS):
        self.default_timeout_ms = default_timeout_ms
        self._probes: Dict[str, ProbeDefinition] = {}

    def add(
        self,
        name: str,
        operation: ProbeOperation,
        policy: Optional[ProbePolicy] = None,
    ) -> ProbeDefinition:
        """
        Register a probe, replacing any probe with the same name.

        Args:
            name: Unique component name
            operation: Zero-argument probe callable
            policy: Optional overrides; unset fields use defaults

        Returns:
            The resolved definition

        Raises:
            InvalidProbeError: If the definition can never run
        """
        definition = ProbeDefinition.create(
            name, operation, policy, self.default_timeout_ms
        )

        if name in self._probes:
            # Re-adding keeps the original position
            logger.warning(f"Overwriting probe: {name}")
        self._probes[name] = definition

        logger.debug(
            f"Registered probe: {name} "
            f"(critical={definition.critical}, timeout={definition.timeout_ms}ms, "
            f"readiness={definition.readiness_eligible})"
        )
        return definition

    def remove(self, name: str) -> bool:
        """
        Remove a probe by name. Unknown names are ignored.

        Returns:
            True if a probe was removed
        """
        if name in self._probes:
            del self._probes[name]
            logger.debug(f"Removed probe: {name}")
            return True
        return False

    def probe(
        self,
        name: str,
        critical: Optional[bool] = None,
        timeout_ms: Optional[int] = None,
        readiness_eligible: Optional[bool] = None,
    ) -> Callable[[ProbeOperation], ProbeOperation]:
        """
        Decorator to register a function as a probe.

        Example:
            @registry.probe("queue", timeout_ms=500)
            async def check_queue():
                ...
        """
        policy = ProbePolicy(
            critical=critical,
            timeout_ms=timeout_ms,
            readiness_eligible=readiness_eligible,
        )

        def decorator(func: ProbeOperation) -> ProbeOperation:
            self.add(name, func, policy)
            return func

        return decorator

    def get(self, name: str) -> Optional[ProbeDefinition]:
        """Get probe by name."""
        return self._probes.get(name)

    def list(self) -> List[ProbeDefinition]:
        """Snapshot of all probes in registration order."""
        return list(self._probes.values())

    def list_critical(self) -> List[ProbeDefinition]:
        """Snapshot of critical probes."""
        return [p for p in self._probes.values() if p.critical]

    def list_readiness(self) -> List[ProbeDefinition]:
        """Snapshot of probes gating readiness (critical and eligible)."""
        return [p for p in self._probes.values() if p.in_readiness]

    def clear(self) -> None:
        """Remove all registered probes."""
        self._probes.clear()

    def __len__(self) -> int:
        return len(self._probes)

    def __contains__(self, name: str) -> bool:
        return name in self._probes


__all__ = [
    "ProbeRegistry",
]
