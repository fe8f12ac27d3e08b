"""Scenario library: the registered test groups."""

from orchestrator_tester.config import HarnessConfig
from orchestrator_tester.registry import TestRegistry
from orchestrator_tester.scenarios import concurrent, crud, recovery, status, ttl

__all__ = ["build_registry"]


def build_registry(config: HarnessConfig) -> TestRegistry:
    """Build the registry with every test group in run order.

    If config.groups is set, only those groups are kept.
    """
    registry = TestRegistry()
    registry.add_group("CRUD Operations", crud.tests(config))
    registry.add_group("Concurrency", concurrent.tests(config))
    registry.add_group("Pool Status", status.tests(config))
    registry.add_group("TTL Expiration", ttl.tests(config))
    registry.add_group("Recovery", recovery.tests(config))

    if config.groups:
        return registry.select(config.groups)
    return registry
