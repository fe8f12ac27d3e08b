"""Fixtures for integration tests against a mocked orchestrator."""

from collections.abc import AsyncGenerator

import pytest
from aioresponses import aioresponses as aioresponses_cls

from orchestrator_tester.client import OrchestratorClient


@pytest.fixture
def base_url() -> str:
    """Base URL of the mocked orchestrator."""
    return "http://orchestrator.test"


@pytest.fixture
async def client(
    base_url: str, aioresponses: aioresponses_cls
) -> AsyncGenerator[OrchestratorClient, None]:
    """Create client with managed session."""
    async with OrchestratorClient.connect(base_url, timeout=5) as impl:
        yield impl
