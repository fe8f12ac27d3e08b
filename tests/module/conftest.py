"""Fixtures for module tests using a WireMock testcontainer."""

from collections.abc import Generator

import pytest
from docker.errors import DockerException
from testcontainers.core import testcontainers_config
from wiremock.client import Mappings
from wiremock.constants import Config
from wiremock.testing.testcontainer import WireMockContainer


@pytest.fixture(scope="session", autouse=True)
def _disable_ryuk() -> None:
    """Disable the extra cleanup instance, we use contexts to clean containers."""
    testcontainers_config.ryuk_disabled = True


@pytest.fixture(scope="session")
def wiremock_server() -> Generator[WireMockContainer, None, None]:
    """Start WireMock container, skipping when Docker is not reachable."""
    try:
        container = WireMockContainer(secure=False)
        container.start()
    except DockerException as e:
        pytest.skip(f"Docker is not available: {e}")

    try:
        Config.base_url = container.get_url("__admin")
        yield container
        print(container.get_logs())
    finally:
        container.stop()


@pytest.fixture
def orchestrator_url(wiremock_server: WireMockContainer) -> Generator[str, None, None]:
    """Base URL of the stubbed orchestrator, with mappings reset per test."""
    Mappings.delete_all_mappings()
    yield wiremock_server.get_base_url()
    Mappings.delete_all_mappings()
