"""Pool status endpoint checks."""

from collections.abc import Sequence

from orchestrator_tester.cleanup import delete_quietly
from orchestrator_tester.client import OrchestratorClient
from orchestrator_tester.config import HarnessConfig
from orchestrator_tester.registry import CheckFailedError, TestCase


def tests(config: HarnessConfig) -> Sequence[TestCase]:
    """Register pool status test cases."""
    return [
        TestCase(name="Pool status reflects live session", body=check_pool_status),
    ]


async def check_pool_status(client: OrchestratorClient) -> None:
    """GET /status counts a live session and shows the worker serving it."""
    session = await client.create_session({"user": "test_status"})
    try:
        status = await client.pool_status()

        if status.active_sessions < 1:
            raise CheckFailedError(
                f"expected at least 1 active session, got {status.active_sessions}"
            )
        if status.worker_count < status.min_workers:
            raise CheckFailedError(
                f"worker_count {status.worker_count} "
                f"below min_workers {status.min_workers}"
            )
        if not any(worker.session_id == session.id for worker in status.workers):
            raise CheckFailedError(f"no worker reports session {session.id}")
    finally:
        await delete_quietly(client, session.id)
