"""Worker pool recovery checks."""

import asyncio
import logging
from collections.abc import Sequence
from functools import partial

from orchestrator_tester.cleanup import delete_quietly
from orchestrator_tester.client import OrchestratorClient, SessionNotFoundError
from orchestrator_tester.config import HarnessConfig
from orchestrator_tester.registry import CheckFailedError, TestCase

log = logging.getLogger(__name__)


def tests(config: HarnessConfig) -> Sequence[TestCase]:
    """Register worker failure recovery test cases."""
    return [
        TestCase(
            name="Worker failure recovery",
            body=partial(
                check_worker_churn,
                count=config.recovery_sessions,
                settle_delay=config.settle_delay,
            ),
        ),
        TestCase(
            name="Crashed worker recovery",
            body=partial(check_crashed_worker, grace_period=config.crash_grace_period),
        ),
    ]


async def check_worker_churn(
    client: OrchestratorClient, *, count: int, settle_delay: float
) -> None:
    """Occupy workers, release them all, then prove the pool hands them out again."""
    session_ids: list[str] = []
    for i in range(count):
        try:
            session = await client.create_session({"user": f"recovery_{i}"})
        except Exception as e:
            await delete_quietly(client, *session_ids)
            raise CheckFailedError(
                f"phase 1: failed to create session {i}: {e}"
            ) from e
        session_ids.append(session.id)

    await delete_quietly(client, *session_ids)

    await asyncio.sleep(settle_delay)

    new_ids: list[str] = []
    try:
        for i in range(count):
            try:
                session = await client.create_session({"user": f"recovery_post_{i}"})
            except Exception as e:
                raise CheckFailedError(
                    f"phase 3: pool failed to recover, session {i}: {e}"
                ) from e
            new_ids.append(session.id)
    finally:
        await delete_quietly(client, *new_ids)


async def check_crashed_worker(
    client: OrchestratorClient, *, grace_period: float
) -> None:
    """Kill the worker behind a session; the session must vanish and the pool heal.

    Phases:
        1. create a session
        2. crash the worker holding it
        3. after the grace period the session resolves to 404
        4. a fresh session can still be created
    """
    try:
        session = await client.create_session({"user": "crash_test"})
    except Exception as e:
        raise CheckFailedError(f"phase 1: failed to create session: {e}") from e

    try:
        await client.inject_worker_fault(session.id)
    except Exception as e:
        await delete_quietly(client, session.id)
        raise CheckFailedError(f"phase 2: failed to crash worker: {e}") from e

    log.debug(
        "Crashed worker for session %s, waiting %.1fs", session.id, grace_period
    )
    await asyncio.sleep(grace_period)

    try:
        await client.get_session(session.id)
    except SessionNotFoundError:
        pass
    except Exception as e:
        await delete_quietly(client, session.id)
        raise CheckFailedError(f"phase 3: unexpected error: {e}") from e
    else:
        await delete_quietly(client, session.id)
        raise CheckFailedError("phase 3: crashed session still resolves, expected 404")

    try:
        fresh = await client.create_session({"user": "crash_test_post"})
    except Exception as e:
        raise CheckFailedError(f"phase 4: pool did not recover: {e}") from e
    await delete_quietly(client, fresh.id)
