"""Session expiry checks."""

import asyncio
from collections.abc import Sequence
from functools import partial

from orchestrator_tester.cleanup import delete_quietly
from orchestrator_tester.client import OrchestratorClient, SessionNotFoundError
from orchestrator_tester.config import HarnessConfig
from orchestrator_tester.registry import CheckFailedError, TestCase


def tests(config: HarnessConfig) -> Sequence[TestCase]:
    """Register TTL test cases."""
    return [
        TestCase(
            name="Session TTL expiration (60s)",
            body=partial(check_session_ttl, wait=config.ttl_wait),
        )
    ]


async def check_session_ttl(client: OrchestratorClient, *, wait: float) -> None:
    """An untouched session is gone once TTL plus one sweep has elapsed."""
    session = await client.create_session({"user": "ttl_test"})

    await asyncio.sleep(wait)

    try:
        await client.get_session(session.id)
    except SessionNotFoundError:
        return
    except Exception:
        await delete_quietly(client, session.id)
        raise

    await delete_quietly(client, session.id)
    raise CheckFailedError(f"session still alive after {wait:g}s, expected 404")
