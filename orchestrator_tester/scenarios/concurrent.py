"""Concurrent session creation checks."""

import asyncio
import logging
from collections.abc import Sequence
from functools import partial

from orchestrator_tester.cleanup import delete_quietly
from orchestrator_tester.client import (
    ClientError,
    DecodeError,
    OrchestratorClient,
    TaskFailureError,
)
from orchestrator_tester.config import HarnessConfig
from orchestrator_tester.registry import CheckFailedError, TestCase

log = logging.getLogger(__name__)


def tests(config: HarnessConfig) -> Sequence[TestCase]:
    """Register concurrency test cases."""
    count = config.concurrent_sessions
    return [
        TestCase(
            name=f"Concurrent sessions ({count} parallel)",
            body=partial(
                check_concurrent_sessions, count=count, timeout=config.fanout_timeout
            ),
        )
    ]


async def create_isolated(base_url: str, timeout: float, index: int) -> str:
    """Create one session through a client owned by this task alone."""
    async with OrchestratorClient.connect(base_url, timeout) as task_client:
        session = await task_client.create_session({"user": f"concurrent_{index}"})
    if not session.id:
        raise DecodeError("POST /sessions returned an empty session id")
    return session.id


async def check_concurrent_sessions(
    client: OrchestratorClient, *, count: int, timeout: float
) -> None:
    """Create sessions simultaneously; all must succeed with distinct ids.

    Every session that was created is deleted afterwards, whether or not
    its siblings succeeded.
    """
    tasks = [
        asyncio.create_task(create_isolated(client.base_url, timeout, index))
        for index in range(count)
    ]
    results = await asyncio.gather(*tasks, return_exceptions=True)

    session_ids, errors = collect_results(results)
    log.debug(
        "Concurrent create: %d succeeded, %d failed", len(session_ids), len(errors)
    )

    await delete_quietly(client, *session_ids)

    if errors:
        index, error = errors[0]
        raise CheckFailedError(
            f"{len(errors)}/{count} failed: request {index}: {error}"
        )

    if len(session_ids) != count:
        raise CheckFailedError(f"expected {count} sessions, got {len(session_ids)}")

    if (unique := len(set(session_ids))) != count:
        raise CheckFailedError(f"expected {count} unique session IDs, got {unique}")


def collect_results(
    results: Sequence[str | BaseException],
) -> tuple[list[str], list[tuple[int, Exception]]]:
    """Split fan-out results into created ids and (slot, error) pairs.

    Request failures are kept as they are. Anything else a task died from,
    cancellation included, is wrapped in TaskFailureError for that slot.
    """
    session_ids: list[str] = []
    errors: list[tuple[int, Exception]] = []

    for index, result in enumerate(results):
        if isinstance(result, str):
            session_ids.append(result)
        elif isinstance(result, ClientError):
            errors.append((index, result))
        else:
            errors.append((index, TaskFailureError(f"task failed: {result!r}")))

    return session_ids, errors
