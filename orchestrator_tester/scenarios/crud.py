"""Create, read and delete checks for single sessions."""

from collections.abc import Sequence

from orchestrator_tester.cleanup import delete_quietly
from orchestrator_tester.client import OrchestratorClient, SessionNotFoundError
from orchestrator_tester.config import HarnessConfig
from orchestrator_tester.registry import CheckFailedError, TestCase

MISSING_SESSION_ID = "nonexistent-session-id-12345"


def tests(config: HarnessConfig) -> Sequence[TestCase]:
    """Register CRUD test cases."""
    return [
        TestCase(name="Create session", body=check_create_session),
        TestCase(name="Get session", body=check_get_session),
        TestCase(name="Delete session", body=check_delete_session),
        TestCase(name="404 on missing session", body=check_missing_session),
    ]


async def check_create_session(client: OrchestratorClient) -> None:
    """POST /sessions returns a session with id, created_at and echoed data."""
    session = await client.create_session({"user": "test_create"})
    try:
        if not session.id:
            raise CheckFailedError("session id is empty")
        if session.created_at is None:
            raise CheckFailedError("created_at is null")
        if _user(session.data) != "test_create":
            raise CheckFailedError(f"unexpected data: {session.data!r}")
    finally:
        await delete_quietly(client, session.id)


async def check_get_session(client: OrchestratorClient) -> None:
    """GET /sessions/{id} returns the session that was created."""
    created = await client.create_session({"user": "test_get"})
    try:
        fetched = await client.get_session(created.id)
        if fetched.id != created.id:
            raise CheckFailedError(f"id mismatch: {fetched.id} != {created.id}")
        if fetched.data != created.data or _user(fetched.data) != "test_get":
            raise CheckFailedError(f"data mismatch: {fetched.data!r}")
    finally:
        await delete_quietly(client, created.id)


async def check_delete_session(client: OrchestratorClient) -> None:
    """DELETE returns 204 and the session is gone afterwards."""
    session = await client.create_session({"user": "test_delete"})

    try:
        status = await client.delete_session(session.id)
        if status != 204:
            raise CheckFailedError(f"expected 204, got {status}")
        fetched = await client.get_session(session.id)
    except SessionNotFoundError:
        return
    except Exception:
        await delete_quietly(client, session.id)
        raise

    await delete_quietly(client, session.id)
    raise CheckFailedError(f"session still exists after delete: {fetched.id}")


async def check_missing_session(client: OrchestratorClient) -> None:
    """GET on an id that was never issued returns 404."""
    try:
        await client.get_session(MISSING_SESSION_ID)
    except SessionNotFoundError:
        return
    raise CheckFailedError("expected 404 but got a session")


def _user(data: object) -> object:
    return data.get("user") if isinstance(data, dict) else None
