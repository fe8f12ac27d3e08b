"""Integration tests for the CRUD scenarios."""

import re

import pytest
from aioresponses import aioresponses as aioresponses_cls
from yarl import URL

from orchestrator_tester.client import OrchestratorClient, RequestFailedError
from orchestrator_tester.registry import CheckFailedError
from orchestrator_tester.scenarios.crud import (
    MISSING_SESSION_ID,
    check_create_session,
    check_delete_session,
    check_get_session,
    check_missing_session,
)
from orchestrator_tester.testing import payloads


@pytest.fixture
def deletes(base_url: str, aioresponses: aioresponses_cls) -> None:
    """Accept every DELETE with 204."""
    aioresponses.delete(
        re.compile(rf"^{re.escape(base_url)}/sessions/.*$"), status=204, repeat=True
    )


def delete_count(aioresponses: aioresponses_cls, base_url: str, session_id: str) -> int:
    key = ("DELETE", URL(f"{base_url}/sessions/{session_id}"))
    return len(aioresponses.requests.get(key, []))


@pytest.mark.usefixtures("deletes")
class TestCreateSession:
    """Tests for check_create_session."""

    async def test_passes_and_cleans_up(
        self,
        client: OrchestratorClient,
        base_url: str,
        aioresponses: aioresponses_cls,
    ) -> None:
        """Passes on a well-formed echo and deletes the session."""
        aioresponses.post(
            f"{base_url}/sessions",
            payload=payloads.session("sess-1", data={"user": "test_create"}),
        )

        await check_create_session(client)

        assert delete_count(aioresponses, base_url, "sess-1") == 1

    async def test_fails_on_null_created_at_and_still_cleans_up(
        self,
        client: OrchestratorClient,
        base_url: str,
        aioresponses: aioresponses_cls,
    ) -> None:
        """A missing timestamp fails the check; cleanup still runs."""
        aioresponses.post(
            f"{base_url}/sessions",
            payload=payloads.session(
                "sess-1", data={"user": "test_create"}, created_at=None
            ),
        )

        with pytest.raises(CheckFailedError, match="created_at is null"):
            await check_create_session(client)

        assert delete_count(aioresponses, base_url, "sess-1") == 1

    async def test_fails_on_empty_id(
        self,
        client: OrchestratorClient,
        base_url: str,
        aioresponses: aioresponses_cls,
    ) -> None:
        """An empty id fails the check."""
        aioresponses.post(
            f"{base_url}/sessions",
            payload=payloads.session("", data={"user": "test_create"}),
        )

        with pytest.raises(CheckFailedError, match="session id is empty"):
            await check_create_session(client)

    async def test_fails_when_data_not_echoed(
        self,
        client: OrchestratorClient,
        base_url: str,
        aioresponses: aioresponses_cls,
    ) -> None:
        """Data that differs from what was sent fails the check."""
        aioresponses.post(
            f"{base_url}/sessions",
            payload=payloads.session("sess-1", data={"user": "someone_else"}),
        )

        with pytest.raises(CheckFailedError, match="unexpected data"):
            await check_create_session(client)

        assert delete_count(aioresponses, base_url, "sess-1") == 1

    async def test_cleanup_failure_does_not_mask_result(
        self,
        client: OrchestratorClient,
        base_url: str,
        aioresponses: aioresponses_cls,
    ) -> None:
        """A passing check stays passing when its cleanup delete fails."""
        aioresponses.clear()
        aioresponses.post(
            f"{base_url}/sessions",
            payload=payloads.session("sess-1", data={"user": "test_create"}),
        )
        aioresponses.delete(f"{base_url}/sessions/sess-1", status=500)

        await check_create_session(client)


@pytest.mark.usefixtures("deletes")
class TestGetSession:
    """Tests for check_get_session."""

    async def test_passes_when_fetched_matches(
        self,
        client: OrchestratorClient,
        base_url: str,
        aioresponses: aioresponses_cls,
    ) -> None:
        """Passes when GET returns the created session."""
        body = payloads.session("sess-1", data={"user": "test_get"})
        aioresponses.post(f"{base_url}/sessions", payload=body)
        aioresponses.get(f"{base_url}/sessions/sess-1", payload=body)

        await check_get_session(client)

        assert delete_count(aioresponses, base_url, "sess-1") == 1

    async def test_fails_on_id_mismatch(
        self,
        client: OrchestratorClient,
        base_url: str,
        aioresponses: aioresponses_cls,
    ) -> None:
        """A different id on GET fails the check and the session is cleaned up."""
        aioresponses.post(
            f"{base_url}/sessions",
            payload=payloads.session("sess-1", data={"user": "test_get"}),
        )
        aioresponses.get(
            f"{base_url}/sessions/sess-1",
            payload=payloads.session("sess-2", data={"user": "test_get"}),
        )

        with pytest.raises(CheckFailedError, match="id mismatch: sess-2 != sess-1"):
            await check_get_session(client)

        assert delete_count(aioresponses, base_url, "sess-1") == 1

    async def test_fails_on_data_mismatch(
        self,
        client: OrchestratorClient,
        base_url: str,
        aioresponses: aioresponses_cls,
    ) -> None:
        """Data changed between create and get fails the check."""
        aioresponses.post(
            f"{base_url}/sessions",
            payload=payloads.session("sess-1", data={"user": "test_get"}),
        )
        aioresponses.get(
            f"{base_url}/sessions/sess-1",
            payload=payloads.session("sess-1", data={"user": "test_get", "x": 1}),
        )

        with pytest.raises(CheckFailedError, match="data mismatch"):
            await check_get_session(client)


@pytest.mark.usefixtures("deletes")
class TestDeleteSession:
    """Tests for check_delete_session."""

    async def test_passes_when_session_is_gone(
        self,
        client: OrchestratorClient,
        base_url: str,
        aioresponses: aioresponses_cls,
    ) -> None:
        """Passes on 204 followed by 404."""
        aioresponses.post(f"{base_url}/sessions", payload=payloads.session("sess-1"))
        aioresponses.get(f"{base_url}/sessions/sess-1", status=404)

        await check_delete_session(client)

        assert delete_count(aioresponses, base_url, "sess-1") == 1

    async def test_fails_when_session_survives(
        self,
        client: OrchestratorClient,
        base_url: str,
        aioresponses: aioresponses_cls,
    ) -> None:
        """A session still readable after delete fails the check."""
        aioresponses.post(f"{base_url}/sessions", payload=payloads.session("sess-1"))
        aioresponses.get(
            f"{base_url}/sessions/sess-1", payload=payloads.session("sess-1")
        )

        with pytest.raises(CheckFailedError, match="still exists after delete"):
            await check_delete_session(client)

        assert delete_count(aioresponses, base_url, "sess-1") == 2

    async def test_fails_on_unexpected_delete_status(
        self,
        client: OrchestratorClient,
        base_url: str,
        aioresponses: aioresponses_cls,
    ) -> None:
        """Anything other than 204 fails the check."""
        aioresponses.clear()
        aioresponses.post(f"{base_url}/sessions", payload=payloads.session("sess-1"))
        aioresponses.delete(f"{base_url}/sessions/sess-1", status=200, repeat=True)

        with pytest.raises(CheckFailedError, match="expected 204, got 200"):
            await check_delete_session(client)


class TestMissingSession:
    """Tests for check_missing_session."""

    async def test_passes_on_404(
        self,
        client: OrchestratorClient,
        base_url: str,
        aioresponses: aioresponses_cls,
    ) -> None:
        """Passes when the fabricated id is unknown."""
        aioresponses.get(f"{base_url}/sessions/{MISSING_SESSION_ID}", status=404)

        await check_missing_session(client)

    async def test_fails_when_session_returned(
        self,
        client: OrchestratorClient,
        base_url: str,
        aioresponses: aioresponses_cls,
    ) -> None:
        """A parsed session for a fabricated id fails the check."""
        aioresponses.get(
            f"{base_url}/sessions/{MISSING_SESSION_ID}",
            payload=payloads.session(MISSING_SESSION_ID),
        )

        with pytest.raises(CheckFailedError, match="expected 404 but got a session"):
            await check_missing_session(client)

    async def test_propagates_other_errors(
        self,
        client: OrchestratorClient,
        base_url: str,
        aioresponses: aioresponses_cls,
    ) -> None:
        """Errors other than 404 are not treated as absence."""
        aioresponses.get(f"{base_url}/sessions/{MISSING_SESSION_ID}", status=500)

        with pytest.raises(RequestFailedError):
            await check_missing_session(client)
