"""HTTP client for the session orchestrator API."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import aiohttp
from pydantic import BaseModel, ValidationError

from orchestrator_tester.client.errors import (
    DecodeError,
    RequestFailedError,
    SessionNotFoundError,
    TransportError,
)
from orchestrator_tester.models.session import PoolStatus, Session

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300.0


def with_trailing_slash(base_url: str) -> str:
    """Normalize a base URL so relative paths join under its path prefix."""
    return base_url.rstrip("/") + "/"


def _decode[M: BaseModel](model: type[M], operation: str, text: str) -> M:
    try:
        return model.model_validate_json(text)
    except ValidationError as e:
        raise DecodeError(f"failed to parse {operation} response: {e}") from e


@dataclass(frozen=True, kw_only=True)
class OrchestratorClient:
    """Typed client for the orchestrator HTTP API.

    Holds no session state of its own; it only translates calls into HTTP
    requests and responses into models or errors. One instance may be shared
    by sequential callers. Concurrent tasks should each open their own client
    via ``connect`` rather than share one.

    Paths are relative and base_url always ends with "/", so a prefix such
    as "http://host/orch/" is kept.
    """

    base_url: str
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def connect(
        cls, base_url: str, timeout: float = DEFAULT_TIMEOUT
    ) -> AsyncGenerator["OrchestratorClient", None]:
        """Create a client with a managed connection pool bound to base_url."""
        base_url = with_trailing_slash(base_url)
        async with aiohttp.ClientSession(
            base_url=base_url,
            timeout=aiohttp.ClientTimeout(total=timeout),
        ) as session:
            yield cls(base_url=base_url, session=session)

    async def _request(
        self, method: str, path: str, **kwargs: Any
    ) -> tuple[int, str]:
        """Issue a request and return (status, body text)."""
        operation = f"{method} /{path}"
        log.debug("Request: %s", operation)
        try:
            async with self.session.request(method, path, **kwargs) as response:
                text = await response.text()
                return response.status, text
        except TimeoutError as e:
            raise TransportError(f"{operation} timed out") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"{operation} request failed: {e}") from e

    async def create_session(self, payload: Any) -> Session:
        """POST /sessions with an arbitrary JSON payload."""
        status, text = await self._request("POST", "sessions", json=payload)
        if not 200 <= status < 300:
            raise RequestFailedError("POST /sessions", status, text)
        return _decode(Session, "POST /sessions", text)

    async def get_session(self, session_id: str) -> Session:
        """GET /sessions/{id}.

        Raises:
            SessionNotFoundError: If the orchestrator answers 404

        """
        path = f"sessions/{session_id}"
        status, text = await self._request("GET", path)
        if status == 404:
            raise SessionNotFoundError(session_id, text)
        if not 200 <= status < 300:
            raise RequestFailedError(f"GET /{path}", status, text)
        return _decode(Session, f"GET /{path}", text)

    async def delete_session(self, session_id: str) -> int:
        """DELETE /sessions/{id} and return the raw status code.

        Callers decide what the status means; 204 is a successful delete.
        """
        status, _ = await self._request("DELETE", f"sessions/{session_id}")
        return status

    async def health(self) -> str:
        """GET /health and return the raw body."""
        _, text = await self._request("GET", "health")
        return text

    async def pool_status(self) -> PoolStatus:
        """GET /status and return the worker pool snapshot."""
        status, text = await self._request("GET", "status")
        if not 200 <= status < 300:
            raise RequestFailedError("GET /status", status, text)
        return _decode(PoolStatus, "GET /status", text)

    async def inject_worker_fault(self, session_id: str) -> None:
        """Kill the worker currently holding a session (testing only)."""
        status, text = await self._request(
            "POST", "debug/crash-worker", params={"session_id": session_id}
        )
        if not 200 <= status < 300:
            raise RequestFailedError("POST /debug/crash-worker", status, text)
