"""Models for orchestrator API responses."""

from collections.abc import Sequence
from typing import Any

from pydantic import Field

from orchestrator_tester.models.base import Model


class Session(Model):
    """A session as returned by POST /sessions and GET /sessions/{id}.

    ``created_at`` is opaque to the harness; only its presence is checked.
    ``data`` is whatever payload the caller supplied on creation.
    """

    id: str = Field(..., description="Session identifier assigned by the service")
    created_at: Any = Field(default=None, description="Creation timestamp")
    data: Any = Field(default=None, description="Caller-supplied payload")


class WorkerStatus(Model):
    """One worker entry from GET /status."""

    id: int
    port: int
    state: str
    session_id: str = ""


class PoolStatus(Model):
    """Response from GET /status."""

    active_sessions: int
    worker_count: int
    available_workers: int
    min_workers: int
    max_workers: int
    workers: Sequence[WorkerStatus] = Field(default_factory=list)
