"""Orchestrator HTTP client."""

from orchestrator_tester.client.errors import (
    ClientError,
    DecodeError,
    RequestFailedError,
    SessionNotFoundError,
    TaskFailureError,
    TransportError,
)
from orchestrator_tester.client.orchestrator import OrchestratorClient

__all__ = [
    "ClientError",
    "DecodeError",
    "OrchestratorClient",
    "RequestFailedError",
    "SessionNotFoundError",
    "TaskFailureError",
    "TransportError",
]
