"""Errors raised by the orchestrator client."""


class ClientError(Exception):
    """Base class for failures talking to the orchestrator."""


class TransportError(ClientError):
    """Raised when a request fails at the network level (refused, reset, timeout)."""


class RequestFailedError(ClientError):
    """Raised when the orchestrator answers with a non-success status."""

    def __init__(self, operation: str, status: int, body: str) -> None:
        super().__init__(f"{operation} returned {status}: {body}")
        self.operation = operation
        self.status = status
        self.body = body


class SessionNotFoundError(RequestFailedError):
    """Raised when the orchestrator reports that a session does not exist."""

    def __init__(self, session_id: str, body: str = "") -> None:
        super().__init__(f"GET /sessions/{session_id}", 404, body)
        self.session_id = session_id


class DecodeError(ClientError):
    """Raised when a response body does not match the expected shape."""


class TaskFailureError(Exception):
    """Raised when a fanned-out task dies from something other than a ClientError."""
