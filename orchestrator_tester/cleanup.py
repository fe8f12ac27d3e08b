"""Best-effort removal of sessions created by test cases."""

import logging

from orchestrator_tester.client import ClientError, OrchestratorClient

log = logging.getLogger(__name__)


async def delete_quietly(client: OrchestratorClient, *session_ids: str) -> None:
    """Attempt to delete every given session, discarding any failure.

    Used for hygiene only: a failed cleanup must never replace the result of
    the check that created the session, so errors are logged and dropped.
    """
    for session_id in session_ids:
        try:
            status = await client.delete_session(session_id)
        except ClientError as e:
            log.debug("Cleanup of session %s failed: %s", session_id, e)
            continue
        if status != 204:
            log.debug("Cleanup of session %s returned status %d", session_id, status)
