"""Sequential runner for registered test groups."""

import logging
import time
from dataclasses import dataclass

from orchestrator_tester.client import ClientError, OrchestratorClient
from orchestrator_tester.models.result import CaseResult, RunReport
from orchestrator_tester.registry import TestRegistry

log = logging.getLogger(__name__)


class OrchestratorUnreachableError(Exception):
    """Raised when the pre-flight health check cannot reach the orchestrator."""


@dataclass(frozen=True, kw_only=True)
class TestRunner:
    """Runs every registered test case once, in registration order."""

    __test__ = False

    client: OrchestratorClient

    async def preflight(self) -> None:
        """Check the orchestrator is reachable before any case runs.

        Raises:
            OrchestratorUnreachableError: If the health check fails

        """
        try:
            await self.client.health()
        except ClientError as e:
            raise OrchestratorUnreachableError(
                f"Cannot reach orchestrator at {self.client.base_url}: {e}"
            ) from e

    async def run(self, registry: TestRegistry) -> RunReport:
        """Run all groups sequentially and return the aggregate report.

        A failing case never stops later cases or groups. Cases may fan out
        internally; the runner itself awaits one case at a time.
        """
        await self.preflight()

        log.info(
            "Running %d test(s) in %d group(s)...", len(registry), len(registry.groups)
        )
        results: list[CaseResult] = []

        for group in registry.groups:
            log.info("▸ %s", group.name)

            for case in group.cases:
                start = time.monotonic()
                outcome = await case.execute(self.client)
                duration = time.monotonic() - start

                if outcome.passed:
                    log.info("  ✓ %s (%.2fs)", case.name, duration)
                else:
                    log.info("  ✗ %s: %s", case.name, outcome.message)

                results.append(
                    CaseResult(
                        group=group.name,
                        name=case.name,
                        outcome=outcome,
                        duration=duration,
                    )
                )

        report = RunReport(results=results)
        log.info("Test execution completed: %d/%d passed", report.passed, report.total)
        return report
