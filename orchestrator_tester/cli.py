"""CLI entry point for the orchestrator test suite."""

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Sequence
from typing import Any

from orchestrator_tester.client import OrchestratorClient
from orchestrator_tester.config import HarnessConfig
from orchestrator_tester.models.result import RunReport
from orchestrator_tester.registry import UnknownGroupError
from orchestrator_tester.runner import OrchestratorUnreachableError, TestRunner
from orchestrator_tester.scenarios import build_registry

STATUS_SYMBOLS = {
    "success": "✅",
    "failure": "❌",
}


def log_results_summary(log: logging.Logger, report: RunReport) -> None:
    """Log a formatted summary of the run."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)

    for result in report.results:
        symbol = STATUS_SYMBOLS.get(result.outcome.status, "?")
        log.info(
            "%s %s / %s: %s (%.2fs)",
            symbol,
            result.group,
            result.name,
            result.outcome.status,
            result.duration,
        )
        if result.outcome.message:
            log.info("  Message: %s", result.outcome.message)

    log.info("=" * 80)
    log.info("RESULTS: %d/%d passed", report.passed, report.total)


def load_config(
    config_json: str, base_url: str | None, groups: Sequence[str]
) -> HarnessConfig:
    """Build the run configuration from JSON plus command line overrides."""
    config_dict = json.loads(config_json) if config_json.strip() else {}
    if base_url:
        config_dict["base_url"] = base_url
    if groups:
        config_dict["groups"] = list(groups)
    return HarnessConfig(**config_dict)


async def run(config: HarnessConfig) -> int:
    """Run the test suite and return the exit code."""
    log = logging.getLogger("orchestrator_tester")

    try:
        registry = build_registry(config)
    except UnknownGroupError as e:
        log.error("%s", e)
        return 1

    log.info("Target orchestrator: %s", config.base_url)

    async with OrchestratorClient.connect(
        config.base_url, config.request_timeout
    ) as client:
        runner = TestRunner(client=client)
        try:
            report = await runner.run(registry)
        except OrchestratorUnreachableError as e:
            log.error("%s", e)
            print(json.dumps({"total": 0, "passed": 0, "unreachable": True}))
            return 1

    log_results_summary(log, report)

    output = format_output(report)
    print(json.dumps(output, indent=2))

    return 0 if report.all_passed else 1


def format_output(report: RunReport) -> dict[str, Any]:
    """Format the run report for JSON output."""
    return {
        "total": report.total,
        "passed": report.passed,
        "failed": report.total - report.passed,
        "results": [
            {
                "group": result.group,
                "name": result.name,
                "status": result.outcome.status,
                "duration": result.duration,
                "message": result.outcome.message,
            }
            for result in report.results
        ],
    }


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Run the conformance suite against a session orchestrator"
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Orchestrator base URL (default: http://localhost:8080)",
    )
    parser.add_argument(
        "--config",
        default="",
        help="JSON configuration overriding timeouts, waits and counts",
    )
    parser.add_argument(
        "--group",
        action="append",
        default=[],
        help="Only run the named test group (repeatable)",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    config = load_config(args.config, args.url, args.group)
    exit_code = asyncio.run(run(config))
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
