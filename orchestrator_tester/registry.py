"""Test cases and the ordered registry of test groups."""

import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass, field

from orchestrator_tester.client import OrchestratorClient
from orchestrator_tester.models.result import TestOutcome

log = logging.getLogger(__name__)

type TestBody = Callable[[OrchestratorClient], Awaitable[None]]


class CheckFailedError(AssertionError):
    """Raised by a test body when an expectation on the orchestrator fails."""


class UnknownGroupError(Exception):
    """Raised when selecting a group that was never registered."""


@dataclass(frozen=True, kw_only=True)
class TestCase:
    """A named asynchronous check run against the orchestrator.

    The body returns normally on success and raises on failure. Any
    exception becomes a failure outcome carrying the exception message.
    """

    __test__ = False

    name: str
    body: TestBody = field(repr=False)

    async def execute(self, client: OrchestratorClient) -> TestOutcome:
        """Run the body and convert its result into an outcome."""
        try:
            await self.body(client)
        except Exception as e:
            log.debug("Test case %r failed", self.name, exc_info=e)
            return TestOutcome.failure(str(e) or type(e).__name__)
        return TestOutcome.success()


@dataclass(frozen=True, kw_only=True)
class TestGroup:
    """Test cases under a label. Order is execution and report order."""

    __test__ = False

    name: str
    cases: Sequence[TestCase]


@dataclass(frozen=True)
class TestRegistry:
    """Append-only, ordered collection of test groups."""

    __test__ = False

    _groups: list[TestGroup] = field(default_factory=list)

    @property
    def groups(self) -> Sequence[TestGroup]:
        return tuple(self._groups)

    def add_group(self, name: str, cases: Iterable[TestCase]) -> None:
        """Register a named group of test cases after those already added."""
        self._groups.append(TestGroup(name=name, cases=tuple(cases)))

    def select(self, names: Iterable[str]) -> "TestRegistry":
        """Return a registry holding only the named groups, in registration order.

        Raises:
            UnknownGroupError: If a name matches no registered group

        """
        wanted = set(names)
        known = {group.name for group in self._groups}
        if missing := sorted(wanted - known):
            raise UnknownGroupError(
                f"Unknown test group(s) {missing}. Available groups: {sorted(known)}"
            )
        return TestRegistry([group for group in self._groups if group.name in wanted])

    def __len__(self) -> int:
        return sum(len(group.cases) for group in self._groups)
