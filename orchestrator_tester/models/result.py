"""Models for test execution results."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Literal


@dataclass(frozen=True, kw_only=True)
class TestOutcome:
    """Outcome of a single test case: success, or failure with a diagnostic."""

    __test__ = False

    status: Literal["success", "failure"]
    message: str | None = None

    @classmethod
    def success(cls) -> "TestOutcome":
        return cls(status="success")

    @classmethod
    def failure(cls, message: str) -> "TestOutcome":
        return cls(status="failure", message=message)

    @property
    def passed(self) -> bool:
        return self.status == "success"


@dataclass(frozen=True, kw_only=True)
class CaseResult:
    """Result of one executed test case, in registration order."""

    group: str
    name: str
    outcome: TestOutcome
    duration: float


@dataclass(frozen=True, kw_only=True)
class RunReport:
    """Aggregate of a complete run. Not persisted."""

    results: Sequence[CaseResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for result in self.results if result.outcome.passed)

    @property
    def all_passed(self) -> bool:
        return self.passed == self.total
