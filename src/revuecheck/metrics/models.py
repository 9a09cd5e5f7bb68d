"""Result dataclasses for scenario runs."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

# NOTE: RequestMetric lives in dsl/http_client.py. Imported here for
# re-export convenience; consumers can import from either location.
from revuecheck.dsl.http_client import RequestMetric

__all__ = [
    "RequestMetric",
    "StepResult",
    "SuiteResult",
]


@dataclass
class StepResult:
    """Outcome of a single step.

    Attributes:
        name: Step name.
        passed: True if the step completed without a failure.
        message: Failure message, None when the step passed.
        duration_ms: Wall time spent in the step in milliseconds.
        requests: Request records for every HTTP call the step made.
    """

    name: str
    passed: bool
    message: str | None = None
    duration_ms: float = 0.0
    requests: list[RequestMetric] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StepResult:
        """Rebuild a StepResult from ``to_dict`` output."""
        return cls(
            name=data["name"],
            passed=data["passed"],
            message=data.get("message"),
            duration_ms=data.get("duration_ms", 0.0),
            requests=[RequestMetric(**r) for r in data.get("requests", [])],
        )


@dataclass
class SuiteResult:
    """Outcome of a complete scenario run.

    Attributes:
        scenario_name: Name of the scenario that was run.
        base_url: API base URL the scenario ran against.
        steps: Step results in execution order.
        duration_seconds: Wall time of the whole run, bootstrap included.
        revue_id: Revue id captured during the run, empty if none.
    """

    scenario_name: str
    base_url: str
    steps: list[StepResult] = field(default_factory=list)
    duration_seconds: float = 0.0
    revue_id: str = ""

    @property
    def passed(self) -> bool:
        """Return True if every step passed."""
        return all(step.passed for step in self.steps)

    @property
    def failed_steps(self) -> list[StepResult]:
        """Return the steps that failed, in execution order."""
        return [step for step in self.steps if not step.passed]

    @property
    def total_requests(self) -> int:
        """Return the number of HTTP requests made by all steps."""
        return sum(len(step.requests) for step in self.steps)

    def get(self, name: str) -> StepResult | None:
        """Return the result for the named step, or None."""
        for step in self.steps:
            if step.name == name:
                return step
        return None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dict."""
        return {
            "scenario_name": self.scenario_name,
            "base_url": self.base_url,
            "passed": self.passed,
            "duration_seconds": self.duration_seconds,
            "revue_id": self.revue_id,
            "steps": [step.to_dict() for step in self.steps],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SuiteResult:
        """Rebuild a SuiteResult from ``to_dict`` output."""
        return cls(
            scenario_name=data["scenario_name"],
            base_url=data["base_url"],
            steps=[StepResult.from_dict(s) for s in data.get("steps", [])],
            duration_seconds=data.get("duration_seconds", 0.0),
            revue_id=data.get("revue_id", ""),
        )
