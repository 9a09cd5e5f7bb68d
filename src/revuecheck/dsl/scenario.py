"""Scenario, step and context definitions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from revuecheck._internal.errors import CheckFailure, ScenarioError

if TYPE_CHECKING:
    from revuecheck.dsl.http_client import HttpClient


class StepFunction(Protocol):
    """Protocol for step coroutines.

    Matches async functions with signature ``(context) -> None``. A step
    signals failure by raising ``CheckFailure``.
    """

    @property
    def __name__(self) -> str:
        """Function name."""
        ...

    async def __call__(self, context: ScenarioContext) -> None:
        """Run the step."""
        ...


@dataclass
class ScenarioContext:
    """State threaded through the steps of one scenario run.

    Attributes:
        client: Authenticated HTTP client shared by every step.
        revue_id: Identifier of the revue created by the create step.
            Empty until that step captures it.
    """

    client: HttpClient
    revue_id: str = ""

    def require_revue_id(self) -> str:
        """Return the captured revue id.

        Raises:
            CheckFailure: If no id has been captured yet.
        """
        if not self.revue_id:
            msg = "No revue id was captured by an earlier step"
            raise CheckFailure(msg)
        return self.revue_id


@dataclass
class StepDefinition:
    """Definition of a single named check.

    Attributes:
        name: Human-readable name shown in reports.
        func: The step coroutine.
        needs_revue_id: True when the step reads ``ScenarioContext.revue_id``.
            The runner fails such a step without calling it when no id is
            available.
    """

    name: str
    func: StepFunction
    needs_revue_id: bool = False


@dataclass
class ScenarioDefinition:
    """An ordered list of steps run one after another.

    Attributes:
        name: Human-readable name for this scenario.
        steps: Steps in execution order.
    """

    name: str
    steps: list[StepDefinition] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.steps:
            msg = f"Scenario {self.name!r} has no steps"
            raise ScenarioError(msg)

        seen: set[str] = set()
        for step in self.steps:
            if step.name in seen:
                msg = f"Scenario {self.name!r} has duplicate step {step.name!r}"
                raise ScenarioError(msg)
            seen.add(step.name)

    @property
    def step_names(self) -> list[str]:
        """Return step names in execution order."""
        return [step.name for step in self.steps]

    def __len__(self) -> int:
        """Return the number of steps."""
        return len(self.steps)
