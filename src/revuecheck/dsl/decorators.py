"""Decorators and builders for defining check scenarios."""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING

from revuecheck._internal.errors import ScenarioError
from revuecheck.dsl.scenario import ScenarioDefinition, StepDefinition, StepFunction

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

# Marker attribute names set on decorated functions.
_STEP_MARKER = "_revuecheck_step"
_STEP_NAME = "_revuecheck_step_name"
_STEP_NEEDS_ID = "_revuecheck_step_needs_revue_id"


def step(
    *,
    name: str | None = None,
    needs_revue_id: bool = False,
) -> Callable[[StepFunction], StepFunction]:
    """Mark a coroutine function as a scenario step.

    The decorator only tags the function. Execution order comes from the
    list handed to ``scenario()``.

    Args:
        name: Name shown in reports. Defaults to the function name.
        needs_revue_id: True when the step reads the captured revue id.

    Returns:
        A function decorator that tags the function with step metadata.

    Raises:
        ScenarioError: If the decorated function is not a coroutine function.
    """

    def decorator(func: StepFunction) -> StepFunction:
        if not inspect.iscoroutinefunction(func):
            msg = f"Step {func.__name__} must be an async function"
            raise ScenarioError(msg)
        setattr(func, _STEP_MARKER, True)
        setattr(func, _STEP_NAME, name or func.__name__)
        setattr(func, _STEP_NEEDS_ID, needs_revue_id)
        return func

    return decorator


def to_step_definition(func: StepFunction) -> StepDefinition:
    """Build a ``StepDefinition`` from a ``@step``-decorated function.

    Raises:
        ScenarioError: If the function was not decorated with ``@step``.
    """
    if not getattr(func, _STEP_MARKER, False):
        msg = f"{getattr(func, '__name__', func)!r} is not decorated with @step"
        raise ScenarioError(msg)
    return StepDefinition(
        name=getattr(func, _STEP_NAME),
        func=func,
        needs_revue_id=getattr(func, _STEP_NEEDS_ID),
    )


def scenario(name: str, steps: Sequence[StepFunction]) -> ScenarioDefinition:
    """Build a scenario from step functions in execution order.

    Args:
        name: Human-readable name for the scenario.
        steps: ``@step``-decorated coroutines, in the order they must run.

    Returns:
        The scenario definition.

    Raises:
        ScenarioError: If a function is not a step, no steps are given,
            or two steps share a name.
    """
    return ScenarioDefinition(
        name=name,
        steps=[to_step_definition(func) for func in steps],
    )
