"""Sequential scenario runner."""

from __future__ import annotations

import asyncio
import time
from typing import TYPE_CHECKING

import aiohttp

from revuecheck._internal.errors import CheckFailure
from revuecheck._internal.logging import get_logger
from revuecheck.dsl.scenario import ScenarioContext
from revuecheck.engine.session import open_session
from revuecheck.metrics.models import StepResult, SuiteResult

if TYPE_CHECKING:
    from collections.abc import Callable

    from revuecheck._internal.config import RevueCheckConfig
    from revuecheck.dsl.http_client import RequestMetric
    from revuecheck.dsl.scenario import ScenarioDefinition, StepDefinition

logger = get_logger("engine.runner")


class ScenarioRunner:
    """Runs the steps of a scenario one after another.

    Authenticates once, then awaits each step in list order with a shared
    ``ScenarioContext``. A failing step is recorded and the next step
    still runs; only a bootstrap failure stops the run.

    Attributes:
        config: Run configuration.
        scenario: The scenario to run.
    """

    def __init__(
        self,
        config: RevueCheckConfig,
        scenario: ScenarioDefinition,
        *,
        on_step: Callable[[StepResult], None] | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            config: Run configuration (base URL, credentials, timeout).
            scenario: The scenario to run.
            on_step: Optional callback invoked with each StepResult as soon
                as the step finishes.
        """
        self.config = config
        self.scenario = scenario
        self._on_step = on_step
        self._current_requests: list[RequestMetric] = []

    def run(self) -> SuiteResult:
        """Run the scenario on a fresh event loop and block until done.

        Returns:
            SuiteResult with one StepResult per step.

        Raises:
            BootstrapError: If authentication fails. No step runs.
        """
        return asyncio.run(self.run_async())

    async def run_async(self) -> SuiteResult:
        """Run the scenario in the current event loop.

        Returns:
            SuiteResult with one StepResult per step.

        Raises:
            BootstrapError: If authentication fails. No step runs.
        """
        start = time.monotonic()
        result = SuiteResult(
            scenario_name=self.scenario.name,
            base_url=self.config.base_url,
        )
        logger.info(
            "Starting scenario %r against %s (%d steps)",
            self.scenario.name,
            self.config.base_url,
            len(self.scenario),
        )

        async with open_session(self.config, metric_callback=self._record) as client:
            context = ScenarioContext(client=client)
            for step in self.scenario.steps:
                step_result = await self._run_step(step, context)
                result.steps.append(step_result)
                if self._on_step is not None:
                    self._on_step(step_result)

        result.revue_id = context.revue_id
        result.duration_seconds = time.monotonic() - start
        logger.info(
            "Scenario %r finished: %d/%d steps passed in %.2fs",
            self.scenario.name,
            len(result.steps) - len(result.failed_steps),
            len(result.steps),
            result.duration_seconds,
        )
        return result

    async def _run_step(self, step: StepDefinition, context: ScenarioContext) -> StepResult:
        """Run one step and convert its outcome into a StepResult."""
        self._current_requests = []
        extra = {"step": step.name}
        logger.debug("Running step %s", step.name, extra=extra)
        start = time.monotonic()
        message: str | None = None

        try:
            if step.needs_revue_id:
                context.require_revue_id()
            await step.func(context)
        except CheckFailure as exc:
            message = str(exc)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            message = f"Request failed: {type(exc).__name__}: {exc}"

        step_result = StepResult(
            name=step.name,
            passed=message is None,
            message=message,
            duration_ms=(time.monotonic() - start) * 1000,
            requests=self._current_requests,
        )
        if step_result.passed:
            logger.info("PASS %s", step.name, extra=extra)
        else:
            logger.warning("FAIL %s: %s", step.name, message, extra=extra)
        return step_result

    def _record(self, metric: RequestMetric) -> None:
        """Attribute a request record to the step that is running."""
        self._current_requests.append(metric)
