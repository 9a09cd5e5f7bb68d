"""revuecheck: end-to-end checks for the Revue API."""

from __future__ import annotations

from revuecheck._internal.config import RevueCheckConfig, load_config
from revuecheck._internal.errors import BootstrapError, CheckFailure, RevueCheckError
from revuecheck.dsl.decorators import scenario, step
from revuecheck.dsl.http_client import HttpClient, RequestMetric
from revuecheck.dsl.scenario import ScenarioContext, ScenarioDefinition
from revuecheck.engine.runner import ScenarioRunner
from revuecheck.metrics.models import StepResult, SuiteResult

__version__ = "0.1.0"

__all__ = [
    "BootstrapError",
    "CheckFailure",
    "HttpClient",
    "RequestMetric",
    "RevueCheckConfig",
    "RevueCheckError",
    "ScenarioContext",
    "ScenarioDefinition",
    "ScenarioRunner",
    "StepResult",
    "SuiteResult",
    "load_config",
    "scenario",
    "step",
]
