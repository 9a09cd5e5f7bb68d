"""Custom exception hierarchy for revuecheck."""

from __future__ import annotations


class RevueCheckError(Exception):
    """Base exception for all revuecheck errors.

    All custom exceptions in the revuecheck package inherit from this class,
    making it easy to catch any revuecheck-specific error with a single
    except clause.
    """


class ScenarioError(RevueCheckError):
    """Raised when a scenario definition is invalid.

    Examples:
        - A scenario is built with no steps.
        - Two steps share the same name.
        - A step function is not a coroutine function.
    """


class ConfigError(RevueCheckError):
    """Raised when configuration is invalid or missing.

    Examples:
        - Required environment variable has an invalid value.
        - Configuration value is out of acceptable range.
    """


class BootstrapError(RevueCheckError):
    """Raised when the authentication bootstrap cannot complete.

    Fatal: no step may run without an authenticated client.

    Examples:
        - The authentication endpoint is unreachable.
        - The authentication response body is not valid JSON.
    """


class CheckFailure(RevueCheckError):
    """Raised by a step when an expectation about the API does not hold.

    The runner records the step as failed and moves on to the next one.
    """
