"""Configuration loading for revuecheck."""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import urlparse

from revuecheck._internal.errors import ConfigError

DEFAULT_BASE_URL = "https://d2925tksfvgq8c.cloudfront.net"
DEFAULT_EMAIL = "Rumka@example.com"
DEFAULT_PASSWORD = "Rumka123"  # noqa: S105
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class RevueCheckConfig:
    """Settings for one run of the Revue scenario.

    Attributes:
        base_url: Base URL of the Revue API; endpoint paths are appended.
        email: Login email for the authentication bootstrap.
        password: Login password for the authentication bootstrap.
        request_timeout: Total timeout per HTTP request in seconds.
    """

    base_url: str = DEFAULT_BASE_URL
    email: str = DEFAULT_EMAIL
    password: str = DEFAULT_PASSWORD
    request_timeout: float = DEFAULT_TIMEOUT

    def __repr__(self) -> str:
        return (
            f"RevueCheckConfig(base_url={self.base_url!r}, email={self.email!r}, "
            f"password='***', request_timeout={self.request_timeout!r})"
        )


def validate_config(config: RevueCheckConfig) -> RevueCheckConfig:
    """Check a configuration and return it unchanged.

    Args:
        config: Configuration to validate.

    Returns:
        The same configuration.

    Raises:
        ConfigError: If any field is empty or out of range.
    """
    parsed = urlparse(config.base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        msg = f"Base URL must be an http(s) URL, got: {config.base_url!r}"
        raise ConfigError(msg)

    if not config.email:
        msg = "Login email must not be empty"
        raise ConfigError(msg)

    if not config.password:
        msg = "Login password must not be empty"
        raise ConfigError(msg)

    if config.request_timeout <= 0:
        msg = f"Request timeout must be positive, got: {config.request_timeout}"
        raise ConfigError(msg)

    return config


def load_config(**overrides: object) -> RevueCheckConfig:
    """Load configuration from environment variables with defaults.

    Keyword overrides (the CLI flags) take the place of the matching
    environment value before it is parsed, and the result is validated once.

    Environment variables:
        REVUECHECK_BASE_URL: Base URL of the Revue API.
        REVUECHECK_EMAIL: Login email.
        REVUECHECK_PASSWORD: Login password.
        REVUECHECK_TIMEOUT: Request timeout in seconds (default: 30.0).

    Args:
        **overrides: Field values that replace the environment, keyed by
            ``RevueCheckConfig`` field name.

    Returns:
        Populated RevueCheckConfig instance.

    Raises:
        ConfigError: If a value is invalid.
    """
    values: dict[str, object] = {
        "base_url": os.environ.get("REVUECHECK_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
        "email": os.environ.get("REVUECHECK_EMAIL", DEFAULT_EMAIL),
        "password": os.environ.get("REVUECHECK_PASSWORD", DEFAULT_PASSWORD),
    }

    if "request_timeout" not in overrides:
        timeout_str = os.environ.get("REVUECHECK_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            values["request_timeout"] = float(timeout_str)
        except ValueError:
            msg = f"REVUECHECK_TIMEOUT must be a number, got: {timeout_str!r}"
            raise ConfigError(msg) from None

    values.update(overrides)
    return validate_config(RevueCheckConfig(**values))  # type: ignore[arg-type]
