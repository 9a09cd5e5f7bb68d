"""Logging setup for revuecheck.

Every module logs through a child of the ``revuecheck`` logger. Steps pass
their name via ``extra={"step": ...}`` so JSON output can be filtered per
check.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime

_ROOT_LOGGER = "revuecheck"

# LogRecord attributes copied into JSON output when a caller sets them
# through ``extra``.
_EXTRA_FIELDS = ("step", "method", "url", "status")


class _JsonFormatter(logging.Formatter):
    """One-line JSON log formatter.

    Emits objects with keys: timestamp, level, logger, message, plus any
    of ``step``, ``method``, ``url`` and ``status`` set on the record.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record as a JSON string.

        Args:
            record: The log record to format.

        Returns:
            A single-line JSON string.
        """
        log_entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                log_entry[key] = value
        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry)


def setup_logging(
    level: int = logging.INFO,
    *,
    json_format: bool = False,
) -> logging.Logger:
    """Configure and return the ``revuecheck`` logger.

    Installs a single stderr handler. Calling it again updates the level
    and the formatter of that handler and points it at the current
    ``sys.stderr``.

    Args:
        level: Logging level (e.g., ``logging.DEBUG``). Defaults to INFO.
        json_format: If True, emit one JSON object per line. If False, emit
            human-readable lines.

    Returns:
        The configured ``revuecheck`` logger.
    """
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(level)

    if json_format:
        formatter: logging.Formatter = _JsonFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)
            if isinstance(handler, logging.StreamHandler):
                handler.setStream(sys.stderr)
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    # The CLI prints its own report; keep records off the root logger.
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child logger under the ``revuecheck`` namespace.

    Args:
        name: Logger name, appended to the ``revuecheck.`` prefix.
            Example: ``get_logger("engine.runner")`` returns
            ``logging.getLogger("revuecheck.engine.runner")``.

    Returns:
        The child logger.
    """
    return logging.getLogger(f"{_ROOT_LOGGER}.{name}")
