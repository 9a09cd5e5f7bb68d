"""Shared type aliases for revuecheck."""

from __future__ import annotations

from typing import Any

# Decoded JSON document (object, array, scalar or None for an empty body).
JsonValue = Any

# Request body sent to the Revue endpoints.
Payload = dict[str, str]
