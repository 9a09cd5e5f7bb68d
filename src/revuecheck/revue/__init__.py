"""Checks for the Revue API."""

from __future__ import annotations

from revuecheck.revue.steps import REVUE_SCENARIO

__all__ = ["REVUE_SCENARIO"]
