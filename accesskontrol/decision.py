"""
Decision outcomes for AccessKontrol checks.
"""

from __future__ import annotations

from enum import Enum


class AccessDecision(str, Enum):
    """Terminal outcome of a single access check."""

    GRANTED = "GRANTED"
    DENIED = "DENIED"

    def to_bool(self) -> bool:
        """Convert the decision to a boolean (GRANTED -> True)."""
        return self is AccessDecision.GRANTED
