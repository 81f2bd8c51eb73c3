from __future__ import annotations

from enum import Enum
from typing import Optional


class OutputFormat(str, Enum):
    JSON = "json"
    CSV = "csv"

    @property
    def extension(self) -> str:
        return self.value

    @classmethod
    def from_str(cls, value: str) -> Optional["OutputFormat"]:
        """Parse a format name case-insensitively; return None for unknown names."""
        s = value.strip().lower()
        for member in cls:
            if member.value == s:
                return member
        return None


class AlertState(str, Enum):
    """Lifecycle states reported by the Dependabot alerts API."""

    OPEN = "open"
    DISMISSED = "dismissed"
    FIXED = "fixed"
    AUTO_DISMISSED = "auto_dismissed"
