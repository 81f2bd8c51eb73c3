from __future__ import annotations

from datetime import datetime
from typing import Protocol
import time


class ClockPort(Protocol):
    def now(self) -> datetime:
        """Return current local datetime."""
        ...

    def sleep(self, seconds: float) -> None:
        """Sleep for the given seconds."""


class SystemClock:
    def now(self) -> datetime:
        return datetime.now().astimezone()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)
