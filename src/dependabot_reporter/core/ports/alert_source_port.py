from __future__ import annotations

from typing import Protocol, Sequence

from ..domain.models import Alert


class AlertSourcePort(Protocol):
    def fetch_open_alerts(self, repo: str) -> Sequence[Alert]:
        """Return the open alerts of the repository ("owner/name") in API order.

        Implementations raise ReporterError subclasses instead of returning partial data.
        """
        ...
