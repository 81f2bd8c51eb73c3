from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

from ..domain.enums import OutputFormat
from ..domain.models import Alert


@dataclass(frozen=True)
class ExportResult:
    path: Path
    format: OutputFormat
    count: int


class ReportExporterPort(Protocol):
    format: OutputFormat

    def export(self, alerts: Sequence[Alert], repo: str) -> ExportResult:
        """Write alerts to a new report file for repo and return where it went."""
        ...
