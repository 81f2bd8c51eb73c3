from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Optional, Sequence

from ...core.domain.enums import OutputFormat
from ...core.domain.models import Alert
from ...core.ports.clock_port import ClockPort, SystemClock
from ...core.ports.exporter_port import ExportResult, ReportExporterPort
from .files import atomic_report_file, prepare_report_path

logger = logging.getLogger(__name__)


CSV_HEADER = ("Dependency", "Ecosystem", "Severity", "CVE", "Manifest", "Description", "URL")
NO_CVE = "N/A"


def alert_to_row(alert: Alert) -> tuple[str, ...]:
    return (
        alert.package_name,
        alert.ecosystem,
        alert.severity,
        NO_CVE if alert.cve_id is None else alert.cve_id,
        alert.manifest_path,
        alert.description,
        alert.html_url,
    )


class CsvReportExporter(ReportExporterPort):
    format = OutputFormat.CSV

    def __init__(self, output_dir: Path | str, clock: Optional[ClockPort] = None) -> None:
        self._output_dir = Path(output_dir)
        self._clock = clock or SystemClock()

    def export(self, alerts: Sequence[Alert], repo: str) -> ExportResult:
        path = prepare_report_path(self._output_dir, repo, self._clock.now(), self.format)
        rows = 0
        with atomic_report_file(path, newline="") as fh:
            writer = csv.writer(fh)
            writer.writerow(CSV_HEADER)
            for alert in alerts:
                writer.writerow(alert_to_row(alert))
                rows += 1
        logger.info(f"Wrote {rows} rows to {path}")
        return ExportResult(path=path, format=self.format, count=rows)
