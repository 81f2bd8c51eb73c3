from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, Sequence

from ...core.domain.enums import OutputFormat
from ...core.domain.models import Alert
from ...core.ports.clock_port import ClockPort, SystemClock
from ...core.ports.exporter_port import ExportResult, ReportExporterPort
from .files import atomic_report_file, prepare_report_path

logger = logging.getLogger(__name__)


def alert_to_payload(alert: Alert) -> dict[str, Any]:
    """Render an alert in the shape of the GitHub REST payload it came from."""
    return {
        "number": alert.number,
        "state": alert.state,
        "html_url": alert.html_url,
        "dependency": {
            "package": {
                "name": alert.package_name,
                "ecosystem": alert.ecosystem,
            },
            "manifest_path": alert.manifest_path,
            "scope": alert.scope,
        },
        "security_advisory": {
            "ghsa_id": alert.ghsa_id,
            "summary": alert.summary,
            "severity": alert.severity,
            "description": alert.description,
            "identifiers": [{"type": i.type, "value": i.value} for i in alert.identifiers],
        },
    }


class JsonReportExporter(ReportExporterPort):
    format = OutputFormat.JSON

    def __init__(self, output_dir: Path | str, clock: Optional[ClockPort] = None) -> None:
        self._output_dir = Path(output_dir)
        self._clock = clock or SystemClock()

    def export(self, alerts: Sequence[Alert], repo: str) -> ExportResult:
        path = prepare_report_path(self._output_dir, repo, self._clock.now(), self.format)
        payload = [alert_to_payload(a) for a in alerts]
        with atomic_report_file(path) as fh:
            json.dump(payload, fh, ensure_ascii=False, indent=2)
            fh.write("\n")
        logger.info(f"Wrote {len(payload)} alerts to {path}")
        return ExportResult(path=path, format=self.format, count=len(payload))
