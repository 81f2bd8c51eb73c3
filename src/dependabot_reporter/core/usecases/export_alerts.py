from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from ..domain.enums import OutputFormat
from ..domain.models import Alert
from ..errors import ConfigurationError
from ..ports.alert_source_port import AlertSourcePort
from ..ports.exporter_port import ExportResult, ReportExporterPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportOutcome:
    repo: str
    alerts: tuple[Alert, ...]
    export: Optional[ExportResult] = None

    @property
    def has_findings(self) -> bool:
        return bool(self.alerts)


class ExportAlertsUseCase:
    def __init__(
        self,
        source: AlertSourcePort,
        exporters: Mapping[str, ReportExporterPort],
        output_format: OutputFormat | str,
    ) -> None:
        self._source = source
        self._exporters = dict(exporters)
        self._format = OutputFormat(output_format)

    def fetch_open(self, repo: str) -> tuple[Alert, ...]:
        logger.info(f"Fetching alerts from repository {repo}...")
        alerts = tuple(self._source.fetch_open_alerts(repo))
        logger.info(f"Found {len(alerts)} open Dependabot alerts")
        return alerts

    def execute(self, repo: str) -> ReportOutcome:
        repo = repo.strip()
        exporter = self._exporters.get(self._format.value)
        if exporter is None:
            raise ConfigurationError(f"Unsupported output format '{self._format.value}'. Use 'json' or 'csv'.")

        alerts = self.fetch_open(repo)
        if not alerts:
            return ReportOutcome(repo=repo, alerts=alerts)

        logger.info(f"Exporting alerts to {self._format.value} format...")
        result = exporter.export(alerts, repo)
        return ReportOutcome(repo=repo, alerts=alerts, export=result)
