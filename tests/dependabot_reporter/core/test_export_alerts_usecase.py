from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pytest

from dependabot_reporter.core.domain.enums import OutputFormat
from dependabot_reporter.core.domain.models import Alert
from dependabot_reporter.core.errors import ConfigurationError, NetworkError
from dependabot_reporter.core.ports.alert_source_port import AlertSourcePort
from dependabot_reporter.core.ports.exporter_port import ExportResult, ReportExporterPort
from dependabot_reporter.core.usecases.export_alerts import ExportAlertsUseCase


class FakeSource(AlertSourcePort):
    def __init__(self, alerts: Sequence[Alert] = (), error: Exception | None = None) -> None:
        self._alerts = tuple(alerts)
        self._error = error
        self.calls: list[str] = []

    def fetch_open_alerts(self, repo: str) -> Sequence[Alert]:
        self.calls.append(repo)
        if self._error is not None:
            raise self._error
        return self._alerts


class FakeExporter(ReportExporterPort):
    def __init__(self, fmt: OutputFormat) -> None:
        self.format = fmt
        self.calls: list[tuple[tuple[Alert, ...], str]] = []

    def export(self, alerts: Sequence[Alert], repo: str) -> ExportResult:
        self.calls.append((tuple(alerts), repo))
        return ExportResult(path=Path(f"out.{self.format.value}"), format=self.format, count=len(alerts))


@pytest.fixture
def exporters():
    return {"json": FakeExporter(OutputFormat.JSON), "csv": FakeExporter(OutputFormat.CSV)}


def test_exports_with_configured_format(alert_factory, exporters):
    alerts = [alert_factory(1), alert_factory(2)]
    uc = ExportAlertsUseCase(FakeSource(alerts), exporters, OutputFormat.CSV)

    outcome = uc.execute("octo/widgets")

    assert outcome.has_findings
    assert outcome.export is not None
    assert outcome.export.format is OutputFormat.CSV
    assert outcome.export.count == 2
    assert exporters["csv"].calls == [(tuple(alerts), "octo/widgets")]
    assert exporters["json"].calls == []


def test_accepts_format_as_string(alert_factory, exporters):
    uc = ExportAlertsUseCase(FakeSource([alert_factory(1)]), exporters, "json")
    outcome = uc.execute("octo/widgets")
    assert outcome.export is not None and outcome.export.format is OutputFormat.JSON


def test_no_open_alerts_skips_exporters(exporters):
    source = FakeSource([])
    uc = ExportAlertsUseCase(source, exporters, OutputFormat.JSON)

    outcome = uc.execute("octo/widgets")

    assert not outcome.has_findings
    assert outcome.export is None
    assert source.calls == ["octo/widgets"]
    assert exporters["json"].calls == [] and exporters["csv"].calls == []


def test_fetch_errors_propagate_without_export(exporters):
    uc = ExportAlertsUseCase(FakeSource(error=NetworkError("boom", status_code=500)), exporters, OutputFormat.JSON)
    with pytest.raises(NetworkError):
        uc.execute("octo/widgets")
    assert exporters["json"].calls == []


def test_missing_exporter_fails_before_fetch():
    source = FakeSource([])
    uc = ExportAlertsUseCase(source, {"json": FakeExporter(OutputFormat.JSON)}, OutputFormat.CSV)
    with pytest.raises(ConfigurationError):
        uc.execute("octo/widgets")
    assert source.calls == []


def test_fetch_open_returns_tuple(alert_factory, exporters):
    uc = ExportAlertsUseCase(FakeSource([alert_factory(7)]), exporters, OutputFormat.JSON)
    assert uc.fetch_open("octo/widgets") == (alert_factory(7),)
