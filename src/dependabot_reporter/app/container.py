from __future__ import annotations

import logging

from dependency_injector import containers, providers

from ..core.ports.clock_port import SystemClock
from ..core.usecases.export_alerts import ExportAlertsUseCase
from ..infra.exporters import CsvReportExporter, JsonReportExporter
from ..infra.github_alerts import GitHubAlertSource
from ..infra.http_client import HttpClient

logger = logging.getLogger(__name__)


def http_client_resource(timeout_seconds):
	"""Create the HTTP client as a resource closed at container shutdown."""
	logger.info(f"Initializing HTTP client (timeout: {timeout_seconds}s)")
	client = HttpClient(timeout_seconds=timeout_seconds)
	try:
		yield client
	finally:
		logger.debug("Closing HTTP client")
		client.close()


class Container(containers.DeclarativeContainer):
	# Populated from an AppConfig via config.from_dict(app_config.model_dump())
	config = providers.Configuration()

	clock = providers.Singleton(SystemClock)

	http_client = providers.Resource(
		http_client_resource,
		timeout_seconds=config.timeout_seconds,
	)

	alert_source = providers.Factory(
		GitHubAlertSource,
		http_client=http_client,
		token=config.github_token,
		api_url=config.api_url,
		max_retries=config.max_retries,
		clock=clock,
	)

	exporters = providers.Dict(
		json=providers.Factory(JsonReportExporter, output_dir=config.output_dir, clock=clock),
		csv=providers.Factory(CsvReportExporter, output_dir=config.output_dir, clock=clock),
	)

	export_uc = providers.Factory(
		ExportAlertsUseCase,
		source=alert_source,
		exporters=exporters,
		output_format=config.output_format,
	)
