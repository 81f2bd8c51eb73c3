from __future__ import annotations

from pathlib import Path
from typing import Sequence

from .container import Container
from ..config.loader import load_config
from ..config.settings import AppConfig
from ..core.domain.models import Alert
from ..core.usecases.export_alerts import ReportOutcome


class DependabotReporterClient:
    """Client for fetching and exporting Dependabot alerts.

    The container and its HTTP client are created once and reused across calls.

    Example:
        # Configuration from config.yaml and DEPENDABOT_TOKEN
        with DependabotReporterClient() as client:
            alerts = client.fetch_open_alerts("octo/widgets")

        # Explicit settings
        with DependabotReporterClient(github_token="ghp_xxx", output_format="csv") as client:
            outcome = client.export("octo/widgets")
            if outcome.export:
                print(outcome.export.path)
    """

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        config_file: str | Path | None = None,
        github_token: str | None = None,
        output_format: str | None = None,
        output_dir: str | Path | None = None,
        timeout_seconds: float | None = None,
        max_retries: int | None = None,
        api_url: str | None = None,
    ):
        """Initialize the client.

        Args:
            config: Fully resolved configuration. When given, the keyword
                    overrides below are ignored.
            config_file: YAML config file to load when config is None.
                         Defaults to ./config.yaml or the user config directory.
            github_token: Token overriding the file and DEPENDABOT_TOKEN.
            output_format: "json" or "csv".
            output_dir: Directory receiving report files.
            timeout_seconds: Timeout of the alerts request.
            max_retries: Retries after a timed-out request.
            api_url: Base URL of the GitHub REST API.

        Raises:
            ConfigurationError: If the resolved configuration is invalid (e.g. no token).
        """
        if config is None:
            config = load_config(
                config_file,
                github_token=github_token,
                output_format=output_format,
                output_dir=output_dir,
                timeout_seconds=timeout_seconds,
                max_retries=max_retries,
                api_url=api_url,
            )
        self._config = config

        self._container = Container()
        self._container.config.from_dict(config.model_dump())
        self._container.init_resources()

    @property
    def config(self) -> AppConfig:
        return self._config

    def fetch_open_alerts(self, repo: str) -> Sequence[Alert]:
        """Return the open alerts of repo ("owner/name") in API order.

        Raises:
            ConfigurationError: If repo is not in owner/name form.
            NetworkError: On connection failures or a non-200 response.
            DecodeError: If the response is not a JSON array of alerts.
        """
        return self._container.alert_source().fetch_open_alerts(repo.strip())

    def export(self, repo: str) -> ReportOutcome:
        """Fetch open alerts of repo and write a report in the configured format.

        No file is written when the repository has no open alerts.
        """
        uc = self._container.export_uc()
        return uc.execute(repo.strip())

    def close(self) -> None:
        """Close the client and release the HTTP connection pool."""
        self._container.shutdown_resources()

    def __enter__(self) -> DependabotReporterClient:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = [
    "DependabotReporterClient",
    "AppConfig",
]
