from __future__ import annotations

import logging
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional

import typer
from typing_extensions import Annotated

from .container import Container
from ..config.loader import load_config
from ..config.settings import AppConfig
from ..core.domain.enums import OutputFormat
from ..core.errors import ConfigurationError, ReporterError
from ..core.usecases.export_alerts import ReportOutcome
from ..shared.utils import parse_repo_slug


app = typer.Typer(add_completion=False, help="Dependabot Reporter: export open Dependabot alerts to JSON or CSV")

EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2


class LogLevel(str, Enum):
    OFF = "OFF"
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"


@contextmanager
def provide_container(config: AppConfig) -> Iterator[Container]:
    container = Container()
    container.config.from_dict(config.model_dump())
    container.init_resources()
    try:
        yield container
    finally:
        container.shutdown_resources()


@app.callback()
def main(
    log_level: Annotated[
        Optional[LogLevel],
        typer.Option(
            "--log-level",
            help="Set log level (OFF, CRITICAL, ERROR, WARNING, INFO, DEBUG). Default: OFF",
        ),
    ] = None,
) -> None:
    """Root command callback to configure logging if requested."""
    if log_level in (None, LogLevel.OFF):
        return

    level = logging.getLevelName(log_level.value)
    if not isinstance(level, int):
        level = logging.INFO

    package_name = __package__.split(".", 1)[0] if __package__ else "dependabot_reporter"
    logger = logging.getLogger(package_name)

    # Avoid stacking console handlers when invoked repeatedly in one process
    has_stream = any(isinstance(h, logging.StreamHandler) for h in logger.handlers)
    if not has_stream:
        handler = logging.StreamHandler()  # stderr
        handler.setFormatter(logging.Formatter("%(levelname)s | %(name)s | %(message)s"))
        logger.addHandler(handler)

    logger.propagate = False
    logger.setLevel(level)


@app.command(help=(
    "Fetch open Dependabot alerts for REPO and write <repo>-alerts-<timestamp>.json|csv "
    "into the output directory. Token: github_token in the config file or DEPENDABOT_TOKEN."
))
def report(
    repo: str = typer.Option(..., "--repo", "-r", help="Repository in owner/repo format"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output format (json or csv). Overrides the config file."),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to configuration file (default: config.yaml)"),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", help="Directory for report files (default: reports)"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Request timeout in seconds (default: 30)"),
) -> None:
    repo = repo.strip()
    if parse_repo_slug(repo) is None:
        typer.echo(f"Invalid repository '{repo}'. Provide it using the --repo flag as owner/repo.", err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    try:
        config = load_config(config_file, output_format=output, output_dir=output_dir, timeout_seconds=timeout)
    except ConfigurationError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=EXIT_CONFIG_ERROR)

    with provide_container(config) as container:
        uc = container.export_uc()
        try:
            outcome = uc.execute(repo)
        except ConfigurationError as e:
            typer.echo(f"Configuration error: {e}", err=True)
            raise typer.Exit(code=EXIT_CONFIG_ERROR)
        except ReporterError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=EXIT_FAILURE)

    _print_outcome(outcome)


def _print_outcome(outcome: ReportOutcome) -> None:
    if not outcome.has_findings or outcome.export is None:
        typer.echo("No open Dependabot alerts found. Congratulations! :)")
        return
    result = outcome.export
    if result.format is OutputFormat.CSV:
        typer.echo(f"Alerts exported to {result.path} ({result.count} rows)")
    else:
        typer.echo(f"Alerts exported to {result.path}")


if __name__ == "__main__":  # pragma: no cover
    app()
