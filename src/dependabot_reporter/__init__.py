"""dependabot_reporter package: app/core/infra/config/shared.

Expose library-friendly API client at the package level.
"""

from .app.api import AppConfig, DependabotReporterClient
from .core.errors import (
    ConfigurationError,
    DecodeError,
    NetworkError,
    ReporterError,
    ReportWriteError,
    RequestTimeoutError,
)

import logging

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    "DependabotReporterClient",
    "AppConfig",
    "ReporterError",
    "ConfigurationError",
    "NetworkError",
    "RequestTimeoutError",
    "DecodeError",
    "ReportWriteError",
]
