from __future__ import annotations

from typing import Optional


class ReporterError(Exception):
    """Base class for every failure that terminates a report run."""


class ConfigurationError(ReporterError):
    """Malformed config file, missing token, unsupported format or bad repository."""


class NetworkError(ReporterError):
    """Request could not be sent, connection failed, or the API answered non-200."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.retryable = retryable


class RequestTimeoutError(NetworkError):
    def __init__(self, message: str) -> None:
        super().__init__(message, retryable=True)


class DecodeError(ReporterError):
    """Response body is not a JSON array of alert objects."""


class ReportWriteError(ReporterError):
    """Output directory or report file could not be created or written."""
