"""Domain, ports and use cases; no I/O besides what ports expose."""

from .errors import ConfigurationError, DecodeError, NetworkError, ReporterError, ReportWriteError, RequestTimeoutError

__all__ = ["ReporterError", "ConfigurationError", "NetworkError", "RequestTimeoutError", "DecodeError", "ReportWriteError"]
