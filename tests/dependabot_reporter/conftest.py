"""tests/conftest.py

Common fixtures for the entire test suite.
"""

import json
import logging
from datetime import datetime
from pathlib import Path

import httpx
import platformdirs
import pytest
from typer.testing import CliRunner

from dependabot_reporter.core.domain.models import Alert, Identifier


ALERTS_URL = "https://api.github.com/repos/octo/widgets/dependabot/alerts"


@pytest.fixture(scope="session")
def runner() -> CliRunner:
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch):
    """
    Runs every test from an empty working directory, with no DEPENDABOT_* variables
    and the per-user config directory redirected into tmp_path.
    """
    workdir = tmp_path / "work"
    user_config = tmp_path / "user-config"
    workdir.mkdir()

    monkeypatch.chdir(workdir)
    for name in ("DEPENDABOT_TOKEN", "DEPENDABOT_OUTPUT_DIR", "DEPENDABOT_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(platformdirs, "user_config_dir", lambda *args, **kwargs: str(user_config))

    yield workdir


@pytest.fixture(autouse=True)
def restore_package_logger():
    """The --log-level option reconfigures the package logger; undo it after each test."""
    logger = logging.getLogger("dependabot_reporter")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def mock_httpx_client(monkeypatch):
    """
    Replaces httpx.Client with a mock that uses a MockTransport.

    Returns a handler function that tests can use to register mock responses.
    Every request seen by the transport is appended to ``add_response.requests``.
    """
    responses = {}
    requests_log: list[httpx.Request] = []
    original_client = httpx.Client

    def add_response(
        url: str,
        method: str = "GET",
        status_code: int = 200,
        json_payload: object | None = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ):
        """Register a mock response for a given URL and method."""
        if json_payload is not None:
            body = json.dumps(json_payload).encode("utf-8")
        else:
            body = content if content is not None else b""
        responses[(method.upper(), url)] = (status_code, body, dict(headers or {}))

    def mock_transport(request: httpx.Request) -> httpx.Response:
        """The transport logic that returns registered responses or a 404."""
        requests_log.append(request)
        key = (request.method, str(request.url))
        if key in responses:
            status, body, extra_headers = responses[key]
            headers = {"Content-Length": str(len(body)), **extra_headers}
            return httpx.Response(status, content=body, headers=headers)

        return httpx.Response(404, text=f"Mock URL not found: {request.method} {request.url}")

    def patched_client(*args, **kwargs):
        kwargs["transport"] = httpx.MockTransport(mock_transport)
        return original_client(*args, **kwargs)

    monkeypatch.setattr(httpx, "Client", patched_client)
    add_response.requests = requests_log  # type: ignore[attr-defined]
    return add_response


def make_alert_payload(
    number: int,
    *,
    state: str = "open",
    name: str = "lodash",
    ecosystem: str = "npm",
    manifest_path: str = "package-lock.json",
    severity: str = "high",
    description: str = "Prototype pollution",
    identifiers: list[dict] | None = None,
) -> dict:
    """Build one alert object shaped like the Dependabot alerts REST response."""
    if identifiers is None:
        identifiers = [
            {"type": "GHSA", "value": f"GHSA-aaaa-bbbb-{number:04d}"},
            {"type": "CVE", "value": f"CVE-2024-{number:04d}"},
        ]
    return {
        "number": number,
        "state": state,
        "html_url": f"https://github.com/octo/widgets/security/dependabot/{number}",
        "created_at": "2024-01-01T00:00:00Z",
        "dependency": {
            "package": {"ecosystem": ecosystem, "name": name},
            "manifest_path": manifest_path,
            "scope": "runtime",
        },
        "security_advisory": {
            "ghsa_id": identifiers[0]["value"] if identifiers else None,
            "summary": f"{name} advisory",
            "description": description,
            "severity": severity,
            "identifiers": identifiers,
        },
    }


def make_alert(number: int, *, state: str = "open", cve: str | None = "default", **kwargs) -> Alert:
    identifiers: tuple[Identifier, ...] = (Identifier("GHSA", f"GHSA-aaaa-bbbb-{number:04d}"),)
    if cve == "default":
        cve = f"CVE-2024-{number:04d}"
    if cve is not None:
        identifiers += (Identifier("CVE", cve),)
    fields = dict(
        number=number,
        state=state,
        html_url=f"https://github.com/octo/widgets/security/dependabot/{number}",
        package_name="lodash",
        ecosystem="npm",
        manifest_path="package-lock.json",
        severity="high",
        description="Prototype pollution",
        identifiers=identifiers,
    )
    fields.update(kwargs)
    return Alert(**fields)


class FixedClock:
    def __init__(self, now: datetime | None = None) -> None:
        self._now = now or datetime(2024, 5, 1, 13, 4, 5)
        self.sleeps: list[float] = []

    def now(self) -> datetime:
        return self._now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def alert_payload():
    """Factory for REST alert objects (see make_alert_payload)."""
    return make_alert_payload


@pytest.fixture
def alert_factory():
    """Factory for domain Alert objects (see make_alert)."""
    return make_alert


@pytest.fixture
def alerts_url() -> str:
    return ALERTS_URL
