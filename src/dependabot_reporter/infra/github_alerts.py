from __future__ import annotations

import logging
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from ..config.settings import DEFAULT_API_URL
from ..config.urls import get_dependabot_alerts_url
from ..core.domain.models import Alert, Identifier
from ..core.errors import ConfigurationError, DecodeError, NetworkError
from ..core.ports.alert_source_port import AlertSourcePort
from ..core.ports.clock_port import ClockPort, SystemClock
from ..core.services.alert_filter import filter_open_alerts
from ..shared.utils import parse_repo_slug, token_preview
from .http_client import HttpClient
from .schemas import GhDependabotAlert

logger = logging.getLogger(__name__)


GITHUB_JSON_MEDIA_TYPE = "application/vnd.github+json"

_ALERT_LIST = TypeAdapter(list[GhDependabotAlert])


def alert_request_headers(token: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Accept": GITHUB_JSON_MEDIA_TYPE,
        "Cache-Control": "no-cache",
    }


def _to_domain(gh: GhDependabotAlert) -> Alert:
    adv = gh.security_advisory
    dep = gh.dependency
    return Alert(
        number=gh.number,
        state=gh.state or "",
        html_url=gh.html_url or "",
        package_name=dep.package.name or "",
        ecosystem=dep.package.ecosystem or "",
        manifest_path=dep.manifest_path or "",
        scope=dep.scope,
        severity=adv.severity or "",
        description=adv.description or "",
        identifiers=tuple(Identifier(type=i.type or "", value=i.value or "") for i in (adv.identifiers or [])),
        ghsa_id=adv.ghsa_id,
        summary=adv.summary,
    )


class GitHubAlertSource(AlertSourcePort):
    def __init__(
        self,
        http_client: HttpClient,
        token: str,
        api_url: str = DEFAULT_API_URL,
        max_retries: int = 0,
        retry_backoff_seconds: float = 1.0,
        clock: Optional[ClockPort] = None,
    ) -> None:
        self._http = http_client
        self._headers = alert_request_headers(token)
        self._api_url = api_url
        self._max_retries = max(0, int(max_retries))
        self._backoff = retry_backoff_seconds
        self._clock = clock or SystemClock()
        logger.debug(f"GitHubAlertSource using token {token_preview(token)}")

    def fetch_all(self, repo: str) -> tuple[Alert, ...]:
        """Fetch and decode every alert of repo, whatever its state."""
        parsed = parse_repo_slug(repo)
        if parsed is None:
            raise ConfigurationError(f"Invalid repository '{repo}'. Use the owner/repo format.")
        owner, name = parsed
        url = get_dependabot_alerts_url(owner, name, self._api_url)

        resp = self._get_with_retry(url)

        if "next" in resp.links:
            logger.warning(
                "Repository %s/%s has more alerts than one page holds; only the first page is reported",
                owner,
                name,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise DecodeError(f"Error decoding response: {e}") from e
        if not isinstance(data, list):
            raise DecodeError(f"Error decoding response: expected a JSON array of alerts, got {type(data).__name__}")

        try:
            decoded = _ALERT_LIST.validate_python(data)
        except ValidationError as e:
            raise DecodeError(f"Error decoding response: {e}") from e

        alerts = tuple(_to_domain(a) for a in decoded)
        logger.info(f"Fetched {len(alerts)} alerts for {owner}/{name}")
        return alerts

    def fetch_open_alerts(self, repo: str) -> tuple[Alert, ...]:
        return filter_open_alerts(self.fetch_all(repo))

    def _get_with_retry(self, url: str):
        attempt = 0
        while True:
            try:
                return self._http.get(url, headers=self._headers)
            except NetworkError as e:
                if not e.retryable or attempt >= self._max_retries:
                    raise
                attempt += 1
                delay = self._backoff * attempt
                logger.warning(f"Retrying {url} in {delay:.1f}s after error ({attempt}/{self._max_retries}): {e}")
                self._clock.sleep(delay)
