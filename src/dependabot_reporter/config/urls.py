from __future__ import annotations

from .settings import DEFAULT_API_URL


def get_dependabot_alerts_url(owner: str, name: str, api_url: str = DEFAULT_API_URL) -> str:
	return f"{api_url.rstrip('/')}/repos/{owner}/{name}/dependabot/alerts"

