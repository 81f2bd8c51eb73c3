from __future__ import annotations

import logging
from typing import Mapping, Optional

import httpx

from ..core.errors import NetworkError, RequestTimeoutError

logger = logging.getLogger(__name__)


class HttpClient:
    def __init__(
        self,
        base_headers: Optional[Mapping[str, str]] = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self._client = httpx.Client(
            timeout=timeout_seconds,
            headers=dict(base_headers or {}),
            follow_redirects=True,
            max_redirects=10
        )

    def get(self, url: str, headers: Optional[Mapping[str, str]] = None) -> httpx.Response:
        """GET url and return the response; anything but 200 raises NetworkError."""
        logger.debug(f"GET {url}")
        try:
            resp = self._client.get(url, headers=dict(headers) if headers else None)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(f"Request to {url} timed out: {e}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise NetworkError(f"Error making request to {url}: {e}") from e

        if resp.status_code != httpx.codes.OK:
            body = resp.text
            raise NetworkError(
                f"Error fetching {url}: {resp.status_code} {resp.reason_phrase}\nResponse: {body}",
                status_code=resp.status_code,
                body=body,
            )
        return resp

    def close(self) -> None:
        self._client.close()
