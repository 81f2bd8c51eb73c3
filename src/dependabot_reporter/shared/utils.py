from __future__ import annotations

import re
from datetime import datetime
from typing import Optional, Tuple


REPO_SLUG_RE = re.compile(r"^(?P<owner>[A-Za-z0-9](?:[A-Za-z0-9_-]*[A-Za-z0-9])?)/(?P<name>[A-Za-z0-9._-]+)$")
TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"


def parse_repo_slug(slug: str) -> Optional[Tuple[str, str]]:
    """Split "owner/name" into its parts; None when the slug is malformed."""
    m = REPO_SLUG_RE.match(slug.strip())
    if not m:
        return None
    name = m.group("name")
    if name in (".", ".."):
        return None
    return m.group("owner"), name


def repo_basename(repo: str) -> str:
    """Last path segment of a repository slug ("octo/widgets" -> "widgets")."""
    return repo.strip().rstrip("/").rsplit("/", 1)[-1]


def report_filename(repo: str, now: datetime, extension: str) -> str:
    """Build "<repo>-alerts-<YYYYMMDD-HHMMSS>.<ext>".

    Examples:
        >>> report_filename("octo/widgets", datetime(2024, 5, 1, 13, 4, 5), "csv")
        'widgets-alerts-20240501-130405.csv'
    """
    return f"{repo_basename(repo)}-alerts-{now.strftime(TIMESTAMP_FORMAT)}.{extension}"


def token_preview(token: str) -> str:
    return f"{token[:8]}..." if len(token) > 8 else "***"
