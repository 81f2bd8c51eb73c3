from __future__ import annotations

import logging
from typing import Iterable

from ..domain.models import Alert

logger = logging.getLogger(__name__)


def filter_open_alerts(alerts: Iterable[Alert]) -> tuple[Alert, ...]:
    """Keep alerts whose state is "open", preserving their relative order."""
    kept: list[Alert] = []
    dropped = 0
    for alert in alerts:
        if alert.is_open:
            kept.append(alert)
        else:
            dropped += 1
    logger.debug(f"Open filter kept {len(kept)} alerts, dropped {dropped}")
    return tuple(kept)
