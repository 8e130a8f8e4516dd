"""Wall-clock helpers."""

from __future__ import annotations

import logging
import time

from eventtracker.models import TimeAnomalyError

logger = logging.getLogger(__name__)


def get_current_time_in_ms() -> int:
    """Return the current Unix time in milliseconds."""
    nanos = time.time_ns()
    if nanos < 0:
        raise TimeAnomalyError("system clock is set before the Unix epoch")
    millis = nanos // 1_000_000
    logger.debug("%d", millis)
    return millis