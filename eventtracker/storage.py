"""In-memory, time-ordered storage for logged events."""

from __future__ import annotations

import copy
import logging
import threading
from typing import Any

from sortedcontainers import SortedDict

from eventtracker.clock import get_current_time_in_ms
from eventtracker.models import EmptyLogFileError, Event, InvalidRangeError, LogType

logger = logging.getLogger(__name__)

Log = tuple[int, tuple[LogType, Any]]


class Storage:
    """Holds logged events keyed by timestamp; a later event at the same time replaces the earlier."""

    def __init__(self) -> None:
        self._logs: SortedDict = SortedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._logs)

    async def get_logs_in_range(
        self,
        start_time: int | None = None,
        end_time: int | None = None,
        event_type: LogType | None = None,
    ) -> list[Log]:
        """Return the logs between the two times inclusive, optionally of one type only.

        A missing start means the beginning and a missing end means the latest log.
        """
        logger.debug(
            "start_range: %s end_range: %s event_type: %s",
            start_time,
            end_time,
            event_type,
        )
        if start_time is not None and end_time is not None and start_time > end_time:
            raise InvalidRangeError("Start time must be earlier than end time")

        with self._lock:
            if not self._logs:
                raise EmptyLogFileError()
            start = 0 if start_time is None else start_time
            end = self._logs.peekitem(-1)[0] if end_time is None else end_time
            found = []
            for timestamp in self._logs.irange(start, end):
                log_type, payload = self._logs[timestamp]
                if event_type is None or log_type == event_type:
                    found.append((timestamp, (log_type, copy.deepcopy(payload))))
            return found

    async def write_log_to_storage(self, event: Event) -> None:
        """Store an event; events dated in the future are refused."""
        logger.debug("event: %s", event)
        if event.timestamp > get_current_time_in_ms():
            raise InvalidRangeError("Cannot log future events")
        with self._lock:
            self._logs[event.timestamp] = (event.log_type, event.payload)