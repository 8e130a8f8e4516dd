"""Event records, log types and the errors raised while storing them."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

U64_MAX = 2**64 - 1

_REQUIRED_FIELDS = ("log_type", "timestamp", "payload")


class LogType(str, Enum):
    """Allowable events for logging and reading."""

    XYZ = "xyz"
    XXX = "xxx"
    YYZ = "yyz"
    ZYX = "zyx"


@dataclass
class Event:
    """An event to be logged."""

    log_type: LogType
    timestamp: int
    payload: Any

    def to_dict(self) -> dict[str, Any]:
        """Return the event in its JSON wire form."""
        return {
            "log_type": self.log_type.value,
            "timestamp": self.timestamp,
            "payload": self.payload,
        }


class TrackerError(Exception):
    """Base class for errors raised by the tracker."""

    message = "Tracker Error"

    def __str__(self) -> str:
        return self.message


class InvalidRangeError(TrackerError):
    """A time range or timestamp is not acceptable."""

    message = "Invalid Range"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class TimeAnomalyError(TrackerError):
    """The system clock reports a time before the Unix epoch."""

    message = "Time Anomaly"


class EmptyLogFileError(TrackerError):
    """No events have been stored yet."""

    message = "Empty Log File"


def parse_event(data: Any) -> Event:
    """Build an Event from decoded JSON, raising ValueError if it does not fit."""
    if not isinstance(data, Mapping):
        raise ValueError("expected a JSON object")
    for field in _REQUIRED_FIELDS:
        if field not in data:
            raise ValueError(f"missing field `{field}`")

    raw_type = data["log_type"]
    if not isinstance(raw_type, str):
        raise ValueError("log_type must be a string")
    try:
        log_type = LogType(raw_type)
    except ValueError:
        variants = ", ".join(f"`{member.value}`" for member in LogType)
        raise ValueError(
            f"unknown variant `{raw_type}`, expected one of {variants}"
        ) from None

    timestamp = data["timestamp"]
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        raise ValueError("timestamp must be an unsigned integer")
    if not 0 <= timestamp <= U64_MAX:
        raise ValueError("timestamp is out of range")

    return Event(log_type=log_type, timestamp=timestamp, payload=data["payload"])