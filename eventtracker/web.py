"""HTTP endpoint handlers."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass

from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response

from eventtracker.models import U64_MAX, LogType, TrackerError, parse_event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Params:
    """Search criteria for reading logs."""

    start: int | None = None
    end: int | None = None
    log_type: LogType | None = None


def _parse_u64(name: str, text: str) -> int:
    digits = text[1:] if text.startswith("+") else text
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"{name}: invalid digit found in string")
    value = int(digits)
    if value > U64_MAX:
        raise ValueError(f"{name}: number too large to fit in target type")
    return value


def parse_params(query: Mapping[str, str]) -> Params:
    """Read search criteria from query parameters, raising ValueError on bad values."""
    start = query.get("start")
    end = query.get("end")
    log_type = query.get("log_type")
    if log_type is not None:
        try:
            log_type = LogType(log_type)
        except ValueError:
            raise ValueError(f"log_type: unknown variant `{log_type}`") from None
    return Params(
        start=None if start is None else _parse_u64("start", start),
        end=None if end is None else _parse_u64("end", end),
        log_type=log_type,
    )


def _is_json_content(content_type: str | None) -> bool:
    if not content_type:
        return False
    mime = content_type.split(";", 1)[0].strip().lower()
    kind, _, subtype = mime.partition("/")
    return kind == "application" and (subtype == "json" or subtype.endswith("+json"))


def _reject_constant(name: str) -> None:
    raise ValueError(f"invalid number {name}")


async def root(request: Request) -> Response:
    """The "/" endpoint."""
    return PlainTextResponse("Welcome home")


async def health_check(request: Request) -> Response:
    """The "/health" endpoint."""
    return PlainTextResponse("Healthy")


async def write_event(request: Request) -> Response:
    """POST "/events": store one event given as a JSON body."""
    logger.debug("write_event")
    if not _is_json_content(request.headers.get("content-type")):
        return PlainTextResponse(
            "Expected request with `Content-Type: application/json`",
            status_code=415,
        )
    body = await request.body()
    try:
        data = json.loads(body, parse_constant=_reject_constant)
    except ValueError as exc:
        return PlainTextResponse(
            f"Failed to parse the request body as JSON: {exc}", status_code=400
        )
    try:
        event = parse_event(data)
    except ValueError as exc:
        return PlainTextResponse(
            f"Failed to deserialize the JSON body into the target type: {exc}",
            status_code=422,
        )
    logger.debug("%s", event)

    try:
        await request.app.state.storage.write_log_to_storage(event)
    except TrackerError:
        return Response(status_code=400)
    return Response(status_code=200)


async def read_events(request: Request) -> Response:
    """GET "/events": list stored events matching the query parameters."""
    logger.debug("read_event")
    try:
        params = parse_params(request.query_params)
    except ValueError as exc:
        return PlainTextResponse(
            f"Failed to deserialize query string: {exc}", status_code=400
        )
    logger.debug("params: %s", params)

    try:
        logs = await request.app.state.storage.get_logs_in_range(
            params.start, params.end, params.log_type
        )
    except TrackerError:
        return Response(status_code=400)
    body = [[timestamp, [log_type.value, payload]] for timestamp, (log_type, payload) in logs]
    logger.debug("%s", body)
    return JSONResponse(body)