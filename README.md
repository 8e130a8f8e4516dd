# eventtracker

A small HTTP service that keeps a log of timestamped events in memory. Clients post
events of a few fixed types. They can read the events back by time range, and can
filter them by type. Requests are rate-limited for each client IP address.

## Installing

```
pip install .
```

## Running

```
eventtracker
```

This starts the server on `0.0.0.0:3000`. Use `--host` and `--port` to change the
address:

```
eventtracker --host 127.0.0.1 --port 8080
```

Rate limiting is on when the server runs this way. Each client IP may send a burst of
5 requests. After that, one more request is allowed every 2 seconds. A client that
goes past the limit gets `429 Too Many Requests`, and the `retry-after` and
`x-ratelimit-after` headers say how many seconds to wait. The server forgets a
client's state once its quota has refilled. It checks for such clients once a
minute.

## Endpoints

| Method | Path      | Purpose                                       |
|--------|-----------|-----------------------------------------------|
| GET    | `/`       | Returns `Welcome home`                        |
| GET    | `/health` | Returns `Healthy`                             |
| POST   | `/events` | Records one event                             |
| GET    | `/events` | Returns the recorded events in a time range   |

### Recording an event

```
curl -X POST localhost:3000/events \
     -H 'Content-Type: application/json' \
     -d '{"log_type": "yyz", "timestamp": 1700000000000, "payload": "anything"}'
```

- The body must be sent as `application/json`. Any other content type gets
  `415 Unsupported Media Type`, and a body that is not valid JSON gets
  `400 Bad Request`.
- `log_type` must be one of `xyz`, `xxx`, `yyz` or `zyx`. Any other value gets
  `422 Unprocessable Entity`. So does a body that is missing a field or has a
  field of the wrong kind.
- `timestamp` is a Unix time in milliseconds. It must be an unsigned 64-bit integer.
  A timestamp in the future gets `400 Bad Request`.
- `payload` can be any JSON value.

Events are keyed by timestamp. A second event with the same timestamp replaces the
first.

### Reading events

```
curl 'localhost:3000/events?start=0&end=1700000000000&log_type=yyz'
```

All query parameters are optional:

- `start`: the earliest timestamp, inclusive. Defaults to 0.
- `end`: the latest timestamp, inclusive. Defaults to the newest stored event.
- `log_type`: return only events of this type.

The response is a JSON array of `[timestamp, [log_type, payload]]` pairs, oldest
first. You get `400 Bad Request` in any of these cases:

- `start` is later than `end`.
- Nothing has been logged yet.
- A query parameter is not valid.

## Using it from Python

- `eventtracker.app.create_app(rate_limiting)` returns the Starlette application
  with a fresh, empty store. Serve it with any ASGI server, or test it in-process.
- `eventtracker.storage.Storage` is the in-memory store. Its async methods are
  `write_log_to_storage(event)` and `get_logs_in_range(start_time, end_time, event_type)`.
- `eventtracker.models.parse_event` builds `Event` values from decoded JSON. The log
  types are the `eventtracker.models.LogType` enum.
- Errors are subclasses of `eventtracker.models.TrackerError`: `InvalidRangeError`,
  `EmptyLogFileError` and `TimeAnomalyError`.
- `eventtracker.ratelimit.RateLimiter` and `RateLimitMiddleware` provide the
  per-client limiter and its ASGI middleware.

## Limitations

Events are kept in memory only. They are lost when the server stops, and they are
not shared between server processes.

## Tests

```
pip install '.[test]'
pytest
```