"""Application assembly and the server entry point."""

from __future__ import annotations

import argparse
import asyncio
import logging
from contextlib import asynccontextmanager, suppress

import uvicorn
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import Route

from eventtracker.ratelimit import RateLimiter, RateLimitMiddleware
from eventtracker.storage import Storage
from eventtracker.web import health_check, read_events, root, write_event

logger = logging.getLogger(__name__)

_REPLENISH_SECONDS = 2
_BURST_SIZE = 5
_PRUNE_INTERVAL = 60.0


async def _prune_forever(limiter: RateLimiter, interval: float) -> None:
    while True:
        await asyncio.sleep(interval)
        limiter.retain_recent()


def _pruning_lifespan(limiter: RateLimiter, interval: float):
    @asynccontextmanager
    async def lifespan(app):
        task = asyncio.create_task(_prune_forever(limiter, interval))
        try:
            yield
        finally:
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task

    return lifespan


def create_app(rate_limiting: bool) -> Starlette:
    """Build the application with its routes and a fresh store."""
    middleware = []
    lifespan = None
    if rate_limiting:
        limiter = RateLimiter(per_second=_REPLENISH_SECONDS, burst_size=_BURST_SIZE)
        middleware.append(Middleware(RateLimitMiddleware, limiter=limiter))
        lifespan = _pruning_lifespan(limiter, _PRUNE_INTERVAL)

    app = Starlette(
        routes=[
            Route("/", root, methods=["GET"]),
            Route("/health", health_check, methods=["GET"]),
            Route("/events", write_event, methods=["POST"]),
            Route("/events", read_events, methods=["GET"]),
        ],
        middleware=middleware,
        lifespan=lifespan,
    )
    app.state.storage = Storage()
    return app


def main(argv: list[str] | None = None) -> int:
    """Serve the rate-limited application."""
    parser = argparse.ArgumentParser(prog="eventtracker", description="Event tracking server.")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=3000)
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    logger.info("starting up")
    uvicorn.run(create_app(True), host=args.host, port=args.port)
    return 0