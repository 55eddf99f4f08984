"""FastAPI façade over the GPS position feed.

Start with::

    uvicorn server.main:app --host 0.0.0.0 --port 8000

or ``python -m server``, which takes the bind address from the config.

Endpoints:
    ``GET /gps/get?type=<name>`` returns the current Position Document.

    ``WS /gps/ws`` accepts JSON requests ``{"verb": ..., ...}``:

    * ``{"verb": "get", "type": "DMS.kn"}``
    * ``{"verb": "subscribe", "type": "WGS84", "period": 1000}``
    * ``{"verb": "unsubscribe", "id": 3}``

    An optional ``"request"`` value is echoed in the reply, which is either
    ``{"request": r, "response": ...}`` or ``{"request": r, "error": code,
    "info": text}``. Subscriptions then receive
    ``{"event": "gps", "id": <id>, "data": <document>}`` at their period.

Every handler is ``async`` so that it runs on the event loop owning the
feed state; the feed is never touched from a worker thread.
"""

import asyncio
import contextlib
import json
from collections.abc import AsyncIterator
from typing import Any

import structlog
from fastapi import FastAPI, Query, Request, WebSocket, WebSocketDisconnect
from fastapi.responses import JSONResponse

from gpsfeed.connection import ConnectionManager
from gpsfeed.context import GPSContext
from gpsfeed.errors import GPSFeedError
from gpsfeed.service import PositionService
from server.config import load_config
from server.feed import run_dispatch_loop
from server.logs import setup_logging
from server.session import WebSocketSession

log = structlog.get_logger()


def _error_reply(code: str, info: str) -> dict[str, Any]:
    return {"error": code, "info": info}


@contextlib.asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    config = load_config()
    setup_logging(config.logging)

    context = GPSContext(max_subscriptions=config.dispatch.max_subscriptions)
    application.state.context = context
    application.state.service = PositionService(
        context, default_period_ms=config.dispatch.default_period_ms
    )

    loop = asyncio.get_running_loop()
    connection = ConnectionManager(
        config.upstream.host,
        config.upstream.service,
        context.framer,
        loop,
        on_cycle=context.dispatch,
        connect_timeout=config.upstream.connect_timeout_s,
    )
    connection.connect()
    application.state.connection = connection
    ticker = asyncio.create_task(
        run_dispatch_loop(context, config.dispatch.tick_interval_ms)
    )
    log.info("server_started", upstream_host=config.upstream.host, upstream_service=config.upstream.service)

    try:
        yield
    finally:
        ticker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await ticker
        connection.close()
        log.info("server_stopped")


app = FastAPI(title="gpsfeed", description="GPS position feed", lifespan=_lifespan)


@app.exception_handler(GPSFeedError)
async def _gpsfeed_error_handler(_request: Request, exc: GPSFeedError) -> JSONResponse:
    return JSONResponse(status_code=400, content=_error_reply(exc.code, str(exc)))


@app.get("/gps/get")
async def get_position(
    request: Request,
    type_name: str | None = Query(default=None, alias="type"),
) -> dict[str, Any]:
    """Return the last known position in the requested representation."""
    service: PositionService = request.app.state.service
    return dict(service.get(type_name))


def _handle_request(
    service: PositionService,
    session: WebSocketSession,
    request: dict[str, Any],
) -> Any:
    verb = request.get("verb")
    if verb == "get":
        return dict(service.get(request.get("type")))
    if verb == "subscribe":
        return service.subscribe(request.get("type"), request.get("period"), session)
    if verb == "unsubscribe":
        service.unsubscribe(request.get("id"), channel=session)
        return None
    raise ValueError(f"unknown verb: {verb!r}")


def _reply_to(service: PositionService, session: WebSocketSession, text: str) -> dict[str, Any]:
    try:
        request = json.loads(text)
    except json.JSONDecodeError:
        return _error_reply("bad-request", "request is not valid JSON")
    if not isinstance(request, dict):
        return _error_reply("bad-request", "request must be a JSON object")

    reply: dict[str, Any] = {"request": request.get("request")}
    try:
        reply["response"] = _handle_request(service, session, request)
    except GPSFeedError as e:
        reply.update(_error_reply(e.code, str(e)))
    except ValueError as e:
        reply.update(_error_reply("unknown-verb", str(e)))
    return reply


async def _forward_queue_to_websocket(
    queue: asyncio.Queue[dict[str, Any]],
    websocket: WebSocket,
) -> None:
    try:
        while True:
            message = await queue.get()
            await websocket.send_json(message)
    except WebSocketDisconnect:
        pass


async def _serve_requests(
    websocket: WebSocket,
    service: PositionService,
    session: WebSocketSession,
) -> None:
    try:
        while True:
            text = await websocket.receive_text()
            await websocket.send_json(_reply_to(service, session, text))
    except WebSocketDisconnect:
        pass


@app.websocket("/gps/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """Serve get/subscribe/unsubscribe requests and push subscriptions.

    The session's subscriptions are not removed on disconnect; the next
    push to a closed session reports that nobody listens and the dispatcher
    drops them.

    Args:
        websocket: The incoming WebSocket connection.
    """
    await websocket.accept()
    service: PositionService = websocket.app.state.service
    session = WebSocketSession()
    sender = asyncio.create_task(_forward_queue_to_websocket(session.queue, websocket))
    try:
        await _serve_requests(websocket, service, session)
    finally:
        session.close()
        sender.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sender
