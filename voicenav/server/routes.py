"""HTTP routes for the VoiceNav server.

Endpoints
---------
GET  /health       Version, capture support, listening state, role, catalog
                   size and speech feedback availability.

GET  /status       State of the voice toggle (for rendering the mic button).

POST /toggle       Start listening when idle, stop when listening.

POST /context      ``{"role": ..., "entities": [{"title", "slug"}, ...]}``.
                   Rebuilds the command catalog for the signed-in user.

POST /command      ``{"text": ...}``. Typed command override: bypasses
                   capture and runs matching and execution directly.

GET  /commands     Phrases in the current catalog.

GET  /notices      Server-Sent Events stream of on-screen notices.

GET  /navigations  Server-Sent Events stream of navigation requests.
"""

import asyncio
import logging

from fastapi import APIRouter, Request
from pydantic import ValidationError
from sse_starlette.sse import EventSourceResponse

from voicenav import __version__
from voicenav.catalog.types import DynamicEntity, Role
from voicenav.engine import VoiceNavEngine
from voicenav.events.event_bus import EventBus

logger = logging.getLogger(__name__)

router = APIRouter()

_KEEPALIVE_SECONDS = 15.0


def _get_engine(request: Request) -> VoiceNavEngine:
    """Retrieve the shared engine from application state."""
    return request.app.state.engine


def _status(engine: VoiceNavEngine) -> dict:
    controller = engine.controller
    return {
        "state": controller.state.value,
        "is_listening": controller.is_listening,
        "is_supported": controller.is_supported,
        "session_id": controller.session_id,
    }


# ---------------------------------------------------------------------------
# GET /health, GET /status
# ---------------------------------------------------------------------------


@router.get("/health")
async def health(request: Request) -> dict:
    engine = _get_engine(request)
    return {
        "status": "ok",
        "version": __version__,
        **_status(engine),
        "role": engine.role.value,
        "commands": len(engine.catalog),
        "tts_provider": engine.synthesizer.provider_name,
        "tts_available": engine.synthesizer.is_available,
        "notice_subscribers": engine.notice_bus.subscriber_count,
        "navigation_subscribers": engine.navigation_bus.subscriber_count,
    }


@router.get("/status")
async def status(request: Request) -> dict:
    return _status(_get_engine(request))


# ---------------------------------------------------------------------------
# POST /toggle
# ---------------------------------------------------------------------------


@router.post("/toggle")
async def toggle(request: Request) -> dict:
    engine = _get_engine(request)
    await engine.toggle()
    return _status(engine)


# ---------------------------------------------------------------------------
# POST /context
# ---------------------------------------------------------------------------


@router.post("/context")
async def set_context(request: Request) -> dict:
    """Rebuild the catalog for the user's role and the topic list.

    ``entities`` may be omitted to keep the current topics.
    """
    engine = _get_engine(request)

    try:
        body = await request.json()
    except Exception:
        return {"status": "error", "reason": "invalid json"}
    if not isinstance(body, dict):
        return {"status": "error", "reason": "expected a json object"}

    try:
        role = Role(body.get("role", ""))
    except ValueError:
        return {"status": "error", "reason": f"unknown role: {body.get('role')!r}"}

    raw_entities = body.get("entities")
    entities = None
    if raw_entities is not None:
        try:
            entities = [DynamicEntity.model_validate(item) for item in raw_entities]
        except (ValidationError, TypeError):
            return {"status": "error", "reason": "entities must be a list of {title, slug}"}

    catalog = engine.set_context(role, entities)
    return {"status": "ok", "role": catalog.role.value, "commands": len(catalog)}


# ---------------------------------------------------------------------------
# POST /command
# ---------------------------------------------------------------------------


@router.post("/command")
async def command(request: Request) -> dict:
    """Typed command override. Accepts JSON ``{"text": "..."}``."""
    engine = _get_engine(request)

    try:
        body = await request.json()
    except Exception:
        return {"status": "error", "reason": "invalid json"}
    if not isinstance(body, dict):
        return {"status": "error", "reason": "expected a json object"}

    text = body.get("text", "")
    if not isinstance(text, str) or not text.strip():
        return {"status": "error", "reason": "text is required"}

    outcome = await engine.handle_text(text)
    return {"status": outcome.status.value, "outcome": outcome.model_dump(mode="json")}


# ---------------------------------------------------------------------------
# GET /commands
# ---------------------------------------------------------------------------


@router.get("/commands")
async def commands(request: Request) -> dict:
    catalog = _get_engine(request).catalog
    return {
        "role": catalog.role.value,
        "commands": [
            item.model_dump(mode="json", include={"phrase", "action", "audience"})
            for item in catalog.commands
        ],
    }


# ---------------------------------------------------------------------------
# Server-Sent Events
# ---------------------------------------------------------------------------


def _stream(request: Request, bus: EventBus, event_name: str) -> EventSourceResponse:
    """Relay every event on *bus* to the client until it disconnects."""

    async def _generate():
        queue = await bus.subscribe()
        try:
            while True:
                if await request.is_disconnected():
                    logger.debug("%s SSE client disconnected", event_name)
                    break
                try:
                    event = await asyncio.wait_for(
                        queue.get(), timeout=_KEEPALIVE_SECONDS
                    )
                except asyncio.TimeoutError:
                    yield {"comment": "ping"}
                    continue
                yield {"event": event_name, "data": event.model_dump_json()}
        except asyncio.CancelledError:
            logger.debug("%s SSE stream cancelled", event_name)
        finally:
            await bus.unsubscribe(queue)

    return EventSourceResponse(_generate())


@router.get("/notices")
async def notice_stream(request: Request) -> EventSourceResponse:
    return _stream(request, _get_engine(request).notice_bus, "notice")


@router.get("/navigations")
async def navigation_stream(request: Request) -> EventSourceResponse:
    return _stream(request, _get_engine(request).navigation_bus, "navigation")
