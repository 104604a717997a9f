from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
import structlog

from ..auth import require_bearer
from ..oadr_models import Event
from ..storage import EventStore
from .deps import get_event_store

router = APIRouter()
log = structlog.get_logger()


@router.get("/ping", response_class=PlainTextResponse)
async def ping():
    log.info("ping")
    return "pong"


@router.get(
    "/events",
    response_model=list[Event],
    response_model_exclude_none=True,
    dependencies=[Depends(require_bearer)],
)
async def list_events(store: EventStore = Depends(get_event_store)):
    """Every stored event, oldest first, as a VEN poller sees them."""
    events = store.snapshot()
    log.debug("events.listed", count=len(events))
    return events
