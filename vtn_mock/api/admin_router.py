"""Operator routes that drive test scenarios.

These share the data routes' bearer credential; the mock has no separate
admin identity.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
import structlog

from ..auth import require_bearer
from ..config import Settings
from ..errors import ConfigurationError
from ..metrics import Metrics
from ..oadr_models import Event, ObjectOperation, ObjectType, Operation, Subscription
from ..services import DispatchEngine, EventParameters, synthesize
from ..storage import EventStore, SubscriptionRegistry
from .deps import get_dispatcher, get_event_store, get_metrics, get_registry, get_settings_state
from .schemas import TriggerResponse

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_bearer)])
log = structlog.get_logger()

INITIAL_SUBSCRIPTION_ID = "test"


@router.post("/events", response_model=Event, response_model_exclude_none=True, status_code=201)
async def generate_polled_event(
    params: EventParameters,
    store: EventStore = Depends(get_event_store),
    metrics: Metrics = Depends(get_metrics),
):
    """
    Store an event with known parameters for pollers to pick up.

    Nothing is pushed to subscribers; use the trigger route for that.
    """
    event = synthesize(params)
    store.append(event)
    metrics.record_event_generated("polled")
    return event


@router.post("/events/clear")
async def clear_events(store: EventStore = Depends(get_event_store)):
    """Empty the event list, e.g. to check pollers cope with no events."""
    store.clear()
    return {"status": "cleared"}


@router.post(
    "/subscriptions/initial",
    response_model=Subscription,
    response_model_exclude_none=True,
    status_code=201,
)
async def generate_initial_subscription(
    settings: Settings = Depends(get_settings_state),
    registry: SubscriptionRegistry = Depends(get_registry),
    metrics: Metrics = Depends(get_metrics),
):
    """
    Create the "test" subscription a VTN operator would set up through its UI.

    Points at DEFAULT_CALLBACK_URL and overwrites any existing "test" entry.
    """
    if settings.DEFAULT_CALLBACK_URL is None:
        raise ConfigurationError("DEFAULT_CALLBACK_URL is not configured")

    now = datetime.now(timezone.utc).isoformat()
    subscription = Subscription(
        id=INITIAL_SUBSCRIPTION_ID,
        created_date_time=now,
        modification_date_time=now,
        object_type="SUBSCRIPTION",
        client_name="testing_oadr3_VEN",
        program_id="test_program",
        object_operations=[
            ObjectOperation(
                object_type=[ObjectType.EVENT],
                operations=[Operation.POST],
                callback_url=str(settings.DEFAULT_CALLBACK_URL),
                bearer_token="",
            )
        ],
    )
    registry.upsert(subscription)
    metrics.set_subscriptions(len(registry))
    log.info("subscription.initial_created", subscription_id=INITIAL_SUBSCRIPTION_ID)
    return subscription


@router.post("/subscriptions/{subscription_id}/trigger", response_model=TriggerResponse)
async def trigger_subscription_event(
    subscription_id: str,
    params: EventParameters,
    dispatcher: DispatchEngine = Depends(get_dispatcher),
):
    """Create an active event and push it to the subscription's EVENT callbacks."""
    result = await dispatcher.trigger(subscription_id, params)
    return TriggerResponse(
        subscription_id=result.subscription_id,
        event_id=result.event.id,
        callbacks_attempted=len(result.attempted),
    )
