"""API routes for subscription management."""
from fastapi import APIRouter, Depends
import structlog

from ..auth import require_bearer
from ..errors import NotFoundError
from ..metrics import Metrics
from ..oadr_models import Subscription
from ..storage import SubscriptionRegistry
from .deps import get_metrics, get_registry

router = APIRouter(
    prefix="/subscriptions",
    tags=["subscriptions"],
    dependencies=[Depends(require_bearer)],
)
log = structlog.get_logger()


@router.post("", response_model=Subscription, response_model_exclude_none=True)
async def upsert_subscription(
    subscription: Subscription,
    registry: SubscriptionRegistry = Depends(get_registry),
    metrics: Metrics = Depends(get_metrics),
):
    """Create a subscription, silently overwriting one with the same id."""
    saved = registry.upsert(subscription)
    metrics.set_subscriptions(len(registry))
    return saved


@router.get("", response_model=list[Subscription], response_model_exclude_none=True)
async def list_subscriptions(registry: SubscriptionRegistry = Depends(get_registry)):
    """All subscriptions; there is no per-client filtering."""
    return registry.list()


@router.get("/{subscription_id}", response_model=Subscription, response_model_exclude_none=True)
async def get_subscription(subscription_id: str, registry: SubscriptionRegistry = Depends(get_registry)):
    subscription = registry.get(subscription_id)
    if subscription is None:
        raise NotFoundError("Subscription not found")
    return subscription


@router.put("/{subscription_id}", response_model=Subscription, response_model_exclude_none=True)
async def replace_subscription(
    subscription_id: str,
    subscription: Subscription,
    registry: SubscriptionRegistry = Depends(get_registry),
):
    """Update an existing subscription; the body id must match the path."""
    return registry.replace(subscription_id, subscription)


@router.delete("/{subscription_id}")
async def delete_subscription(
    subscription_id: str,
    registry: SubscriptionRegistry = Depends(get_registry),
    metrics: Metrics = Depends(get_metrics),
):
    if not registry.delete(subscription_id):
        raise NotFoundError("Subscription not found")
    metrics.set_subscriptions(len(registry))
    return {"id": subscription_id, "status": "deleted"}
