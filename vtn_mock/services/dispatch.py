"""Dispatch engine: synthesize an event and push it to a subscription's callbacks.

Delivery is fire-and-forget. Each matching callback gets exactly one POST;
failures, timeouts and non-2xx answers are logged and counted, never
retried and never reported back to the caller. Retries and a delivery
ledger would belong in ``WebhookSender``.
"""
import asyncio
import time
from dataclasses import dataclass, field

import httpx
import orjson
import structlog

from ..errors import NotFoundError
from ..metrics import Metrics
from ..oadr_models import Event, ObjectOperation, ObjectType
from ..storage import EventStore, SubscriptionRegistry
from .synthesizer import EventParameters, synthesize, validate_parameters

log = structlog.get_logger()


@dataclass
class DispatchResult:
    """Outcome of a trigger as seen by the caller."""
    subscription_id: str
    event: Event
    attempted: list[str] = field(default_factory=list)


class WebhookSender:
    """
    Posts serialized objects to subscriber callbacks.

    A fresh ``httpx.AsyncClient`` is used per batch, with a bounded timeout
    on every call. ``transport`` lets tests substitute an
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
        metrics: Metrics | None = None,
    ):
        self._timeout = httpx.Timeout(timeout)
        self._transport = transport
        self._metrics = metrics

    async def send_all(self, operations: list[ObjectOperation], body: bytes) -> list[str]:
        """
        POST ``body`` to every operation's callback concurrently.

        Returns:
            Callback URLs that were attempted, in operation order
        """
        if not operations:
            return []

        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            await asyncio.gather(
                *(self._deliver(client, op, body) for op in operations),
                return_exceptions=True,
            )

        return [op.callback_url for op in operations]

    async def _deliver(self, client: httpx.AsyncClient, operation: ObjectOperation, body: bytes) -> bool:
        start = time.perf_counter()
        headers = {
            "Authorization": f"Bearer {operation.bearer_token}",
            "Content-Type": "application/json",
        }

        try:
            response = await client.post(operation.callback_url, content=body, headers=headers)
        except Exception as exc:
            # Includes invalid URLs and tokens that cannot be encoded as a header
            self._record("failed", start)
            log.warning(
                "webhook.delivery_failed",
                callback_url=operation.callback_url,
                error=str(exc),
                error_type=exc.__class__.__name__,
            )
            return False

        if not response.is_success:
            self._record("rejected", start)
            log.warning(
                "webhook.delivery_rejected",
                callback_url=operation.callback_url,
                status_code=response.status_code,
            )
            return False

        self._record("delivered", start)
        log.info(
            "webhook.delivered",
            callback_url=operation.callback_url,
            status_code=response.status_code,
        )
        return True

    def _record(self, outcome: str, start: float):
        if self._metrics is not None:
            self._metrics.record_delivery(outcome, time.perf_counter() - start)


class DispatchEngine:
    """
    Correlates a subscription with a freshly synthesized event.

    The link between the two exists only for the duration of ``trigger``;
    nothing ties the stored event to the subscription afterwards.
    """

    def __init__(
        self,
        events: EventStore,
        subscriptions: SubscriptionRegistry,
        sender: WebhookSender | None = None,
        metrics: Metrics | None = None,
    ):
        self._events = events
        self._subscriptions = subscriptions
        self._sender = sender or WebhookSender(metrics=metrics)
        self._metrics = metrics

    async def trigger(self, subscription_id: str, params: EventParameters) -> DispatchResult:
        """
        Create an event and send it to every EVENT callback of a subscription.

        The event is stored before any delivery starts and stays stored
        whatever the deliveries do.

        Raises:
            NotFoundError: If no subscription is stored under ``subscription_id``
            ValidationError: If ``params`` are out of range (nothing is stored)
        """
        subscription = self._subscriptions.get(subscription_id)
        if subscription is None:
            log.debug("dispatch.subscription_missing", subscription_id=subscription_id)
            raise NotFoundError("Subscription not found")

        validate_parameters(params)
        event = synthesize(params)
        self._events.append(event)
        if self._metrics is not None:
            self._metrics.record_event_generated("trigger")

        targets = [op for op in subscription.object_operations if op.handles(ObjectType.EVENT)]
        log.info(
            "dispatch.triggered",
            subscription_id=subscription_id,
            event_id=event.id,
            callbacks=len(targets),
        )

        body = orjson.dumps(event.to_wire())
        attempted = await self._sender.send_all(targets, body)

        return DispatchResult(subscription_id=subscription_id, event=event, attempted=attempted)
