"""Shared fixtures: isolated applications and a recording webhook transport."""
import httpx
import pytest
from fastapi.testclient import TestClient

from vtn_mock.config import Settings
from vtn_mock.main import create_app
from vtn_mock.oadr_models import ObjectOperation, ObjectType, Operation, Subscription
from vtn_mock.storage import EventStore, SubscriptionRegistry

TOKEN = "correct"
AUTH = {"Authorization": f"Bearer {TOKEN}"}
BASIC = "Basic dmVuOnNlY3JldA=="


class WebhookRecorder:
    """httpx.MockTransport handler that records requests.

    Requests to hosts listed in ``failures`` raise the mapped exception.
    """

    def __init__(self, status_code: int = 200, failures: dict | None = None):
        self.status_code = status_code
        self.failures = failures or {}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        failure = self.failures.get(request.url.host)
        if failure is not None:
            raise failure("delivery failed", request=request)
        return httpx.Response(self.status_code, json={"ok": True})

    @property
    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]


def make_subscription(sub_id: str | None = "test", *operations: ObjectOperation, client_name: str = "ven-1"):
    if not operations:
        operations = (
            ObjectOperation(
                object_type=[ObjectType.EVENT],
                operations=[Operation.POST],
                callback_url="http://x/cb",
                bearer_token="t",
            ),
        )
    return Subscription(
        id=sub_id,
        client_name=client_name,
        program_id="1",
        object_operations=list(operations),
    )


@pytest.fixture
def settings():
    return Settings(
        BEARER_TOKEN=TOKEN,
        BASIC_AUTH_HEADER=BASIC,
        DUMMY_TOKEN="issued-token",
        LOG_JSON=False,
        LOG_LEVEL="WARNING",
        MAX_BODY_SIZE=4096,
    )


@pytest.fixture
def recorder():
    return WebhookRecorder()


@pytest.fixture
def app(settings, recorder):
    return create_app(settings=settings, webhook_transport=httpx.MockTransport(recorder))


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def event_store():
    return EventStore()


@pytest.fixture
def registry():
    return SubscriptionRegistry()
