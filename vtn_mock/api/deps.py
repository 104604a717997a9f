"""Accessors for per-application state, for use with ``Depends``."""
from fastapi import Request

from ..auth.token_grant import StaticTokenIssuer
from ..config import Settings
from ..metrics import Metrics
from ..services import DispatchEngine
from ..storage import EventStore, SubscriptionRegistry


def get_settings_state(request: Request) -> Settings:
    return request.app.state.settings


def get_event_store(request: Request) -> EventStore:
    return request.app.state.event_store


def get_registry(request: Request) -> SubscriptionRegistry:
    return request.app.state.subscriptions


def get_dispatcher(request: Request) -> DispatchEngine:
    return request.app.state.dispatcher


def get_metrics(request: Request) -> Metrics:
    return request.app.state.metrics


def get_token_issuer(request: Request) -> StaticTokenIssuer:
    return request.app.state.token_issuer
