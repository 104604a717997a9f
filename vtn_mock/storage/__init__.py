"""In-memory state shared by all request handlers."""
from .event_store import EventStore
from .subscription_registry import SubscriptionRegistry

__all__ = ["EventStore", "SubscriptionRegistry"]
