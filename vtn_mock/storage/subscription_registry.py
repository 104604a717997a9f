"""Subscription registry keyed by subscription id.

Any caller may create, overwrite or delete any subscription: there is no
ownership model, which suits a single-tenant test harness and nothing else.
"""
import threading
from contextlib import contextmanager

import structlog

from ..errors import ConflictError, NotFoundError, ValidationError
from ..oadr_models import Subscription

log = structlog.get_logger()


class SubscriptionRegistry:
    """
    Thread-safe in-memory subscription storage.

    Mutations are serialized per id through a lock dedicated to that id, so
    writes to different subscriptions never wait on each other. The shared
    ``_guard`` is held only for dict operations. A key lock lives only while
    some caller holds or waits on it.
    """

    def __init__(self):
        self._entries: dict[str, Subscription] = {}
        self._guard = threading.Lock()
        # id -> [lock, number of callers holding or waiting on it]
        self._key_locks: dict[str, list] = {}

    @contextmanager
    def _lock_for(self, subscription_id: str):
        with self._guard:
            entry = self._key_locks.get(subscription_id)
            if entry is None:
                entry = self._key_locks[subscription_id] = [threading.Lock(), 0]
            entry[1] += 1

        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._key_locks[subscription_id]

    def upsert(self, subscription: Subscription) -> Subscription:
        """
        Insert or overwrite the subscription stored under ``subscription.id``.

        Raises:
            ValidationError: If the subscription carries no id
        """
        if not subscription.id:
            raise ValidationError("Subscription ID is required")

        with self._lock_for(subscription.id):
            with self._guard:
                replaced = subscription.id in self._entries
                self._entries[subscription.id] = subscription

        log.info(
            "subscription.upserted",
            subscription_id=subscription.id,
            client_name=subscription.client_name,
            replaced=replaced,
        )
        return subscription

    def replace(self, subscription_id: str, subscription: Subscription) -> Subscription:
        """
        Overwrite an existing subscription.

        Raises:
            ConflictError: If the body id differs from ``subscription_id``
            NotFoundError: If nothing is stored under ``subscription_id``
        """
        if subscription.id != subscription_id:
            raise ConflictError("Subscription ID mismatch")

        with self._lock_for(subscription_id):
            with self._guard:
                if subscription_id not in self._entries:
                    raise NotFoundError("Subscription not found")
                self._entries[subscription_id] = subscription

        log.info("subscription.replaced", subscription_id=subscription_id)
        return subscription

    def get(self, subscription_id: str) -> Subscription | None:
        with self._guard:
            return self._entries.get(subscription_id)

    def list(self) -> list[Subscription]:
        """Point-in-time copy of all subscriptions; order is not meaningful."""
        with self._guard:
            return list(self._entries.values())

    def delete(self, subscription_id: str) -> bool:
        """
        Remove a subscription.

        Returns:
            True if an entry existed and was removed
        """
        if self.get(subscription_id) is None:
            return False

        with self._lock_for(subscription_id):
            with self._guard:
                removed = self._entries.pop(subscription_id, None) is not None

        if removed:
            log.info("subscription.deleted", subscription_id=subscription_id)
        return removed

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)
