"""Tests for the subscription registry."""
import threading

import pytest

from conftest import make_subscription
from vtn_mock.errors import ConflictError, NotFoundError, ValidationError


def test_upsert_requires_id(registry):
    with pytest.raises(ValidationError):
        registry.upsert(make_subscription(None))

    assert registry.list() == []


def test_upsert_then_get(registry):
    subscription = make_subscription("a")

    registry.upsert(subscription)

    assert registry.get("a") == subscription
    assert registry.get("missing") is None


def test_second_upsert_wins(registry):
    registry.upsert(make_subscription("a", client_name="first"))
    registry.upsert(make_subscription("a", client_name="second"))

    assert registry.get("a").client_name == "second"
    assert len(registry) == 1


def test_list_returns_all(registry):
    for sub_id in ("a", "b", "c"):
        registry.upsert(make_subscription(sub_id))

    assert sorted(s.id for s in registry.list()) == ["a", "b", "c"]


def test_replace_mismatched_id_conflicts(registry):
    registry.upsert(make_subscription("a"))

    with pytest.raises(ConflictError):
        registry.replace("a", make_subscription("b"))

    assert registry.get("b") is None


def test_replace_unknown_id_not_found(registry):
    with pytest.raises(NotFoundError):
        registry.replace("a", make_subscription("a"))


def test_replace_existing(registry):
    registry.upsert(make_subscription("a", client_name="old"))

    registry.replace("a", make_subscription("a", client_name="new"))

    assert registry.get("a").client_name == "new"


def test_delete(registry):
    registry.upsert(make_subscription("a"))

    assert registry.delete("a") is True
    assert registry.get("a") is None
    assert registry.delete("a") is False


def test_concurrent_upserts_on_distinct_and_shared_ids(registry):
    def worker(n):
        for i in range(100):
            registry.upsert(make_subscription(f"own-{n}", client_name=str(i)))
            registry.upsert(make_subscription("shared", client_name=f"{n}-{i}"))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(registry) == 9
    assert all(registry.get(f"own-{n}").client_name == "99" for n in range(8))
    assert registry.get("shared").client_name.endswith("-99")


def test_key_locks_are_released(registry):
    registry.upsert(make_subscription("a"))
    registry.upsert(make_subscription("b"))
    registry.replace("a", make_subscription("a", client_name="new"))
    registry.delete("a")

    assert registry._key_locks == {}


def test_deleting_unknown_ids_leaves_no_locks(registry):
    for n in range(50):
        assert registry.delete(f"missing-{n}") is False

    assert registry._key_locks == {}
