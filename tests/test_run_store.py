import json
from datetime import timedelta

import pytest

from llmstxt_gen.repositories import RedisRunStore
from llmstxt_gen.repositories.run_store import KEY_PREFIX


@pytest.fixture
def store(fake_redis, clock):
    return RedisRunStore(fake_redis, clock=clock)


def test_create_stores_unpaid_run_for_a_day(store, fake_redis, clock):
    run_id = store.create("# Acme\n")

    key = f"{KEY_PREFIX}{run_id}"
    assert fake_redis.ttls[key] == 24 * 3600
    stored = json.loads(fake_redis.data[key])
    assert stored["content"] == "# Acme\n"
    assert stored["paid_at"] is None

    run = store.find_active(run_id)
    assert run.paid is False
    assert run.expires_at == clock.now + timedelta(hours=24)


def test_create_rejects_blank_content(store):
    with pytest.raises(ValueError):
        store.create("  ")


def test_run_ids_are_unique(store):
    assert store.create("a") != store.create("a")


def test_mark_paid_extends_retention_from_payment_time(store, fake_redis, clock):
    run_id = store.create("# Acme\n")
    clock.now += timedelta(hours=3)

    run = store.mark_paid(run_id)

    assert run.paid_at == clock.now
    assert run.expires_at == clock.now + timedelta(days=30)
    assert fake_redis.ttls[f"{KEY_PREFIX}{run_id}"] == 30 * 24 * 3600
    assert store.find_active(run_id).paid is True


def test_mark_paid_unknown_run(store):
    assert store.mark_paid("missing") is None


def test_expired_runs_are_not_active(store, clock):
    run_id = store.create("# Acme\n")
    clock.now += timedelta(hours=25)
    assert store.find_active(run_id) is None
    assert store.get(run_id) is not None


def test_find_active_blank_id(store):
    assert store.find_active("") is None


def test_unreadable_value_is_ignored(store, fake_redis):
    fake_redis.data[f"{KEY_PREFIX}broken"] = b"{not json"
    assert store.get("broken") is None


def test_delete_expired(store, fake_redis, clock):
    old = store.create("old")
    clock.now += timedelta(hours=20)
    fresh = store.create("fresh")
    paid = store.create("paid")
    store.mark_paid(paid)
    fake_redis.data["other:key"] = b"untouched"
    clock.now += timedelta(hours=5)

    assert store.delete_expired() == 1
    assert store.get(old) is None
    assert store.find_active(fresh) is not None
    assert store.find_active(paid) is not None
    assert "other:key" in fake_redis.data
