import threading

import pytest

from portfolio.services.sessions import SessionStore


class FakeTime:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_create_and_lookup():
    store = SessionStore(ttl_seconds=60)
    session = store.create(7)
    assert len(session.token) >= 32
    assert store.user_id_for(session.token) == 7
    assert store.user_id_for("unknown") is None
    assert store.user_id_for(None) is None


def test_tokens_are_unique():
    store = SessionStore(ttl_seconds=60)
    tokens = {store.create(1).token for _ in range(50)}
    assert len(tokens) == 50


def test_fixed_ttl_not_extended_by_activity():
    clock = FakeTime()
    store = SessionStore(ttl_seconds=60, clock=clock)
    session = store.create(1)

    clock.now += 59
    assert store.user_id_for(session.token) == 1
    clock.now += 1
    assert store.user_id_for(session.token) is None
    assert len(store) == 0


def test_destroy():
    store = SessionStore(ttl_seconds=60)
    session = store.create(3)
    assert store.destroy(session.token) is True
    assert store.destroy(session.token) is False
    assert store.get(session.token) is None


def test_expired_sessions_swept_on_create():
    clock = FakeTime()
    store = SessionStore(ttl_seconds=10, clock=clock)
    for user_id in range(5):
        store.create(user_id)
    clock.now += 120
    store.create(99)
    assert len(store) == 1


def test_invalid_ttl():
    with pytest.raises(ValueError):
        SessionStore(ttl_seconds=0)


def test_concurrent_creates():
    store = SessionStore(ttl_seconds=60)

    def worker():
        for _ in range(100):
            store.create(1)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(store) == 800
