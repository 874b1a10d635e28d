from __future__ import annotations

from datetime import datetime, timedelta

from classroom_attendance.core.enums import Role
from classroom_attendance.users.model import Principal
from classroom_attendance.users.session_store import InMemorySessionStore

ADMIN = Principal(user_id=1, username="admin", role=Role.ADMIN)


class FrozenClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def test_tokens_expire_after_ttl():
    clock = FrozenClock(datetime(2026, 3, 2, 8, 0))
    store = InMemorySessionStore(ttl=timedelta(hours=8), clock=clock)
    issued = store.create(ADMIN)

    assert issued.expires_at == datetime(2026, 3, 2, 16, 0)
    assert store.resolve(issued.token) == ADMIN

    clock.now = datetime(2026, 3, 2, 16, 0)
    assert store.resolve(issued.token) is None
    assert len(store) == 0


def test_sweep_removes_only_expired_tokens():
    clock = FrozenClock(datetime(2026, 3, 2, 8, 0))
    store = InMemorySessionStore(ttl=timedelta(hours=1), clock=clock)
    old = store.create(ADMIN)
    clock.now = datetime(2026, 3, 2, 8, 30)
    fresh = store.create(ADMIN)

    clock.now = datetime(2026, 3, 2, 9, 5)
    assert store.sweep_expired() == 1
    assert store.resolve(old.token) is None
    assert store.resolve(fresh.token) == ADMIN


def test_tokens_are_unique_and_unknown_tokens_do_not_resolve():
    store = InMemorySessionStore()
    tokens = {store.create(ADMIN).token for _ in range(20)}
    assert len(tokens) == 20
    assert store.resolve("not-a-token") is None
    store.revoke("not-a-token")
    assert len(store) == 20
