"""
tests.test_otp_store

OTP store contract: supersede-on-reissue, single use, expiry, concurrency.
"""

from __future__ import annotations

import json
import random
import uuid
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime, timedelta

import pytest

from badgermole.otp.store import MemoryOtpStore

ALICE = "ssh-ed25519 AAAAalice"
BOB = "ssh-ed25519 AAAAbob"
T0 = datetime(2026, 1, 1, tzinfo=UTC)


class FakeClock:
    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


def test_issue_returns_fresh_uuid_secret() -> None:
    store = MemoryOtpStore(clock=FakeClock())
    cred = store.issue(ALICE, "10.0.0.1:5555")

    assert cred.subject_key == ALICE
    assert cred.origin == "10.0.0.1:5555"
    assert cred.issued_at == T0
    assert uuid.UUID(cred.secret).version == 4
    assert cred.as_text() == f"One Time Password: {cred.secret}"
    assert json.loads(cred.as_json()) == {"oneTimePassword": cred.secret}


def test_issue_rejects_empty_key() -> None:
    with pytest.raises(ValueError):
        MemoryOtpStore().issue("", "origin")


def test_reissue_supersedes_previous_secret() -> None:
    store = MemoryOtpStore()
    issued = [store.issue(ALICE, "origin") for _ in range(5)]

    assert len(store) == 1
    assert len({c.secret for c in issued}) == 5
    for old in issued[:-1]:
        assert store.resolve_by_secret(old.secret) is None
    assert store.resolve_by_secret(issued[-1].secret) == issued[-1]


def test_resolve_does_not_mutate() -> None:
    store = MemoryOtpStore()
    cred = store.issue(ALICE, "origin")
    assert store.resolve_by_secret(cred.secret) == cred
    assert store.resolve_by_secret(cred.secret) == cred
    assert len(store) == 1


def test_resolve_unknown_or_empty() -> None:
    store = MemoryOtpStore()
    store.issue(ALICE, "origin")
    assert store.resolve_by_secret(str(uuid.uuid4())) is None
    assert store.resolve_by_secret("") is None


def test_single_use_after_remove() -> None:
    store = MemoryOtpStore()
    cred = store.issue(ALICE, "origin")
    store.issue(BOB, "origin")

    assert store.resolve_by_secret(cred.secret) is not None
    assert store.remove(ALICE) is True
    assert store.resolve_by_secret(cred.secret) is None
    assert store.remove(ALICE) is False
    assert len(store) == 1


def test_remove_with_secret_is_compare_and_delete() -> None:
    store = MemoryOtpStore()
    old = store.issue(ALICE, "origin")
    new = store.issue(ALICE, "origin")

    assert store.remove(ALICE, secret=old.secret) is False
    assert store.resolve_by_secret(new.secret) == new
    assert store.remove(ALICE, secret=new.secret) is True
    assert len(store) == 0


def test_sweep_evicts_at_lifetime_boundary() -> None:
    clock = FakeClock()
    store = MemoryOtpStore(clock=clock)
    lifetime = timedelta(minutes=1)
    alice = store.issue(ALICE, "origin")
    clock.advance(seconds=30)
    bob = store.issue(BOB, "origin")

    clock.advance(seconds=29)
    assert store.sweep_expired(lifetime) == 0
    assert store.resolve_by_secret(alice.secret) == alice

    clock.advance(seconds=1)
    assert store.sweep_expired(lifetime) == 1
    assert store.resolve_by_secret(alice.secret) is None
    assert store.resolve_by_secret(bob.secret) == bob

    # Explicit `now` overrides the clock.
    assert store.sweep_expired(lifetime, now=clock.now + timedelta(minutes=5)) == 1
    assert len(store) == 0


def test_lifetime_hides_unswept_records() -> None:
    clock = FakeClock()
    store = MemoryOtpStore(lifetime=timedelta(seconds=60), clock=clock)
    cred = store.issue(ALICE, "origin")

    clock.advance(seconds=59.9)
    assert store.resolve_by_secret(cred.secret) == cred
    clock.advance(seconds=0.1)
    assert store.resolve_by_secret(cred.secret) is None
    # Still physically present until swept.
    assert len(store) == 1


def test_sweep_spares_records_reissued_after_snapshot() -> None:
    clock = FakeClock()
    store = MemoryOtpStore(clock=clock)
    store.issue(ALICE, "origin")
    clock.advance(minutes=2)
    fresh = store.issue(ALICE, "origin")

    assert store.sweep_expired(timedelta(minutes=1)) == 0
    assert store.resolve_by_secret(fresh.secret) == fresh


def test_concurrent_issue_resolve_remove_sweep() -> None:
    store = MemoryOtpStore()
    keys = [f"ssh-ed25519 AAAA{i}" for i in range(300)]
    removed_secrets: list[str] = []

    def worker(key: str) -> None:
        cred = store.issue(key, "origin")
        assert store.resolve_by_secret(cred.secret) == cred
        if random.random() < 0.5 and store.remove(key, secret=cred.secret):
            removed_secrets.append(cred.secret)
        store.sweep_expired(timedelta(hours=1))

    with ThreadPoolExecutor(max_workers=16) as pool:
        list(pool.map(worker, keys))

    assert len(store) == len(keys) - len(removed_secrets)
    for secret in removed_secrets:
        assert store.resolve_by_secret(secret) is None

    # Expire everything.
    store.sweep_expired(timedelta(0))
    assert len(store) == 0


def test_reads_complete_while_a_writer_holds_the_lock() -> None:
    store = MemoryOtpStore()
    cred = store.issue(ALICE, "origin")

    with ThreadPoolExecutor(max_workers=2) as pool:
        # The lock is released before the pool joins, so a blocked read fails fast.
        with store._lock:
            resolved = pool.submit(store.resolve_by_secret, cred.secret).result(timeout=2)
            size = pool.submit(len, store).result(timeout=2)

    assert resolved == cred
    assert size == 1


def test_reader_snapshot_is_unaffected_by_later_writes() -> None:
    store = MemoryOtpStore()
    cred = store.issue(ALICE, "origin")
    snapshot = store._records

    store.remove(ALICE)
    store.issue(BOB, "origin")

    assert snapshot == {ALICE: cred}
    assert store.resolve_by_secret(cred.secret) is None
