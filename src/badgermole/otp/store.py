"""
badgermole.otp.store

Concurrent in-memory OTP store.

Responsibilities:
- Issue credentials keyed by subject public key (a reissue supersedes).
- Resolve a presented secret to its credential without mutating state.
- Remove credentials on redemption (optionally compare-and-delete).
- Evict expired credentials one record at a time.
"""

from __future__ import annotations

import hmac
import threading
import uuid
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Protocol

from badgermole.otp.models import Credential


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


class OtpStore(Protocol):
    def issue(self, public_key: str, origin: str) -> Credential: ...

    def resolve_by_secret(self, secret: str) -> Credential | None: ...

    def remove(self, public_key: str, *, secret: str | None = None) -> bool: ...

    def sweep_expired(self, lifetime: timedelta, now: datetime | None = None) -> int: ...

    def __len__(self) -> int: ...


class MemoryOtpStore:
    """
    At most one live credential per subject key.

    Keying by subject caps memory at one record per known identity and makes
    "latest SSH login wins" a plain overwrite. Secret lookup is a linear scan,
    which is fine while the registry stays small.

    `lifetime`, when given, also hides records that are past due but not yet
    swept, so expiry does not depend on sweeper timing.

    Writes are copy-on-write under one lock: the dict is rebuilt and rebound,
    never mutated in place. Readers take the current reference lock-free.
    """

    def __init__(
        self,
        *,
        lifetime: timedelta | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._records: dict[str, Credential] = {}
        self._lock = threading.Lock()
        self._lifetime = lifetime
        self._clock = clock

    def issue(self, public_key: str, origin: str) -> Credential:
        if not public_key:
            raise ValueError("public key is empty")
        credential = Credential(
            subject_key=public_key,
            secret=str(uuid.uuid4()),
            issued_at=self._clock(),
            origin=origin,
        )
        with self._lock:
            records = dict(self._records)
            records[public_key] = credential
            self._records = records
        return credential

    def resolve_by_secret(self, secret: str) -> Credential | None:
        if not secret:
            return None
        snapshot = list(self._records.values())

        now = self._clock()
        found: Credential | None = None
        for credential in snapshot:
            # Compare every record so the scan time does not depend on the match position.
            if hmac.compare_digest(credential.secret.encode(), secret.encode()):
                found = credential
        if found is None:
            return None
        if self._lifetime is not None and now - found.issued_at >= self._lifetime:
            return None
        return found

    def remove(self, public_key: str, *, secret: str | None = None) -> bool:
        with self._lock:
            current = self._records.get(public_key)
            if current is None:
                return False
            if secret is not None and current.secret != secret:
                # Superseded or already redeemed by someone else.
                return False
            self._discard(public_key)
            return True

    def sweep_expired(self, lifetime: timedelta, now: datetime | None = None) -> int:
        now = now or self._clock()
        candidates = [c for c in self._records.values() if now - c.issued_at >= lifetime]

        evicted = 0
        for credential in candidates:
            # Each eviction is its own critical section; a record reissued since the
            # snapshot is a different object and survives.
            with self._lock:
                if self._records.get(credential.subject_key) is credential:
                    self._discard(credential.subject_key)
                    evicted += 1
        return evicted

    def __len__(self) -> int:
        return len(self._records)

    def _discard(self, public_key: str) -> None:
        # Caller holds the lock.
        records = dict(self._records)
        del records[public_key]
        self._records = records


# --- Module Notes -----------------------------------------------------------
# Callers only ever receive frozen `Credential` values. A rebound dict is never
# mutated again, so a reader holding an old reference sees a consistent snapshot.
