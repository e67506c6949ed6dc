"""
badgermole.identity.registry

In-memory identity registry.

Responsibilities:
- Map canonical public keys to principals (last writer wins per key).
- Answer the SSH authentication predicate and post-redemption lookups.
- Provide snapshot reads for the users directory.
"""

from __future__ import annotations

import threading
from typing import Protocol

from badgermole.identity.models import Principal
from badgermole.observability.logging import get_logger

log = get_logger(__name__)


class IdentityRegistry(Protocol):
    def register(self, public_key: str, name: str) -> Principal: ...

    def is_authorized(self, public_key: str) -> bool: ...

    def resolve(self, public_key: str) -> Principal | None: ...

    def find_by_name(self, name: str) -> Principal | None: ...

    def list_all(self) -> list[Principal]: ...


class MemoryIdentityRegistry:
    """
    Volatile registry; lives as long as the process.

    Copy-on-write: writers build a new dict under the lock and rebind it;
    readers take the current reference without locking and never wait.
    """

    def __init__(self) -> None:
        self._principals: dict[str, Principal] = {}
        self._lock = threading.Lock()

    def register(self, public_key: str, name: str) -> Principal:
        principal = Principal(name=name, public_key=public_key)
        with self._lock:
            principals = dict(self._principals)
            replaced = public_key in principals
            principals[public_key] = principal
            self._principals = principals
        log.info("principal_registered", name=name, replaced=replaced)
        return principal

    def is_authorized(self, public_key: str) -> bool:
        return public_key in self._principals

    def resolve(self, public_key: str) -> Principal | None:
        return self._principals.get(public_key)

    def find_by_name(self, name: str) -> Principal | None:
        # Insertion order: the earliest registration under this name wins.
        for principal in self.list_all():
            if principal.name == name:
                return principal
        return None

    def list_all(self) -> list[Principal]:
        return list(self._principals.values())

    def __len__(self) -> int:
        return len(self._principals)
