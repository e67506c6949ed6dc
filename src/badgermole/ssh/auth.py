"""
badgermole.ssh.auth

SSH public-key authentication.

Responsibilities:
- Decide admission for a presented key via the identity registry.
- Remember the admitted key on the connection for the issuance gate.
"""

from __future__ import annotations

import asyncssh

from badgermole.identity.keys import canonical_key
from badgermole.identity.registry import IdentityRegistry
from badgermole.observability.logging import get_logger

log = get_logger(__name__)

# Connection extra-info slot holding the canonical key that passed authentication.
AUTHORIZED_KEY_EXTRA = "badgermole_public_key"


def is_authorized_key(registry: IdentityRegistry, key: asyncssh.SSHKey) -> bool:
    # Malformed and unknown keys both answer False; callers cannot tell them apart.
    try:
        public_key = canonical_key(key)
    except Exception:
        return False
    return registry.is_authorized(public_key)


class PublicKeyAuthServer(asyncssh.SSHServer):
    """
    Per-connection asyncssh callbacks: public-key auth only.
    """

    def __init__(self, registry: IdentityRegistry) -> None:
        self._registry = registry
        self._conn: asyncssh.SSHServerConnection | None = None

    def connection_made(self, conn: asyncssh.SSHServerConnection) -> None:
        self._conn = conn

    def begin_auth(self, username: str) -> bool:
        return True

    def password_auth_supported(self) -> bool:
        return False

    def public_key_auth_supported(self) -> bool:
        return True

    def validate_public_key(self, username: str, key: asyncssh.SSHKey) -> bool:
        if not is_authorized_key(self._registry, key):
            log.info("ssh_auth_rejected", username=username)
            return False
        # The last key accepted is the one the client signed with when auth completes.
        if self._conn is not None:
            self._conn.set_extra_info(**{AUTHORIZED_KEY_EXTRA: canonical_key(key)})
        log.info("ssh_auth_accepted", username=username)
        return True


# --- Module Notes -----------------------------------------------------------
# asyncssh calls `validate_public_key` both for the unsigned probe and for the
# signed request, so the extra-info slot always ends on the signing key.
