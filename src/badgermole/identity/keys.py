"""
badgermole.identity.keys

Canonical text encoding of SSH public keys.

Responsibilities:
- Parse user-submitted authorized-key lines.
- Produce the single canonical form (`<algorithm> <base64>`) used as the
  identity key by both the registry and the OTP store.
"""

from __future__ import annotations

import asyncssh


class InvalidPublicKeyError(ValueError):
    pass


def canonical_key(key: asyncssh.SSHKey) -> str:
    # The OpenSSH export carries an optional comment and a trailing newline; drop both.
    fields = key.export_public_key("openssh").decode("ascii").split()
    return " ".join(fields[:2])


def normalize_public_key(text: str) -> str:
    text = (text or "").strip()
    if not text:
        raise InvalidPublicKeyError("public key is empty")
    try:
        key = asyncssh.import_public_key(text)
    except (asyncssh.KeyImportError, ValueError) as e:
        raise InvalidPublicKeyError(f"public key error: {e}") from e
    return canonical_key(key)


# --- Module Notes -----------------------------------------------------------
# Registration and SSH authentication must agree byte-for-byte on this form,
# otherwise a registered key would never be admitted.
