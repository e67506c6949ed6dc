"""
badgermole.identity

Identity package.

Responsibilities:
- Principal model and canonical SSH public key encoding.
- The in-memory identity registry consulted by SSH auth and web redemption.
"""

from badgermole.identity.keys import InvalidPublicKeyError, canonical_key, normalize_public_key
from badgermole.identity.models import Principal
from badgermole.identity.registry import IdentityRegistry, MemoryIdentityRegistry

__all__ = [
    "IdentityRegistry",
    "InvalidPublicKeyError",
    "MemoryIdentityRegistry",
    "Principal",
    "canonical_key",
    "normalize_public_key",
]
