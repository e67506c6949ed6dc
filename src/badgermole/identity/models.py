"""
badgermole.identity.models

Identity domain models.

Responsibilities:
- Define the registered identity type (`Principal`).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Principal:
    """
    A registered identity: a display name bound to one canonical SSH public key.
    """

    name: str
    public_key: str


# --- Module Notes -----------------------------------------------------------
# Names are display labels only; several keys may share one.
