"""
badgermole.otp.models

OTP domain models.

Responsibilities:
- Define the immutable `Credential` record held by the OTP store.
- Render it for the SSH session (plain line or JSON).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Credential:
    """
    One outstanding, single-use password bound to a canonical public key.
    """

    subject_key: str
    secret: str
    issued_at: datetime
    # Remote address that asked for issuance; informational only.
    origin: str

    def as_text(self) -> str:
        return f"One Time Password: {self.secret}"

    def as_json(self) -> str:
        # Only the secret crosses the wire; key/origin/timestamp stay server-side.
        return json.dumps({"oneTimePassword": self.secret})


# --- Module Notes -----------------------------------------------------------
# Records are never updated in place: a reissue replaces the whole record.
