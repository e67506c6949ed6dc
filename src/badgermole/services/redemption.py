"""
badgermole.services.redemption

OTP redemption (web side of the login handshake).

Responsibilities:
- Resolve a submitted secret to a principal.
- Retire the credential before success is reported, so no secret logs in twice.
- Collapse unknown, expired and already-used codes into one outcome.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from badgermole.identity.models import Principal
from badgermole.identity.registry import IdentityRegistry
from badgermole.observability.logging import get_logger
from badgermole.otp.store import OtpStore

log = get_logger(__name__)


class RedemptionOutcome(enum.StrEnum):
    ok = "ok"
    empty = "empty"
    incorrect = "incorrect"
    identity_gone = "identity_gone"


@dataclass(frozen=True, slots=True)
class RedemptionResult:
    outcome: RedemptionOutcome
    principal: Principal | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is RedemptionOutcome.ok


class RedemptionService:
    def __init__(self, *, store: OtpStore, registry: IdentityRegistry) -> None:
        self._store = store
        self._registry = registry

    def redeem(self, secret: str) -> RedemptionResult:
        secret = (secret or "").strip()
        if not secret:
            return self._reject(RedemptionOutcome.empty)

        credential = self._store.resolve_by_secret(secret)
        if credential is None:
            return self._reject(RedemptionOutcome.incorrect)

        principal = self._registry.resolve(credential.subject_key)
        if principal is None:
            # The credential stays; the sweeper retires it.
            return self._reject(RedemptionOutcome.identity_gone)

        # Compare-and-delete: losing a race with another redemption or a reissue means
        # this secret is no longer the live one.
        if not self._store.remove(credential.subject_key, secret=credential.secret):
            return self._reject(RedemptionOutcome.incorrect)

        log.info("otp_redeemed", name=principal.name)
        return RedemptionResult(outcome=RedemptionOutcome.ok, principal=principal)

    def _reject(self, outcome: RedemptionOutcome) -> RedemptionResult:
        log.info("otp_redeem_rejected", outcome=outcome.value)
        return RedemptionResult(outcome=outcome)


# --- Module Notes -----------------------------------------------------------
# Deletion happens before the HTTP layer writes the session cookie. Writing the cookie
# is an in-memory header mutation that cannot fail, so no retry path is needed.
