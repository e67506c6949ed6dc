"""
badgermole.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Provide liveness probe (`/healthz`).
- Provide readiness probe (`/readyz`) reporting in-memory state sizes.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from badgermole.api.deps import otp_store_dep, registry_dep
from badgermole.identity.registry import IdentityRegistry
from badgermole.otp.store import OtpStore

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(
    store: OtpStore = Depends(otp_store_dep),
    registry: IdentityRegistry = Depends(registry_dep),
) -> dict[str, Any]:
    # Counts only; never the keys or secrets themselves.
    return {
        "status": "ready",
        "principals": len(registry.list_all()),
        "live_otps": len(store),
    }
