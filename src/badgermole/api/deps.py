"""
badgermole.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Hand the app-owned registry/store/settings to handlers.
- Build the redemption service per request.
- Read the session cookie.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request
from starlette.status import HTTP_401_UNAUTHORIZED

from badgermole.identity.registry import IdentityRegistry
from badgermole.otp.store import OtpStore
from badgermole.services.redemption import RedemptionService
from badgermole.settings import Settings


def settings_dep(request: Request) -> Settings:
    # Set in `badgermole.api.app.create_app`; may differ from the env-derived default in tests.
    return request.app.state.settings  # type: ignore[attr-defined]


def registry_dep(request: Request) -> IdentityRegistry:
    return request.app.state.registry  # type: ignore[attr-defined]


def otp_store_dep(request: Request) -> OtpStore:
    return request.app.state.otp_store  # type: ignore[attr-defined]


def redemption_service(
    store: OtpStore = Depends(otp_store_dep),
    registry: IdentityRegistry = Depends(registry_dep),
) -> RedemptionService:
    return RedemptionService(store=store, registry=registry)


def current_principal_name(
    request: Request,
    settings: Settings = Depends(settings_dep),
) -> str | None:
    # Presence of the cookie is the session; its value is the display name.
    return request.cookies.get(settings.session_cookie_name)


def require_session(name: str | None = Depends(current_principal_name)) -> str:
    if name is None:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return name


# --- Module Notes -----------------------------------------------------------
# Swapping the registry or store for a test double only requires passing it to
# `create_app`; nothing here reaches for module-level state.
