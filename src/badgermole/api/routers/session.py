"""
badgermole.api.routers.session

Pages that only inspect the session cookie.

Responsibilities:
- Home (`/`) reports whether the caller is logged in.
- Users directory and profile for logged-in callers.
- Logout clears the cookie.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from starlette.status import HTTP_303_SEE_OTHER

from badgermole.api.deps import current_principal_name, registry_dep, require_session, settings_dep
from badgermole.identity.registry import IdentityRegistry
from badgermole.settings import Settings

router = APIRouter(tags=["session"])


@router.get("/")
async def home(name: str | None = Depends(current_principal_name)) -> dict[str, Any]:
    return {"authorized": name is not None}


@router.get("/users")
async def list_users(
    _: str = Depends(require_session),
    registry: IdentityRegistry = Depends(registry_dep),
) -> list[dict[str, str]]:
    return [{"name": p.name, "public_key": p.public_key} for p in registry.list_all()]


@router.get("/profile")
async def profile(
    name: str = Depends(require_session),
    registry: IdentityRegistry = Depends(registry_dep),
) -> dict[str, str]:
    principal = registry.find_by_name(name)
    return {"name": name, "public_key": principal.public_key if principal else ""}


@router.get("/logout")
async def logout(
    _: str = Depends(require_session),
    settings: Settings = Depends(settings_dep),
) -> RedirectResponse:
    response = RedirectResponse(url="/", status_code=HTTP_303_SEE_OTHER)
    response.delete_cookie(key=settings.session_cookie_name, path="/")
    return response


# --- Module Notes -----------------------------------------------------------
# The cookie is a bare display name; pages must not treat it as proof of key ownership
# beyond what the login flow established.
