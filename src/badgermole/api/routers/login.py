"""
badgermole.api.routers.login

OTP redemption endpoint.

Responsibilities:
- Accept the `otp` form field.
- Map redemption outcomes to HTTP responses.
- Establish the session cookie on success.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Form, HTTPException
from fastapi.responses import RedirectResponse
from starlette.status import (
    HTTP_303_SEE_OTHER,
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
)

from badgermole.api.deps import redemption_service, settings_dep
from badgermole.services.redemption import RedemptionOutcome, RedemptionService
from badgermole.settings import Settings

router = APIRouter(tags=["login"])

_FAILURES: dict[RedemptionOutcome, tuple[int, str]] = {
    RedemptionOutcome.empty: (HTTP_400_BAD_REQUEST, "One time password is required"),
    RedemptionOutcome.incorrect: (HTTP_401_UNAUTHORIZED, "Incorrect one time password"),
    RedemptionOutcome.identity_gone: (HTTP_403_FORBIDDEN, "User does not exist anymore"),
}


@router.post("/login")
async def login(
    otp: str = Form(default=""),
    service: RedemptionService = Depends(redemption_service),
    settings: Settings = Depends(settings_dep),
) -> RedirectResponse:
    result = service.redeem(otp)
    if not result.ok or result.principal is None:
        status_code, detail = _FAILURES[result.outcome]
        raise HTTPException(status_code=status_code, detail=detail)

    # The credential is already retired at this point.
    response = RedirectResponse(url="/", status_code=HTTP_303_SEE_OTHER)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=result.principal.name,
        max_age=settings.session_max_age_seconds,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return response


# --- Module Notes -----------------------------------------------------------
# Unknown, expired and already-used codes all land on the same 401 body.
