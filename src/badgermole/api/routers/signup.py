"""
badgermole.api.routers.signup

Sign-up endpoint.

Responsibilities:
- Validate a submitted name and SSH public key.
- Register the principal under the canonical key.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Form, HTTPException
from pydantic import BaseModel
from starlette.status import HTTP_201_CREATED, HTTP_400_BAD_REQUEST

from badgermole.api.deps import registry_dep
from badgermole.identity.keys import InvalidPublicKeyError, normalize_public_key
from badgermole.identity.registry import IdentityRegistry

router = APIRouter(tags=["signup"])


class SignUpResponse(BaseModel):
    name: str
    public_key: str


@router.post("/signup", response_model=SignUpResponse, status_code=HTTP_201_CREATED)
async def signup(
    name: str = Form(default=""),
    publickey: str = Form(default=""),
    registry: IdentityRegistry = Depends(registry_dep),
) -> SignUpResponse:
    name = name.strip()
    if not name:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="name is empty")
    if not publickey.strip():
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail="public key is empty")
    try:
        public_key = normalize_public_key(publickey)
    except InvalidPublicKeyError as e:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=str(e)) from e

    principal = registry.register(public_key, name)
    return SignUpResponse(name=principal.name, public_key=principal.public_key)
