"""
Authentication-related FastAPI routes (router-only module).

Why:
    Stand in for the login/register/logout forms. Handlers only check input
    shape and map session outcomes to HTTP statuses; all state lives in the
    session manager on `app.state.portal`.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import Response
from pydantic import BaseModel
import logging

from backend.identity_access.domain import (
    EMAIL_ALREADY_REGISTERED,
    INVALID_CREDENTIALS,
)
from backend.web.auth_utils import json_error, json_ok, portal_from_request, private_no_store


auth_router = APIRouter(tags=["Auth"])  # explicit paths, no prefix
logger = logging.getLogger("portal.web.auth")

_STATUS_BY_ERROR = {
    INVALID_CREDENTIALS: 401,
    EMAIL_ALREADY_REGISTERED: 409,
}


class LoginPayload(BaseModel):
    # Accept missing/empty values and validate in handler to return 400
    email: str | None = None
    password: str | None = None


class RegisterPayload(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None


@auth_router.post("/api/auth/login")
async def login(request: Request, payload: LoginPayload):
    """Log in with email and password.

    Responses:
        200 identity, 400 when a field is missing, 401 `invalid_credentials`.
    """
    if not payload.email or not payload.password:
        logger.debug("auth.login rejected reason=missing_fields")
        return json_error("bad_request", 400, "email_and_password_required")
    result = portal_from_request(request).login(payload.email, payload.password)
    if not result.ok:
        return json_error(result.error or INVALID_CREDENTIALS, _STATUS_BY_ERROR.get(result.error or "", 400))
    return json_ok(result.identity.to_snapshot())


@auth_router.post("/api/auth/register")
async def register(request: Request, payload: RegisterPayload):
    """Register a new contributor or explorer and log them in.

    Responses:
        201 identity, 400 `invalid_role`/`invalid_registration`,
        409 `email_already_registered`.
    """
    result = portal_from_request(request).register(
        payload.name or "",
        payload.email or "",
        payload.password or "",
        (payload.role or "").strip().lower(),
    )
    if not result.ok:
        return json_error(result.error or "bad_request", _STATUS_BY_ERROR.get(result.error or "", 400))
    return json_ok(result.identity.to_snapshot(), status_code=201)


@auth_router.post("/api/auth/logout")
async def logout(request: Request):
    portal_from_request(request).logout()
    return Response(status_code=204, headers=private_no_store())


@auth_router.get("/api/me")
async def get_me(request: Request):
    user = portal_from_request(request).current_user()
    if user is None:
        return json_error("unauthenticated", 401)
    return json_ok(user.to_snapshot())
