"""
Shared helpers for the web routers.

Why:
    Both routers need the session manager wired into the app, the same cache
    policy on JSON responses and one error payload shape. Keeping them here
    avoids drift between the auth and innovations adapters.
"""

from __future__ import annotations

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from backend.identity_access.session import SessionManager


def portal_from_request(request: Request) -> SessionManager:
    return request.app.state.portal


def private_no_store() -> dict:
    return {"Cache-Control": "private, no-store"}


def json_ok(payload: Any, status_code: int = 200) -> JSONResponse:
    return JSONResponse(payload, status_code=status_code, headers=private_no_store())


def json_error(error: str, status_code: int, detail: str | None = None) -> JSONResponse:
    body = {"error": error}
    if detail:
        body["detail"] = detail
    return JSONResponse(body, status_code=status_code, headers=private_no_store())
