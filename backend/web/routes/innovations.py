"""
Innovations API routes: list, search, submit and "my innovations".

Why:
    Stand in for the contributor and explorer dashboards. The blank-keyword
    guard of the search form lives here; the catalog itself treats a blank
    keyword as "match nothing".

Permissions:
    - Listing, searching and the popular fields list are public.
    - Submitting requires an authenticated contributor.
    - `/mine` requires an authenticated user.
"""
from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel

from backend.identity_access.domain import FORBIDDEN, INVALID_INNOVATION, NOT_AUTHENTICATED
from backend.innovations.catalog import POPULAR_FIELDS
from backend.web.auth_utils import json_error, json_ok, portal_from_request


innovations_router = APIRouter(tags=["Innovations"])

_STATUS_BY_ERROR = {
    NOT_AUTHENTICATED: 401,
    FORBIDDEN: 403,
    INVALID_INNOVATION: 400,
}


class InnovationCreate(BaseModel):
    title: str | None = None
    description: str | None = None
    field: str | None = None


@innovations_router.get("/api/innovations")
async def list_innovations(request: Request):
    items = portal_from_request(request).list_innovations()
    return json_ok([item.to_dict() for item in items])


@innovations_router.get("/api/innovations/search")
async def search_innovations(request: Request, q: str = ""):
    """Case-insensitive keyword search over title, description and field.

    Validation:
        - `q` must not be blank (400 `q_required`).
    """
    if not (q or "").strip():
        return json_error("bad_request", 400, "q_required")
    items = portal_from_request(request).search(q)
    return json_ok([item.to_dict() for item in items])


@innovations_router.get("/api/innovations/fields")
async def popular_fields():
    return json_ok(list(POPULAR_FIELDS))


@innovations_router.get("/api/innovations/mine")
async def my_innovations(request: Request):
    portal = portal_from_request(request)
    if not portal.is_authenticated:
        return json_error("unauthenticated", 401)
    return json_ok([item.to_dict() for item in portal.my_innovations()])


@innovations_router.post("/api/innovations")
async def submit_innovation(request: Request, payload: InnovationCreate):
    """Submit a new innovation as the current contributor.

    Responses:
        201 record, 400 `invalid_innovation`, 401 `not_authenticated`,
        403 `forbidden` for explorers.
    """
    result = portal_from_request(request).submit_innovation(
        payload.title or "", payload.description or "", payload.field
    )
    if not result.ok:
        error = result.error or INVALID_INNOVATION
        return json_error(error, _STATUS_BY_ERROR.get(error, 400))
    return json_ok(result.innovation.to_dict(), status_code=201)
