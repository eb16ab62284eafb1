"""
Session manager: who is currently acting, and the only writer of the
directory and the catalog.

States:
    Anonymous (no current user) and Authenticated(identity).

Behavior:
    - `login`/`register` move to Authenticated on success and persist an
      identity snapshot (no secret) to the durable cache.
    - `logout` returns to Anonymous and clears the cache entry.
    - `restore` runs once at process start and trusts a well-formed cached
      snapshot without re-checking credentials. Absent or malformed entries
      leave the session Anonymous.
    - Failures are returned as `AuthResult`/`SubmitResult` values; nothing
      here raises for bad input.

Permissions:
    Only contributors may submit innovations (enforced by the catalog).
"""
from __future__ import annotations

from typing import List, Optional
import json
import logging

from backend.identity_access.directory import UserDirectory
from backend.identity_access.domain import (
    ALLOWED_ROLES,
    EMAIL_ALREADY_REGISTERED,
    INVALID_CREDENTIALS,
    INVALID_REGISTRATION,
    INVALID_ROLE,
    AuthResult,
    Identity,
)
from backend.identity_access.stores import SessionCacheProtocol
from backend.innovations.catalog import Innovation, InnovationCatalog, SubmitResult

logger = logging.getLogger("portal.identity_access")

SESSION_CACHE_KEY = "portal.user"


class SessionManager:
    def __init__(self, directory: UserDirectory, catalog: InnovationCatalog, cache: SessionCacheProtocol) -> None:
        self._directory = directory
        self._catalog = catalog
        self._cache = cache
        self._user: Optional[Identity] = None

    @property
    def directory(self) -> UserDirectory:
        return self._directory

    @property
    def catalog(self) -> InnovationCatalog:
        return self._catalog

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def current_user(self) -> Optional[Identity]:
        return self._user

    def _authenticate(self, identity: Identity) -> None:
        # Cache writes are best-effort; the in-memory session still counts.
        try:
            self._cache.set(SESSION_CACHE_KEY, json.dumps(identity.to_snapshot()))
        except OSError as exc:
            logger.warning("session.cache_write_failed id=%s error=%s", identity.id, exc.__class__.__name__)
        self._user = identity

    def _clear_cache(self) -> None:
        try:
            self._cache.delete(SESSION_CACHE_KEY)
        except OSError as exc:
            logger.warning("session.cache_delete_failed error=%s", exc.__class__.__name__)

    def login(self, email: str, secret: str) -> AuthResult:
        identity = self._directory.find_by_email_and_secret(email, secret)
        if identity is None:
            logger.info("session.login failed reason=%s", INVALID_CREDENTIALS)
            return AuthResult.failure(INVALID_CREDENTIALS)
        self._authenticate(identity)
        logger.info("session.login ok id=%s role=%s", identity.id, identity.role)
        return AuthResult.success(identity)

    def register(self, name: str, email: str, secret: str, role: str) -> AuthResult:
        if role not in ALLOWED_ROLES:
            return AuthResult.failure(INVALID_ROLE)
        name = (name or "").strip()
        if not name or not (email or "").strip() or not secret:
            return AuthResult.failure(INVALID_REGISTRATION)
        identity = self._directory.add(name, email, secret, role)
        if identity is None:
            logger.info("session.register failed reason=%s", EMAIL_ALREADY_REGISTERED)
            return AuthResult.failure(EMAIL_ALREADY_REGISTERED)
        self._authenticate(identity)
        logger.info("session.register ok id=%s role=%s", identity.id, identity.role)
        return AuthResult.success(identity)

    def logout(self) -> None:
        previous = self._user
        self._user = None
        self._clear_cache()
        if previous is not None:
            logger.info("session.logout id=%s", previous.id)

    def restore(self) -> Optional[Identity]:
        raw = self._cache.get(SESSION_CACHE_KEY)
        if raw is None:
            return None
        try:
            identity = Identity.from_snapshot(json.loads(raw))
        except (ValueError, RecursionError) as exc:
            # json.JSONDecodeError is a ValueError; deep nesting raises RecursionError
            logger.warning("session.restore dropped malformed snapshot reason=%s", exc.__class__.__name__)
            self._clear_cache()
            return None
        self._user = identity
        logger.info("session.restore ok id=%s role=%s", identity.id, identity.role)
        return identity

    # --- Catalog access ------------------------------------------------------

    def submit_innovation(self, title: str, description: str, field: str | None = None) -> SubmitResult:
        return self._catalog.submit(title, description, field, self._user)

    def search(self, keyword: str | None) -> List[Innovation]:
        return self._catalog.search(keyword)

    def list_innovations(self) -> List[Innovation]:
        return self._catalog.list_all()

    def my_innovations(self) -> List[Innovation]:
        if self._user is None:
            return []
        return self._catalog.list_by_owner(self._user.id)


__all__ = ["SessionManager", "SESSION_CACHE_KEY"]
