"""
In-memory user directory: registered identities and their credentials.

Why:
    Login and registration need exact lookups by email and a uniqueness check
    before appending. The directory is the only place where secrets live; it
    hands out `Identity` values that never include them.

Security:
    - Secrets are compared as plaintext (demo portal, no hashing).
    - Email comparison is exact and case-sensitive, matching how it was stored.
    - Do not log secrets.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional
from uuid import uuid4
import logging

from backend.identity_access.domain import ALLOWED_ROLES, ROLE_CONTRIBUTOR, ROLE_EXPLORER, Identity

logger = logging.getLogger("portal.identity_access")


@dataclass(frozen=True)
class _Account:
    identity: Identity
    secret: str


class UserDirectory:
    def __init__(self) -> None:
        self._accounts: List[_Account] = []
        self._by_email: Dict[str, _Account] = {}

    def __len__(self) -> int:
        return len(self._accounts)

    def exists(self, email: str) -> bool:
        return email in self._by_email

    def find_by_email_and_secret(self, email: str, secret: str) -> Optional[Identity]:
        acc = self._by_email.get(email)
        if acc is None or acc.secret != secret:
            return None
        return acc.identity

    def get(self, identity_id: str) -> Optional[Identity]:
        for acc in self._accounts:
            if acc.identity.id == identity_id:
                return acc.identity
        return None

    def add(self, name: str, email: str, secret: str, role: str, *, identity_id: str | None = None) -> Optional[Identity]:
        """Append a new account and return its identity.

        Returns None when the email is already registered; the caller reports
        the failure. Raises ValueError for an unknown role since callers
        validate roles before reaching the directory.
        """
        if role not in ALLOWED_ROLES:
            raise ValueError("invalid role")
        if self.exists(email):
            return None
        identity = Identity(id=identity_id or str(uuid4()), name=name, email=email, role=role)
        acc = _Account(identity=identity, secret=secret)
        self._accounts.append(acc)
        self._by_email[email] = acc
        logger.debug("directory.add id=%s role=%s", identity.id, role)
        return identity


# Demo accounts. Secrets are plaintext and public.
DEMO_ACCOUNTS = (
    {"identity_id": "1", "name": "Dr. Sarah Johnson", "email": "sarah@example.com", "secret": "password", "role": ROLE_CONTRIBUTOR},
    {"identity_id": "2", "name": "John Explorer", "email": "john@example.com", "secret": "password", "role": ROLE_EXPLORER},
)


def seed_demo_accounts(directory: UserDirectory) -> List[Identity]:
    """Register the demo accounts that are not yet present; return all of them."""
    seeded: List[Identity] = []
    for acc in DEMO_ACCOUNTS:
        identity = directory.add(
            acc["name"], acc["email"], acc["secret"], acc["role"], identity_id=acc["identity_id"]
        )
        if identity is None:
            identity = directory.get(acc["identity_id"])
        if identity is not None:
            seeded.append(identity)
    return seeded


__all__ = ["UserDirectory", "DEMO_ACCOUNTS", "seed_demo_accounts"]
