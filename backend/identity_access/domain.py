"""
Identity domain constants, value objects and outcome types.

Why:
- Centralize allowed roles and error codes to avoid drift between the core
  and the web layer.
- Report expected failures (bad credentials, duplicate email) as values.
  Callers decide on user-visible messaging; nothing here raises for bad input.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

ROLE_CONTRIBUTOR = "contributor"
ROLE_EXPLORER = "explorer"

# Keep roles minimal and explicit. Immutable to prevent accidental mutation.
ALLOWED_ROLES = frozenset({ROLE_CONTRIBUTOR, ROLE_EXPLORER})

# Error codes returned in outcomes and API payloads
INVALID_CREDENTIALS = "invalid_credentials"
EMAIL_ALREADY_REGISTERED = "email_already_registered"
INVALID_ROLE = "invalid_role"
INVALID_REGISTRATION = "invalid_registration"
NOT_AUTHENTICATED = "not_authenticated"
FORBIDDEN = "forbidden"
INVALID_INNOVATION = "invalid_innovation"


@dataclass(frozen=True)
class Identity:
    """A registered participant. Never carries the credential."""

    id: str
    name: str
    email: str
    role: str

    @property
    def is_contributor(self) -> bool:
        return self.role == ROLE_CONTRIBUTOR

    def to_snapshot(self) -> dict[str, str]:
        return {"id": self.id, "name": self.name, "email": self.email, "role": self.role}

    @classmethod
    def from_snapshot(cls, data: Any) -> "Identity":
        """Rebuild an identity from a cached snapshot.

        Raises ValueError when the snapshot is not a mapping with non-empty
        string fields and a known role.
        """
        if not isinstance(data, Mapping):
            raise ValueError("snapshot_not_mapping")
        values: dict[str, str] = {}
        for key in ("id", "name", "email", "role"):
            value = data.get(key)
            if not isinstance(value, str) or not value:
                raise ValueError(f"snapshot_missing_{key}")
            values[key] = value
        if values["role"] not in ALLOWED_ROLES:
            raise ValueError("snapshot_invalid_role")
        return cls(**values)


@dataclass(frozen=True)
class AuthResult:
    identity: Optional[Identity] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.identity is not None

    @classmethod
    def success(cls, identity: Identity) -> "AuthResult":
        return cls(identity=identity)

    @classmethod
    def failure(cls, error: str) -> "AuthResult":
        return cls(error=error)


__all__ = [
    "ALLOWED_ROLES",
    "ROLE_CONTRIBUTOR",
    "ROLE_EXPLORER",
    "Identity",
    "AuthResult",
    "INVALID_CREDENTIALS",
    "EMAIL_ALREADY_REGISTERED",
    "INVALID_ROLE",
    "INVALID_REGISTRATION",
    "NOT_AUTHENTICATED",
    "FORBIDDEN",
    "INVALID_INNOVATION",
]
