"""
Innovation catalog: ordered, memory-resident list of submitted innovations.

Why:
    Contributors publish short records (title, description, field) that
    explorers browse and search. Records are immutable once created and the
    catalog keeps them newest-first by insertion.

Behavior:
    - `submit` only accepts contributors; other callers get a negative
      `SubmitResult`, never an exception.
    - The owner's display name is copied into the record at submission time.
      Later renames do not touch past submissions.
    - `search` is a case-insensitive substring match over title, description
      and field. A blank keyword matches nothing.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Callable, Iterable, List, Optional
from uuid import uuid4
import logging

from backend.identity_access.domain import (
    FORBIDDEN,
    INVALID_INNOVATION,
    NOT_AUTHENTICATED,
    Identity,
)

logger = logging.getLogger("portal.innovations")

# Quick-search chips on the explorer dashboard
POPULAR_FIELDS = ("Computer Science", "Biology", "Physics", "Materials Science")


@dataclass(frozen=True)
class Innovation:
    id: str
    title: str
    description: str
    field: str
    owner_id: str
    owner_name: str
    created_at: str  # ISO date (YYYY-MM-DD)

    def matches(self, needle: str) -> bool:
        """`needle` must already be lowercased."""
        return (
            needle in self.title.lower()
            or needle in self.description.lower()
            or needle in self.field.lower()
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "field": self.field,
            "owner_id": self.owner_id,
            "owner_name": self.owner_name,
            "created_at": self.created_at,
        }


@dataclass(frozen=True)
class SubmitResult:
    innovation: Optional[Innovation] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.innovation is not None


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class InnovationCatalog:
    def __init__(self, *, today: Callable[[], date] = _utc_today) -> None:
        self._items: List[Innovation] = []
        self._today = today

    def __len__(self) -> int:
        return len(self._items)

    def submit(self, title: str, description: str, field: str | None, owner: Identity | None) -> SubmitResult:
        if owner is None:
            return SubmitResult(error=NOT_AUTHENTICATED)
        if not owner.is_contributor:
            logger.info("catalog.submit rejected reason=role owner=%s role=%s", owner.id, owner.role)
            return SubmitResult(error=FORBIDDEN)
        title = (title or "").strip()
        description = (description or "").strip()
        if not title or not description:
            return SubmitResult(error=INVALID_INNOVATION)
        innovation = Innovation(
            id=str(uuid4()),
            title=title,
            description=description,
            field=(field or "").strip(),
            owner_id=owner.id,
            owner_name=owner.name,
            created_at=self._today().isoformat(),
        )
        self._items.insert(0, innovation)
        logger.info("catalog.submit ok id=%s owner=%s", innovation.id, owner.id)
        return SubmitResult(innovation=innovation)

    def search(self, keyword: str | None) -> List[Innovation]:
        if not (keyword or "").strip():
            return []
        needle = keyword.lower()
        return [item for item in self._items if item.matches(needle)]

    def list_all(self) -> List[Innovation]:
        return list(self._items)

    def list_by_owner(self, owner_id: str) -> List[Innovation]:
        return [item for item in self._items if item.owner_id == owner_id]

    def load(self, items: Iterable[Innovation]) -> None:
        """Append pre-built records in the given order (oldest last)."""
        self._items.extend(items)


def seed_demo_innovations(catalog: InnovationCatalog, owner: Identity) -> None:
    """Load the two demo records, owned by `owner`."""
    catalog.load(
        [
            Innovation(
                id="1",
                title="Quantum Computing Algorithm",
                description="Revolutionary quantum algorithm for optimization problems",
                field="Computer Science",
                owner_id=owner.id,
                owner_name=owner.name,
                created_at="2024-01-15",
            ),
            Innovation(
                id="2",
                title="Biodegradable Plastic Alternative",
                description="New material from algae that decomposes in 30 days",
                field="Materials Science",
                owner_id=owner.id,
                owner_name=owner.name,
                created_at="2024-01-10",
            ),
        ]
    )


__all__ = ["Innovation", "InnovationCatalog", "SubmitResult", "POPULAR_FIELDS", "seed_demo_innovations"]
