"""
Quote domain entity.

A ``Quote`` is a plain dataclass.  Assigning any content field after
construction refreshes ``updated_at``, and assigning ``tags`` always
stores the normalised form (lower‑cased, trimmed, no blanks).  The
identifier is assigned once by the store and cannot change afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, Optional, Set


MAX_TITLE_LENGTH = 100

# Fields whose assignment counts as a modification of the quote.
_TRACKED_FIELDS = {
    "title",
    "description",
    "category",
    "status",
    "tags",
    "author",
    "source",
    "publisher",
}


def _now() -> datetime:
    return datetime.now(timezone.utc)


class QuoteStatus(str, Enum):
    """Lifecycle status of a quote."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ARCHIVED = "ARCHIVED"

    @classmethod
    def parse(cls, value: "str | QuoteStatus") -> "QuoteStatus":
        """Resolve a status name case‑insensitively.

        Raises ``ValueError`` if the name does not match any status.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Status must be a string, got {type(value).__name__}")
        name = value.strip().upper()
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"Unknown status '{value}'") from None


def normalize_tag(tag: Optional[str]) -> str:
    """Return the canonical form of a tag, or ``""`` for blank input."""
    if tag is None:
        return ""
    if not isinstance(tag, str):
        raise ValueError(f"Tag must be a string, got {type(tag).__name__}")
    return tag.strip().lower()


def normalize_tags(tags: Optional[Iterable[str]]) -> Set[str]:
    """Normalise a collection of tags, dropping blanks and duplicates.

    Raises ``ValueError`` for a bare string or a non‑iterable value.
    """
    if tags is None:
        return set()
    if isinstance(tags, (str, bytes)) or not isinstance(tags, Iterable):
        raise ValueError("Tags must be a collection of strings")
    return {t for t in (normalize_tag(tag) for tag in tags) if t}


@dataclass
class Quote:
    """A quotation with descriptive metadata and free‑form tags."""

    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    status: QuoteStatus = QuoteStatus.ACTIVE
    tags: Set[str] = field(default_factory=set)
    author: Optional[str] = None
    source: Optional[str] = None
    publisher: Optional[str] = None
    id: Optional[int] = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    def __setattr__(self, name, value):
        if name == "id":
            current = self.__dict__.get("id")
            if current is not None and value != current:
                raise ValueError(f"Quote id {current} cannot be changed to {value}")
        elif name == "tags":
            value = normalize_tags(value)
        elif name == "status":
            value = QuoteStatus.parse(value)
        object.__setattr__(self, name, value)
        # ``updated_at`` is the last field set by ``__init__``; before that
        # the object is still being constructed.
        if name in _TRACKED_FIELDS and "updated_at" in self.__dict__:
            object.__setattr__(self, "updated_at", _now())

    def add_tag(self, tag: Optional[str]) -> None:
        normalized = normalize_tag(tag)
        if normalized:
            self.tags.add(normalized)
            self.updated_at = _now()

    def remove_tag(self, tag: Optional[str]) -> None:
        self.tags.discard(normalize_tag(tag))
        self.updated_at = _now()

    def has_tag(self, tag: Optional[str]) -> bool:
        return normalize_tag(tag) in self.tags

    def __str__(self) -> str:
        return (
            f"Quote[id={self.id}, title='{self.title}', "
            f"category='{self.category}', status={self.status.value}]"
        )
