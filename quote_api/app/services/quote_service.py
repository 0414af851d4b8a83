"""
Business logic for quotes.

``QuoteService`` validates quotes before they reach the store and
builds the aggregate views used by the API: grouping by category, tag
statistics, text search and the bulk archive of inactive quotes.

Every failure is reported as ``ValueError``, whether the quote is
invalid or the identifier does not exist.  The endpoints decide which
HTTP status each case maps to.
"""

import dataclasses
import logging
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional, Set

from quote_api.app.core.store import get_store
from quote_api.app.models.quote import (
    MAX_TITLE_LENGTH,
    Quote,
    QuoteStatus,
    normalize_tags,
)


logger = logging.getLogger(__name__)

UNCATEGORIZED = "Uncategorized"

_UPDATABLE_FIELDS = {
    "title",
    "description",
    "category",
    "status",
    "tags",
    "author",
    "source",
    "publisher",
}

# An explicit null for these leaves the stored value unchanged.
_NON_NULLABLE_FIELDS = {"status", "tags"}


class QuoteService:
    """Service for managing quotes stored in the in‑memory store."""

    # ------------------------------------------------------------------
    # Validation and CRUD
    # ------------------------------------------------------------------
    @classmethod
    def validate_entity(cls, quote: Optional[Quote]) -> None:
        """Check that a quote may be stored.

        Raises ``ValueError`` if the quote is missing, has no title, a
        blank title, or a title longer than ``MAX_TITLE_LENGTH``
        characters once surrounding whitespace is removed.
        """
        if quote is None:
            raise ValueError("Quote cannot be null")
        title = (quote.title or "").strip()
        if not title:
            raise ValueError("Title is required")
        if len(title) > MAX_TITLE_LENGTH:
            raise ValueError(f"Title cannot exceed {MAX_TITLE_LENGTH} characters")

    @classmethod
    async def save(cls, quote: Optional[Quote]) -> Quote:
        """Validate a quote and persist it, assigning an id if needed."""
        try:
            cls.validate_entity(quote)
        except ValueError as e:
            logger.warning("Rejected quote: %s", e)
            raise
        is_new = quote.id is None
        saved = get_store().save(quote)
        if is_new:
            logger.info("Created quote %s '%s'", saved.id, saved.title)
        else:
            logger.info("Saved quote %s", saved.id)
        return saved

    @classmethod
    async def save_all(cls, quotes: Iterable[Quote]) -> List[Quote]:
        """Validate and save several quotes.

        All quotes are validated first, so nothing is stored if any of
        them is invalid.
        """
        quotes = list(quotes)
        for quote in quotes:
            cls.validate_entity(quote)
        return get_store().save_all(quotes)

    @classmethod
    async def update(cls, quote_id: int, updates: Dict[str, Any]) -> Quote:
        """Apply ``updates`` to an existing quote.

        Only keys naming a quote field are applied.  ``None`` for
        ``status`` or ``tags`` means "leave unchanged"; other fields
        accept ``None`` as a cleared value.  The read, the change and the
        write happen as one step in the store, and the stored quote is
        left untouched if the result fails validation.  Raises
        ``ValueError`` if the quote does not exist.
        """

        def apply(existing: Quote) -> Quote:
            candidate = dataclasses.replace(existing)
            for key, value in updates.items():
                if key not in _UPDATABLE_FIELDS:
                    continue
                if key in _NON_NULLABLE_FIELDS and value is None:
                    continue
                setattr(candidate, key, value)
            cls.validate_entity(candidate)
            return candidate

        try:
            updated = get_store().replace(quote_id, apply)
        except ValueError as e:
            logger.warning("Rejected update of quote %s: %s", quote_id, e)
            raise
        logger.info("Updated quote %s (%s)", quote_id, ", ".join(sorted(updates)) or "no fields")
        return updated

    @classmethod
    async def find_all(cls) -> List[Quote]:
        return get_store().find_all()

    @classmethod
    async def find_by_id(cls, quote_id: int) -> Optional[Quote]:
        return get_store().find_by_id(quote_id)

    @classmethod
    async def exists_by_id(cls, quote_id: int) -> bool:
        return get_store().exists_by_id(quote_id)

    @classmethod
    async def count(cls) -> int:
        return get_store().count()

    @classmethod
    async def delete_by_id(cls, quote_id: int) -> None:
        """Delete a quote; raises ``ValueError`` if it does not exist."""
        store = get_store()
        if not store.exists_by_id(quote_id):
            raise ValueError(f"Quote {quote_id} not found")
        store.delete_by_id(quote_id)
        logger.info("Deleted quote %s", quote_id)

    # ------------------------------------------------------------------
    # Store filters
    # ------------------------------------------------------------------
    @classmethod
    async def find_by_status(cls, status) -> List[Quote]:
        return get_store().find_by_status(status)

    @classmethod
    async def find_by_category(cls, category: Optional[str]) -> List[Quote]:
        return get_store().find_by_category(category)

    @classmethod
    async def find_by_tag(cls, tag: Optional[str]) -> List[Quote]:
        return get_store().find_by_tag(tag)

    @classmethod
    async def find_by_title_containing(cls, term: Optional[str]) -> List[Quote]:
        return get_store().find_by_title_containing(term)

    @classmethod
    async def find_by_author(cls, author: Optional[str]) -> List[Quote]:
        return get_store().find_by_author(author)

    @classmethod
    async def find_by_source(cls, source: Optional[str]) -> List[Quote]:
        return get_store().find_by_source(source)

    @classmethod
    async def find_by_publisher(cls, publisher: Optional[str]) -> List[Quote]:
        return get_store().find_by_publisher(publisher)

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------
    @classmethod
    async def group_by_category(cls) -> Dict[str, List[Quote]]:
        """Group quotes by category; quotes without one go under ``Uncategorized``."""
        groups: Dict[str, List[Quote]] = {}
        for quote in get_store().find_all():
            key = (quote.category or "").strip() or UNCATEGORIZED
            groups.setdefault(key, []).append(quote)
        return groups

    @classmethod
    async def get_all_unique_tags(cls) -> Set[str]:
        tags: Set[str] = set()
        for quote in get_store().find_all():
            tags.update(quote.tags)
        return tags

    @classmethod
    async def count_by_status(cls) -> Dict[QuoteStatus, int]:
        """Count quotes per status.  Every status is present, possibly with 0."""
        counts = {status: 0 for status in QuoteStatus}
        for quote in get_store().find_all():
            counts[quote.status] += 1
        return counts

    @classmethod
    async def find_by_all_tags(cls, tags: Iterable[str]) -> List[Quote]:
        wanted = normalize_tags(tags)
        if not wanted:
            return []
        return [q for q in get_store().find_all() if wanted <= q.tags]

    @classmethod
    async def find_by_any_tag(cls, tags: Iterable[str]) -> List[Quote]:
        wanted = normalize_tags(tags)
        if not wanted:
            return []
        return [q for q in get_store().find_all() if wanted & q.tags]

    @classmethod
    async def get_most_popular_tags(cls, limit: int) -> List[str]:
        """Return the ``limit`` most frequent tags, most frequent first.

        Ties keep the order in which tags were first seen, walking
        quotes in id order and each quote's tags alphabetically.
        """
        if limit <= 0:
            return []
        counter: Counter = Counter()
        for quote in get_store().find_all():
            counter.update(sorted(quote.tags))
        return [tag for tag, _ in counter.most_common(limit)]

    @classmethod
    async def search(cls, query: Optional[str]) -> List[Quote]:
        """Find quotes whose title, description or category contains ``query``."""
        needle = (query or "").strip().casefold()
        if not needle:
            return []
        results = []
        for quote in get_store().find_all():
            haystacks = (quote.title, quote.description, quote.category)
            if any(needle in (h or "").casefold() for h in haystacks):
                results.append(quote)
        return results

    @classmethod
    async def archive_inactive_items(cls) -> int:
        """Move every INACTIVE quote to ARCHIVED and return how many moved."""
        store = get_store()
        archived = 0

        def archive(quote: Quote) -> Quote:
            nonlocal archived
            # Re-checked under the store lock; the quote may have changed.
            if quote.status == QuoteStatus.INACTIVE:
                quote.status = QuoteStatus.ARCHIVED
                archived += 1
            return quote

        for quote in store.find_by_status(QuoteStatus.INACTIVE):
            try:
                store.replace(quote.id, archive)
            except ValueError:
                logger.debug("Quote %s was deleted before it could be archived", quote.id)
        logger.info("Archived %d inactive quotes", archived)
        return archived
