"""
In‑memory quote storage.

``QuoteStore`` keeps quotes in a dictionary keyed by identifier and
hands out identifiers from a counter starting at 1.  A single
re‑entrant lock guards both, so individual reads and writes are atomic
when the store is shared between request handler threads.  Queries
that scan the whole store work on a snapshot taken under the lock;
there are no transactions spanning several calls.

The application uses one store per process, obtained through
``get_store``.  Tests call ``reset_store`` to start from a clean state.
"""

import logging
import threading
from typing import Callable, Dict, Iterable, List, Optional, Union

from ..models.quote import Quote, QuoteStatus, normalize_tag


logger = logging.getLogger(__name__)


def _norm(value: Optional[str]) -> str:
    return "" if value is None else value.strip()


def _equals_ignore_case(a: Optional[str], b: Optional[str]) -> bool:
    return _norm(a).casefold() == _norm(b).casefold()


def _contains_ignore_case(haystack: Optional[str], needle: Optional[str]) -> bool:
    n = _norm(needle).casefold()
    return bool(n) and n in _norm(haystack).casefold()


class QuoteStore:
    """Thread‑safe in‑memory repository of ``Quote`` objects."""

    def __init__(self) -> None:
        self._storage: Dict[int, Quote] = {}
        self._next_id = 1
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------
    def save(self, quote: Quote) -> Quote:
        """Insert or replace a quote.

        Quotes without an ``id`` receive the next identifier; quotes
        with an ``id`` overwrite whatever is stored under it.
        """
        with self._lock:
            if quote.id is None:
                quote.id = self._next_id
                self._next_id += 1
            elif quote.id >= self._next_id:
                # Keep generated ids clear of explicitly supplied ones.
                self._next_id = quote.id + 1
            self._storage[quote.id] = quote
        return quote

    def replace(self, quote_id: int, update: Callable[[Quote], Quote]) -> Quote:
        """Atomically swap the quote stored under ``quote_id``.

        ``update`` receives the stored quote and returns its replacement;
        the lookup, the call and the write all happen under the lock, so
        a concurrent delete or archive cannot be lost.  Raises
        ``ValueError`` if no quote has that id.  Anything ``update``
        raises propagates and leaves the store unchanged.
        """
        with self._lock:
            existing = self._storage.get(quote_id)
            if existing is None:
                raise ValueError(f"Quote {quote_id} not found")
            replacement = update(existing)
            if replacement.id != quote_id:
                raise ValueError(f"Replacement for quote {quote_id} has id {replacement.id}")
            self._storage[quote_id] = replacement
            return replacement

    def save_all(self, quotes: Iterable[Quote]) -> List[Quote]:
        return [self.save(quote) for quote in quotes]

    def find_by_id(self, quote_id: int) -> Optional[Quote]:
        with self._lock:
            return self._storage.get(quote_id)

    def find_all(self) -> List[Quote]:
        """Return a new list of all quotes ordered by id."""
        with self._lock:
            return sorted(self._storage.values(), key=lambda q: q.id)

    def exists_by_id(self, quote_id: int) -> bool:
        with self._lock:
            return quote_id in self._storage

    def count(self) -> int:
        with self._lock:
            return len(self._storage)

    def delete_by_id(self, quote_id: int) -> None:
        with self._lock:
            self._storage.pop(quote_id, None)

    def delete_all(self) -> None:
        """Remove every quote and restart identifiers at 1."""
        with self._lock:
            self._storage.clear()
            self._next_id = 1

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------
    def _filter(self, predicate: Callable[[Quote], bool]) -> List[Quote]:
        return [quote for quote in self.find_all() if predicate(quote)]

    def find_by_status(self, status: Union[QuoteStatus, str, None]) -> List[Quote]:
        if status is None or (isinstance(status, str) and not status.strip()):
            return []
        try:
            target = QuoteStatus.parse(status)
        except ValueError:
            logger.debug("Ignoring unknown status filter %r", status)
            return []
        return self._filter(lambda q: q.status == target)

    def find_by_category(self, category: Optional[str]) -> List[Quote]:
        if not _norm(category):
            return []
        return self._filter(lambda q: _equals_ignore_case(q.category, category))

    def find_by_tag(self, tag: Optional[str]) -> List[Quote]:
        """Return quotes having a tag equal to or containing ``tag``."""
        target = normalize_tag(tag)
        if not target:
            return []
        return self._filter(lambda q: any(target in t for t in q.tags))

    def find_by_title_containing(self, term: Optional[str]) -> List[Quote]:
        if not _norm(term):
            return []
        return self._filter(lambda q: _contains_ignore_case(q.title, term))

    def find_by_author(self, author: Optional[str]) -> List[Quote]:
        if not _norm(author):
            return []
        return self._filter(lambda q: _equals_ignore_case(q.author, author))

    def find_by_source(self, source: Optional[str]) -> List[Quote]:
        if not _norm(source):
            return []
        return self._filter(lambda q: _equals_ignore_case(q.source, source))

    def find_by_publisher(self, publisher: Optional[str]) -> List[Quote]:
        if not _norm(publisher):
            return []
        return self._filter(lambda q: _equals_ignore_case(q.publisher, publisher))


_store = QuoteStore()


def get_store() -> QuoteStore:
    """Return the process‑wide quote store."""
    return _store


def reset_store() -> None:
    """Empty the process‑wide store and reset its id counter."""
    _store.delete_all()
