"""
SnippetBoard Backend — Snippet Store
======================================

What:  The single source of truth for every posted snippet.
How:   An append-only log kept newest-first. The abstract SnippetStore fixes
       the contract; InMemorySnippetStore implements it with a deque guarded
       by a reader-writer lock.
Who:   FeedService; the application factory builds one store per app.

Ordering:
    Snippets are ordered by insertion, newest at the head. They are never
    re-sorted by `posted_at`: a snippet added with a backdated timestamp
    still shows up first, because it is the newest activity on the board.

Concurrency:
    list_all / list_by_author  → shared (read) side of the lock
    add                        → exclusive (write) side of the lock

    Reads copy the log while holding the lock and return the copy, so a
    caller never sees a half-applied add and can never mutate the store
    through a returned list.
"""

import logging
from abc import ABC, abstractmethod
from collections import deque
from datetime import datetime
from typing import Callable, Deque, Iterable, List, Optional

from snippetboard.exceptions import StoreCapacityError
from snippetboard.models.author import Author
from snippetboard.models.snippet import Snippet, utcnow
from snippetboard.services.locks import ReadWriteLock

logger = logging.getLogger(__name__)


class SnippetStore(ABC):
    """
    Contract for snippet storage.

    Implementations must be safe to call from many threads at once, and must
    leave their contents untouched when `add` fails.
    """

    #: Maximum number of snippets the store accepts; None when unbounded
    capacity: Optional[int] = None

    @abstractmethod
    def list_all(self) -> List[Snippet]:
        """Every stored snippet, newest first."""
        ...

    @abstractmethod
    def list_by_author(self, author: Author) -> List[Snippet]:
        """
        Snippets whose author has the same id as `author`, newest first.

        The relative order of the returned snippets is their order in
        list_all().
        """
        ...

    @abstractmethod
    def add(self, snippet: Snippet) -> Snippet:
        """
        Store `snippet` as the new head of the log.

        Returns:
            The snippet as stored (with `posted_at` filled in).

        Raises:
            StoreFailureError: The snippet was not stored; nothing changed.
        """
        ...

    @abstractmethod
    def count(self) -> int:
        ...


class InMemorySnippetStore(SnippetStore):
    """
    Process-lifetime snippet store.

    Args:
        snippets: Initial contents, newest first
        capacity: Maximum number of snippets; None for unbounded
        clock:    Source of `posted_at` for snippets added without one
    """

    def __init__(
        self,
        snippets: Iterable[Snippet] = (),
        capacity: Optional[int] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self._snippets: Deque[Snippet] = deque(snippets)
        self._lock = ReadWriteLock()
        self._clock = clock
        self.capacity = capacity

    def list_all(self) -> List[Snippet]:
        with self._lock.read_locked():
            return list(self._snippets)

    def list_by_author(self, author: Author) -> List[Snippet]:
        with self._lock.read_locked():
            return [s for s in self._snippets if s.author.is_same(author)]

    def add(self, snippet: Snippet) -> Snippet:
        with self._lock.write_locked():
            if self.capacity is not None and len(self._snippets) >= self.capacity:
                logger.warning(
                    "Snippet store full (%d/%d), refusing post by author %s",
                    len(self._snippets),
                    self.capacity,
                    snippet.author.id,
                )
                raise StoreCapacityError(
                    capacity=self.capacity,
                    context={"author_id": snippet.author.id},
                )
            stored = snippet.stamped(self._clock())
            self._snippets.appendleft(stored)

        logger.debug("Stored snippet by author %s (%d chars)", stored.author.id, len(stored.body))
        return stored

    def count(self) -> int:
        with self._lock.read_locked():
            return len(self._snippets)
