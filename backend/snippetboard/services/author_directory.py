"""
SnippetBoard Backend — Author Directory
=========================================

What:  The fixed set of known authors, looked up by id.
How:   A tuple built once at startup. There is no write path, so no locking
       is needed for concurrent readers.
Who:   FeedService (author feeds, resolving the posting author) and the
       health route.
"""

import logging
from typing import Iterable, List, Optional

from snippetboard.config import AuthorSeed
from snippetboard.models.author import Author

logger = logging.getLogger(__name__)


class AuthorDirectory:
    """
    Read-only registry of authors, in registration order.

    Duplicate ids are tolerated; lookups return the first registered match.
    """

    def __init__(self, authors: Iterable[Author] = ()):
        self._authors = tuple(authors)

    @classmethod
    def from_seeds(cls, seeds: Iterable[AuthorSeed]) -> "AuthorDirectory":
        directory = cls(Author(id=seed.id, name=seed.name) for seed in seeds)
        logger.info("Author directory loaded: %d author(s)", len(directory))
        return directory

    def list(self) -> List[Author]:
        """All known authors in registration order (a fresh list)."""
        return list(self._authors)

    def get_by_id(self, author_id: str) -> Optional[Author]:
        """
        Find an author by id.

        Returns:
            The first author registered with `author_id`, or None when there
            is none. A miss is a normal answer; callers decide what it means.
        """
        for author in self._authors:
            if author.id == author_id:
                return author
        return None

    def __len__(self) -> int:
        return len(self._authors)
