"""
SnippetBoard Backend — Feed Service (Request Flow Orchestrator)
================================================================

What:  The three flows behind every page and API call.
How:   Composes the AuthorDirectory, the SnippetStore and the FeedProjector.
Who:   Called by route handlers (HTML pages and JSON API alike).

Flows:
    feed()              store.list_all() ───────────────────▶ projector ─▶ FeedPage
    author_feed(id)     directory.get_by_id(id) ─▶ store.list_by_author()
                                                ─▶ projector ─▶ FeedPage
                        (unknown id ─▶ AuthorNotFoundError ─▶ 404)
    post(body, id)      resolve posting author ─▶ store.add() ─▶ Snippet

Design Decision:
    Posting does not validate the author against the directory. A known id
    posts as that author; any other id, or none, posts under the configured
    default identity. The directory is consulted for read-side filtering and
    for picking up display names, never to reject a write.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from snippetboard.exceptions import AuthorNotFoundError
from snippetboard.models.author import Author
from snippetboard.models.snippet import Snippet, utcnow
from snippetboard.schemas.feed import AuthorResponse, FeedPage
from snippetboard.services.author_directory import AuthorDirectory
from snippetboard.services.feed_projector import FeedProjector, feed_projector
from snippetboard.services.snippet_store import SnippetStore

logger = logging.getLogger(__name__)


class FeedService:
    """
    Request flows over the shared author directory and snippet store.

    Args:
        directory:      Registered authors
        store:          Snippet log shared by all requests
        default_author: Identity for posts that don't name a registered author
        projector:      Snippet → FeedEntry transform
        clock:          Reference "now" for relative time labels
    """

    def __init__(
        self,
        directory: AuthorDirectory,
        store: SnippetStore,
        default_author: Author,
        projector: FeedProjector = feed_projector,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.directory = directory
        self.store = store
        self.default_author = default_author
        self.projector = projector
        self._clock = clock

    def feed(self) -> FeedPage:
        """The global feed, newest first, with the new-snippet form."""
        snippets = self.store.list_all()
        return FeedPage(
            show_new_snippet_form=True,
            snippets=self.projector.project_all(snippets, self._clock()),
        )

    def author_feed(self, author_id: str) -> FeedPage:
        """
        One author's feed, newest first.

        Raises:
            AuthorNotFoundError: No registered author has `author_id`
        """
        author = self.directory.get_by_id(author_id)
        if author is None:
            logger.warning("Feed requested for unknown author %r", author_id)
            raise AuthorNotFoundError(author_id)

        snippets = self.store.list_by_author(author)
        return FeedPage(
            show_new_snippet_form=False,
            author=AuthorResponse.from_author(author),
            snippets=self.projector.project_all(snippets, self._clock()),
        )

    def post(self, body: str, author_id: Optional[str] = None) -> Snippet:
        """
        Add a snippet to the board.

        Raises:
            StoreFailureError: The store refused the snippet
        """
        author = self.resolve_poster(author_id)
        stored = self.store.add(Snippet(author=author, body=body))
        logger.info("Snippet posted by %s (%s): %d chars", author.id, author.name, len(body))
        return stored

    def resolve_poster(self, author_id: Optional[str]) -> Author:
        if author_id:
            known = self.directory.get_by_id(author_id)
            if known is not None:
                return known
            return Author(id=author_id, name=self.default_author.name)
        return self.default_author

    def authors(self) -> List[Author]:
        return self.directory.list()
