"""
SnippetBoard Backend — Feed Projector
=======================================

What:  Turns stored snippets into display-ready FeedEntry records.
How:   A pure function of (snippet, now): the relative time label comes from
       `humanize.naturaltime`, the author fields from the snippet's Author.
       Nothing is cached; every read projects again, so labels stay current.
"""

from datetime import datetime
from typing import Iterable, List, Optional

import humanize

from snippetboard.models.snippet import Snippet
from snippetboard.schemas.feed import FeedEntry


class FeedProjector:
    """Stateless snippet → FeedEntry transform."""

    def project(self, snippet: Snippet, now: datetime) -> FeedEntry:
        return FeedEntry(
            posted_at=self.relative_time(snippet.posted_at, now),
            posted_at_iso=snippet.posted_at,
            body=snippet.body,
            author_name=snippet.author.name,
            author_uri=snippet.author.uri,
        )

    def project_all(self, snippets: Iterable[Snippet], now: datetime) -> List[FeedEntry]:
        """Project a sequence in order, all against the same `now`."""
        return [self.project(snippet, now) for snippet in snippets]

    @staticmethod
    def relative_time(posted_at: Optional[datetime], now: datetime) -> str:
        """
        "now", "3 minutes ago", "2 days ago", ...

        A timestamp later than `now` reads as "... from now" rather than
        failing.
        """
        if posted_at is None:
            return "now"
        return humanize.naturaltime(now - posted_at)


feed_projector = FeedProjector()
