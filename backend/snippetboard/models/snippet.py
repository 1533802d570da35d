"""
SnippetBoard Backend — Snippet Model
======================================

What:  One posted text snippet, attributed to an author.
How:   Frozen dataclass. `posted_at` is normally left unset by callers and
       stamped by the snippet store when the snippet is added; a stored
       snippet is never changed afterwards.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from snippetboard.models.author import Author


def utcnow() -> datetime:
    """Timezone-aware current time; the default clock of store and feed."""
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Snippet:
    """
    Attributes:
        author:    The posting author (by value)
        body:      Raw text, stored as given
        posted_at: Creation time (UTC); None until the store stamps it.
                   A naive datetime is read as UTC.
    """

    author: Author
    body: str
    posted_at: Optional[datetime] = None

    def __post_init__(self):
        # Timestamps without a timezone are taken as UTC
        if self.posted_at is not None and self.posted_at.tzinfo is None:
            object.__setattr__(self, "posted_at", self.posted_at.replace(tzinfo=timezone.utc))

    def stamped(self, when: datetime) -> "Snippet":
        """Return this snippet with `posted_at` set, unless it already is."""
        if self.posted_at is not None:
            return self
        return replace(self, posted_at=when)
