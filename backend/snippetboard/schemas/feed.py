"""
SnippetBoard Backend — Pydantic Request/Response Schemas
=========================================================

What:  Pydantic models for everything that leaves the service: the display
       entries handed to the HTML templates and the JSON API contract.
How:   FastAPI validates request bodies and serializes responses with these
       models and generates the OpenAPI docs from them.

Design Decision:
    Schemas are separate from the dataclass models: a FeedEntry is a
    read-time projection (relative time, author URI) recomputed on every
    read, while Author and Snippet are what the store actually holds.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from snippetboard.models.author import Author
from snippetboard.models.snippet import Snippet


# ══════════════════════════════════════════════════════════════════════════
# Display Models — What the feed projector produces
# ══════════════════════════════════════════════════════════════════════════


class FeedEntry(BaseModel):
    """
    One snippet, ready for display.

    `posted_at` is the humanized label ("3 minutes ago"); the absolute time
    is kept in `posted_at_iso` for the JSON API and the HTML title tooltip.
    """

    posted_at: str = Field(description="Relative posting time, e.g. '3 minutes ago'")
    posted_at_iso: Optional[datetime] = Field(
        default=None, description="Absolute posting time (UTC ISO 8601)"
    )
    body: str = Field(description="Snippet text as posted")
    author_name: str = Field(description="Display name of the author")
    author_uri: str = Field(description="Path of the author's feed")

    model_config = {"frozen": True}


class AuthorResponse(BaseModel):
    id: str = Field(description="Author identifier")
    name: str = Field(description="Display name")
    uri: str = Field(description="Path of the author's feed")

    @classmethod
    def from_author(cls, author: Author) -> "AuthorResponse":
        return cls(id=author.id, name=author.name, uri=author.uri)


class FeedPage(BaseModel):
    """
    Everything a feed view needs.

    The new-snippet form is offered on the global feed only; author feeds
    are read-only views.
    """

    show_new_snippet_form: bool = Field(default=False)
    author: Optional[AuthorResponse] = Field(
        default=None, description="Author whose feed this is (null for the global feed)"
    )
    snippets: List[FeedEntry] = Field(default_factory=list, description="Newest first")

    @property
    def count(self) -> int:
        return len(self.snippets)


# ══════════════════════════════════════════════════════════════════════════
# API Models
# ══════════════════════════════════════════════════════════════════════════


class SnippetCreate(BaseModel):
    """
    Body of POST /api/snippets.

    The body is stored as given (no length or content rules). `author_id`
    picks a registered author; anything else posts under the default identity.
    """

    body: str = Field(description="Snippet text")
    author_id: Optional[str] = Field(default=None, description="Posting author id")


class SnippetResponse(BaseModel):
    """A stored snippet as returned right after posting it."""

    author: AuthorResponse
    body: str
    posted_at: datetime

    @classmethod
    def from_snippet(cls, snippet: Snippet) -> "SnippetResponse":
        return cls(
            author=AuthorResponse.from_author(snippet.author),
            body=snippet.body,
            posted_at=snippet.posted_at,
        )


class FeedResponse(BaseModel):
    """JSON rendition of a FeedPage."""

    author: Optional[AuthorResponse] = None
    snippets: List[FeedEntry]
    count: int

    @classmethod
    def from_page(cls, page: FeedPage) -> "FeedResponse":
        return cls(author=page.author, snippets=page.snippets, count=page.count)


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "author with ID '42' was not found",
            "request_id": "1f0c2a9e"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    authors: int = Field(description="Registered authors")
    snippets: int = Field(description="Snippets currently on the board")
    capacity: Optional[int] = Field(default=None, description="Store capacity, null if unbounded")
    uptime_seconds: float = Field(description="Seconds since service started")
