"""
SnippetBoard Backend — Custom Exception Hierarchy
===================================================

What:  Application-specific exceptions for the few things that can go wrong.
How:   Each exception carries a user-facing message and an optional context
       dict. Global handlers registered in main.py translate them into JSON
       error bodies (API) or the error page (HTML) with the right status code.
Who:   Raised by services and middleware; caught by the global handlers.

Exception Hierarchy:
    SnippetBoardError (base)
    ├── NotFoundError                → 404 Not Found
    │   └── AuthorNotFoundError      → 404 (unknown author id)
    ├── StoreFailureError            → 503 Service Unavailable
    │   └── StoreCapacityError       → 503 (bounded store is full)
    └── RateLimitExceededError       → 429 Too Many Requests

None of these is fatal: an unknown author or a refused post is reported to
the client and the process keeps serving.
"""

from typing import Any, Dict, Optional


class SnippetBoardError(Exception):
    """
    Base exception for all SnippetBoard application errors.

    Attributes:
        message:  User-facing error description (safe to return in a response)
        context:  Additional debug info (logged, returned only where harmless)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(SnippetBoardError):
    """Raised when a requested resource does not exist."""

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class AuthorNotFoundError(NotFoundError):
    """
    Raised when an author id has no match in the author directory.

    The directory itself answers a miss with None; the feed service turns
    that into this exception at the point where a caller asked for the
    author's feed.
    """

    def __init__(self, author_id: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(resource="author", resource_id=author_id, context=context)
        self.author_id = author_id


class StoreFailureError(SnippetBoardError):
    """
    Raised when the snippet store refuses an append.

    The store guarantees that nothing was written when this is raised.
    """

    def __init__(
        self,
        message: str = "The snippet could not be stored. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreCapacityError(StoreFailureError):
    """Raised by a bounded store that already holds `capacity` snippets."""

    def __init__(self, capacity: int, context: Optional[Dict[str, Any]] = None):
        ctx = context or {}
        ctx["capacity"] = capacity
        super().__init__(
            message=f"The board is full ({capacity} snippets). No more snippets can be posted.",
            context=ctx,
        )
        self.capacity = capacity


class RateLimitExceededError(SnippetBoardError):
    """
    Raised when a client posts too many snippets within the throttle window.

    Response includes a Retry-After header with the seconds until the
    oldest post leaves the window.
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Too many snippets posted. Please wait {retry_after} seconds before posting again."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
