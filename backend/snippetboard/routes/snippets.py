"""
SnippetBoard Backend — Snippet API Routes
===========================================

What:  JSON access to the same flows the HTML pages use.
Who:   Scripts and other clients of the board.

Caching:
    Feeds change with every post and carry relative time labels, so feed
    responses are marked `no-store`. The author list is fixed for the life of
    the process and may be cached briefly.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response

from snippetboard.dependencies import get_feed_service
from snippetboard.schemas.feed import (
    AuthorResponse,
    ErrorResponse,
    FeedResponse,
    SnippetCreate,
    SnippetResponse,
)
from snippetboard.services.feed_service import FeedService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Snippets"])


@router.get(
    "/snippets",
    response_model=FeedResponse,
    summary="Global feed, newest first",
)
def list_snippets(
    response: Response,
    service: FeedService = Depends(get_feed_service),
) -> FeedResponse:
    page = service.feed()
    response.headers["Cache-Control"] = "no-store"
    response.headers["X-Total-Count"] = str(page.count)
    return FeedResponse.from_page(page)


@router.post(
    "/snippets",
    status_code=201,
    response_model=SnippetResponse,
    responses={
        201: {"description": "Snippet stored", "model": SnippetResponse},
        429: {"description": "Posting throttle hit", "model": ErrorResponse},
        503: {"description": "Store refused the snippet", "model": ErrorResponse},
    },
    summary="Post a snippet",
)
def create_snippet(
    payload: SnippetCreate,
    service: FeedService = Depends(get_feed_service),
) -> SnippetResponse:
    stored = service.post(body=payload.body, author_id=payload.author_id)
    return SnippetResponse.from_snippet(stored)


@router.get(
    "/authors",
    response_model=List[AuthorResponse],
    summary="Registered authors",
)
def list_authors(
    response: Response,
    service: FeedService = Depends(get_feed_service),
) -> List[AuthorResponse]:
    response.headers["Cache-Control"] = "public, max-age=300"
    return [AuthorResponse.from_author(author) for author in service.authors()]


@router.get(
    "/authors/{author_id}/snippets",
    response_model=FeedResponse,
    responses={
        200: {"description": "Author feed", "model": FeedResponse},
        404: {"description": "Unknown author", "model": ErrorResponse},
    },
    summary="One author's feed, newest first",
)
def list_author_snippets(
    author_id: str,
    response: Response,
    service: FeedService = Depends(get_feed_service),
) -> FeedResponse:
    page = service.author_feed(author_id)
    response.headers["Cache-Control"] = "no-store"
    response.headers["X-Total-Count"] = str(page.count)
    return FeedResponse.from_page(page)
