"""
SnippetBoard Backend — HTML Page Routes
=========================================

What:  The browser-facing board: the global feed with its posting form, and
       read-only author feeds.
How:   FeedService builds a FeedPage; the Jinja2 template set renders it.
       Unknown authors raise AuthorNotFoundError, which the global handler
       renders as a 404 error page.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from snippetboard.dependencies import get_feed_service, get_templates
from snippetboard.schemas.feed import FeedPage
from snippetboard.services.feed_service import FeedService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Pages"])


def render_feed(request: Request, templates: Jinja2Templates, page: FeedPage) -> HTMLResponse:
    return templates.TemplateResponse(request, "snippets.html", {"page": page})


@router.get("/", response_class=HTMLResponse, summary="Global feed page")
def index(
    request: Request,
    service: FeedService = Depends(get_feed_service),
    templates: Jinja2Templates = Depends(get_templates),
) -> HTMLResponse:
    return render_feed(request, templates, service.feed())


@router.post("/", summary="Post a snippet from the form")
def post_snippet(
    snippet: str = Form(default=""),
    author_id: Optional[str] = Form(default=None),
    service: FeedService = Depends(get_feed_service),
) -> RedirectResponse:
    """
    Store the form's `snippet` field, then send the browser back to the feed.

    303 See Other turns the browser's POST into a GET of `/`, so reloading
    the feed does not post again.
    """
    service.post(body=snippet, author_id=author_id)
    return RedirectResponse(url="/", status_code=303)


@router.get("/authors/{author_id}", response_class=HTMLResponse, summary="Author feed page")
def author_page(
    author_id: str,
    request: Request,
    service: FeedService = Depends(get_feed_service),
    templates: Jinja2Templates = Depends(get_templates),
) -> HTMLResponse:
    return render_feed(request, templates, service.author_feed(author_id))
