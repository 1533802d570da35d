"""
SnippetBoard Backend — FastAPI Dependencies
=============================================

What:  Hands the process-wide registries to route handlers.
How:   The application factory builds the feed service and the template set
       once and parks them on `app.state`; these dependencies read them back
       for each request, so tests can swap them by building their own app.

Usage:
    @router.get("/")
    def index(service: FeedService = Depends(get_feed_service)): ...
"""

from fastapi import Request
from fastapi.templating import Jinja2Templates

from snippetboard.services.feed_service import FeedService


def get_feed_service(request: Request) -> FeedService:
    return request.app.state.feed_service


def get_templates(request: Request) -> Jinja2Templates:
    return request.app.state.templates
