"""
SnippetBoard Backend — Error Responses
========================================

What:  One place that turns an error into a response body.
How:   Browsers (Accept includes text/html) get the `error.html` page with
       the status code; API clients and scripts get the JSON
       ErrorResponse shape. Used by the exception handlers in main.py and
       by middleware that answers a request itself (throttle, unexpected
       errors). Callers pass the request id they are holding.
"""

from typing import Optional

from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates
from starlette.requests import Request
from starlette.responses import Response


def wants_html(request: Request) -> bool:
    return "text/html" in request.headers.get("accept", "")


def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: Optional[dict] = None,
    headers: Optional[dict] = None,
    request_id: str = "",
) -> Response:
    if wants_html(request):
        templates: Jinja2Templates = request.app.state.templates
        return templates.TemplateResponse(
            request,
            "error.html",
            {"status_code": status_code, "message": message, "request_id": request_id},
            status_code=status_code,
            headers=headers,
        )

    content = {"error": error, "message": message, "request_id": request_id}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)
