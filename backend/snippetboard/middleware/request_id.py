"""
SnippetBoard Backend — Request ID Middleware
==============================================

What:  Tags each request with a short correlation id.
How:   Reuses the client's X-Request-ID header when present, otherwise makes
       one up; stores it in a ContextVar (read by loggers and error handlers)
       and echoes it back in the response header.

Unexpected errors:
    An exception escaping the app is answered here, as a 500 carrying the
    id in the body and the header, and logged with the id. This middleware
    is the outermost one, so it covers every route and inner middleware.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from snippetboard.responses import error_response

logger = logging.getLogger(__name__)

# Coroutine-local: concurrent requests on the same event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or new_request_id()
        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
            response = error_response(
                request,
                500,
                "internal_server_error",
                "An unexpected error occurred. Please try again later.",
                request_id=rid,
            )
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = rid
        return response
