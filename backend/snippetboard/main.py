"""
SnippetBoard Backend — FastAPI Application Factory
====================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() wires the registries, middleware,
       exception handlers and routers, and returns the app.
Who:   uvicorn (`uvicorn snippetboard.main:app`), the `snippetboard` console
       script, and the test suite (which builds apps with its own Settings).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌──────────────┐ ┌─────────────────┐  │
    │  │ Req ID   │→│ Post Throttle│→│  Access Log     │  │
    │  └──────────┘ └──────────────┘ └─────────────────┘  │
    │                                                     │
    │  app.state (built once, shared by all requests):    │
    │    AuthorDirectory · InMemorySnippetStore           │
    │    FeedService · Jinja2Templates                    │
    │                                                     │
    │  Routes:                                            │
    │    GET/POST /  · GET /authors/{id}   (HTML)         │
    │    /api/snippets · /api/authors/...  (JSON)         │
    │    GET /health                                      │
    │                                                     │
    │  Exception Handlers:                                │
    │    NotFound→404 │ StoreFailure→503 │ other→500      │
    └─────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncGenerator, Callable, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.templating import Jinja2Templates

from snippetboard import __version__
from snippetboard.config import Settings, settings
from snippetboard.exceptions import NotFoundError, StoreFailureError
from snippetboard.middleware.logging import RequestLoggingMiddleware
from snippetboard.middleware.rate_limit import PostRateLimitMiddleware
from snippetboard.middleware.request_id import RequestIDMiddleware, request_id_var
from snippetboard.models.author import Author
from snippetboard.models.snippet import Snippet, utcnow
from snippetboard.responses import error_response
from snippetboard.routes import health, pages, snippets
from snippetboard.services.author_directory import AuthorDirectory
from snippetboard.services.feed_service import FeedService
from snippetboard.services.snippet_store import InMemorySnippetStore

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure logging for the whole process: one stdout handler, one format.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    # uvicorn's own access log duplicates RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    cfg: Settings = app.state.settings
    setup_logging(cfg.log_level)

    logger.info("=" * 60)
    logger.info("%s %s starting up...", cfg.app_name, __version__)
    logger.info(
        "Authors: %d, snippets: %d, capacity: %s",
        len(app.state.author_directory),
        app.state.snippet_store.count(),
        cfg.max_snippets or "unbounded",
    )
    logger.info("Server ready at http://%s:%d", cfg.backend_host, cfg.backend_port)
    logger.info("=" * 60)

    yield

    # Nothing to flush: the board is not persisted.
    logger.info("%s shutting down, %d snippet(s) discarded.", cfg.app_name, app.state.snippet_store.count())


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to responses.

        NotFoundError      → 404 (unknown author)
        StoreFailureError  → 503 (store refused a post; nothing was written)
        Exception          → 500 (generic message, traceback logged)

    Other exceptions are normally answered by RequestIDMiddleware, which
    wraps everything below it; the Exception handler here only sees errors
    raised outside that middleware.
    """

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(request, 404, "not_found", exc.message, request_id=request_id_var.get(""))

    @app.exception_handler(StoreFailureError)
    async def handle_store_failure(request: Request, exc: StoreFailureError):
        rid = request_id_var.get("")
        logger.error("[%s] Store failure: %s | Context: %s", rid, exc.message, exc.context)
        return error_response(request, 503, "store_unavailable", exc.message, request_id=rid)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = getattr(request.state, "request_id", "")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return error_response(
            request,
            500,
            "internal_server_error",
            "An unexpected error occurred. Please try again later.",
            request_id=rid,
        )


# ══════════════════════════════════════════════════════════════════════════
# Registries
# ══════════════════════════════════════════════════════════════════════════

def build_feed_service(cfg: Settings, clock: Callable[[], datetime] = utcnow) -> FeedService:
    """
    Build the author directory, the (seeded) snippet store and the service
    on top of them. Called once per application.
    """
    directory = AuthorDirectory.from_seeds(cfg.authors)
    store = InMemorySnippetStore(capacity=cfg.max_snippets, clock=clock)

    registered = directory.list()
    if cfg.seed_snippet_body and registered:
        store.add(Snippet(author=registered[0], body=cfg.seed_snippet_body))

    return FeedService(
        directory=directory,
        store=store,
        default_author=Author(id=cfg.default_author_id, name=cfg.default_author_name),
        clock=clock,
    )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    app_settings: Optional[Settings] = None,
    clock: Callable[[], datetime] = utcnow,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Configuration to use (defaults to the env-loaded singleton)
        clock:        Time source for posting timestamps and relative labels
    """
    cfg = app_settings or settings

    app = FastAPI(
        title=f"{cfg.app_name} API",
        description="A small multi-author snippet board.",
        version=__version__,
        lifespan=lifespan,
    )

    feed_service = build_feed_service(cfg, clock=clock)
    app.state.settings = cfg
    app.state.feed_service = feed_service
    app.state.author_directory = feed_service.directory
    app.state.snippet_store = feed_service.store
    app.state.templates = Jinja2Templates(directory=str(cfg.templates_path))

    # Middleware executes in REVERSE order of addition:
    # RequestID → PostRateLimit → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins_list,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Total-Count", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        PostRateLimitMiddleware,
        limit=cfg.post_rate_limit_requests,
        window=cfg.post_rate_limit_window,
    )
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(pages.router)
    app.include_router(snippets.router)
    app.include_router(health.router)

    return app


app = create_app()


def main() -> None:
    """Console entry point: serve the module-level app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "snippetboard.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
