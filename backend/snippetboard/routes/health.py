"""
SnippetBoard Backend — Health Check Route
===========================================

What:  Liveness probe for Docker health checks and load balancers.
How:   The service has no external dependencies; it reports the registry
       sizes so a probe (or a human) can see the board is being served.

    healthy   → store accepting posts (HTTP 200)
    degraded  → bounded store is full, reads still work (HTTP 200)
"""

import logging
import time

from fastapi import APIRouter, Depends

from snippetboard import __version__
from snippetboard.dependencies import get_feed_service
from snippetboard.schemas.feed import HealthResponse
from snippetboard.services.feed_service import FeedService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
def health_check(service: FeedService = Depends(get_feed_service)) -> HealthResponse:
    snippets = service.store.count()
    capacity = service.store.capacity

    status = "healthy"
    if capacity is not None and snippets >= capacity:
        status = "degraded"
        logger.warning("Health check: snippet store full (%d/%d)", snippets, capacity)

    return HealthResponse(
        status=status,
        version=__version__,
        authors=len(service.directory),
        snippets=snippets,
        capacity=capacity,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
