"""
Comments API - Health Check Route
==================================

What:  Health check endpoint for monitoring and load balancer health checks.
Why:   Load balancers route away from instances that can't reach MongoDB.
How:   Sends a `ping` command through the comment repository.

Status levels:
    - healthy:   MongoDB reachable (HTTP 200)
    - unhealthy: MongoDB unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from app import __version__
from app.database import get_comment_repository
from app.models.comment import CommentRepository
from app.schemas.comment import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(
    response: Response,
    repo: CommentRepository = Depends(get_comment_repository),
) -> HealthResponse:
    """
    Check the service and its database.

    Why a ping (not a query): health checks run every few seconds; `ping`
    costs the server nothing and still proves authentication and networking.
    """
    if await repo.ping():
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable")

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
