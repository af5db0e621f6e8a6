"""
Core views providing infrastructure endpoints.

Views here are not part of the participation domain; they exist for
deployment tooling (Docker health checks, load balancers).
"""

import logging

from django.core.cache import cache
from django.db import DatabaseError, connection
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def _database_ok() -> bool:
    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError:
        logger.exception("Health check: database unreachable")
        return False
    return True


def _cache_ok() -> bool:
    # django-redis is configured with IGNORE_EXCEPTIONS, so a dead Redis
    # shows up as a cache miss rather than an exception
    cache.set("health_check", "ok", timeout=1)
    return cache.get("health_check") == "ok"


def health_check(request):
    """
    Report database and cache connectivity.

    Returns:
        200 when the database answers, 503 otherwise. A cache outage is
        reported but does not fail the check.

    Example Response:
        {"status": "healthy", "database": "connected", "cache": "connected"}
    """
    database_ok = _database_ok()
    body = {
        "status": "healthy" if database_ok else "unhealthy",
        "database": "connected" if database_ok else "disconnected",
        "cache": "connected" if _cache_ok() else "disconnected",
    }
    return JsonResponse(body, status=200 if database_ok else 503)
