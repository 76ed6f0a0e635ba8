"""
Health Check Module.

Liveness and readiness endpoints shared by the services. Readiness probes
the database and cache, plus any probes a service lists in the
``HEALTH_CHECKS`` setting (dotted paths to callables that raise on failure).
"""
import logging
import time
from typing import Callable, Dict, Any, List
from datetime import datetime, timezone

from django.conf import settings
from django.db import connection
from django.core.cache import cache
from django.utils.module_loading import import_string
from rest_framework.decorators import api_view, permission_classes, authentication_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class HealthStatus:
    """Health check status constants."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def run_probe(name: str, probe: Callable[[], None]) -> Dict[str, Any]:
    """Run one probe and report its status and latency."""
    start = time.time()
    try:
        probe()
    except Exception as e:
        logger.error(f"Health check '{name}' failed: {e}")
        return {"name": name, "status": HealthStatus.UNHEALTHY, "error": str(e)}
    return {
        "name": name,
        "status": HealthStatus.HEALTHY,
        "latency_ms": round((time.time() - start) * 1000, 2),
    }


def probe_database() -> None:
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()


def probe_cache() -> None:
    cache_key = f"health_check_{time.time()}"
    cache.set(cache_key, "OK", 10)
    value = cache.get(cache_key)
    cache.delete(cache_key)
    if value != "OK":
        raise RuntimeError("Cache read/write mismatch")


def get_probes() -> List[tuple]:
    probes = [("database", probe_database), ("cache", probe_cache)]
    for dotted_path in getattr(settings, 'HEALTH_CHECKS', []):
        probe = import_string(dotted_path)
        probes.append((getattr(probe, 'probe_name', probe.__name__), probe))
    return probes


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health_check(request):
    return Response({
        "status": HealthStatus.HEALTHY,
        "service": getattr(settings, 'SERVICE_NAME', None),
        "version": getattr(settings, 'SERVICE_VERSION', None),
        "timestamp": _now(),
    })


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def liveness_check(request):
    """Kubernetes liveness probe endpoint."""
    return Response({"status": "alive", "timestamp": _now()})


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def readiness_check(request):
    """Kubernetes readiness probe endpoint."""
    checks = [run_probe(name, probe) for name, probe in get_probes()]
    healthy = all(c["status"] == HealthStatus.HEALTHY for c in checks)

    return Response(
        {
            "status": HealthStatus.HEALTHY if healthy else HealthStatus.UNHEALTHY,
            "checks": checks,
            "timestamp": _now(),
        },
        status=200 if healthy else 503
    )


def get_health_urlpatterns():
    """
    Returns URL patterns for health check endpoints.

    Usage in urls.py:
        from common.health import get_health_urlpatterns
        urlpatterns += get_health_urlpatterns()
    """
    from django.urls import path

    return [
        path('health/', health_check, name='health'),
        path('health/live/', liveness_check, name='liveness'),
        path('health/ready/', readiness_check, name='readiness'),
    ]
