"""Health check router for system monitoring."""

from datetime import datetime, timezone
from typing import Dict, Any
from fastapi import APIRouter, Request

from urlshort.config.settings import SERVICE_NAME, SERVICE_VERSION

router = APIRouter()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/")
async def health_check() -> Dict[str, Any]:
    """Basic health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": _now(),
        "version": SERVICE_VERSION,
        "service": SERVICE_NAME
    }


@router.get("/redirects")
async def redirects_status(request: Request) -> Dict[str, Any]:
    """Report how many redirect paths are loaded and where from."""
    return {
        "count": len(request.app.state.redirects),
        "source": request.app.state.redirects_source
    }


@router.get("/ready")
async def readiness_check() -> Dict[str, Any]:
    """Readiness check for Kubernetes health probes."""
    return {
        "status": "ready",
        "timestamp": _now()
    }


@router.get("/live")
async def liveness_check() -> Dict[str, Any]:
    """Liveness check for Kubernetes health probes."""
    return {
        "status": "alive",
        "timestamp": _now()
    }
