"""
Liveness and readiness probes for orchestrators and load balancers.
"""
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, status

from ..db import check_db_connection

router = APIRouter(tags=["health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health")
def health_check() -> Dict[str, Any]:
    # The process is up; says nothing about the database
    return {"status": "healthy", "timestamp": _now()}


@router.get("/ready", responses={503: {"description": "User store unreachable"}})
def readiness_check() -> Dict[str, Any]:
    """Ready only when the user store accepts queries; 503 otherwise."""
    if not check_db_connection():
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable"
        )
    return {"status": "ready", "database": "connected", "timestamp": _now()}
