# app/routers/health.py
"""
System health check endpoint.
Returns backend status, storage kind, environment and storage reachability.
"""

from fastapi import APIRouter, Depends
from app.config import settings
from app.dependencies import get_repository
from app.environment import current_environment
from app.errors import GatewayError
from app.repositories.base import YardRepository
from app.utils.time_utils import utcnow

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check(repo: YardRepository = Depends(get_repository)):
    result = {
        "status": "ok",
        "timestamp": utcnow().isoformat(),
        "backend": "ok",
        "storage": settings.STORAGE_BACKEND,
        "environment": current_environment().env,
        "database": "unknown",
    }

    try:
        repo.ping()
        result["database"] = "ok"
    except GatewayError as e:
        result["database"] = f"error: {e.message}"
        result["status"] = "degraded"

    return result
