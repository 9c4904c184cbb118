# app/routers/jobs.py
"""Scheduler-triggered jobs. Not meant for the dashboard."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.dependencies import get_repository
from app.repositories.base import YardRepository
from app.schemas.workflow import SweepOut
from app.services.prebooking_sweep import sweep_expired_prebookings

router = APIRouter()


@router.post("/jobs/cleanup-prebookings", response_model=SweepOut, response_model_exclude_none=True,
             summary="Expire past prebookings")
def cleanup_prebookings(repo: YardRepository = Depends(get_repository)):
    """No body. 200 with ok=true, or 500 with ok=false and the backend error text."""
    result = sweep_expired_prebookings(repo)
    if not result.ok:
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=result.to_response())
    return result.to_response()
