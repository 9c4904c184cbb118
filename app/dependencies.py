# app/dependencies.py
"""FastAPI dependencies shared by the routers."""

from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.environment import current_environment
from app.gateway.postgrest import PostgrestGateway
from app.repositories.base import YardRepository
from app.repositories.rest import RestYardRepository
from app.repositories.sql import SqlYardRepository
from app.services.workflow_service import OperatorContext


def build_repository(db: Optional[Session] = None) -> YardRepository:
    """SQL repository on the given session, or the hosted backend when STORAGE_BACKEND=rest."""
    if settings.STORAGE_BACKEND == "rest":
        profile = current_environment()
        gateway = PostgrestGateway(profile.endpoint_url, profile.api_key, timeout=settings.BACKEND_TIMEOUT_SECONDS)
        return RestYardRepository(gateway)
    return SqlYardRepository(db)


def get_repository(db: Session = Depends(get_db)) -> YardRepository:
    return build_repository(db)


def get_operator_context(x_operator_id: Optional[str] = Header(None)) -> OperatorContext:
    """Operator identity comes from the X-Operator-Id header set by the dashboard."""
    return OperatorContext(operator_id=x_operator_id)
