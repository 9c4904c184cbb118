# app/routers/activity.py
"""Audit log reads: raw log list, recent activity feed, SMS counters."""

from fastapi import APIRouter, Depends

from app.dependencies import get_repository
from app.repositories.base import YardRepository
from app.schemas.action_log import ActionLogOut, ActivityFeedItem, SmsStatsOut
from app.services import reporting_service

router = APIRouter()


@router.get("/logs", response_model=list[ActionLogOut], summary="Latest actions_log rows")
def get_logs(limit: int = 50, repo: YardRepository = Depends(get_repository)):
    return reporting_service.list_recent_logs(repo, limit=limit)


@router.get("/activity", response_model=list[ActivityFeedItem], summary="Recent activity with SMS markers")
def get_activity(repo: YardRepository = Depends(get_repository)):
    """Last 20 entries, newest first. SMS rows carry marker='sms'."""
    return reporting_service.render_activity_with_sms(repo)


@router.get("/sms/stats/today", response_model=SmsStatsOut, summary="Simulated SMS sent today")
def get_sms_stats(repo: YardRepository = Depends(get_repository)):
    return reporting_service.get_today_sms_stats(repo)


@router.get("/sms/kpi", summary="Dashboard tile: SMS sent today")
def get_sms_kpi(repo: YardRepository = Depends(get_repository)):
    return reporting_service.get_sms_kpi(repo)
