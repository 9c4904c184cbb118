# app/services/reporting_service.py
"""
Read side: per-vehicle SMS history, today's SMS counters, the KPI tile,
the recent activity feed, and the vehicle / log lists the UI refreshes.
History, stats and activity never raise on backend errors; they log and
return an empty or zeroed result.
"""

from datetime import datetime
from typing import Optional

from app.errors import GatewayError
from app.repositories.base import YardRepository
from app.schemas.action_log import ActionLogOut, ActivityFeedItem, SmsHistoryEntry, SmsStatsOut
from app.schemas.vehicle import VehicleOut
from app.utils.logger import get_logger
from app.utils.time_utils import start_of_day, utcnow

logger = get_logger(__name__)

ACTIVITY_LIMIT = 20
UNKNOWN = "Unknown"
MARKER_SMS = "sms"
MARKER_ACTION = "action"


def get_vehicle_sms_history(repo: YardRepository, vehicle_id: str) -> list[SmsHistoryEntry]:
    try:
        return repo.list_sms_history(vehicle_id)
    except GatewayError as e:
        logger.error(f"Error fetching SMS history for {vehicle_id}: {e.message}")
        return []


def get_today_sms_stats(repo: YardRepository, now: datetime = None) -> SmsStatsOut:
    """Sent SMS rows since 00:00 UTC today, with a per-type breakdown."""
    since = start_of_day(now or utcnow())
    try:
        kinds = repo.list_sent_message_types(since)
    except GatewayError as e:
        logger.error(f"Error fetching SMS stats: {e.message}")
        return SmsStatsOut(total=0, by_type={})

    by_type: dict[str, int] = {}
    for kind in kinds:
        if not kind:
            continue
        by_type[kind] = by_type.get(kind, 0) + 1
    return SmsStatsOut(total=sum(by_type.values()), by_type=by_type)


def get_sms_kpi(repo: YardRepository, now: datetime = None) -> dict:
    stats = get_today_sms_stats(repo, now)
    return {"label": "SMS Sent Today", "value": stats.total}


def render_activity_with_sms(repo: YardRepository, limit: int = ACTIVITY_LIMIT) -> list[ActivityFeedItem]:
    try:
        entries = repo.list_activity(limit)
    except GatewayError as e:
        logger.error(f"Error fetching activity feed: {e.message}")
        return []

    feed = []
    for entry in entries:
        if entry.message_type:
            action_text = f"{entry.action} (SMS sent to {entry.recipient_phone})"
            marker = MARKER_SMS
        else:
            action_text = entry.action
            marker = MARKER_ACTION
        feed.append(ActivityFeedItem(
            time=entry.timestamp.strftime("%H:%M"),
            registration=entry.registration or UNKNOWN,
            po_ref=entry.po_ref or "",
            action_text=action_text,
            operator_name=entry.operator_name or UNKNOWN,
            marker=marker,
        ))
    return feed


def list_vehicles(repo: YardRepository, status: Optional[str] = None) -> list[VehicleOut]:
    return repo.list_vehicles(status=status)


def list_recent_logs(repo: YardRepository, limit: int = 50) -> list[ActionLogOut]:
    return repo.list_action_logs(limit=limit)
