# app/schemas/action_log.py
from pydantic import BaseModel
from datetime import datetime
from typing import Optional


class ActionLogCreate(BaseModel):
    vehicle_id: str
    operator_id: Optional[str] = None
    action: str                       # check_in | notified | released
    timestamp: datetime
    recipient_phone: Optional[str] = None
    message_type: Optional[str] = None
    message_sent: Optional[bool] = None
    message_content: Optional[str] = None
    details: Optional[dict] = None


class ActionLogOut(ActionLogCreate):
    id: int

    class Config:
        from_attributes = True


class SmsHistoryEntry(BaseModel):
    message_type: str
    recipient_phone: Optional[str] = None
    message_content: Optional[str] = None
    timestamp: datetime
    message_sent: Optional[bool] = None
    operator_name: Optional[str] = None


class ActivityEntry(BaseModel):
    """One actions_log row joined with operator name and vehicle identity."""
    timestamp: datetime
    action: str
    message_type: Optional[str] = None
    recipient_phone: Optional[str] = None
    operator_name: Optional[str] = None
    registration: Optional[str] = None
    po_ref: Optional[str] = None


class ActivityFeedItem(BaseModel):
    time: str                # HH:MM
    registration: str
    po_ref: str
    action_text: str
    operator_name: str
    marker: str              # sms | action


class SmsStatsOut(BaseModel):
    total: int = 0
    by_type: dict[str, int] = {}
