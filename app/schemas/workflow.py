# app/schemas/workflow.py
from pydantic import BaseModel
from typing import Any, Optional


class PresentationEventOut(BaseModel):
    kind: str                # qr_display | sms_simulator | refresh
    payload: dict[str, Any]


class WorkflowOutcomeOut(BaseModel):
    vehicle_id: str
    status: str
    message: str
    sms_logged: bool
    events: list[PresentationEventOut] = []


class SweepOut(BaseModel):
    ok: bool
    message: Optional[str] = None
    error: Optional[str] = None
