# app/schemas/vehicle.py
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class VehicleCheckIn(BaseModel):
    registration: str
    po_ref: Optional[str] = None
    pager_number: Optional[str] = None
    mobile_number: Optional[str] = None
    notes: Optional[str] = None
    quoted_minutes: int = Field(0, ge=0)
    is_export: bool = False


class VehicleOut(BaseModel):
    id: str
    registration: str
    po_ref: Optional[str] = None
    pager_number: Optional[str] = None
    mobile_number: Optional[str] = None
    notes: Optional[str] = None
    quoted_minutes: Optional[int] = None
    status: str
    check_in_time: datetime
    due_time: Optional[datetime] = None
    notify_time: Optional[datetime] = None
    release_time: Optional[datetime] = None
    operator_id: Optional[str] = None
    classification: Optional[str] = None

    class Config:
        from_attributes = True
