# app/models/vehicle.py
"""
Yard visits. One row per lorry check-in, moved through
parked → notified → released by the workflow service.
"""

import uuid
from sqlalchemy import Column, Integer, String, DateTime, Text
from app.database import Base

STATUS_PARKED = "parked"
STATUS_NOTIFIED = "notified"
STATUS_RELEASED = "released"


def _new_id() -> str:
    return str(uuid.uuid4())


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(String(36), primary_key=True, default=_new_id)
    registration = Column(String(20), nullable=False, index=True)
    po_ref = Column(String(100))
    pager_number = Column(String(50))
    mobile_number = Column(String(50))
    notes = Column(Text)
    quoted_minutes = Column(Integer)
    status = Column(String(20), nullable=False, default=STATUS_PARKED, index=True)  # parked | notified | released
    check_in_time = Column(DateTime, nullable=False, index=True)
    due_time = Column(DateTime)
    notify_time = Column(DateTime)
    release_time = Column(DateTime)
    operator_id = Column(String(36))         # FK to operators.id
    classification = Column(String(20), default="normal")  # normal | export

    def __repr__(self):
        return f"<Vehicle {self.registration} status={self.status}>"
