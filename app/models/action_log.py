# app/models/action_log.py
"""
Append-only audit trail. Each workflow transition writes one action row and
one simulated-SMS row (same action, with the message_* columns filled).
"""

from sqlalchemy import Column, Integer, String, DateTime, Text, Boolean, JSON, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base


class ActionLog(Base):
    __tablename__ = "actions_log"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(String(36), ForeignKey("vehicles.id"), nullable=False, index=True)
    operator_id = Column(String(36), ForeignKey("operators.id"))
    action = Column(String(20), nullable=False)      # check_in | notified | released
    timestamp = Column(DateTime, nullable=False, index=True)
    # SMS simulation
    recipient_phone = Column(String(50))
    message_type = Column(String(20))
    message_sent = Column(Boolean)
    message_content = Column(Text)
    details = Column(JSON)

    operator = relationship("Operator", lazy="joined")
    vehicle = relationship("Vehicle", lazy="joined")

    def __repr__(self):
        return f"<ActionLog {self.id} vehicle={self.vehicle_id} action={self.action}>"
