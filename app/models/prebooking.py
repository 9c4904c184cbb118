# app/models/prebooking.py
"""Expected arrivals. Marked consumed on arrival or by the expiry sweep."""

from sqlalchemy import Column, Integer, String, Date, Time, Boolean
from app.database import Base


class Prebooking(Base):
    __tablename__ = "prebookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    registration = Column(String(20))
    po_ref = Column(String(100))
    expected_date = Column(Date, nullable=False, index=True)
    expected_time = Column(Time)
    consumed = Column(Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<Prebooking {self.id} {self.expected_date} {self.expected_time} consumed={self.consumed}>"
