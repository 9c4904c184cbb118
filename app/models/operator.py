# app/models/operator.py
"""Gatehouse operators. Provisioned outside this service, read-only here."""

from sqlalchemy import Column, String
from app.database import Base


class Operator(Base):
    __tablename__ = "operators"

    id = Column(String(36), primary_key=True)
    name = Column(String(200), nullable=False)

    def __repr__(self):
        return f"<Operator {self.id} name={self.name}>"
