# app/repositories/base.py
"""
Storage interface used by the workflow, reporting and sweep services.
One method per logical query so the backend can be swapped (local SQL
database or the hosted REST backend) without touching the services.
Implementations raise GatewayError on any backend failure.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional

from app.schemas.action_log import ActionLogCreate, ActionLogOut, ActivityEntry, SmsHistoryEntry
from app.schemas.vehicle import VehicleOut


class YardRepository(ABC):
    # ── vehicles ──────────────────────────────────────────────────────────
    @abstractmethod
    def insert_vehicle(self, values: dict) -> VehicleOut: ...

    @abstractmethod
    def get_vehicle(self, vehicle_id: str) -> Optional[VehicleOut]: ...

    @abstractmethod
    def update_vehicle(self, vehicle_id: str, patch: dict) -> Optional[VehicleOut]:
        """Returns the updated row, or None when no vehicle has that id."""

    @abstractmethod
    def list_vehicles(self, status: Optional[str] = None, limit: int = 200) -> list[VehicleOut]: ...

    # ── actions_log ───────────────────────────────────────────────────────
    @abstractmethod
    def insert_action_log(self, entry: ActionLogCreate) -> ActionLogOut: ...

    @abstractmethod
    def list_action_logs(self, limit: int = 50) -> list[ActionLogOut]:
        """Newest first."""

    @abstractmethod
    def list_sms_history(self, vehicle_id: str) -> list[SmsHistoryEntry]:
        """Rows with a message_type, oldest first."""

    @abstractmethod
    def list_sent_message_types(self, since: datetime) -> list[str]:
        """message_type of every sent SMS row at or after `since`."""

    @abstractmethod
    def list_activity(self, limit: int = 20) -> list[ActivityEntry]:
        """Newest first, joined with operator and vehicle."""

    # ── prebookings ───────────────────────────────────────────────────────
    @abstractmethod
    def consume_prebookings_before(self, day: date) -> int:
        """Mark unconsumed rows with expected_date < day. Returns rows touched."""

    @abstractmethod
    def consume_prebookings_due(self, day: date, before_hhmm: str) -> int:
        """Mark unconsumed rows on `day` with expected_time < before_hhmm."""

    # ── health ────────────────────────────────────────────────────────────
    @abstractmethod
    def ping(self) -> None: ...
