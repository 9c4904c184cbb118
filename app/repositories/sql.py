# app/repositories/sql.py
"""YardRepository backed by a SQLAlchemy session (local PostgreSQL / SQLite)."""

from datetime import date, datetime, time
from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import GatewayError
from app.models.action_log import ActionLog
from app.models.prebooking import Prebooking
from app.models.vehicle import Vehicle
from app.repositories.base import YardRepository
from app.schemas.action_log import ActionLogCreate, ActionLogOut, ActivityEntry, SmsHistoryEntry
from app.schemas.vehicle import VehicleOut
from app.utils.logger import get_logger

logger = get_logger(__name__)


class SqlYardRepository(YardRepository):
    def __init__(self, db: Session):
        self.db = db

    def _fail(self, what: str, exc: SQLAlchemyError) -> GatewayError:
        self.db.rollback()
        logger.error(f"[SQL] {what} failed: {exc}")
        return GatewayError(str(exc))

    # ── vehicles ──────────────────────────────────────────────────────────
    def insert_vehicle(self, values: dict) -> VehicleOut:
        vehicle = Vehicle(**values)
        try:
            self.db.add(vehicle)
            self.db.commit()
            self.db.refresh(vehicle)
        except SQLAlchemyError as e:
            raise self._fail("insert vehicle", e)
        return VehicleOut.model_validate(vehicle)

    def get_vehicle(self, vehicle_id: str) -> Optional[VehicleOut]:
        try:
            vehicle = self.db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()
        except SQLAlchemyError as e:
            raise self._fail("select vehicle", e)
        return VehicleOut.model_validate(vehicle) if vehicle else None

    def update_vehicle(self, vehicle_id: str, patch: dict) -> Optional[VehicleOut]:
        try:
            vehicle = self.db.query(Vehicle).filter(Vehicle.id == vehicle_id).first()
            if not vehicle:
                return None
            for key, value in patch.items():
                setattr(vehicle, key, value)
            self.db.commit()
            self.db.refresh(vehicle)
        except SQLAlchemyError as e:
            raise self._fail("update vehicle", e)
        return VehicleOut.model_validate(vehicle)

    def list_vehicles(self, status: Optional[str] = None, limit: int = 200) -> list[VehicleOut]:
        try:
            q = self.db.query(Vehicle)
            if status:
                q = q.filter(Vehicle.status == status)
            rows = q.order_by(Vehicle.check_in_time.desc()).limit(limit).all()
        except SQLAlchemyError as e:
            raise self._fail("list vehicles", e)
        return [VehicleOut.model_validate(v) for v in rows]

    # ── actions_log ───────────────────────────────────────────────────────
    def insert_action_log(self, entry: ActionLogCreate) -> ActionLogOut:
        row = ActionLog(**entry.model_dump())
        try:
            self.db.add(row)
            self.db.commit()
            self.db.refresh(row)
        except SQLAlchemyError as e:
            raise self._fail("insert action log", e)
        return ActionLogOut.model_validate(row)

    def list_action_logs(self, limit: int = 50) -> list[ActionLogOut]:
        try:
            rows = (
                self.db.query(ActionLog)
                .order_by(ActionLog.timestamp.desc(), ActionLog.id.desc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            raise self._fail("list action logs", e)
        return [ActionLogOut.model_validate(r) for r in rows]

    def list_sms_history(self, vehicle_id: str) -> list[SmsHistoryEntry]:
        try:
            rows = (
                self.db.query(ActionLog)
                .filter(ActionLog.vehicle_id == vehicle_id, ActionLog.message_type != None)  # noqa: E711
                .order_by(ActionLog.timestamp.asc(), ActionLog.id.asc())
                .all()
            )
        except SQLAlchemyError as e:
            raise self._fail("select sms history", e)
        return [
            SmsHistoryEntry(
                message_type=r.message_type,
                recipient_phone=r.recipient_phone,
                message_content=r.message_content,
                timestamp=r.timestamp,
                message_sent=r.message_sent,
                operator_name=r.operator.name if r.operator else None,
            )
            for r in rows
        ]

    def list_sent_message_types(self, since: datetime) -> list[str]:
        try:
            rows = (
                self.db.query(ActionLog.message_type)
                .filter(ActionLog.message_sent == True, ActionLog.timestamp >= since)  # noqa: E712
                .filter(ActionLog.message_type != None)  # noqa: E711
                .all()
            )
        except SQLAlchemyError as e:
            raise self._fail("select sms stats", e)
        return [r[0] for r in rows]

    def list_activity(self, limit: int = 20) -> list[ActivityEntry]:
        try:
            rows = (
                self.db.query(ActionLog)
                .order_by(ActionLog.timestamp.desc(), ActionLog.id.desc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            raise self._fail("select activity", e)
        return [
            ActivityEntry(
                timestamp=r.timestamp,
                action=r.action,
                message_type=r.message_type,
                recipient_phone=r.recipient_phone,
                operator_name=r.operator.name if r.operator else None,
                registration=r.vehicle.registration if r.vehicle else None,
                po_ref=r.vehicle.po_ref if r.vehicle else None,
            )
            for r in rows
        ]

    # ── prebookings ───────────────────────────────────────────────────────
    def consume_prebookings_before(self, day: date) -> int:
        try:
            count = (
                self.db.query(Prebooking)
                .filter(Prebooking.expected_date < day, Prebooking.consumed == False)  # noqa: E712
                .update({Prebooking.consumed: True}, synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("expire prebookings by date", e)
        return count

    def consume_prebookings_due(self, day: date, before_hhmm: str) -> int:
        cutoff = time.fromisoformat(before_hhmm)
        try:
            count = (
                self.db.query(Prebooking)
                .filter(
                    Prebooking.expected_date == day,
                    Prebooking.expected_time < cutoff,
                    Prebooking.consumed == False,  # noqa: E712
                )
                .update({Prebooking.consumed: True}, synchronize_session=False)
            )
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("expire prebookings by time", e)
        return count

    def ping(self) -> None:
        try:
            self.db.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise self._fail("ping", e)
