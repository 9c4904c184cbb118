# app/repositories/rest.py
"""YardRepository backed by the hosted REST backend via PostgrestGateway."""

from datetime import date, datetime
from typing import Optional

from app.errors import GatewayError
from app.gateway.postgrest import PostgrestGateway, GatewayResult, eq, gte, lt, not_null
from app.repositories.base import YardRepository
from app.schemas.action_log import ActionLogCreate, ActionLogOut, ActivityEntry, SmsHistoryEntry
from app.schemas.vehicle import VehicleOut

VEHICLES = "vehicles"
ACTIONS_LOG = "actions_log"
PREBOOKINGS = "prebookings"

SMS_HISTORY_COLUMNS = """
    message_type,
    recipient_phone,
    message_content,
    timestamp,
    message_sent,
    operators(name)
"""

ACTIVITY_COLUMNS = """
    timestamp,
    action,
    message_type,
    recipient_phone,
    operators(name),
    vehicles(registration, po_ref)
"""


def _unwrap(result: GatewayResult):
    if not result.ok:
        raise GatewayError(result.error, result.status_code)
    return result.data or []


def _inserted(result: GatewayResult) -> dict:
    rows = _unwrap(result)
    if not rows:
        raise GatewayError("insert returned no row")
    return rows[0]


def _embedded(row: dict, relation: str, field: str):
    return (row.get(relation) or {}).get(field)


class RestYardRepository(YardRepository):
    def __init__(self, gateway: PostgrestGateway):
        self.gateway = gateway

    # ── vehicles ──────────────────────────────────────────────────────────
    def insert_vehicle(self, values: dict) -> VehicleOut:
        row = _inserted(self.gateway.insert(VEHICLES, values))
        return VehicleOut.model_validate(row)

    def get_vehicle(self, vehicle_id: str) -> Optional[VehicleOut]:
        rows = _unwrap(self.gateway.select(VEHICLES, filters=[eq("id", vehicle_id)], limit=1))
        return VehicleOut.model_validate(rows[0]) if rows else None

    def update_vehicle(self, vehicle_id: str, patch: dict) -> Optional[VehicleOut]:
        rows = _unwrap(self.gateway.update(VEHICLES, patch, [eq("id", vehicle_id)]))
        return VehicleOut.model_validate(rows[0]) if rows else None

    def list_vehicles(self, status: Optional[str] = None, limit: int = 200) -> list[VehicleOut]:
        filters = [eq("status", status)] if status else []
        rows = _unwrap(self.gateway.select(VEHICLES, filters=filters,
                                           order=[("check_in_time", False)], limit=limit))
        return [VehicleOut.model_validate(r) for r in rows]

    # ── actions_log ───────────────────────────────────────────────────────
    def insert_action_log(self, entry: ActionLogCreate) -> ActionLogOut:
        row = _inserted(self.gateway.insert(ACTIONS_LOG, entry.model_dump(exclude_none=True)))
        return ActionLogOut.model_validate(row)

    def list_action_logs(self, limit: int = 50) -> list[ActionLogOut]:
        rows = _unwrap(self.gateway.select(ACTIONS_LOG, order=[("timestamp", False), ("id", False)], limit=limit))
        return [ActionLogOut.model_validate(r) for r in rows]

    def list_sms_history(self, vehicle_id: str) -> list[SmsHistoryEntry]:
        rows = _unwrap(self.gateway.select(
            ACTIONS_LOG,
            columns=SMS_HISTORY_COLUMNS,
            filters=[eq("vehicle_id", vehicle_id), not_null("message_type")],
            order=[("timestamp", True), ("id", True)],
        ))
        return [
            SmsHistoryEntry(
                message_type=r["message_type"],
                recipient_phone=r.get("recipient_phone"),
                message_content=r.get("message_content"),
                timestamp=r["timestamp"],
                message_sent=r.get("message_sent"),
                operator_name=_embedded(r, "operators", "name"),
            )
            for r in rows
        ]

    def list_sent_message_types(self, since: datetime) -> list[str]:
        rows = _unwrap(self.gateway.select(
            ACTIONS_LOG,
            columns="message_type",
            filters=[eq("message_sent", True), gte("timestamp", since), not_null("message_type")],
        ))
        return [r.get("message_type") for r in rows]

    def list_activity(self, limit: int = 20) -> list[ActivityEntry]:
        rows = _unwrap(self.gateway.select(
            ACTIONS_LOG,
            columns=ACTIVITY_COLUMNS,
            order=[("timestamp", False), ("id", False)],
            limit=limit,
        ))
        return [
            ActivityEntry(
                timestamp=r["timestamp"],
                action=r["action"],
                message_type=r.get("message_type"),
                recipient_phone=r.get("recipient_phone"),
                operator_name=_embedded(r, "operators", "name"),
                registration=_embedded(r, "vehicles", "registration"),
                po_ref=_embedded(r, "vehicles", "po_ref"),
            )
            for r in rows
        ]

    # ── prebookings ───────────────────────────────────────────────────────
    def consume_prebookings_before(self, day: date) -> int:
        rows = _unwrap(self.gateway.update(
            PREBOOKINGS, {"consumed": True},
            [lt("expected_date", day), eq("consumed", False)],
        ))
        return len(rows)

    def consume_prebookings_due(self, day: date, before_hhmm: str) -> int:
        rows = _unwrap(self.gateway.update(
            PREBOOKINGS, {"consumed": True},
            [eq("expected_date", day), lt("expected_time", before_hhmm), eq("consumed", False)],
        ))
        return len(rows)

    def ping(self) -> None:
        _unwrap(self.gateway.select(VEHICLES, columns="id", limit=1))
