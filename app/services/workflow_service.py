# app/services/workflow_service.py
"""
Gatehouse workflow: check-in → notify → release.

Each step:
  1. writes the vehicle state change (must succeed, otherwise nothing else runs)
  2. writes the action row to actions_log
  3. builds the SMS text and writes the simulated-SMS row to actions_log
  4. publishes presentation events (QR screen, SMS simulator, list refresh)

Operator identity arrives explicitly in an OperatorContext. Nothing is
retried; a failed vehicle or action write raises WorkflowError. Two operators
acting on the same vehicle at once are not coordinated (last write wins).
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from app.errors import GatewayError, InvalidTransitionError, VehicleNotFoundError, WorkflowError
from app.models.vehicle import STATUS_NOTIFIED, STATUS_PARKED, STATUS_RELEASED
from app.repositories.base import YardRepository
from app.schemas.action_log import ActionLogCreate
from app.schemas.vehicle import VehicleCheckIn, VehicleOut
from app.services.message_templates import MISSING_VALUE, generate_message_content
from app.services.presentation import (
    PresentationBus,
    QrDisplayRequested,
    ReadModelRefreshRequested,
    SmsSimulatorRequested,
)
from app.utils.logger import get_logger
from app.utils.time_utils import duration_minutes, format_duration, utcnow

logger = get_logger(__name__)

ACTION_CHECK_IN = "check_in"
ACTION_NOTIFIED = "notified"
ACTION_RELEASED = "released"

# target status → statuses it may be entered from
ALLOWED_TRANSITIONS = {
    STATUS_NOTIFIED: {STATUS_PARKED},
    STATUS_RELEASED: {STATUS_PARKED, STATUS_NOTIFIED},
}

SMS_DETAILS = {"sms_simulated": True, "sent_via": "simulator"}


@dataclass(frozen=True)
class OperatorContext:
    operator_id: Optional[str] = None


@dataclass
class WorkflowOutcome:
    vehicle_id: str
    status: str
    message: str
    sms_logged: bool
    events: list = field(default_factory=list)


def contact_details(vehicle: Optional[VehicleOut]) -> tuple[str, str]:
    """(phone, po_ref) with mobile → pager → N/A fallback."""
    if vehicle is None:
        return MISSING_VALUE, MISSING_VALUE
    phone = vehicle.mobile_number or vehicle.pager_number or MISSING_VALUE
    return phone, vehicle.po_ref or MISSING_VALUE


def log_sms(repo: YardRepository, vehicle_id: str, message_type: str, phone: str,
          message_content: str, ctx: OperatorContext, now: datetime, sent: bool = True) -> bool:
    """Write the simulated-SMS audit row. Failures are logged and reported as False."""
    try:
        repo.insert_action_log(ActionLogCreate(
            vehicle_id=vehicle_id,
            operator_id=ctx.operator_id,
            action=message_type,
            timestamp=now,
            recipient_phone=phone,
            message_type=message_type,
            message_sent=sent,
            message_content=message_content,
            details=dict(SMS_DETAILS),
        ))
    except GatewayError as e:
        logger.error(f"[SMS] Failed to log {message_type} SMS for vehicle {vehicle_id}: {e.message}")
        return False
    logger.info(f"[SMS] {message_type} → {phone} (vehicle {vehicle_id})")
    return True


def _write_action(repo: YardRepository, vehicle_id: str, action: str, ctx: OperatorContext, now: datetime):
    try:
        repo.insert_action_log(ActionLogCreate(
            vehicle_id=vehicle_id, action=action, timestamp=now, operator_id=ctx.operator_id,
        ))
    except GatewayError as e:
        logger.error(f"[{action}] Action log write failed for vehicle {vehicle_id}: {e.message}")
        raise WorkflowError(f"Could not record {action} for vehicle {vehicle_id}: {e.message}") from e


def _load_for_transition(repo: YardRepository, vehicle_id: str, target: str) -> VehicleOut:
    try:
        vehicle = repo.get_vehicle(vehicle_id)
    except GatewayError as e:
        logger.error(f"[{target}] Could not read vehicle {vehicle_id}: {e.message}")
        raise WorkflowError(f"Could not read vehicle {vehicle_id}: {e.message}") from e
    if vehicle is None:
        logger.warning(f"[{target}] Unknown vehicle {vehicle_id}")
        raise VehicleNotFoundError(vehicle_id)
    if vehicle.status not in ALLOWED_TRANSITIONS[target]:
        logger.warning(f"[{target}] Vehicle {vehicle_id} is '{vehicle.status}', rejected")
        raise InvalidTransitionError(vehicle_id, vehicle.status, target)
    return vehicle


def _apply_transition(repo: YardRepository, vehicle_id: str, target: str, patch: dict) -> VehicleOut:
    try:
        updated = repo.update_vehicle(vehicle_id, patch)
    except GatewayError as e:
        logger.error(f"[{target}] Vehicle update failed for {vehicle_id}: {e.message}")
        raise WorkflowError(f"Could not update vehicle {vehicle_id}: {e.message}") from e
    if updated is None:
        raise VehicleNotFoundError(vehicle_id)
    return updated


def _publish(bus: PresentationBus, events: list) -> list:
    for event in events:
        bus.publish(event)
    return events


def submit_vehicle(repo: YardRepository, body: VehicleCheckIn, ctx: OperatorContext,
                   bus: PresentationBus, now: datetime = None) -> WorkflowOutcome:
    now = now or utcnow()
    try:
        vehicle = repo.insert_vehicle({
            "registration": body.registration,
            "po_ref": body.po_ref,
            "pager_number": body.pager_number,
            "mobile_number": body.mobile_number,
            "notes": body.notes,
            "quoted_minutes": body.quoted_minutes,
            "check_in_time": now,
            "due_time": now + timedelta(minutes=body.quoted_minutes),
            "status": STATUS_PARKED,
            "operator_id": ctx.operator_id,
            "classification": "export" if body.is_export else "normal",
        })
    except GatewayError as e:
        logger.error(f"[check_in] Vehicle insert failed for {body.registration}: {e.message}")
        raise WorkflowError(f"Could not check in {body.registration}: {e.message}") from e

    logger.info(f"[check_in] {vehicle.registration} parked as {vehicle.id} (quoted {body.quoted_minutes} min)")
    _write_action(repo, vehicle.id, ACTION_CHECK_IN, ctx, now)

    phone = body.pager_number or MISSING_VALUE
    po = body.po_ref or MISSING_VALUE
    content = generate_message_content(ACTION_CHECK_IN, {"phone": phone, "po": po, "quoted": body.quoted_minutes})
    sms_logged = log_sms(repo, vehicle.id, ACTION_CHECK_IN, phone, content, ctx, now)

    events = _publish(bus, [
        QrDisplayRequested(vehicle_id=vehicle.id),
        SmsSimulatorRequested(vehicle_id=vehicle.id, message_kind=ACTION_CHECK_IN, phone=phone,
                              po_ref=po, quoted_minutes=body.quoted_minutes),
    ])
    return WorkflowOutcome(vehicle.id, STATUS_PARKED, content, sms_logged, events)


def notify(repo: YardRepository, vehicle_id: str, ctx: OperatorContext,
           bus: PresentationBus, now: datetime = None) -> WorkflowOutcome:
    now = now or utcnow()
    _load_for_transition(repo, vehicle_id, STATUS_NOTIFIED)
    vehicle = _apply_transition(repo, vehicle_id, STATUS_NOTIFIED,
                                {"status": STATUS_NOTIFIED, "notify_time": now})
    logger.info(f"[notified] {vehicle.registration} ({vehicle_id})")

    phone, po = contact_details(vehicle)
    _write_action(repo, vehicle_id, ACTION_NOTIFIED, ctx, now)
    content = generate_message_content(ACTION_NOTIFIED, {"po": po})
    sms_logged = log_sms(repo, vehicle_id, ACTION_NOTIFIED, phone, content, ctx, now)

    events = _publish(bus, [
        SmsSimulatorRequested(vehicle_id=vehicle_id, message_kind=ACTION_NOTIFIED, phone=phone, po_ref=po),
        ReadModelRefreshRequested(),
    ])
    return WorkflowOutcome(vehicle_id, STATUS_NOTIFIED, content, sms_logged, events)


def release(repo: YardRepository, vehicle_id: str, ctx: OperatorContext,
            bus: PresentationBus, now: datetime = None) -> WorkflowOutcome:
    now = now or utcnow()
    # check_in_time is needed for the duration, so read before writing
    vehicle = _load_for_transition(repo, vehicle_id, STATUS_RELEASED)
    _apply_transition(repo, vehicle_id, STATUS_RELEASED,
                      {"status": STATUS_RELEASED, "release_time": now})

    duration = format_duration(duration_minutes(vehicle.check_in_time, now))
    logger.info(f"[released] {vehicle.registration} ({vehicle_id}) after {duration}")

    phone, po = contact_details(vehicle)
    _write_action(repo, vehicle_id, ACTION_RELEASED, ctx, now)
    content = generate_message_content(ACTION_RELEASED, {"po": po, "duration": duration})
    sms_logged = log_sms(repo, vehicle_id, ACTION_RELEASED, phone, content, ctx, now)

    events = _publish(bus, [
        SmsSimulatorRequested(vehicle_id=vehicle_id, message_kind=ACTION_RELEASED, phone=phone,
                              po_ref=po, duration=duration),
        ReadModelRefreshRequested(),
    ])
    return WorkflowOutcome(vehicle_id, STATUS_RELEASED, content, sms_logged, events)
