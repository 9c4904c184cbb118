# app/routers/vehicles.py
"""Gatehouse workflow endpoints: check-in, notify, release, plus vehicle reads."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from app.dependencies import get_operator_context, get_repository
from app.repositories.base import YardRepository
from app.schemas.action_log import SmsHistoryEntry
from app.schemas.vehicle import VehicleCheckIn, VehicleOut
from app.schemas.workflow import PresentationEventOut, WorkflowOutcomeOut
from app.services import reporting_service, workflow_service
from app.services.presentation import PresentationBus, event_payload
from app.services.workflow_service import OperatorContext, WorkflowOutcome

router = APIRouter()


def _to_out(outcome: WorkflowOutcome) -> WorkflowOutcomeOut:
    return WorkflowOutcomeOut(
        vehicle_id=outcome.vehicle_id,
        status=outcome.status,
        message=outcome.message,
        sms_logged=outcome.sms_logged,
        events=[PresentationEventOut(kind=e.kind, payload=event_payload(e)) for e in outcome.events],
    )


@router.post("/vehicles", response_model=WorkflowOutcomeOut, status_code=status.HTTP_201_CREATED,
             summary="Check a vehicle in")
def check_in_vehicle(
    body: VehicleCheckIn,
    repo: YardRepository = Depends(get_repository),
    ctx: OperatorContext = Depends(get_operator_context),
):
    """Parks the vehicle, logs the check-in and its SMS, returns the QR + simulator events."""
    outcome = workflow_service.submit_vehicle(repo, body, ctx, PresentationBus())
    return _to_out(outcome)


@router.post("/vehicles/{vehicle_id}/notify", response_model=WorkflowOutcomeOut, summary="Call a vehicle to the bay")
def notify_vehicle(
    vehicle_id: str,
    repo: YardRepository = Depends(get_repository),
    ctx: OperatorContext = Depends(get_operator_context),
):
    outcome = workflow_service.notify(repo, vehicle_id, ctx, PresentationBus())
    return _to_out(outcome)


@router.post("/vehicles/{vehicle_id}/release", response_model=WorkflowOutcomeOut, summary="Release a vehicle")
def release_vehicle(
    vehicle_id: str,
    repo: YardRepository = Depends(get_repository),
    ctx: OperatorContext = Depends(get_operator_context),
):
    outcome = workflow_service.release(repo, vehicle_id, ctx, PresentationBus())
    return _to_out(outcome)


@router.get("/vehicles", response_model=list[VehicleOut], summary="Vehicles on site, newest first")
def get_vehicles(status: Optional[str] = None, repo: YardRepository = Depends(get_repository)):
    return reporting_service.list_vehicles(repo, status=status)


@router.get("/vehicles/{vehicle_id}", response_model=VehicleOut)
def get_vehicle(vehicle_id: str, repo: YardRepository = Depends(get_repository)):
    vehicle = repo.get_vehicle(vehicle_id)
    if not vehicle:
        raise HTTPException(status_code=404, detail=f"Vehicle '{vehicle_id}' not found")
    return vehicle


@router.get("/vehicles/{vehicle_id}/sms-history", response_model=list[SmsHistoryEntry],
            summary="Simulated SMS timeline for one vehicle")
def get_sms_history(vehicle_id: str, repo: YardRepository = Depends(get_repository)):
    return reporting_service.get_vehicle_sms_history(repo, vehicle_id)
