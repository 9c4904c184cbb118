# app/errors.py
"""Exceptions raised by the gateway, repositories and workflow services."""


class GatewayError(Exception):
    """Backend read or write failed (network error or constraint violation)."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class WorkflowError(Exception):
    """A check-in / notify / release step could not complete."""


class VehicleNotFoundError(WorkflowError):
    def __init__(self, vehicle_id: str):
        super().__init__(f"Vehicle {vehicle_id} not found")
        self.vehicle_id = vehicle_id


class InvalidTransitionError(WorkflowError):
    def __init__(self, vehicle_id: str, current: str, target: str):
        super().__init__(f"Vehicle {vehicle_id} cannot move from '{current}' to '{target}'")
        self.vehicle_id = vehicle_id
        self.current = current
        self.target = target
