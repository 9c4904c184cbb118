# app/services/presentation.py
"""
Events the workflow raises for the UI: show the QR screen, open the SMS
simulator, reload the vehicle and log lists. The workflow never touches a
window itself; callers subscribe to a PresentationBus and react.
"""

from dataclasses import dataclass, field, asdict
from typing import Callable, Optional

from app.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class QrDisplayRequested:
    vehicle_id: str
    kind: str = field(default="qr_display", init=False)


@dataclass(frozen=True)
class SmsSimulatorRequested:
    vehicle_id: str
    message_kind: str
    phone: str
    po_ref: str
    quoted_minutes: Optional[int] = None
    duration: Optional[str] = None
    kind: str = field(default="sms_simulator", init=False)


@dataclass(frozen=True)
class ReadModelRefreshRequested:
    views: tuple = ("vehicles", "logs")
    kind: str = field(default="refresh", init=False)


def event_payload(event) -> dict:
    payload = asdict(event)
    payload.pop("kind")
    return payload


class PresentationBus:
    """Fan-out to subscribers. Also keeps every published event for the caller."""

    def __init__(self):
        self._subscribers: list[Callable] = []
        self.published: list = []

    def subscribe(self, callback: Callable) -> None:
        self._subscribers.append(callback)

    def publish(self, event) -> None:
        self.published.append(event)
        for callback in self._subscribers:
            try:
                callback(event)
            except Exception as e:
                logger.error(f"Presentation subscriber failed on {event.kind}: {e}", exc_info=True)
