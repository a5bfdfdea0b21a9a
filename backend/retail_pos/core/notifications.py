"""
Alert side channel

Engines report user-facing outcomes here (most importantly failed background
writes). Presentation layers subscribe to `alerts` and render the latest one.
"""
import logging
import uuid
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from retail_pos.core.events import BehaviorSubject

logger = logging.getLogger(__name__)

AlertType = Literal["success", "error", "warning", "info"]


class Alert(BaseModel):
    """A single side-channel message"""
    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:9])
    type: AlertType
    title: str
    message: str
    created_at: datetime = Field(default_factory=datetime.now)


class AlertService:
    """Publishes alerts and keeps a bounded history of them"""

    def __init__(self, history_size: int = 50):
        self.alerts: BehaviorSubject[Optional[Alert]] = BehaviorSubject(None)
        self.history_size = history_size
        self._history: List[Alert] = []

    def success(self, title: str, message: str) -> Alert:
        return self._show("success", title, message)

    def error(self, title: str, message: str) -> Alert:
        return self._show("error", title, message)

    def warning(self, title: str, message: str) -> Alert:
        return self._show("warning", title, message)

    def info(self, title: str, message: str) -> Alert:
        return self._show("info", title, message)

    def clear(self) -> None:
        self.alerts.next(None)

    @property
    def history(self) -> List[Alert]:
        return list(self._history)

    def _show(self, alert_type: AlertType, title: str, message: str) -> Alert:
        alert = Alert(type=alert_type, title=title, message=message)
        if alert_type == "error":
            logger.error(f"{title}: {message}")
        else:
            logger.debug(f"{alert_type} alert - {title}: {message}")

        self._history = (self._history + [alert])[-self.history_size:]
        self.alerts.next(alert)
        return alert
