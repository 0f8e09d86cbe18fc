from __future__ import annotations
from typing import Dict

from .core.logging import get_logger
from .models import OvertimeTracking

DEFAULT_USER_ID = "default"

logger = get_logger(__name__)


class OvertimeTracker:
    """Running weekly/yearly overtime totals per user.

    Totals accumulate for the lifetime of the process; there is no calendar
    rollover.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, OvertimeTracking] = {}

    def record_completion(self, user_id: str, hours: float) -> OvertimeTracking:
        if hours < 0:
            raise ValueError("Committed overtime hours cannot be negative")
        entry = self._entries.setdefault(user_id, OvertimeTracking())
        entry.weekly += hours
        entry.yearly += hours
        logger.info("overtime_recorded", user_id=user_id, hours=hours, weekly=entry.weekly, yearly=entry.yearly)
        return self.get_tracking(user_id)

    def get_tracking(self, user_id: str = DEFAULT_USER_ID) -> OvertimeTracking:
        entry = self._entries.get(user_id)
        if entry is None:
            return OvertimeTracking()
        return OvertimeTracking(weekly=entry.weekly, yearly=entry.yearly)
