from overtime_counter.core.config import settings
from overtime_counter.notifications import NotificationHub
from overtime_counter.service import OvertimeService

_service = OvertimeService(
    notifications=NotificationHub(queue_size=settings.subscriber_queue_size),
    user_id=settings.default_user_id,
)


def get_service() -> OvertimeService:
    return _service
