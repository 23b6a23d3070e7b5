from abc import ABC, abstractmethod

from src.service.court_booking.domain.value_object.notification_request import (
    NotificationRequest,
)


class INotificationSink(ABC):
    """Delivers one notification. Callers treat failures as non-fatal."""

    @abstractmethod
    async def notify(self, *, request: NotificationRequest) -> None:
        pass
