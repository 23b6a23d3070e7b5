"""
Notification Sink

Stores one row per notification in the `notification` table. The push and
inbox services read from there.
"""

from typing import AsyncContextManager, Callable
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.court_booking.app.interface.i_notification_sink import INotificationSink
from src.service.court_booking.domain.value_object.notification_request import (
    NotificationRequest,
)
from src.service.court_booking.driven_adapter.model.notification_model import NotificationModel


class NotificationSinkImpl(INotificationSink):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def notify(self, *, request: NotificationRequest) -> None:
        async with self.session_factory() as session:
            session.add(
                NotificationModel(
                    user_id=request.user_id,
                    type=request.kind.value,
                    title=request.title,
                    message=request.message,
                    booking_id=uuid.UUID(str(request.booking_id)),
                    related_user_id=request.related_user_id,
                    payload=request.metadata,
                )
            )
            await session.commit()
