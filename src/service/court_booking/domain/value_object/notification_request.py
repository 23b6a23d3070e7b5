from typing import Any, Optional

import attrs
from uuid_utils import UUID

from src.service.court_booking.domain.enum.notification_type import NotificationType


@attrs.frozen
class NotificationRequest:
    user_id: int
    kind: NotificationType
    booking_id: UUID
    title: str
    message: str
    related_user_id: Optional[int] = None
    metadata: dict[str, Any] = attrs.field(factory=dict)
