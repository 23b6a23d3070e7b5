"""Court Booking Value Objects"""

from src.service.court_booking.domain.value_object.directory_info import (
    CourtInfo,
    UserInfo,
    VenueInfo,
)
from src.service.court_booking.domain.value_object.notification_request import (
    NotificationRequest,
)
from src.service.court_booking.domain.value_object.time_slot import TimeSlot, to_minutes

__all__ = [
    'CourtInfo',
    'NotificationRequest',
    'TimeSlot',
    'UserInfo',
    'VenueInfo',
    'to_minutes',
]
