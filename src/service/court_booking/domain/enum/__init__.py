"""Court Booking Domain Enums"""

from src.service.court_booking.domain.enum.booking_kind import (
    BookingType,
    GroupType,
    PaymentStatus,
)
from src.service.court_booking.domain.enum.booking_status import BookingStatus
from src.service.court_booking.domain.enum.notification_type import NotificationType
from src.service.court_booking.domain.enum.roster_status import InviteStatus, PlayerStatus

__all__ = [
    'BookingStatus',
    'BookingType',
    'GroupType',
    'InviteStatus',
    'NotificationType',
    'PaymentStatus',
    'PlayerStatus',
]
