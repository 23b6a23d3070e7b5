"""Application layer interfaces (Ports)"""

from src.service.court_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.court_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.court_booking.app.interface.i_court_directory import ICourtDirectory
from src.service.court_booking.app.interface.i_notification_sink import INotificationSink
from src.service.court_booking.app.interface.i_slot_lock import ISlotLock
from src.service.court_booking.app.interface.i_user_directory import IUserDirectory

__all__ = [
    'IBookingCommandRepo',
    'IBookingQueryRepo',
    'ICourtDirectory',
    'INotificationSink',
    'ISlotLock',
    'IUserDirectory',
]
