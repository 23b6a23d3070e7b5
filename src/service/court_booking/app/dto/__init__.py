"""Application layer DTOs"""

from src.service.court_booking.app.dto.booking_search_query import (
    BookingSearchQuery,
    BookingSortField,
    SortOrder,
)
from src.service.court_booking.app.dto.booking_view import (
    BookingDetail,
    CourtAvailability,
    CourtSummary,
    GroupMatch,
    InvitePlayersResult,
    JoinBookingResult,
    OccupiedInterval,
    Page,
    PlayerDetail,
    UserSummary,
    VenueSummary,
)

__all__ = [
    'BookingDetail',
    'BookingSearchQuery',
    'BookingSortField',
    'CourtAvailability',
    'CourtSummary',
    'GroupMatch',
    'InvitePlayersResult',
    'JoinBookingResult',
    'OccupiedInterval',
    'Page',
    'PlayerDetail',
    'SortOrder',
    'UserSummary',
    'VenueSummary',
]
