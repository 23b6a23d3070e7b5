from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from uuid_utils import UUID

from src.service.court_booking.app.dto.booking_search_query import BookingSearchQuery
from src.service.court_booking.domain.entity.booking_entity import Booking


class IBookingQueryRepo(ABC):
    """
    Repository interface for booking listings

    Implementations apply the column filters of `BookingSearchQuery` (ids,
    status, type, dates). Roster-derived filters, sorting and paging are done
    by the caller.
    """

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def find_by_user_id(self, *, user_id: int, query: BookingSearchQuery) -> List[Booking]:
        """Bookings the user created or is an active player of"""
        pass

    @abstractmethod
    async def find_public_group_matches(
        self, *, query: BookingSearchQuery, today: date
    ) -> List[Booking]:
        """Public PENDING/CONFIRMED bookings from `today` on, or on `query.date` when set"""
        pass

    @abstractmethod
    async def find_by_venue_ids(
        self, *, venue_ids: List[int], query: BookingSearchQuery
    ) -> List[Booking]:
        pass

    @abstractmethod
    async def find_occupying(self, *, court_id: int, date: date) -> List[Booking]:
        """Non-cancelled bookings for a court and day, ordered by start time"""
        pass
