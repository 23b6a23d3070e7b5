"""
Booking Command Repository Interface

Writes go through `save` with the version the booking was loaded at, so two
concurrent mutations of the same booking can never both succeed.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from uuid_utils import UUID

from src.service.court_booking.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        pass

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """
        Insert a new booking

        Returns:
            The stored booking (version 1)
        """
        pass

    @abstractmethod
    async def save(self, *, booking: Booking, expected_version: int) -> Booking:
        """
        Conditionally overwrite a booking

        Args:
            booking: Booking with the new state
            expected_version: Version the caller read before mutating

        Returns:
            The stored booking with its version incremented

        Raises:
            ConcurrentModificationError: Someone else saved the booking first
        """
        pass

    @abstractmethod
    async def find_by_court_and_date(self, *, court_id: int, date: date) -> List[Booking]:
        """PENDING and CONFIRMED bookings on a court for one day (conflict check input)"""
        pass
