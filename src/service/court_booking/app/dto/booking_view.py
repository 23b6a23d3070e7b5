"""Read models returned by the booking use cases"""

from datetime import date as date_type, datetime
from decimal import Decimal
from typing import Generic, List, Optional, TypeVar

import attrs
from uuid_utils import UUID

from src.service.court_booking.domain.entity.booking_entity import Booking
from src.service.court_booking.domain.enum.booking_status import BookingStatus


UNKNOWN = 'Unknown'

_T = TypeVar('_T')


@attrs.frozen
class CourtSummary:
    id: int
    name: str = UNKNOWN
    size: str = UNKNOWN
    hourly_rate: Optional[Decimal] = None
    peak_hour_rate: Optional[Decimal] = None


@attrs.frozen
class VenueSummary:
    id: int
    name: str = UNKNOWN
    location: str = UNKNOWN


@attrs.frozen
class UserSummary:
    id: int
    full_name: str = UNKNOWN
    profile_image: Optional[str] = None


@attrs.frozen
class PlayerDetail:
    user: UserSummary
    joined_at: datetime
    is_admin: bool


@attrs.frozen
class BookingDetail:
    booking: Booking
    court: CourtSummary
    venue: VenueSummary
    creator: UserSummary
    players_details: List[PlayerDetail]

    @property
    def current_players(self) -> int:
        return self.booking.active_player_count

    @property
    def available_slots(self) -> int:
        return self.booking.available_slots


@attrs.frozen
class GroupMatch:
    """Listing row for an open public match"""

    booking_id: UUID
    court_id: int
    court_name: str
    venue_id: int
    venue_name: str
    venue_location: str
    creator_id: int
    creator_name: str
    date: date_type
    start_time: str
    end_time: str
    booking_type: str
    status: BookingStatus
    max_players: int
    current_players: int
    available_slots: int
    total_amount: Decimal
    created_at: Optional[datetime]


@attrs.frozen
class JoinBookingResult:
    booking: BookingDetail
    auto_confirmed: bool
    message: str


@attrs.frozen
class InvitePlayersResult:
    booking: BookingDetail
    invited_user_ids: List[int]
    skipped_user_ids: List[int]


@attrs.frozen
class OccupiedInterval:
    booking_id: UUID
    start_time: str
    end_time: str
    status: BookingStatus


@attrs.frozen
class CourtAvailability:
    court_id: int
    date: date_type
    opening_time: Optional[str]
    closing_time: Optional[str]
    occupied: List[OccupiedInterval]


@attrs.frozen
class Page(Generic[_T]):
    items: List[_T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return -(-self.total // self.limit) if self.limit else 0
