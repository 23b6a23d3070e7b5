from collections import defaultdict
from contextlib import asynccontextmanager
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import AsyncIterator, Callable, Dict, List, Optional
from unittest.mock import AsyncMock, Mock

import anyio
import attrs
import uuid_utils
from uuid_utils import UUID

from src.platform.exception.exceptions import ConcurrentModificationError
from src.service.court_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.court_booking.app.interface.i_court_directory import ICourtDirectory
from src.service.court_booking.app.interface.i_notification_sink import INotificationSink
from src.service.court_booking.app.interface.i_slot_lock import ISlotLock
from src.service.court_booking.app.interface.i_user_directory import IUserDirectory
from src.service.court_booking.app.service.booking_detail_assembler import (
    BookingDetailAssembler,
)
from src.service.court_booking.app.service.notification_dispatcher import (
    NotificationDispatcher,
)
from src.service.court_booking.domain.entity.booking_entity import Booking
from src.service.court_booking.domain.enum.booking_kind import BookingType, GroupType
from src.service.court_booking.domain.enum.booking_status import BookingStatus
from src.service.court_booking.domain.value_object.directory_info import (
    CourtInfo,
    UserInfo,
    VenueInfo,
)
from src.service.court_booking.domain.value_object.notification_request import (
    NotificationRequest,
)
from src.service.court_booking.domain.value_object.time_slot import TimeSlot


OWNER_ID = 100
OTHER_OWNER_ID = 200
CREATOR_ID = 7
PLAYER_ID = 8
ANOTHER_PLAYER_ID = 9
VENUE_ID = 1
OTHER_VENUE_ID = 2
COURT_ID = 3
BOOKING_DATE = date(2025, 6, 1)
TODAY = date(2025, 5, 30)
NOW = datetime(2025, 5, 30, 9, 0, tzinfo=timezone.utc)

HOURLY_RATE = Decimal('50.00')
PEAK_HOUR_RATE = Decimal('80.00')


def make_court(**overrides: object) -> CourtInfo:
    defaults: dict = {
        'id': COURT_ID,
        'venue_id': VENUE_ID,
        'name': 'Court A',
        'size': '5v5',
        'hourly_rate': HOURLY_RATE,
        'peak_hour_rate': PEAK_HOUR_RATE,
        'max_players': 10,
        'is_active': True,
        'opening_time': '08:00',
        'closing_time': '23:00',
    }
    return CourtInfo(**{**defaults, **overrides})


def make_venue(**overrides: object) -> VenueInfo:
    defaults: dict = {
        'id': VENUE_ID,
        'owner_id': OWNER_ID,
        'name': 'Downtown Futsal',
        'location': 'Main St 1',
    }
    return VenueInfo(**{**defaults, **overrides})


def make_booking(
    *,
    start_time: str = '18:00',
    end_time: str = '19:00',
    max_players: int = 10,
    group_type: GroupType = GroupType.PUBLIC,
    created_by: int = CREATOR_ID,
    booking_date: date = BOOKING_DATE,
    court_id: int = COURT_ID,
    venue_id: int = VENUE_ID,
    **overrides: object,
) -> Booking:
    """Fresh PENDING booking with the creator as admin, stored at version 1"""
    booking = Booking.create(
        id=uuid_utils.uuid7(),
        court_id=court_id,
        venue_id=venue_id,
        created_by=created_by,
        date=booking_date,
        slot=TimeSlot(start_time=start_time, end_time=end_time),
        total_amount=PEAK_HOUR_RATE,
        booking_type=BookingType.PARTIAL_TEAM,
        group_type=group_type,
        max_players=max_players,
        now=NOW,
    )
    return attrs.evolve(booking, version=1, **overrides)


class InMemoryBookingCommandRepo(IBookingCommandRepo):
    """
    Dict-backed repo with the same compare-and-set contract as the SQL one.

    `before_save` runs right before the version check, which lets a test slip
    a concurrent write in between a use case's read and its save.
    """

    def __init__(self, *bookings: Booking) -> None:
        self.bookings: Dict[str, Booking] = {str(b.id): b for b in bookings}
        self.before_save: Optional[Callable[['InMemoryBookingCommandRepo'], None]] = None
        self.save_calls = 0

    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        return self.bookings.get(str(booking_id))

    async def create(self, *, booking: Booking) -> Booking:
        stored = attrs.evolve(booking, version=1)
        self.bookings[str(booking.id)] = stored
        return stored

    async def save(self, *, booking: Booking, expected_version: int) -> Booking:
        self.save_calls += 1
        if self.before_save is not None:
            hook, self.before_save = self.before_save, None
            hook(self)
        current = self.bookings.get(str(booking.id))
        if current is None or current.version != expected_version:
            raise ConcurrentModificationError(
                'Booking was modified concurrently', {'booking_id': str(booking.id)}
            )
        stored = attrs.evolve(booking, version=expected_version + 1)
        self.bookings[str(booking.id)] = stored
        return stored

    async def find_by_court_and_date(self, *, court_id: int, date: date) -> List[Booking]:
        return [
            b
            for b in self.bookings.values()
            if b.court_id == court_id
            and b.date == date
            and b.status in (BookingStatus.PENDING, BookingStatus.CONFIRMED)
        ]

    def write_concurrently(self, booking_id: UUID, change: Callable[[Booking], Booking]) -> None:
        current = self.bookings[str(booking_id)]
        self.bookings[str(booking_id)] = attrs.evolve(change(current), version=current.version + 1)


class StubCourtDirectory(ICourtDirectory):
    def __init__(
        self,
        *,
        courts: Optional[List[CourtInfo]] = None,
        venues: Optional[List[VenueInfo]] = None,
        failing: bool = False,
    ) -> None:
        self.courts = {c.id: c for c in (courts if courts is not None else [make_court()])}
        self.venues = {v.id: v for v in (venues if venues is not None else [make_venue()])}
        self.failing = failing

    async def get_court_by_id(self, *, court_id: int) -> Optional[CourtInfo]:
        if self.failing:
            raise ConnectionError('catalog unavailable')
        return self.courts.get(court_id)

    async def get_venue_by_id(self, *, venue_id: int) -> Optional[VenueInfo]:
        if self.failing:
            raise ConnectionError('catalog unavailable')
        return self.venues.get(venue_id)

    async def list_venue_ids_by_owner(self, *, owner_id: int) -> List[int]:
        return [v.id for v in self.venues.values() if v.owner_id == owner_id]


class StubUserDirectory(IUserDirectory):
    def __init__(self, users: Optional[Dict[int, str]] = None) -> None:
        self.users = users if users is not None else {
            CREATOR_ID: 'Sam Creator',
            PLAYER_ID: 'Pat Player',
            ANOTHER_PLAYER_ID: 'Alex Another',
            OWNER_ID: 'Olive Owner',
        }
        self.lookups: List[int] = []

    async def get_user_by_id(self, *, user_id: int) -> Optional[UserInfo]:
        self.lookups.append(user_id)
        name = self.users.get(user_id)
        return UserInfo(id=user_id, full_name=name) if name else None


class RecordingNotificationSink(INotificationSink):
    def __init__(self, *, failing_user_ids: Optional[set[int]] = None) -> None:
        self.sent: List[NotificationRequest] = []
        self.failing_user_ids = failing_user_ids or set()

    async def notify(self, *, request: NotificationRequest) -> None:
        if request.user_id in self.failing_user_ids:
            raise ConnectionError('notification service down')
        self.sent.append(request)

    def kinds_for(self, user_id: int) -> List[str]:
        return [r.kind.value for r in self.sent if r.user_id == user_id]


class InProcessSlotLock(ISlotLock):
    def __init__(self) -> None:
        self._locks: Dict[tuple[int, date], anyio.Lock] = defaultdict(anyio.Lock)
        self.held: List[tuple[int, date]] = []

    @asynccontextmanager
    async def hold(self, *, court_id: int, date: date) -> AsyncIterator[None]:
        async with self._locks[(court_id, date)]:
            self.held.append((court_id, date))
            yield


class BookingEngineFakes:
    """Everything a command use case needs, wired together in memory"""

    def __init__(
        self,
        *bookings: Booking,
        court_directory: Optional[StubCourtDirectory] = None,
        user_directory: Optional[StubUserDirectory] = None,
        notification_sink: Optional[RecordingNotificationSink] = None,
    ) -> None:
        self.booking_command_repo = InMemoryBookingCommandRepo(*bookings)
        self.court_directory = court_directory or StubCourtDirectory()
        self.user_directory = user_directory or StubUserDirectory()
        self.notification_sink = notification_sink or RecordingNotificationSink()
        self.slot_lock = InProcessSlotLock()
        self.detail_assembler = BookingDetailAssembler(
            court_directory=self.court_directory, user_directory=self.user_directory
        )
        self.notification_dispatcher = NotificationDispatcher(
            notification_sink=self.notification_sink
        )

    def stored(self, booking_id: UUID) -> Booking:
        return self.booking_command_repo.bookings[str(booking_id)]


class RepositoryMocks:
    def __init__(self, *, bookings: Optional[List[Booking]] = None) -> None:
        """
        Args:
            bookings: Returned by every booking_query_repo listing method
        """
        self.bookings = bookings or []

        self.booking_query_repo: Mock = AsyncMock()
        self.booking_query_repo.get_by_id = AsyncMock(
            return_value=self.bookings[0] if self.bookings else None
        )
        self.booking_query_repo.find_by_user_id = AsyncMock(return_value=self.bookings)
        self.booking_query_repo.find_public_group_matches = AsyncMock(return_value=self.bookings)
        self.booking_query_repo.find_by_venue_ids = AsyncMock(return_value=self.bookings)
        self.booking_query_repo.find_occupying = AsyncMock(return_value=self.bookings)
