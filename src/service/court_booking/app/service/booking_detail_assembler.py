from typing import Awaitable, Callable, Dict, List, Optional, TypeVar

from src.platform.logging.loguru_io import Logger
from src.service.court_booking.app.dto.booking_view import (
    UNKNOWN,
    BookingDetail,
    CourtSummary,
    GroupMatch,
    PlayerDetail,
    UserSummary,
    VenueSummary,
)
from src.service.court_booking.app.interface.i_court_directory import ICourtDirectory
from src.service.court_booking.app.interface.i_user_directory import IUserDirectory
from src.service.court_booking.domain.entity.booking_entity import Booking


_T = TypeVar('_T')


class BookingDetailAssembler:
    """
    Joins bookings with court, venue and user directory data.

    A lookup that finds nothing or raises degrades to an `Unknown` placeholder
    so listings keep rendering when a catalog record is gone. Lookups are cached
    per assembler call, not across calls.
    """

    def __init__(
        self, *, court_directory: ICourtDirectory, user_directory: IUserDirectory
    ) -> None:
        self.court_directory = court_directory
        self.user_directory = user_directory

    @staticmethod
    async def _guarded(lookup: Awaitable[Optional[_T]], *, what: str) -> Optional[_T]:
        try:
            return await lookup
        except Exception as e:
            Logger.base.warning(f'⚠️ [DETAIL] {what} lookup failed, using placeholder: {e}')
            return None

    async def court_summary(self, court_id: int) -> CourtSummary:
        court = await self._guarded(
            self.court_directory.get_court_by_id(court_id=court_id), what=f'court {court_id}'
        )
        if court is None:
            return CourtSummary(id=court_id)
        return CourtSummary(
            id=court.id,
            name=court.name,
            size=court.size,
            hourly_rate=court.hourly_rate,
            peak_hour_rate=court.peak_hour_rate,
        )

    async def venue_summary(self, venue_id: int) -> VenueSummary:
        venue = await self._guarded(
            self.court_directory.get_venue_by_id(venue_id=venue_id), what=f'venue {venue_id}'
        )
        if venue is None:
            return VenueSummary(id=venue_id)
        return VenueSummary(id=venue.id, name=venue.name, location=venue.location or UNKNOWN)

    async def user_summary(self, user_id: int) -> UserSummary:
        user = await self._guarded(
            self.user_directory.get_user_by_id(user_id=user_id), what=f'user {user_id}'
        )
        if user is None:
            return UserSummary(id=user_id)
        return UserSummary(id=user.id, full_name=user.full_name, profile_image=user.profile_image)

    async def display_name(self, user_id: int) -> str:
        return (await self.user_summary(user_id)).full_name

    @staticmethod
    async def _cached(
        cache: Dict[int, _T], key: int, load: Callable[[int], Awaitable[_T]]
    ) -> _T:
        if key not in cache:
            cache[key] = await load(key)
        return cache[key]

    @Logger.io(truncate_content=True)
    async def assemble(self, booking: Booking) -> BookingDetail:
        return (await self.assemble_many([booking]))[0]

    @Logger.io(truncate_content=True)
    async def assemble_many(self, bookings: List[Booking]) -> List[BookingDetail]:
        courts: Dict[int, CourtSummary] = {}
        venues: Dict[int, VenueSummary] = {}
        users: Dict[int, UserSummary] = {}

        details = []
        for booking in bookings:
            players = [
                PlayerDetail(
                    user=await self._cached(users, p.user_id, self.user_summary),
                    joined_at=p.joined_at,
                    is_admin=p.is_admin,
                )
                for p in booking.active_players
            ]
            details.append(
                BookingDetail(
                    booking=booking,
                    court=await self._cached(courts, booking.court_id, self.court_summary),
                    venue=await self._cached(venues, booking.venue_id, self.venue_summary),
                    creator=await self._cached(users, booking.created_by, self.user_summary),
                    players_details=players,
                )
            )
        return details

    @Logger.io(truncate_content=True)
    async def group_matches(self, bookings: List[Booking]) -> List[GroupMatch]:
        return [
            GroupMatch(
                booking_id=detail.booking.id,
                court_id=detail.court.id,
                court_name=detail.court.name,
                venue_id=detail.venue.id,
                venue_name=detail.venue.name,
                venue_location=detail.venue.location,
                creator_id=detail.creator.id,
                creator_name=detail.creator.full_name,
                date=detail.booking.date,
                start_time=detail.booking.start_time,
                end_time=detail.booking.end_time,
                booking_type=detail.booking.booking_type.value,
                status=detail.booking.status,
                max_players=detail.booking.max_players,
                current_players=detail.current_players,
                available_slots=detail.available_slots,
                total_amount=detail.booking.total_amount,
                created_at=detail.booking.created_at,
            )
            for detail in await self.assemble_many(bookings)
        ]
