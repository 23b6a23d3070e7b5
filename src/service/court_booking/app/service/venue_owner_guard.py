from src.platform.exception.exceptions import AuthorizationError, ErrorCode
from src.service.court_booking.app.interface.i_court_directory import ICourtDirectory
from src.service.court_booking.domain.entity.booking_entity import Booking


async def ensure_venue_owner(
    court_directory: ICourtDirectory, *, booking: Booking, actor_id: int
) -> None:
    """booking.court_id -> court.venue_id -> venue.owner_id must be the actor."""
    context = {'booking_id': str(booking.id), 'user_id': actor_id}
    court = await court_directory.get_court_by_id(court_id=booking.court_id)
    venue = await court_directory.get_venue_by_id(venue_id=court.venue_id) if court else None
    if venue is None or venue.owner_id != actor_id:
        raise AuthorizationError(
            'Only the venue owner can manage this booking', ErrorCode.NOT_VENUE_OWNER, context
        )
