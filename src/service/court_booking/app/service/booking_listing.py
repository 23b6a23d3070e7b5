"""In-memory filtering, sorting and paging over bookings fetched by column filters"""

from datetime import datetime, timezone
from typing import Callable, List

from src.service.court_booking.app.dto.booking_search_query import (
    BookingSearchQuery,
    BookingSortField,
    SortOrder,
)
from src.service.court_booking.app.dto.booking_view import Page
from src.service.court_booking.domain.entity.booking_entity import Booking


_EPOCH = datetime.min.replace(tzinfo=timezone.utc)

_SORT_KEYS: dict[BookingSortField, Callable[[Booking], object]] = {
    BookingSortField.PLAYERS: lambda b: b.active_player_count,
    BookingSortField.DATE: lambda b: (b.date, b.slot.start_minutes),
    BookingSortField.TIME: lambda b: b.slot.start_minutes,
    BookingSortField.CREATED_AT: lambda b: b.created_at or _EPOCH,
}


def matches_roster_filters(booking: Booking, query: BookingSearchQuery) -> bool:
    current = booking.active_player_count
    if query.min_players is not None and current < query.min_players:
        return False
    if query.max_players is not None and current > query.max_players:
        return False
    if query.available_slots is not None and booking.available_slots < query.available_slots:
        return False
    return True


def sort_bookings(
    bookings: List[Booking], *, sort_by: BookingSortField, sort_order: SortOrder
) -> List[Booking]:
    return sorted(bookings, key=_SORT_KEYS[sort_by], reverse=sort_order == SortOrder.DESC)  # type: ignore[arg-type]


def apply_listing(
    bookings: List[Booking],
    query: BookingSearchQuery,
    *,
    default_sort: BookingSortField = BookingSortField.CREATED_AT,
) -> Page[Booking]:
    filtered = [b for b in bookings if matches_roster_filters(b, query)]
    ordered = sort_bookings(
        filtered,
        sort_by=query.sort_by or default_sort,
        sort_order=query.sort_order,
    )
    return Page(
        items=ordered[query.offset : query.offset + query.limit],
        total=len(ordered),
        page=query.page,
        limit=query.limit,
    )
