from datetime import date, datetime
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.court_booking.app.dto.booking_search_query import (
    BookingSearchQuery,
    BookingSortField,
)
from src.service.court_booking.app.dto.booking_view import GroupMatch, Page
from src.service.court_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.court_booking.app.service.booking_detail_assembler import (
    BookingDetailAssembler,
)
from src.service.court_booking.app.service.booking_listing import apply_listing


class ListGroupMatchesUseCase:
    """
    Open public matches players can browse.

    Only public PENDING/CONFIRMED bookings from today on are listed, unless
    the query pins an explicit date.
    """

    def __init__(
        self, *, booking_query_repo: IBookingQueryRepo, detail_assembler: BookingDetailAssembler
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.detail_assembler = detail_assembler

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        detail_assembler: BookingDetailAssembler = Depends(
            Provide[Container.booking_detail_assembler]
        ),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo, detail_assembler=detail_assembler)

    async def _list(
        self,
        query: BookingSearchQuery,
        *,
        today: Optional[date],
        default_sort: BookingSortField,
    ) -> Page[GroupMatch]:
        bookings = await self.booking_query_repo.find_public_group_matches(
            query=query, today=today or datetime.now().date()
        )
        page = apply_listing(bookings, query, default_sort=default_sort)
        return Page(
            items=await self.detail_assembler.group_matches(page.items),
            total=page.total,
            page=page.page,
            limit=page.limit,
        )

    @Logger.io
    async def list_public_group_matches(
        self, *, query: BookingSearchQuery, today: Optional[date] = None
    ) -> Page[GroupMatch]:
        return await self._list(query, today=today, default_sort=BookingSortField.CREATED_AT)

    @Logger.io
    async def list_joinable_bookings(
        self, *, query: BookingSearchQuery, today: Optional[date] = None
    ) -> Page[GroupMatch]:
        """Public matches with room left, fullest first unless the query says otherwise."""
        if query.available_slots is None:
            query = query.model_copy(update={'available_slots': 1})
        return await self._list(query, today=today, default_sort=BookingSortField.PLAYERS)
