from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.court_booking.app.dto.booking_search_query import BookingSearchQuery
from src.service.court_booking.app.dto.booking_view import BookingDetail, Page
from src.service.court_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.court_booking.app.interface.i_court_directory import ICourtDirectory
from src.service.court_booking.app.service.booking_detail_assembler import (
    BookingDetailAssembler,
)
from src.service.court_booking.app.service.booking_listing import apply_listing


class ListBookingsUseCase:
    """Bookings seen from one account: as a player, or as a venue owner."""

    def __init__(
        self,
        *,
        booking_query_repo: IBookingQueryRepo,
        court_directory: ICourtDirectory,
        detail_assembler: BookingDetailAssembler,
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.court_directory = court_directory
        self.detail_assembler = detail_assembler

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        court_directory: ICourtDirectory = Depends(Provide[Container.court_directory]),
        detail_assembler: BookingDetailAssembler = Depends(
            Provide[Container.booking_detail_assembler]
        ),
    ) -> Self:
        return cls(
            booking_query_repo=booking_query_repo,
            court_directory=court_directory,
            detail_assembler=detail_assembler,
        )

    async def _to_detail_page(self, page: Page) -> Page[BookingDetail]:
        return Page(
            items=await self.detail_assembler.assemble_many(page.items),
            total=page.total,
            page=page.page,
            limit=page.limit,
        )

    @Logger.io
    async def list_my_bookings(
        self, *, user_id: int, query: BookingSearchQuery
    ) -> Page[BookingDetail]:
        """Bookings the user created plus those they are an active player of"""
        bookings = await self.booking_query_repo.find_by_user_id(user_id=user_id, query=query)
        return await self._to_detail_page(apply_listing(bookings, query))

    @Logger.io
    async def list_owner_bookings(
        self, *, owner_id: int, query: BookingSearchQuery
    ) -> Page[BookingDetail]:
        venue_ids = await self.court_directory.list_venue_ids_by_owner(owner_id=owner_id)
        if query.venue_id is not None:
            venue_ids = [v for v in venue_ids if v == query.venue_id]
        if not venue_ids:
            return Page(items=[], total=0, page=query.page, limit=query.limit)

        bookings = await self.booking_query_repo.find_by_venue_ids(
            venue_ids=venue_ids, query=query
        )
        return await self._to_detail_page(apply_listing(bookings, query))
