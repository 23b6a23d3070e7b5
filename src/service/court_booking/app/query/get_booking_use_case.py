from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import ErrorCode, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.court_booking.app.dto.booking_view import BookingDetail
from src.service.court_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.court_booking.app.service.booking_detail_assembler import (
    BookingDetailAssembler,
)


class GetBookingUseCase:
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

    @Logger.io
    async def get_booking_with_details(self, *, booking_id: UUID) -> BookingDetail:
        booking = await self.booking_query_repo.get_by_id(booking_id=booking_id)
        if not booking:
            raise NotFoundError(
                'Booking not found', ErrorCode.BOOKING_NOT_FOUND, {'booking_id': str(booking_id)}
            )
        return await self.detail_assembler.assemble(booking)
