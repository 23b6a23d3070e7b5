from datetime import date
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ErrorCode, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.court_booking.app.dto.booking_view import CourtAvailability, OccupiedInterval
from src.service.court_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.court_booking.app.interface.i_court_directory import ICourtDirectory


class GetCourtAvailabilityUseCase:
    """Occupied windows of one court on one day, for slot pickers."""

    def __init__(
        self, *, booking_query_repo: IBookingQueryRepo, court_directory: ICourtDirectory
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.court_directory = court_directory

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        court_directory: ICourtDirectory = Depends(Provide[Container.court_directory]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo, court_directory=court_directory)

    @Logger.io
    async def get_court_availability(self, *, court_id: int, date: date) -> CourtAvailability:
        court = await self.court_directory.get_court_by_id(court_id=court_id)
        if court is None:
            raise NotFoundError('Court not found', ErrorCode.COURT_NOT_FOUND, {'court_id': court_id})

        bookings = await self.booking_query_repo.find_occupying(court_id=court_id, date=date)
        return CourtAvailability(
            court_id=court_id,
            date=date,
            opening_time=court.opening_time,
            closing_time=court.closing_time,
            occupied=[
                OccupiedInterval(
                    booking_id=b.id, start_time=b.start_time, end_time=b.end_time, status=b.status
                )
                for b in sorted(bookings, key=lambda b: b.slot.start_minutes)
            ],
        )
