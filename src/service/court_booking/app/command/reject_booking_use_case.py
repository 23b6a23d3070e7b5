from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.court_booking.app.dto.booking_view import BookingDetail
from src.service.court_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.court_booking.app.interface.i_court_directory import ICourtDirectory
from src.service.court_booking.app.service import booking_notifications
from src.service.court_booking.app.service.booking_detail_assembler import (
    BookingDetailAssembler,
)
from src.service.court_booking.app.service.booking_mutation import load_booking, mutate_booking
from src.service.court_booking.app.service.notification_dispatcher import NotificationDispatcher
from src.service.court_booking.app.service.venue_owner_guard import ensure_venue_owner


class RejectBookingUseCase:
    """Venue owner turns a pending or confirmed booking down, which cancels it."""

    def __init__(
        self,
        *,
        booking_command_repo: IBookingCommandRepo,
        court_directory: ICourtDirectory,
        detail_assembler: BookingDetailAssembler,
        notification_dispatcher: NotificationDispatcher,
    ) -> None:
        self.booking_command_repo = booking_command_repo
        self.court_directory = court_directory
        self.detail_assembler = detail_assembler
        self.notification_dispatcher = notification_dispatcher

    @classmethod
    @inject
    def depends(
        cls,
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        court_directory: ICourtDirectory = Depends(Provide[Container.court_directory]),
        detail_assembler: BookingDetailAssembler = Depends(
            Provide[Container.booking_detail_assembler]
        ),
        notification_dispatcher: NotificationDispatcher = Depends(
            Provide[Container.notification_dispatcher]
        ),
    ) -> Self:
        return cls(
            booking_command_repo=booking_command_repo,
            court_directory=court_directory,
            detail_assembler=detail_assembler,
            notification_dispatcher=notification_dispatcher,
        )

    @Logger.io
    async def reject_booking(
        self, *, owner_id: int, booking_id: UUID, reason: Optional[str] = None
    ) -> BookingDetail:
        """`reason` is shown to the players, defaults to "Rejected by owner"."""
        current = await load_booking(self.booking_command_repo, booking_id)
        await ensure_venue_owner(self.court_directory, booking=current, actor_id=owner_id)

        booking, _ = await mutate_booking(
            booking_command_repo=self.booking_command_repo,
            booking_id=booking_id,
            operation='reject',
            mutate=lambda b: (b.reject(owner_id=owner_id, reason=reason), None),
        )
        Logger.base.info(f'🚫 [REJECT] booking {booking_id} by owner {owner_id}')

        await self.notification_dispatcher.dispatch(
            booking_notifications.booking_cancelled(booking, owner_id=owner_id)
        )
        return await self.detail_assembler.assemble(booking)
