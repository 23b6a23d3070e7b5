from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.court_booking.app.dto.booking_view import BookingDetail
from src.service.court_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.court_booking.app.service import booking_notifications
from src.service.court_booking.app.service.booking_detail_assembler import (
    BookingDetailAssembler,
)
from src.service.court_booking.app.service.booking_mutation import mutate_booking
from src.service.court_booking.app.service.notification_dispatcher import NotificationDispatcher


class LeaveBookingUseCase:
    def __init__(
        self,
        *,
        booking_command_repo: IBookingCommandRepo,
        detail_assembler: BookingDetailAssembler,
        notification_dispatcher: NotificationDispatcher,
    ) -> None:
        self.booking_command_repo = booking_command_repo
        self.detail_assembler = detail_assembler
        self.notification_dispatcher = notification_dispatcher

    @classmethod
    @inject
    def depends(
        cls,
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        detail_assembler: BookingDetailAssembler = Depends(
            Provide[Container.booking_detail_assembler]
        ),
        notification_dispatcher: NotificationDispatcher = Depends(
            Provide[Container.notification_dispatcher]
        ),
    ) -> Self:
        return cls(
            booking_command_repo=booking_command_repo,
            detail_assembler=detail_assembler,
            notification_dispatcher=notification_dispatcher,
        )

    @Logger.io
    async def leave_booking(self, *, user_id: int, booking_id: UUID) -> BookingDetail:
        """
        Mark the caller's roster entry as left. Status is unchanged, so a
        confirmed booking stays confirmed with a free slot.
        """
        booking, _ = await mutate_booking(
            booking_command_repo=self.booking_command_repo,
            booking_id=booking_id,
            operation='leave',
            mutate=lambda b: (b.leave(user_id=user_id), None),
        )

        player_name = await self.detail_assembler.display_name(user_id)
        await self.notification_dispatcher.dispatch(
            [booking_notifications.player_left(booking, user_id=user_id, player_name=player_name)]
        )
        return await self.detail_assembler.assemble(booking)
