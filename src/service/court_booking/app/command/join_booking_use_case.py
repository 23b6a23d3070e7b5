from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.court_booking.app.dto.booking_view import JoinBookingResult
from src.service.court_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.court_booking.app.service import booking_notifications
from src.service.court_booking.app.service.booking_detail_assembler import (
    BookingDetailAssembler,
)
from src.service.court_booking.app.service.booking_mutation import mutate_booking
from src.service.court_booking.app.service.notification_dispatcher import NotificationDispatcher


class JoinBookingUseCase:
    """
    Add the caller to a booking's roster.

    The join that fills the last slot confirms the booking. Capacity is checked
    against the freshly loaded booking on every save attempt, so two racing
    joins for the last slot cannot both land.
    """

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
        self.tracer = trace.get_tracer(__name__)

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
    async def join_booking(self, *, user_id: int, booking_id: UUID) -> JoinBookingResult:
        with self.tracer.start_as_current_span(
            'use_case.join_booking',
            attributes={'booking.id': str(booking_id), 'user.id': user_id},
        ):
            booking, auto_confirmed = await mutate_booking(
                booking_command_repo=self.booking_command_repo,
                booking_id=booking_id,
                operation='join',
                mutate=lambda b: b.join(user_id=user_id),
            )

        player_name = await self.detail_assembler.display_name(user_id)
        notifications = [
            booking_notifications.player_joined(booking, user_id=user_id, player_name=player_name)
        ]
        if auto_confirmed:
            Logger.base.info(f'✅ [JOIN] booking {booking_id} is full, auto-confirmed')
            notifications.extend(booking_notifications.booking_full(booking))
        await self.notification_dispatcher.dispatch(notifications)

        return JoinBookingResult(
            booking=await self.detail_assembler.assemble(booking),
            auto_confirmed=auto_confirmed,
            message=(
                'Successfully joined booking. Booking is now full and confirmed!'
                if auto_confirmed
                else 'Successfully joined booking'
            ),
        )
