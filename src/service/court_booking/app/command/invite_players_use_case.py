from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.court_booking.app.dto.booking_view import InvitePlayersResult
from src.service.court_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.court_booking.app.service import booking_notifications
from src.service.court_booking.app.service.booking_detail_assembler import (
    BookingDetailAssembler,
)
from src.service.court_booking.app.service.booking_mutation import mutate_booking
from src.service.court_booking.app.service.notification_dispatcher import NotificationDispatcher
from src.service.court_booking.domain.entity.booking_entity import Booking


class InvitePlayersUseCase:
    """
    Invite users into a booking, best effort.

    Targets already playing or already invited are reported as skipped. Only
    the invites actually created produce an INVITE_RECEIVED notification.
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
    async def invite_players(
        self, *, actor_id: int, booking_id: UUID, user_ids: List[int]
    ) -> InvitePlayersResult:
        booking, (invited, skipped) = await mutate_booking(
            booking_command_repo=self.booking_command_repo,
            booking_id=booking_id,
            operation='invite',
            mutate=lambda b: self._invite(b, actor_id=actor_id, user_ids=user_ids),
        )

        if invited:
            inviter_name = await self.detail_assembler.display_name(actor_id)
            await self.notification_dispatcher.dispatch(
                booking_notifications.invite_received(
                    booking, user_id=target, inviter_id=actor_id, inviter_name=inviter_name
                )
                for target in invited
            )
            Logger.base.info(f'📨 [INVITE] booking {booking_id}: invited {invited}')

        return InvitePlayersResult(
            booking=await self.detail_assembler.assemble(booking),
            invited_user_ids=invited,
            skipped_user_ids=skipped,
        )

    @staticmethod
    def _invite(
        booking: Booking, *, actor_id: int, user_ids: List[int]
    ) -> tuple[Booking, tuple[List[int], List[int]]]:
        updated, invited, skipped = booking.invite(actor_id=actor_id, user_ids=user_ids)
        return updated, (invited, skipped)
