from datetime import date, datetime
import time
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils

from src.platform.config.di import Container
from src.platform.exception.exceptions import (
    ConflictError,
    CustomBaseError,
    ErrorCode,
    NotFoundError,
    ValidationError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.court_booking.app.dto.booking_view import BookingDetail
from src.service.court_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.court_booking.app.interface.i_court_directory import ICourtDirectory
from src.service.court_booking.app.interface.i_slot_lock import ISlotLock
from src.service.court_booking.app.service.booking_detail_assembler import (
    BookingDetailAssembler,
)
from src.service.court_booking.domain.entity.booking_entity import Booking
from src.service.court_booking.domain.enum.booking_kind import BookingType, GroupType
from src.service.court_booking.domain.service.booking_pricing import calculate_total_amount
from src.service.court_booking.domain.value_object.time_slot import TimeSlot


class CreateBookingUseCase:
    """
    Reserve a court for one time window.

    Flow:
    1. Validate the slot format and requested roster size
    2. Resolve court and venue, reject past dates
    3. Under the court/date slot lock: check overlaps with PENDING/CONFIRMED
       bookings, check opening hours, insert the PENDING booking
    4. Return the detail view
    """

    def __init__(
        self,
        *,
        booking_command_repo: IBookingCommandRepo,
        court_directory: ICourtDirectory,
        slot_lock: ISlotLock,
        detail_assembler: BookingDetailAssembler,
    ) -> None:
        self.booking_command_repo = booking_command_repo
        self.court_directory = court_directory
        self.slot_lock = slot_lock
        self.detail_assembler = detail_assembler
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        court_directory: ICourtDirectory = Depends(Provide[Container.court_directory]),
        slot_lock: ISlotLock = Depends(Provide[Container.slot_lock]),
        detail_assembler: BookingDetailAssembler = Depends(
            Provide[Container.booking_detail_assembler]
        ),
    ) -> Self:
        return cls(
            booking_command_repo=booking_command_repo,
            court_directory=court_directory,
            slot_lock=slot_lock,
            detail_assembler=detail_assembler,
        )

    @Logger.io
    async def create_booking(
        self,
        *,
        user_id: int,
        court_id: int,
        date: date,
        start_time: str,
        end_time: str,
        booking_type: BookingType,
        group_type: GroupType = GroupType.PUBLIC,
        max_players: Optional[int] = None,
        today: Optional[date] = None,
    ) -> BookingDetail:
        """
        Args:
            user_id: Creator, becomes the admin player
            max_players: Roster size, defaults to the court capacity
            today: Reference day for the past-date check (venue-local), defaults to now

        Raises:
            ValidationError: Bad time window, roster size, past date or outside opening hours
            NotFoundError: Court missing or inactive, or its venue missing
            ConflictError: Overlapping booking exists, or the slot lock is busy
        """
        started = time.perf_counter()
        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={
                'court.id': court_id,
                'booking.date': date.isoformat(),
                'booking.slot': f'{start_time}-{end_time}',
            },
        ):
            try:
                detail = await self._create(
                    user_id=user_id,
                    court_id=court_id,
                    date=date,
                    start_time=start_time,
                    end_time=end_time,
                    booking_type=booking_type,
                    group_type=group_type,
                    max_players=max_players,
                    today=today or datetime.now().date(),
                )
            except CustomBaseError as e:
                metrics.record_operation(
                    operation='create',
                    result=str(e.code or type(e).__name__),
                    duration=time.perf_counter() - started,
                )
                raise

        metrics.record_operation(
            operation='create', result='success', duration=time.perf_counter() - started
        )
        return detail

    async def _create(
        self,
        *,
        user_id: int,
        court_id: int,
        date: date,
        start_time: str,
        end_time: str,
        booking_type: BookingType,
        group_type: GroupType,
        max_players: Optional[int],
        today: date,
    ) -> BookingDetail:
        slot = TimeSlot.parse(start_time=start_time, end_time=end_time)
        if max_players is not None and max_players < 1:
            raise ValidationError(
                'max_players must be at least 1',
                ErrorCode.INVALID_MAX_PLAYERS,
                {'max_players': max_players},
            )

        court = await self.court_directory.get_court_by_id(court_id=court_id)
        if court is None or not court.is_active:
            raise NotFoundError(
                'Court not found or inactive', ErrorCode.COURT_NOT_FOUND, {'court_id': court_id}
            )
        if max_players is not None and max_players > court.max_players:
            raise ValidationError(
                f'max_players cannot exceed court capacity of {court.max_players}',
                ErrorCode.INVALID_MAX_PLAYERS,
                {'max_players': max_players, 'court_capacity': court.max_players},
            )

        venue = await self.court_directory.get_venue_by_id(venue_id=court.venue_id)
        if venue is None:
            raise NotFoundError(
                'Venue not found for court',
                ErrorCode.COURT_NOT_FOUND,
                {'court_id': court_id, 'venue_id': court.venue_id},
            )

        if date < today:
            raise ValidationError(
                'Cannot book for past dates',
                ErrorCode.INVALID_DATE,
                {'date': date.isoformat(), 'today': today.isoformat()},
            )

        async with self.slot_lock.hold(court_id=court_id, date=date):
            existing = await self.booking_command_repo.find_by_court_and_date(
                court_id=court_id, date=date
            )
            conflict = next((b for b in existing if b.slot.overlaps(slot)), None)
            if conflict is not None:
                raise ConflictError(
                    'Time slot is not available',
                    ErrorCode.SLOT_UNAVAILABLE,
                    {
                        'court_id': court_id,
                        'date': date.isoformat(),
                        'requested': str(slot),
                        'conflicting_booking_id': str(conflict.id),
                        'conflicting_slot': str(conflict.slot),
                    },
                )

            if (
                court.opening_time
                and court.closing_time
                and not slot.within(opening_time=court.opening_time, closing_time=court.closing_time)
            ):
                raise ValidationError(
                    'Requested time is outside court opening hours',
                    ErrorCode.OUTSIDE_OPENING_HOURS,
                    {
                        'requested': str(slot),
                        'opening_time': court.opening_time,
                        'closing_time': court.closing_time,
                    },
                )

            booking = Booking.create(
                id=uuid_utils.uuid7(),
                court_id=court_id,
                venue_id=court.venue_id,
                created_by=user_id,
                date=date,
                slot=slot,
                total_amount=calculate_total_amount(slot, court),
                booking_type=booking_type,
                group_type=group_type,
                max_players=max_players or court.max_players,
            )
            created = await self.booking_command_repo.create(booking=booking)

        Logger.base.info(
            f'📝 [CREATE-BOOKING] {created.id} court {court_id} {date} {slot} '
            f'by user {user_id}, total {created.total_amount}'
        )
        return await self.detail_assembler.assemble(created)
