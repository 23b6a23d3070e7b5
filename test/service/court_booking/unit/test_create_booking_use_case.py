"""
Unit tests for CreateBookingUseCase

Test Coverage:
1. Pricing and defaults on the created booking
2. Validation order: time format, roster size, court, venue, past date
3. Overlap conflicts under the slot lock, opening hours
"""

from datetime import date
from typing import Any
from unittest.mock import AsyncMock, patch

import anyio
import pytest
from uuid_utils import UUID

from src.platform.exception.exceptions import (
    AuthorizationError,
    ConflictError,
    ErrorCode,
    NotFoundError,
    ValidationError,
)
from src.service.court_booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.court_booking.domain.enum.booking_kind import BookingType, GroupType
from src.service.court_booking.domain.enum.booking_status import BookingStatus
from test.service.court_booking.helpers import (
    BOOKING_DATE,
    COURT_ID,
    CREATOR_ID,
    PEAK_HOUR_RATE,
    PLAYER_ID,
    TODAY,
    VENUE_ID,
    BookingEngineFakes,
    StubCourtDirectory,
    make_booking,
    make_court,
    make_venue,
)


pytestmark = pytest.mark.unit


def _use_case(fakes: BookingEngineFakes) -> CreateBookingUseCase:
    return CreateBookingUseCase(
        booking_command_repo=fakes.booking_command_repo,
        court_directory=fakes.court_directory,
        slot_lock=fakes.slot_lock,
        detail_assembler=fakes.detail_assembler,
    )


@pytest.fixture
def fakes() -> BookingEngineFakes:
    return BookingEngineFakes()


@pytest.fixture
def params() -> dict[str, Any]:
    return {
        'user_id': CREATOR_ID,
        'court_id': COURT_ID,
        'date': BOOKING_DATE,
        'start_time': '18:00',
        'end_time': '19:00',
        'booking_type': BookingType.PARTIAL_TEAM,
        'max_players': 10,
        'today': TODAY,
    }


class TestCreateBooking:
    @pytest.mark.asyncio
    async def test_peak_hour_booking_costs_peak_rate(self, fakes, params):
        """
        Given: court with a peak rate, 18:00-19:00 on 2025-06-01
        When: the booking is created
        Then: total is one peak hour and the creator is the only player
        """
        detail = await _use_case(fakes).create_booking(**params)

        booking = detail.booking
        assert booking.total_amount == PEAK_HOUR_RATE
        assert booking.status == BookingStatus.PENDING
        assert booking.venue_id == VENUE_ID
        assert booking.group_type == GroupType.PUBLIC
        assert [p.user_id for p in booking.players] == [CREATOR_ID]
        assert booking.version == 1
        assert detail.court.name == 'Court A'
        assert detail.creator.full_name == 'Sam Creator'
        assert fakes.slot_lock.held == [(COURT_ID, BOOKING_DATE)]

    @pytest.mark.asyncio
    async def test_generates_uuid7_id(self, fakes, params):
        test_uuid = UUID('01936d8f-5e73-7c4e-a9c5-123456789abc')
        with patch(
            'src.service.court_booking.app.command.create_booking_use_case.uuid_utils.uuid7'
        ) as mock_uuid7:
            mock_uuid7.return_value = test_uuid

            detail = await _use_case(fakes).create_booking(**params)

        mock_uuid7.assert_called_once()
        assert detail.booking.id == test_uuid
        assert str(test_uuid) in fakes.booking_command_repo.bookings

    @pytest.mark.asyncio
    async def test_max_players_defaults_to_court_capacity(self, fakes, params):
        params['max_players'] = None

        detail = await _use_case(fakes).create_booking(**params)

        assert detail.booking.max_players == 10

    @pytest.mark.asyncio
    async def test_overlapping_booking_conflicts(self, fakes, params):
        """18:30-19:30 overlaps an existing 18:00-19:00 on the same court and day"""
        use_case = _use_case(fakes)
        first = await use_case.create_booking(**params)

        with pytest.raises(ConflictError) as exc_info:
            await use_case.create_booking(
                **{**params, 'user_id': PLAYER_ID, 'start_time': '18:30', 'end_time': '19:30'}
            )

        assert exc_info.value.code == ErrorCode.SLOT_UNAVAILABLE
        assert exc_info.value.context['conflicting_booking_id'] == str(first.booking.id)
        assert len(fakes.booking_command_repo.bookings) == 1

    @pytest.mark.asyncio
    async def test_adjacent_booking_is_allowed(self, fakes, params):
        use_case = _use_case(fakes)
        await use_case.create_booking(**params)

        await use_case.create_booking(**{**params, 'start_time': '19:00', 'end_time': '20:00'})

        assert len(fakes.booking_command_repo.bookings) == 2

    @pytest.mark.asyncio
    async def test_cancelled_booking_frees_the_slot(self, params):
        cancelled = make_booking().reject(owner_id=1)
        fakes = BookingEngineFakes(cancelled)

        await _use_case(fakes).create_booking(**params)

        assert len(fakes.booking_command_repo.bookings) == 2

    @pytest.mark.asyncio
    async def test_concurrent_overlapping_creates_book_once(self, fakes, params):
        use_case = _use_case(fakes)
        outcomes: list[str] = []

        async def attempt(user_id: int) -> None:
            try:
                await use_case.create_booking(**{**params, 'user_id': user_id})
                outcomes.append('created')
            except ConflictError:
                outcomes.append('conflict')

        async with anyio.create_task_group() as tg:
            for user_id in (CREATOR_ID, PLAYER_ID):
                tg.start_soon(attempt, user_id)

        assert sorted(outcomes) == ['conflict', 'created']
        assert len(fakes.booking_command_repo.bookings) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'start,end',
        [('18:00', '18:00'), ('19:00', '18:00'), ('6pm', '19:00')],
    )
    async def test_invalid_time_window(self, fakes, params, start, end):
        with pytest.raises(ValidationError) as exc_info:
            await _use_case(fakes).create_booking(**{**params, 'start_time': start, 'end_time': end})

        assert exc_info.value.code == ErrorCode.INVALID_TIME

    @pytest.mark.asyncio
    @pytest.mark.parametrize('max_players', [0, 11])
    async def test_max_players_out_of_range(self, fakes, params, max_players):
        with pytest.raises(ValidationError) as exc_info:
            await _use_case(fakes).create_booking(**{**params, 'max_players': max_players})

        assert exc_info.value.code == ErrorCode.INVALID_MAX_PLAYERS

    @pytest.mark.asyncio
    async def test_unknown_court(self, params):
        fakes = BookingEngineFakes(court_directory=StubCourtDirectory(courts=[]))

        with pytest.raises(NotFoundError) as exc_info:
            await _use_case(fakes).create_booking(**params)

        assert exc_info.value.code == ErrorCode.COURT_NOT_FOUND

    @pytest.mark.asyncio
    async def test_inactive_court(self, params):
        fakes = BookingEngineFakes(
            court_directory=StubCourtDirectory(courts=[make_court(is_active=False)])
        )

        with pytest.raises(NotFoundError) as exc_info:
            await _use_case(fakes).create_booking(**params)

        assert exc_info.value.code == ErrorCode.COURT_NOT_FOUND

    @pytest.mark.asyncio
    async def test_court_without_venue(self, params):
        fakes = BookingEngineFakes(
            court_directory=StubCourtDirectory(venues=[make_venue(id=99)])
        )

        with pytest.raises(NotFoundError):
            await _use_case(fakes).create_booking(**params)

    @pytest.mark.asyncio
    async def test_past_date(self, fakes, params):
        with pytest.raises(ValidationError) as exc_info:
            await _use_case(fakes).create_booking(**{**params, 'date': date(2025, 5, 29)})

        assert exc_info.value.code == ErrorCode.INVALID_DATE

    @pytest.mark.asyncio
    async def test_booking_today_is_allowed(self, fakes, params):
        detail = await _use_case(fakes).create_booking(**{**params, 'date': TODAY})

        assert detail.booking.date == TODAY

    @pytest.mark.asyncio
    async def test_outside_opening_hours(self, fakes, params):
        with pytest.raises(ValidationError) as exc_info:
            await _use_case(fakes).create_booking(
                **{**params, 'start_time': '22:30', 'end_time': '23:30'}
            )

        assert exc_info.value.code == ErrorCode.OUTSIDE_OPENING_HOURS
        assert fakes.booking_command_repo.bookings == {}

    @pytest.mark.asyncio
    async def test_court_without_opening_hours_accepts_any_slot(self, params):
        fakes = BookingEngineFakes(
            court_directory=StubCourtDirectory(
                courts=[make_court(opening_time=None, closing_time=None)]
            )
        )

        detail = await _use_case(fakes).create_booking(
            **{**params, 'start_time': '06:00', 'end_time': '07:00'}
        )

        assert detail.booking.total_amount == detail.court.hourly_rate


class TestCreateBookingMetrics:
    @pytest.mark.asyncio
    async def test_any_domain_error_is_counted_as_failure(self, fakes, params):
        fakes.court_directory.get_court_by_id = AsyncMock(
            side_effect=AuthorizationError('catalog access denied')
        )

        with patch(
            'src.service.court_booking.app.command.create_booking_use_case.metrics'
        ) as metrics:
            with pytest.raises(AuthorizationError):
                await _use_case(fakes).create_booking(**params)

        metrics.record_operation.assert_called_once()
        assert metrics.record_operation.call_args.kwargs['operation'] == 'create'
        assert metrics.record_operation.call_args.kwargs['result'] == 'AuthorizationError'

    @pytest.mark.asyncio
    async def test_success_is_counted(self, fakes, params):
        with patch(
            'src.service.court_booking.app.command.create_booking_use_case.metrics'
        ) as metrics:
            await _use_case(fakes).create_booking(**params)

        assert metrics.record_operation.call_args.kwargs['result'] == 'success'
