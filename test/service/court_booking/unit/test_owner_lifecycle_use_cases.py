"""
Unit tests for approve / reject / complete

Only the owner of the venue holding the booked court may act. Every active
player hears about the outcome.
"""

import pytest
import uuid_utils

from src.platform.exception.exceptions import (
    AuthorizationError,
    BusinessLogicError,
    ErrorCode,
    NotFoundError,
)
from src.service.court_booking.app.command.approve_booking_use_case import ApproveBookingUseCase
from src.service.court_booking.app.command.complete_booking_use_case import (
    CompleteBookingUseCase,
)
from src.service.court_booking.app.command.reject_booking_use_case import RejectBookingUseCase
from src.service.court_booking.domain.entity.booking_entity import DEFAULT_REJECTION_REASON
from src.service.court_booking.domain.enum.booking_status import BookingStatus
from src.service.court_booking.domain.enum.notification_type import NotificationType
from test.service.court_booking.helpers import (
    CREATOR_ID,
    OTHER_OWNER_ID,
    OTHER_VENUE_ID,
    OWNER_ID,
    PLAYER_ID,
    BookingEngineFakes,
    StubCourtDirectory,
    make_booking,
    make_court,
    make_venue,
)


pytestmark = pytest.mark.unit


def _deps(fakes: BookingEngineFakes) -> dict:
    return {
        'booking_command_repo': fakes.booking_command_repo,
        'court_directory': fakes.court_directory,
        'detail_assembler': fakes.detail_assembler,
        'notification_dispatcher': fakes.notification_dispatcher,
    }


@pytest.fixture
def booking():
    booking, _ = make_booking().join(user_id=PLAYER_ID)
    return booking


class TestApproveBooking:
    @pytest.mark.asyncio
    async def test_owner_approves_and_players_are_notified(self, booking):
        fakes = BookingEngineFakes(booking)

        detail = await ApproveBookingUseCase(**_deps(fakes)).approve_booking(
            owner_id=OWNER_ID, booking_id=booking.id
        )

        assert detail.booking.status == BookingStatus.CONFIRMED
        assert detail.booking.owner_approved is True
        sent = fakes.notification_sink.sent
        assert {r.user_id for r in sent} == {CREATOR_ID, PLAYER_ID}
        assert {r.kind for r in sent} == {NotificationType.BOOKING_CONFIRMED}
        assert all(r.related_user_id == OWNER_ID for r in sent)

    @pytest.mark.asyncio
    async def test_owner_of_another_venue_is_refused(self, booking):
        """The other owner's venue exists, but the court belongs to venue 1"""
        fakes = BookingEngineFakes(
            booking,
            court_directory=StubCourtDirectory(
                courts=[make_court()],
                venues=[make_venue(), make_venue(id=OTHER_VENUE_ID, owner_id=OTHER_OWNER_ID)],
            ),
        )

        with pytest.raises(AuthorizationError) as exc_info:
            await ApproveBookingUseCase(**_deps(fakes)).approve_booking(
                owner_id=OTHER_OWNER_ID, booking_id=booking.id
            )

        assert exc_info.value.code == ErrorCode.NOT_VENUE_OWNER
        assert exc_info.value.status_code == 403
        assert fakes.stored(booking.id).status == BookingStatus.PENDING
        assert fakes.notification_sink.sent == []

    @pytest.mark.asyncio
    async def test_creator_is_not_the_owner(self, booking):
        fakes = BookingEngineFakes(booking)

        with pytest.raises(AuthorizationError):
            await ApproveBookingUseCase(**_deps(fakes)).approve_booking(
                owner_id=CREATOR_ID, booking_id=booking.id
            )

    @pytest.mark.asyncio
    async def test_unknown_booking(self):
        fakes = BookingEngineFakes()

        with pytest.raises(NotFoundError):
            await ApproveBookingUseCase(**_deps(fakes)).approve_booking(
                owner_id=OWNER_ID, booking_id=uuid_utils.uuid7()
            )

    @pytest.mark.asyncio
    async def test_cancelled_booking_cannot_be_approved(self, booking):
        fakes = BookingEngineFakes(booking.reject(owner_id=OWNER_ID))

        with pytest.raises(BusinessLogicError) as exc_info:
            await ApproveBookingUseCase(**_deps(fakes)).approve_booking(
                owner_id=OWNER_ID, booking_id=booking.id
            )

        assert exc_info.value.code == ErrorCode.INVALID_STATUS_TRANSITION


class TestRejectBooking:
    @pytest.mark.asyncio
    async def test_reject_with_reason(self, booking):
        fakes = BookingEngineFakes(booking)

        detail = await RejectBookingUseCase(**_deps(fakes)).reject_booking(
            owner_id=OWNER_ID, booking_id=booking.id, reason='Pitch flooded'
        )

        assert detail.booking.status == BookingStatus.CANCELLED
        assert detail.booking.cancelled_by == OWNER_ID
        messages = {r.message for r in fakes.notification_sink.sent}
        assert messages == {'Pitch flooded'}

    @pytest.mark.asyncio
    async def test_reject_without_reason(self, booking):
        fakes = BookingEngineFakes(booking)

        detail = await RejectBookingUseCase(**_deps(fakes)).reject_booking(
            owner_id=OWNER_ID, booking_id=booking.id
        )

        assert detail.booking.cancellation_reason == DEFAULT_REJECTION_REASON
        assert len(fakes.notification_sink.sent) == 2

    @pytest.mark.asyncio
    async def test_completed_booking_cannot_be_rejected(self, booking):
        fakes = BookingEngineFakes(booking.approve().complete())

        with pytest.raises(BusinessLogicError):
            await RejectBookingUseCase(**_deps(fakes)).reject_booking(
                owner_id=OWNER_ID, booking_id=booking.id
            )


class TestCompleteBooking:
    @pytest.mark.asyncio
    async def test_complete_confirmed_booking(self, booking):
        fakes = BookingEngineFakes(booking.approve())

        detail = await CompleteBookingUseCase(**_deps(fakes)).complete_booking(
            owner_id=OWNER_ID, booking_id=booking.id
        )

        assert detail.booking.status == BookingStatus.COMPLETED
        assert detail.booking.completed_at is not None
        assert {r.kind for r in fakes.notification_sink.sent} == {
            NotificationType.BOOKING_COMPLETED
        }

    @pytest.mark.asyncio
    async def test_pending_booking_cannot_be_completed(self, booking):
        fakes = BookingEngineFakes(booking)

        with pytest.raises(BusinessLogicError) as exc_info:
            await CompleteBookingUseCase(**_deps(fakes)).complete_booking(
                owner_id=OWNER_ID, booking_id=booking.id
            )

        assert exc_info.value.code == ErrorCode.INVALID_STATUS_TRANSITION
        assert fakes.stored(booking.id).status == BookingStatus.PENDING
