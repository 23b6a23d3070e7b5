from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.types.uuid7_utils_types import UtilsUUID7
from src.service.court_booking.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.court_booking.app.command.decline_invite_use_case import DeclineInviteUseCase
from src.service.court_booking.app.command.invite_players_use_case import InvitePlayersUseCase
from src.service.court_booking.app.command.join_booking_use_case import JoinBookingUseCase
from src.service.court_booking.app.command.leave_booking_use_case import LeaveBookingUseCase
from src.service.court_booking.app.dto.booking_search_query import BookingSearchQuery
from src.service.court_booking.app.query.get_booking_use_case import GetBookingUseCase
from src.service.court_booking.app.query.get_court_availability_use_case import (
    GetCourtAvailabilityUseCase,
)
from src.service.court_booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.court_booking.app.query.list_group_matches_use_case import (
    ListGroupMatchesUseCase,
)
from src.service.court_booking.driving_adapter.http_controller.auth.actor_auth import (
    get_current_user_id,
)
from src.service.court_booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingDetailPageResponse,
    BookingDetailResponse,
    CourtAvailabilityResponse,
    GroupMatchPageResponse,
    InvitePlayersRequest,
    InvitePlayersResponse,
    JoinBookingResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    user_id: int = Depends(get_current_user_id),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingDetailResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('court_id', request.court_id)
        span.set_attribute('date', request.date.isoformat())

        detail = await use_case.create_booking(
            user_id=user_id,
            court_id=request.court_id,
            date=request.date,
            start_time=request.start_time,
            end_time=request.end_time,
            booking_type=request.booking_type,
            group_type=request.group_type,
            max_players=request.max_players,
        )

        span.set_attribute('booking.id', str(detail.booking.id))
        return BookingDetailResponse.from_detail(detail)


@router.get('/my_booking')
@Logger.io
async def list_my_bookings(
    query: Annotated[BookingSearchQuery, Query()],
    user_id: int = Depends(get_current_user_id),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> BookingDetailPageResponse:
    page = await use_case.list_my_bookings(user_id=user_id, query=query)
    return BookingDetailPageResponse.from_page(page)


@router.get('/public')
@Logger.io
async def list_public_group_matches(
    query: Annotated[BookingSearchQuery, Query()],
    use_case: ListGroupMatchesUseCase = Depends(ListGroupMatchesUseCase.depends),
) -> GroupMatchPageResponse:
    page = await use_case.list_public_group_matches(query=query)
    return GroupMatchPageResponse.from_page(page)


@router.get('/joinable')
@Logger.io
async def list_joinable_bookings(
    query: Annotated[BookingSearchQuery, Query()],
    use_case: ListGroupMatchesUseCase = Depends(ListGroupMatchesUseCase.depends),
) -> GroupMatchPageResponse:
    page = await use_case.list_joinable_bookings(query=query)
    return GroupMatchPageResponse.from_page(page)


@router.get('/court/{court_id}/availability')
@Logger.io
async def get_court_availability(
    court_id: int,
    date: date,
    use_case: GetCourtAvailabilityUseCase = Depends(GetCourtAvailabilityUseCase.depends),
) -> CourtAvailabilityResponse:
    availability = await use_case.get_court_availability(court_id=court_id, date=date)
    return CourtAvailabilityResponse.from_availability(availability)


@router.get('/{booking_id}')
@Logger.io
async def get_booking(
    booking_id: UtilsUUID7,
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingDetailResponse:
    detail = await use_case.get_booking_with_details(booking_id=booking_id)
    return BookingDetailResponse.from_detail(detail)


@router.post('/{booking_id}/join')
@Logger.io
async def join_booking(
    booking_id: UtilsUUID7,
    user_id: int = Depends(get_current_user_id),
    use_case: JoinBookingUseCase = Depends(JoinBookingUseCase.depends),
) -> JoinBookingResponse:
    result = await use_case.join_booking(user_id=user_id, booking_id=booking_id)
    return JoinBookingResponse(
        message=result.message,
        auto_confirmed=result.auto_confirmed,
        booking=BookingDetailResponse.from_detail(result.booking),
    )


@router.post('/{booking_id}/leave')
@Logger.io
async def leave_booking(
    booking_id: UtilsUUID7,
    user_id: int = Depends(get_current_user_id),
    use_case: LeaveBookingUseCase = Depends(LeaveBookingUseCase.depends),
) -> BookingDetailResponse:
    detail = await use_case.leave_booking(user_id=user_id, booking_id=booking_id)
    return BookingDetailResponse.from_detail(detail)


@router.post('/{booking_id}/invite')
@Logger.io
async def invite_players(
    booking_id: UtilsUUID7,
    request: InvitePlayersRequest,
    user_id: int = Depends(get_current_user_id),
    use_case: InvitePlayersUseCase = Depends(InvitePlayersUseCase.depends),
) -> InvitePlayersResponse:
    result = await use_case.invite_players(
        actor_id=user_id, booking_id=booking_id, user_ids=request.user_ids
    )
    return InvitePlayersResponse(
        invited_user_ids=result.invited_user_ids,
        skipped_user_ids=result.skipped_user_ids,
        booking=BookingDetailResponse.from_detail(result.booking),
    )


@router.post('/{booking_id}/invite/decline')
@Logger.io
async def decline_invite(
    booking_id: UtilsUUID7,
    user_id: int = Depends(get_current_user_id),
    use_case: DeclineInviteUseCase = Depends(DeclineInviteUseCase.depends),
) -> BookingDetailResponse:
    detail = await use_case.decline_invite(user_id=user_id, booking_id=booking_id)
    return BookingDetailResponse.from_detail(detail)
