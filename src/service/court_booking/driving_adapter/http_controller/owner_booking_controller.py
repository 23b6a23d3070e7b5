from typing import Annotated, Optional

from fastapi import APIRouter, Body, Depends, Query

from src.platform.logging.loguru_io import Logger
from src.platform.types.uuid7_utils_types import UtilsUUID7
from src.service.court_booking.app.command.approve_booking_use_case import ApproveBookingUseCase
from src.service.court_booking.app.command.complete_booking_use_case import (
    CompleteBookingUseCase,
)
from src.service.court_booking.app.command.reject_booking_use_case import RejectBookingUseCase
from src.service.court_booking.app.dto.booking_search_query import BookingSearchQuery
from src.service.court_booking.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.court_booking.driving_adapter.http_controller.auth.actor_auth import (
    get_current_user_id,
)
from src.service.court_booking.driving_adapter.http_controller.schema.booking_schema import (
    BookingDetailPageResponse,
    BookingDetailResponse,
    RejectBookingRequest,
)


router = APIRouter()


@router.get('')
@Logger.io
async def list_owner_bookings(
    query: Annotated[BookingSearchQuery, Query()],
    owner_id: int = Depends(get_current_user_id),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> BookingDetailPageResponse:
    """Bookings on venues the caller owns"""
    page = await use_case.list_owner_bookings(owner_id=owner_id, query=query)
    return BookingDetailPageResponse.from_page(page)


@router.patch('/{booking_id}/approve')
@Logger.io
async def approve_booking(
    booking_id: UtilsUUID7,
    owner_id: int = Depends(get_current_user_id),
    use_case: ApproveBookingUseCase = Depends(ApproveBookingUseCase.depends),
) -> BookingDetailResponse:
    detail = await use_case.approve_booking(owner_id=owner_id, booking_id=booking_id)
    return BookingDetailResponse.from_detail(detail)


@router.patch('/{booking_id}/reject')
@Logger.io
async def reject_booking(
    booking_id: UtilsUUID7,
    request: Optional[RejectBookingRequest] = Body(default=None),
    owner_id: int = Depends(get_current_user_id),
    use_case: RejectBookingUseCase = Depends(RejectBookingUseCase.depends),
) -> BookingDetailResponse:
    detail = await use_case.reject_booking(
        owner_id=owner_id,
        booking_id=booking_id,
        reason=request.reason if request else None,
    )
    return BookingDetailResponse.from_detail(detail)


@router.patch('/{booking_id}/complete')
@Logger.io
async def complete_booking(
    booking_id: UtilsUUID7,
    owner_id: int = Depends(get_current_user_id),
    use_case: CompleteBookingUseCase = Depends(CompleteBookingUseCase.depends),
) -> BookingDetailResponse:
    detail = await use_case.complete_booking(owner_id=owner_id, booking_id=booking_id)
    return BookingDetailResponse.from_detail(detail)
