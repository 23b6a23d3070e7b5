from datetime import date as date_type, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from src.platform.types.uuid7_utils_types import UtilsUUID7
from src.service.court_booking.app.dto.booking_view import (
    BookingDetail,
    CourtAvailability,
    GroupMatch,
    Page,
    UserSummary,
)
from src.service.court_booking.domain.enum.booking_kind import BookingType, GroupType


_HHMM = r'^\d{2}:\d{2}$'


class BookingCreateRequest(BaseModel):
    court_id: int
    date: date_type
    start_time: str = Field(pattern=_HHMM)
    end_time: str = Field(pattern=_HHMM)
    booking_type: BookingType
    group_type: GroupType = GroupType.PUBLIC
    max_players: Optional[int] = None

    class Config:
        json_schema_extra = {
            'examples': [
                {
                    'court_id': 3,
                    'date': '2026-10-20',
                    'start_time': '18:00',
                    'end_time': '19:30',
                    'booking_type': 'PARTIAL_TEAM',
                    'group_type': 'public',
                    'max_players': 10,
                },
                {
                    'court_id': 3,
                    'date': '2026-10-21',
                    'start_time': '09:00',
                    'end_time': '10:00',
                    'booking_type': 'FULL_TEAM',
                },
            ]
        }


class InvitePlayersRequest(BaseModel):
    user_ids: List[int] = Field(min_length=1)

    class Config:
        json_schema_extra = {'example': {'user_ids': [12, 15]}}


class RejectBookingRequest(BaseModel):
    reason: Optional[str] = None

    class Config:
        json_schema_extra = {'example': {'reason': 'Court maintenance'}}


class CourtSummaryResponse(BaseModel):
    id: int
    name: str
    size: str
    hourly_rate: Optional[Decimal] = None
    peak_hour_rate: Optional[Decimal] = None


class VenueSummaryResponse(BaseModel):
    id: int
    name: str
    location: str


class UserSummaryResponse(BaseModel):
    id: int
    full_name: str
    profile_image: Optional[str] = None


class PlayerDetailResponse(BaseModel):
    user: UserSummaryResponse
    joined_at: datetime
    is_admin: bool


class RosterEntryResponse(BaseModel):
    user_id: int
    joined_at: datetime
    is_admin: bool
    status: str
    left_at: Optional[datetime] = None


class InviteResponse(BaseModel):
    user_id: int
    invited_by: int
    invited_at: datetime
    status: str
    responded_at: Optional[datetime] = None


class BookingDetailResponse(BaseModel):
    """Booking with court, venue and people resolved to display data"""

    model_config = {
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'court': {'id': 3, 'name': 'Court A', 'size': '5v5'},
                'venue': {'id': 1, 'name': 'Downtown Futsal', 'location': 'Main St 1'},
                'creator': {'id': 7, 'full_name': 'Sam Lee'},
                'date': '2026-10-20',
                'start_time': '18:00',
                'end_time': '19:30',
                'total_amount': '75.00',
                'status': 'PENDING',
                'current_players': 1,
                'available_slots': 9,
            }
        },
    }

    id: UtilsUUID7
    court: CourtSummaryResponse
    venue: VenueSummaryResponse
    creator: UserSummaryResponse
    created_by: int
    date: date_type
    start_time: str
    end_time: str
    total_amount: Decimal
    booking_type: str
    group_type: str
    max_players: int
    status: str
    payment_status: str
    owner_approved: bool
    owner_approved_at: Optional[datetime] = None
    current_players: int
    available_slots: int
    players: List[RosterEntryResponse]
    invites: List[InviteResponse]
    players_details: List[PlayerDetailResponse]
    cancelled_at: Optional[datetime] = None
    cancelled_by: Optional[int] = None
    cancellation_reason: Optional[str] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_detail(cls, detail: BookingDetail) -> 'BookingDetailResponse':
        booking = detail.booking
        return cls(
            id=booking.id,
            court=CourtSummaryResponse(
                id=detail.court.id,
                name=detail.court.name,
                size=detail.court.size,
                hourly_rate=detail.court.hourly_rate,
                peak_hour_rate=detail.court.peak_hour_rate,
            ),
            venue=VenueSummaryResponse(
                id=detail.venue.id, name=detail.venue.name, location=detail.venue.location
            ),
            creator=_user(detail.creator),
            created_by=booking.created_by,
            date=booking.date,
            start_time=booking.start_time,
            end_time=booking.end_time,
            total_amount=booking.total_amount,
            booking_type=booking.booking_type.value,
            group_type=booking.group_type.value,
            max_players=booking.max_players,
            status=booking.status.value,
            payment_status=booking.payment_status.value,
            owner_approved=booking.owner_approved,
            owner_approved_at=booking.owner_approved_at,
            current_players=detail.current_players,
            available_slots=detail.available_slots,
            players=[
                RosterEntryResponse(
                    user_id=p.user_id,
                    joined_at=p.joined_at,
                    is_admin=p.is_admin,
                    status=p.status.value,
                    left_at=p.left_at,
                )
                for p in booking.players
            ],
            invites=[
                InviteResponse(
                    user_id=i.user_id,
                    invited_by=i.invited_by,
                    invited_at=i.invited_at,
                    status=i.status.value,
                    responded_at=i.responded_at,
                )
                for i in booking.invites
            ],
            players_details=[
                PlayerDetailResponse(
                    user=_user(p.user), joined_at=p.joined_at, is_admin=p.is_admin
                )
                for p in detail.players_details
            ],
            cancelled_at=booking.cancelled_at,
            cancelled_by=booking.cancelled_by,
            cancellation_reason=booking.cancellation_reason,
            completed_at=booking.completed_at,
            created_at=booking.created_at,
            updated_at=booking.updated_at,
        )


def _user(summary: UserSummary) -> UserSummaryResponse:
    return UserSummaryResponse(
        id=summary.id, full_name=summary.full_name, profile_image=summary.profile_image
    )


class BookingDetailPageResponse(BaseModel):
    items: List[BookingDetailResponse]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page[BookingDetail]) -> 'BookingDetailPageResponse':
        return cls(
            items=[BookingDetailResponse.from_detail(d) for d in page.items],
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        )


class GroupMatchResponse(BaseModel):
    booking_id: UtilsUUID7
    court_id: int
    court_name: str
    venue_id: int
    venue_name: str
    venue_location: str
    creator_id: int
    creator_name: str
    date: date_type
    start_time: str
    end_time: str
    booking_type: str
    status: str
    max_players: int
    current_players: int
    available_slots: int
    total_amount: Decimal
    created_at: Optional[datetime] = None


class GroupMatchPageResponse(BaseModel):
    items: List[GroupMatchResponse]
    total: int
    page: int
    limit: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page[GroupMatch]) -> 'GroupMatchPageResponse':
        return cls(
            items=[
                GroupMatchResponse(
                    booking_id=m.booking_id,
                    court_id=m.court_id,
                    court_name=m.court_name,
                    venue_id=m.venue_id,
                    venue_name=m.venue_name,
                    venue_location=m.venue_location,
                    creator_id=m.creator_id,
                    creator_name=m.creator_name,
                    date=m.date,
                    start_time=m.start_time,
                    end_time=m.end_time,
                    booking_type=m.booking_type,
                    status=m.status.value,
                    max_players=m.max_players,
                    current_players=m.current_players,
                    available_slots=m.available_slots,
                    total_amount=m.total_amount,
                    created_at=m.created_at,
                )
                for m in page.items
            ],
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
        )


class JoinBookingResponse(BaseModel):
    message: str
    auto_confirmed: bool
    booking: BookingDetailResponse

    class Config:
        json_schema_extra = {
            'example': {
                'message': 'Successfully joined booking',
                'auto_confirmed': False,
                'booking': {'id': '01936d8f-5e73-7c4e-a9c5-123456789abc', 'status': 'PENDING'},
            }
        }


class InvitePlayersResponse(BaseModel):
    invited_user_ids: List[int]
    skipped_user_ids: List[int]
    booking: BookingDetailResponse


class OccupiedIntervalResponse(BaseModel):
    booking_id: UtilsUUID7
    start_time: str
    end_time: str
    status: str


class CourtAvailabilityResponse(BaseModel):
    court_id: int
    date: date_type
    opening_time: Optional[str] = None
    closing_time: Optional[str] = None
    occupied: List[OccupiedIntervalResponse]

    @classmethod
    def from_availability(cls, availability: CourtAvailability) -> 'CourtAvailabilityResponse':
        return cls(
            court_id=availability.court_id,
            date=availability.date,
            opening_time=availability.opening_time,
            closing_time=availability.closing_time,
            occupied=[
                OccupiedIntervalResponse(
                    booking_id=o.booking_id,
                    start_time=o.start_time,
                    end_time=o.end_time,
                    status=o.status.value,
                )
                for o in availability.occupied
            ],
        )
