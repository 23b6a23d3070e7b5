"""Booking entity <-> court_booking row, including the JSONB roster arrays"""

from datetime import datetime
from typing import Any, Optional
import uuid

from uuid_utils import UUID

from src.service.court_booking.domain.entity.booking_entity import (
    Booking,
    BookingInvite,
    BookingPlayer,
)
from src.service.court_booking.domain.enum.booking_kind import (
    BookingType,
    GroupType,
    PaymentStatus,
)
from src.service.court_booking.domain.enum.booking_status import BookingStatus
from src.service.court_booking.domain.enum.roster_status import InviteStatus, PlayerStatus
from src.service.court_booking.driven_adapter.model.booking_model import BookingModel


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def player_to_json(player: BookingPlayer) -> dict[str, Any]:
    return {
        'user_id': player.user_id,
        'joined_at': _iso(player.joined_at),
        'is_admin': player.is_admin,
        'status': player.status.value,
        'left_at': _iso(player.left_at),
    }


def invite_to_json(invite: BookingInvite) -> dict[str, Any]:
    return {
        'user_id': invite.user_id,
        'invited_by': invite.invited_by,
        'invited_at': _iso(invite.invited_at),
        'status': invite.status.value,
        'responded_at': _iso(invite.responded_at),
    }


def to_row_values(booking: Booking) -> dict[str, Any]:
    """Column values for insert/update, `id` and `version` excluded"""
    return {
        'court_id': booking.court_id,
        'venue_id': booking.venue_id,
        'created_by': booking.created_by,
        'date': booking.date,
        'start_time': booking.start_time,
        'end_time': booking.end_time,
        'total_amount': booking.total_amount,
        'booking_type': booking.booking_type.value,
        'group_type': booking.group_type.value,
        'max_players': booking.max_players,
        'status': booking.status.value,
        'payment_status': booking.payment_status.value,
        'owner_approved': booking.owner_approved,
        'owner_approved_at': booking.owner_approved_at,
        'players': [player_to_json(p) for p in booking.players],
        'invites': [invite_to_json(i) for i in booking.invites],
        'cancelled_at': booking.cancelled_at,
        'cancelled_by': booking.cancelled_by,
        'cancellation_reason': booking.cancellation_reason,
        'completed_at': booking.completed_at,
        'updated_at': booking.updated_at,
    }


def to_model(booking: Booking, *, version: int = 1) -> BookingModel:
    return BookingModel(
        # asyncpg binds stdlib uuid.UUID, not uuid_utils.UUID
        id=uuid.UUID(str(booking.id)),
        created_at=booking.created_at,
        version=version,
        **to_row_values(booking),
    )


def to_entity(db_booking: BookingModel) -> Booking:
    return Booking(
        id=UUID(str(db_booking.id)),
        court_id=db_booking.court_id,
        venue_id=db_booking.venue_id,
        created_by=db_booking.created_by,
        date=db_booking.date,
        start_time=db_booking.start_time,
        end_time=db_booking.end_time,
        total_amount=db_booking.total_amount,
        booking_type=BookingType(db_booking.booking_type),
        group_type=GroupType(db_booking.group_type),
        max_players=db_booking.max_players,
        status=BookingStatus(db_booking.status),
        payment_status=PaymentStatus(db_booking.payment_status),
        owner_approved=db_booking.owner_approved,
        owner_approved_at=db_booking.owner_approved_at,
        players=[
            BookingPlayer(
                user_id=p['user_id'],
                joined_at=_parse(p['joined_at']),  # type: ignore[arg-type]
                is_admin=p.get('is_admin', False),
                status=PlayerStatus(p.get('status', PlayerStatus.ACTIVE)),
                left_at=_parse(p.get('left_at')),
            )
            for p in db_booking.players or []
        ],
        invites=[
            BookingInvite(
                user_id=i['user_id'],
                invited_by=i['invited_by'],
                invited_at=_parse(i['invited_at']),  # type: ignore[arg-type]
                status=InviteStatus(i.get('status', InviteStatus.PENDING)),
                responded_at=_parse(i.get('responded_at')),
            )
            for i in db_booking.invites or []
        ],
        cancelled_at=db_booking.cancelled_at,
        cancelled_by=db_booking.cancelled_by,
        cancellation_reason=db_booking.cancellation_reason,
        completed_at=db_booking.completed_at,
        created_at=db_booking.created_at,
        updated_at=db_booking.updated_at,
        version=db_booking.version,
    )
