"""Notification payloads for each booking event"""

from typing import List, Optional

from src.service.court_booking.domain.entity.booking_entity import Booking, BookingInvite
from src.service.court_booking.domain.enum.notification_type import NotificationType
from src.service.court_booking.domain.value_object.notification_request import (
    NotificationRequest,
)


def _to_active_players(
    booking: Booking,
    *,
    kind: NotificationType,
    title: str,
    message: str,
    related_user_id: Optional[int] = None,
) -> List[NotificationRequest]:
    return [
        NotificationRequest(
            user_id=player.user_id,
            kind=kind,
            booking_id=booking.id,
            title=title,
            message=message,
            related_user_id=related_user_id,
            metadata={'date': booking.date.isoformat(), 'slot': str(booking.slot)},
        )
        for player in booking.active_players
    ]


def booking_confirmed(booking: Booking, *, owner_id: int) -> List[NotificationRequest]:
    return _to_active_players(
        booking,
        kind=NotificationType.BOOKING_CONFIRMED,
        title='Booking Confirmed',
        message='Your booking has been confirmed by the owner.',
        related_user_id=owner_id,
    )


def booking_cancelled(booking: Booking, *, owner_id: int) -> List[NotificationRequest]:
    return _to_active_players(
        booking,
        kind=NotificationType.BOOKING_CANCELLED,
        title='Booking Cancelled',
        message=booking.cancellation_reason or 'Your booking has been cancelled by the owner.',
        related_user_id=owner_id,
    )


def booking_completed(booking: Booking, *, owner_id: int) -> List[NotificationRequest]:
    return _to_active_players(
        booking,
        kind=NotificationType.BOOKING_COMPLETED,
        title='Booking Completed',
        message='Your booking has been completed by the owner.',
        related_user_id=owner_id,
    )


def booking_full(booking: Booking) -> List[NotificationRequest]:
    return _to_active_players(
        booking,
        kind=NotificationType.BOOKING_FULL,
        title='Booking Full',
        message='Your booking is now full and has been auto-confirmed.',
    )


def player_joined(booking: Booking, *, user_id: int, player_name: str) -> NotificationRequest:
    return NotificationRequest(
        user_id=booking.created_by,
        kind=NotificationType.PLAYER_JOINED,
        booking_id=booking.id,
        title='New Player Joined',
        message=f'{player_name} joined your booking.',
        related_user_id=user_id,
    )


def player_left(booking: Booking, *, user_id: int, player_name: str) -> NotificationRequest:
    return NotificationRequest(
        user_id=booking.created_by,
        kind=NotificationType.PLAYER_LEFT,
        booking_id=booking.id,
        title='Player Left',
        message=f'{player_name} left your booking.',
        related_user_id=user_id,
    )


def invite_received(
    booking: Booking, *, user_id: int, inviter_id: int, inviter_name: str
) -> NotificationRequest:
    return NotificationRequest(
        user_id=user_id,
        kind=NotificationType.INVITE_RECEIVED,
        booking_id=booking.id,
        title='Booking Invitation',
        message=f'{inviter_name} invited you to join a booking.',
        related_user_id=inviter_id,
    )


def invite_rejected(
    booking: Booking, *, invite: BookingInvite, invitee_name: str
) -> NotificationRequest:
    return NotificationRequest(
        user_id=invite.invited_by,
        kind=NotificationType.INVITE_REJECTED,
        booking_id=booking.id,
        title='Invitation Declined',
        message=f'{invitee_name} declined your invitation.',
        related_user_id=invite.user_id,
    )
