from enum import StrEnum


class NotificationType(StrEnum):
    BOOKING_CONFIRMED = 'BOOKING_CONFIRMED'
    BOOKING_CANCELLED = 'BOOKING_CANCELLED'
    BOOKING_COMPLETED = 'BOOKING_COMPLETED'
    PLAYER_JOINED = 'PLAYER_JOINED'
    PLAYER_LEFT = 'PLAYER_LEFT'
    INVITE_RECEIVED = 'INVITE_RECEIVED'
    INVITE_REJECTED = 'INVITE_REJECTED'
    BOOKING_FULL = 'BOOKING_FULL'
