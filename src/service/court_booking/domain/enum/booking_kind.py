from enum import StrEnum


class BookingType(StrEnum):
    FULL_TEAM = 'FULL_TEAM'
    PARTIAL_TEAM = 'PARTIAL_TEAM'
    SOLO = 'SOLO'


class GroupType(StrEnum):
    PUBLIC = 'public'
    PRIVATE = 'private'


class PaymentStatus(StrEnum):
    UNPAID = 'unpaid'
    PAID = 'paid'
    REFUNDED = 'refunded'
