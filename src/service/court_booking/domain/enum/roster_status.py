from enum import StrEnum


class PlayerStatus(StrEnum):
    ACTIVE = 'active'
    LEFT = 'left'
    REMOVED = 'removed'


class InviteStatus(StrEnum):
    PENDING = 'pending'
    ACCEPTED = 'accepted'
    REJECTED = 'rejected'
