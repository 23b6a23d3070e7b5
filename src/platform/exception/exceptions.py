from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    COURT_NOT_FOUND = 'COURT_NOT_FOUND'
    BOOKING_NOT_FOUND = 'BOOKING_NOT_FOUND'
    INVITE_NOT_FOUND = 'INVITE_NOT_FOUND'
    INVALID_DATE = 'INVALID_DATE'
    INVALID_TIME = 'INVALID_TIME'
    INVALID_MAX_PLAYERS = 'INVALID_MAX_PLAYERS'
    OUTSIDE_OPENING_HOURS = 'OUTSIDE_OPENING_HOURS'
    SLOT_UNAVAILABLE = 'SLOT_UNAVAILABLE'
    SLOT_LOCKED = 'SLOT_LOCKED'
    DUPLICATE = 'DUPLICATE'
    CONCURRENT_MODIFICATION = 'CONCURRENT_MODIFICATION'
    NOT_VENUE_OWNER = 'NOT_VENUE_OWNER'
    NOT_A_PARTICIPANT = 'NOT_A_PARTICIPANT'
    INVITE_REQUIRED = 'INVITE_REQUIRED'
    CANNOT_JOIN_OWN = 'CANNOT_JOIN_OWN'
    ALREADY_FULL = 'ALREADY_FULL'
    CREATOR_CANNOT_LEAVE = 'CREATOR_CANNOT_LEAVE'
    INSUFFICIENT_SLOTS = 'INSUFFICIENT_SLOTS'
    BOOKING_NOT_MUTABLE = 'BOOKING_NOT_MUTABLE'
    INVALID_STATUS_TRANSITION = 'INVALID_STATUS_TRANSITION'


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(
        self,
        message: str,
        status_code: int,
        code: ErrorCode | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.code = code
        self.context = context or {}
        super().__init__(message)


class ValidationError(CustomBaseError):
    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, 400, code, context)


class BusinessLogicError(CustomBaseError):
    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, 400, code, context)


class AuthorizationError(CustomBaseError):
    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, 403, code, context)


class NotFoundError(CustomBaseError):
    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, 404, code, context)


class ConflictError(CustomBaseError):
    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, 409, code, context)


class ConcurrentModificationError(ConflictError):
    """Raised when a conditional booking update loses the version race"""

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        super().__init__(message, ErrorCode.CONCURRENT_MODIFICATION, context)
