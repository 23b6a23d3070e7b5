from datetime import date as date_type, datetime, timezone
from decimal import Decimal
from typing import List, Optional

import attrs
from uuid_utils import UUID

from src.platform.exception.exceptions import (
    AuthorizationError,
    BusinessLogicError,
    ConflictError,
    ErrorCode,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.service.court_booking.domain.enum.booking_kind import (
    BookingType,
    GroupType,
    PaymentStatus,
)
from src.service.court_booking.domain.enum.booking_status import (
    MUTABLE_STATUSES,
    BookingStatus,
    can_transition,
)
from src.service.court_booking.domain.enum.roster_status import InviteStatus, PlayerStatus
from src.service.court_booking.domain.value_object.time_slot import TimeSlot


DEFAULT_REJECTION_REASON = 'Rejected by owner'


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@attrs.frozen
class BookingPlayer:
    user_id: int
    joined_at: datetime
    is_admin: bool = False
    status: PlayerStatus = PlayerStatus.ACTIVE
    left_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == PlayerStatus.ACTIVE


@attrs.frozen
class BookingInvite:
    user_id: int
    invited_by: int
    invited_at: datetime
    status: InviteStatus = InviteStatus.PENDING
    responded_at: Optional[datetime] = None

    @property
    def is_pending(self) -> bool:
        return self.status == InviteStatus.PENDING


@attrs.define
class Booking:
    """
    Reservation of one court for one time window, plus its roster.

    Every mutating method validates against the current state and returns a
    new Booking; the caller persists it with the version it was loaded at.
    """

    id: UUID
    court_id: int
    venue_id: int
    created_by: int
    date: date_type
    start_time: str
    end_time: str
    total_amount: Decimal
    booking_type: BookingType
    max_players: int
    group_type: GroupType = GroupType.PUBLIC
    status: BookingStatus = BookingStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.UNPAID
    owner_approved: bool = False
    owner_approved_at: Optional[datetime] = None
    players: List[BookingPlayer] = attrs.field(factory=list)
    invites: List[BookingInvite] = attrs.field(factory=list)
    cancelled_at: Optional[datetime] = None
    cancelled_by: Optional[int] = None
    cancellation_reason: Optional[str] = None
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    version: int = 0

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        court_id: int,
        venue_id: int,
        created_by: int,
        date: date_type,
        slot: TimeSlot,
        total_amount: Decimal,
        booking_type: BookingType,
        max_players: int,
        group_type: GroupType = GroupType.PUBLIC,
        now: Optional[datetime] = None,
    ) -> 'Booking':
        now = now or _utcnow()
        return cls(
            id=id,
            court_id=court_id,
            venue_id=venue_id,
            created_by=created_by,
            date=date,
            start_time=slot.start_time,
            end_time=slot.end_time,
            total_amount=total_amount,
            booking_type=booking_type,
            group_type=group_type,
            max_players=max_players,
            players=[BookingPlayer(user_id=created_by, joined_at=now, is_admin=True)],
            created_at=now,
            updated_at=now,
        )

    # ========== Read helpers ==========

    @property
    def slot(self) -> TimeSlot:
        return TimeSlot(start_time=self.start_time, end_time=self.end_time)

    @property
    def active_players(self) -> List[BookingPlayer]:
        return [p for p in self.players if p.is_active]

    @property
    def active_player_count(self) -> int:
        return len(self.active_players)

    @property
    def available_slots(self) -> int:
        return max(self.max_players - self.active_player_count, 0)

    @property
    def is_full(self) -> bool:
        return self.active_player_count >= self.max_players

    @property
    def is_mutable(self) -> bool:
        return self.status in MUTABLE_STATUSES

    def is_active_player(self, user_id: int) -> bool:
        return any(p.user_id == user_id for p in self.active_players)

    def pending_invite_for(self, user_id: int) -> Optional[BookingInvite]:
        return next((i for i in self.invites if i.user_id == user_id and i.is_pending), None)

    # ========== Guards ==========

    def _context(self, **extra: object) -> dict[str, object]:
        return {'booking_id': str(self.id), **extra}

    def _ensure_mutable(self) -> None:
        if not self.is_mutable:
            raise BusinessLogicError(
                f'Booking is {self.status} and can no longer be changed',
                ErrorCode.BOOKING_NOT_MUTABLE,
                self._context(status=self.status.value),
            )

    def _ensure_transition(self, to_status: BookingStatus) -> None:
        if not can_transition(self.status, to_status):
            raise BusinessLogicError(
                f'Cannot move booking from {self.status} to {to_status}',
                ErrorCode.INVALID_STATUS_TRANSITION,
                self._context(from_status=self.status.value, to_status=to_status.value),
            )

    # ========== Roster ==========

    @Logger.io
    def join(self, *, user_id: int, now: Optional[datetime] = None) -> tuple['Booking', bool]:
        """
        Add `user_id` as an active player.

        Returns:
            (updated booking, whether this join filled the roster and confirmed it)
        """
        if user_id == self.created_by:
            raise BusinessLogicError(
                'You cannot join your own booking',
                ErrorCode.CANNOT_JOIN_OWN,
                self._context(user_id=user_id),
            )
        if self.is_active_player(user_id):
            raise ConflictError(
                'You are already in this booking',
                ErrorCode.DUPLICATE,
                self._context(user_id=user_id),
            )
        if self.is_full:
            raise BusinessLogicError(
                'Booking is already full',
                ErrorCode.ALREADY_FULL,
                self._context(max_players=self.max_players),
            )
        self._ensure_mutable()

        invite = self.pending_invite_for(user_id)
        if self.group_type == GroupType.PRIVATE and invite is None:
            raise AuthorizationError(
                'This is a private group. You need an invitation to join.',
                ErrorCode.INVITE_REQUIRED,
                self._context(user_id=user_id),
            )

        now = now or _utcnow()
        invites = self.invites
        if invite is not None:
            invites = [
                attrs.evolve(i, status=InviteStatus.ACCEPTED, responded_at=now) if i is invite else i
                for i in self.invites
            ]

        joined = attrs.evolve(
            self,
            players=[*self.players, BookingPlayer(user_id=user_id, joined_at=now)],
            invites=invites,
            updated_at=now,
        )
        if not joined.is_full:
            return joined, False

        joined._ensure_transition(BookingStatus.CONFIRMED)
        return attrs.evolve(joined, status=BookingStatus.CONFIRMED), True

    @Logger.io
    def leave(self, *, user_id: int, now: Optional[datetime] = None) -> 'Booking':
        if not self.is_active_player(user_id):
            raise BusinessLogicError(
                'You are not an active player in this booking',
                ErrorCode.NOT_A_PARTICIPANT,
                self._context(user_id=user_id),
            )
        if user_id == self.created_by:
            raise BusinessLogicError(
                'Booking creator cannot leave the booking',
                ErrorCode.CREATOR_CANNOT_LEAVE,
                self._context(user_id=user_id),
            )
        self._ensure_mutable()

        now = now or _utcnow()
        # Only the current active entry flips, earlier left entries stay as history
        players = [
            attrs.evolve(p, status=PlayerStatus.LEFT, left_at=now)
            if p.user_id == user_id and p.is_active
            else p
            for p in self.players
        ]
        return attrs.evolve(self, players=players, updated_at=now)

    @Logger.io
    def invite(
        self, *, actor_id: int, user_ids: List[int], now: Optional[datetime] = None
    ) -> tuple['Booking', List[int], List[int]]:
        """
        Add pending invites for `user_ids`, best effort.

        Users already on the roster or already holding a pending invite are
        skipped rather than failing the batch.

        Returns:
            (updated booking, invited user ids, skipped user ids)
        """
        self._ensure_mutable()
        if not self.is_active_player(actor_id):
            raise AuthorizationError(
                'Only booking participants can invite others',
                ErrorCode.NOT_A_PARTICIPANT,
                self._context(user_id=actor_id),
            )
        if len(user_ids) > self.available_slots:
            raise BusinessLogicError(
                'Not enough available slots for all invited players',
                ErrorCode.INSUFFICIENT_SLOTS,
                self._context(available_slots=self.available_slots, requested=len(user_ids)),
            )

        now = now or _utcnow()
        invites = list(self.invites)
        invited: List[int] = []
        skipped: List[int] = []
        for target in dict.fromkeys(user_ids):
            already_pending = any(i.user_id == target and i.is_pending for i in invites)
            if self.is_active_player(target) or already_pending:
                skipped.append(target)
                continue
            invites.append(BookingInvite(user_id=target, invited_by=actor_id, invited_at=now))
            invited.append(target)

        if not invited:
            return self, invited, skipped
        return attrs.evolve(self, invites=invites, updated_at=now), invited, skipped

    @Logger.io
    def decline_invite(
        self, *, user_id: int, now: Optional[datetime] = None
    ) -> tuple['Booking', BookingInvite]:
        """Returns the updated booking and the invite as it was before declining."""
        invite = self.pending_invite_for(user_id)
        if invite is None:
            raise NotFoundError(
                'No pending invitation for this booking',
                ErrorCode.INVITE_NOT_FOUND,
                self._context(user_id=user_id),
            )
        self._ensure_mutable()

        now = now or _utcnow()
        invites = [
            attrs.evolve(i, status=InviteStatus.REJECTED, responded_at=now) if i is invite else i
            for i in self.invites
        ]
        return attrs.evolve(self, invites=invites, updated_at=now), invite

    # ========== Owner lifecycle ==========

    @Logger.io
    def approve(self, *, now: Optional[datetime] = None) -> 'Booking':
        self._ensure_transition(BookingStatus.CONFIRMED)
        now = now or _utcnow()
        return attrs.evolve(
            self,
            status=BookingStatus.CONFIRMED,
            owner_approved=True,
            owner_approved_at=now,
            updated_at=now,
        )

    @Logger.io
    def reject(
        self, *, owner_id: int, reason: Optional[str] = None, now: Optional[datetime] = None
    ) -> 'Booking':
        self._ensure_transition(BookingStatus.CANCELLED)
        now = now or _utcnow()
        return attrs.evolve(
            self,
            status=BookingStatus.CANCELLED,
            owner_approved=False,
            cancelled_at=now,
            cancelled_by=owner_id,
            cancellation_reason=reason or DEFAULT_REJECTION_REASON,
            updated_at=now,
        )

    @Logger.io
    def complete(self, *, now: Optional[datetime] = None) -> 'Booking':
        self._ensure_transition(BookingStatus.COMPLETED)
        now = now or _utcnow()
        return attrs.evolve(
            self,
            status=BookingStatus.COMPLETED,
            completed_at=now,
            updated_at=now,
        )
