from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional
import uuid

from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.court_booking.app.dto.booking_search_query import BookingSearchQuery
from src.service.court_booking.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.court_booking.domain.entity.booking_entity import Booking
from src.service.court_booking.domain.enum.booking_kind import GroupType
from src.service.court_booking.domain.enum.booking_status import BookingStatus
from src.service.court_booking.domain.enum.roster_status import PlayerStatus
from src.service.court_booking.driven_adapter.model.booking_model import BookingModel
from src.service.court_booking.driven_adapter.repo.booking_row_mapper import to_entity


_OPEN_STATUSES = [BookingStatus.PENDING.value, BookingStatus.CONFIRMED.value]


def _apply_column_filters(stmt: Select, query: BookingSearchQuery) -> Select:
    if query.court_id is not None:
        stmt = stmt.where(BookingModel.court_id == query.court_id)
    if query.venue_id is not None:
        stmt = stmt.where(BookingModel.venue_id == query.venue_id)
    if query.status is not None:
        stmt = stmt.where(BookingModel.status == query.status.value)
    if query.booking_type is not None:
        stmt = stmt.where(BookingModel.booking_type == query.booking_type.value)
    if query.group_type is not None:
        stmt = stmt.where(BookingModel.group_type == query.group_type.value)
    if query.date is not None:
        stmt = stmt.where(BookingModel.date == query.date)
    if query.start_date is not None:
        stmt = stmt.where(BookingModel.date >= query.start_date)
    if query.end_date is not None:
        stmt = stmt.where(BookingModel.date <= query.end_date)
    return stmt


class BookingQueryRepoImpl(IBookingQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    async def _fetch(self, stmt: Select) -> List[Booking]:
        async with self._get_session() as session:
            result = await session.execute(stmt)
            return [to_entity(row) for row in result.scalars().all()]

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel).where(BookingModel.id == uuid.UUID(str(booking_id)))
            )
            db_booking = result.scalar_one_or_none()
            return to_entity(db_booking) if db_booking else None

    @Logger.io
    async def find_by_user_id(self, *, user_id: int, query: BookingSearchQuery) -> List[Booking]:
        # JSONB containment: some roster element has this user_id and is active
        is_active_player = BookingModel.players.contains(
            [{'user_id': user_id, 'status': PlayerStatus.ACTIVE.value}]
        )
        stmt = select(BookingModel).where(
            or_(BookingModel.created_by == user_id, is_active_player)
        )
        return await self._fetch(_apply_column_filters(stmt, query))

    @Logger.io
    async def find_public_group_matches(
        self, *, query: BookingSearchQuery, today: date
    ) -> List[Booking]:
        stmt = select(BookingModel).where(
            BookingModel.group_type == GroupType.PUBLIC.value,
            BookingModel.status.in_(_OPEN_STATUSES),
        )
        if query.date is None:
            stmt = stmt.where(BookingModel.date >= today)
        # The listing is always public and open, whatever the query asks for
        query = query.model_copy(update={'status': None, 'group_type': None})
        return await self._fetch(_apply_column_filters(stmt, query))

    @Logger.io
    async def find_by_venue_ids(
        self, *, venue_ids: List[int], query: BookingSearchQuery
    ) -> List[Booking]:
        stmt = select(BookingModel).where(BookingModel.venue_id.in_(venue_ids))
        return await self._fetch(_apply_column_filters(stmt, query))

    @Logger.io
    async def find_occupying(self, *, court_id: int, date: date) -> List[Booking]:
        stmt = (
            select(BookingModel)
            .where(
                BookingModel.court_id == court_id,
                BookingModel.date == date,
                BookingModel.status != BookingStatus.CANCELLED.value,
            )
            .order_by(BookingModel.start_time)
        )
        return await self._fetch(stmt)
