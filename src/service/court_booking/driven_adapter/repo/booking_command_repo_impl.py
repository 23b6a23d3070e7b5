"""
Booking Command Repository Implementation

Single-row writes on court_booking. `save` is a compare-and-set on the
version column: zero rows updated means another writer got there first.
"""

from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncContextManager, AsyncIterator, Callable, List, Optional
import uuid

import attrs
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.exception.exceptions import ConcurrentModificationError
from src.platform.logging.loguru_io import Logger
from src.service.court_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.court_booking.domain.entity.booking_entity import Booking
from src.service.court_booking.domain.enum.booking_status import BookingStatus
from src.service.court_booking.driven_adapter.model.booking_model import BookingModel
from src.service.court_booking.driven_adapter.repo.booking_row_mapper import (
    to_entity,
    to_model,
    to_row_values,
)


class BookingCommandRepoImpl(IBookingCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def _get_session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Optional[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel).where(BookingModel.id == uuid.UUID(str(booking_id)))
            )
            db_booking = result.scalar_one_or_none()
            return to_entity(db_booking) if db_booking else None

    @Logger.io
    async def create(self, *, booking: Booking) -> Booking:
        async with self._get_session() as session:
            session.add(to_model(booking, version=1))
            await session.commit()
        return attrs.evolve(booking, version=1)

    @Logger.io
    async def save(self, *, booking: Booking, expected_version: int) -> Booking:
        new_version = expected_version + 1
        async with self._get_session() as session:
            result = await session.execute(
                update(BookingModel)
                .where(
                    BookingModel.id == uuid.UUID(str(booking.id)),
                    BookingModel.version == expected_version,
                )
                .values(**to_row_values(booking), version=new_version)
                .returning(BookingModel.version)
            )
            if result.scalar_one_or_none() is None:
                await session.rollback()
                raise ConcurrentModificationError(
                    'Booking was modified concurrently',
                    {'booking_id': str(booking.id), 'expected_version': expected_version},
                )
            await session.commit()
        return attrs.evolve(booking, version=new_version)

    @Logger.io
    async def find_by_court_and_date(self, *, court_id: int, date: date) -> List[Booking]:
        async with self._get_session() as session:
            result = await session.execute(
                select(BookingModel).where(
                    BookingModel.court_id == court_id,
                    BookingModel.date == date,
                    BookingModel.status.in_(
                        [BookingStatus.PENDING.value, BookingStatus.CONFIRMED.value]
                    ),
                )
            )
            return [to_entity(row) for row in result.scalars().all()]
