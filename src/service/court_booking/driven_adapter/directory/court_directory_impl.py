from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.court_booking.app.interface.i_court_directory import ICourtDirectory
from src.service.court_booking.domain.value_object.directory_info import CourtInfo, VenueInfo
from src.service.court_booking.driven_adapter.model.catalog_model import CourtModel, VenueModel


class CourtDirectoryImpl(ICourtDirectory):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_court_by_id(self, *, court_id: int) -> Optional[CourtInfo]:
        async with self.session_factory() as session:
            result = await session.execute(select(CourtModel).where(CourtModel.id == court_id))
            court_model = result.scalar_one_or_none()

            if not court_model:
                return None

            return CourtInfo(
                id=court_model.id,
                venue_id=court_model.venue_id,
                name=court_model.name,
                size=court_model.size,
                hourly_rate=court_model.hourly_rate,
                max_players=court_model.max_players,
                is_active=court_model.is_active,
                peak_hour_rate=court_model.peak_hour_rate,
                opening_time=court_model.opening_time,
                closing_time=court_model.closing_time,
            )

    @Logger.io
    async def get_venue_by_id(self, *, venue_id: int) -> Optional[VenueInfo]:
        async with self.session_factory() as session:
            result = await session.execute(select(VenueModel).where(VenueModel.id == venue_id))
            venue_model = result.scalar_one_or_none()

            if not venue_model:
                return None

            return VenueInfo(
                id=venue_model.id,
                owner_id=venue_model.owner_id,
                name=venue_model.name,
                location=venue_model.location,
            )

    @Logger.io
    async def list_venue_ids_by_owner(self, *, owner_id: int) -> List[int]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(VenueModel.id).where(VenueModel.owner_id == owner_id)
            )
            return list(result.scalars().all())
