from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.court_booking.domain.value_object.directory_info import CourtInfo, VenueInfo


class ICourtDirectory(ABC):
    """Read-only view of the court and venue catalog"""

    @abstractmethod
    async def get_court_by_id(self, *, court_id: int) -> Optional[CourtInfo]:
        pass

    @abstractmethod
    async def get_venue_by_id(self, *, venue_id: int) -> Optional[VenueInfo]:
        pass

    @abstractmethod
    async def list_venue_ids_by_owner(self, *, owner_id: int) -> List[int]:
        pass
