"""Read-only snapshots handed out by the court and user directories"""

from decimal import Decimal
from typing import Optional

import attrs


@attrs.frozen
class CourtInfo:
    id: int
    venue_id: int
    name: str
    size: str
    hourly_rate: Decimal
    max_players: int
    is_active: bool = True
    peak_hour_rate: Optional[Decimal] = None
    opening_time: Optional[str] = None
    closing_time: Optional[str] = None


@attrs.frozen
class VenueInfo:
    id: int
    owner_id: int
    name: str
    location: str = ''


@attrs.frozen
class UserInfo:
    id: int
    full_name: str
    profile_image: Optional[str] = None
