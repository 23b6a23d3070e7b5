from datetime import date as date_type
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from src.platform.config.core_setting import settings
from src.service.court_booking.domain.enum.booking_kind import BookingType, GroupType
from src.service.court_booking.domain.enum.booking_status import BookingStatus


class BookingSortField(StrEnum):
    PLAYERS = 'players'
    DATE = 'date'
    TIME = 'time'
    CREATED_AT = 'createdAt'


class SortOrder(StrEnum):
    ASC = 'asc'
    DESC = 'desc'


class BookingSearchQuery(BaseModel):
    """Filters shared by every booking listing. Unset fields don't filter."""

    court_id: Optional[int] = None
    venue_id: Optional[int] = None
    status: Optional[BookingStatus] = None
    date: Optional[date_type] = None
    start_date: Optional[date_type] = None
    end_date: Optional[date_type] = None
    booking_type: Optional[BookingType] = None
    group_type: Optional[GroupType] = None
    min_players: Optional[int] = Field(default=None, ge=0)
    max_players: Optional[int] = Field(default=None, ge=0)
    available_slots: Optional[int] = Field(default=None, ge=0)
    sort_by: Optional[BookingSortField] = None
    sort_order: SortOrder = SortOrder.DESC
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=settings.DEFAULT_PAGE_LIMIT, ge=1, le=settings.MAX_PAGE_LIMIT)

    @model_validator(mode='after')
    def check_ranges(self) -> 'BookingSearchQuery':
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError('start_date must not be after end_date')
        if (
            self.min_players is not None
            and self.max_players is not None
            and self.min_players > self.max_players
        ):
            raise ValueError('min_players must not be greater than max_players')
        return self

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
