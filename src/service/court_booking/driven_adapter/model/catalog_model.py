"""
Tables owned by the catalog and account services.

The booking engine only reads them. They are declared here so the directory
adapters can query them and local setups can create them.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class UserModel(Base):
    __tablename__ = 'app_user'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    profile_image: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)

    def __repr__(self) -> str:
        return f'<UserModel(id={self.id}, full_name={self.full_name})>'


class VenueModel(Base):
    __tablename__ = 'venue'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str] = mapped_column(String(512), nullable=False, default='')


class CourtModel(Base):
    __tablename__ = 'court'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    venue_id: Mapped[int] = mapped_column(ForeignKey('venue.id'), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    size: Mapped[str] = mapped_column(String(20), nullable=False, default='5v5')
    hourly_rate: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    peak_hour_rate: Mapped[Optional[Decimal]] = mapped_column(Numeric(10, 2), nullable=True)
    max_players: Mapped[int] = mapped_column(Integer, nullable=False, default=10)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    opening_time: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)
    closing_time: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)
