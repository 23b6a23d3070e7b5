from datetime import date as date_type, datetime
from decimal import Decimal
from typing import Optional
import uuid

from sqlalchemy import Boolean, Date, DateTime, Index, Integer, Numeric, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB, UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class BookingModel(Base):
    """
    One row per booking. Players and invites are embedded as JSONB arrays so a
    roster change is a single-row conditional update guarded by `version`.
    """

    __tablename__ = 'court_booking'
    __table_args__ = (
        Index('ix_court_booking_court_date', 'court_id', 'date'),
        Index('ix_court_booking_players', 'players', postgresql_using='gin'),
    )

    id: Mapped[uuid.UUID] = mapped_column(PG_UUID(as_uuid=True), primary_key=True)  # UUID7
    court_id: Mapped[int] = mapped_column(Integer, nullable=False)
    venue_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    created_by: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    booking_type: Mapped[str] = mapped_column(String(20), nullable=False)
    group_type: Mapped[str] = mapped_column(String(10), nullable=False, default='public')
    max_players: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default='PENDING', index=True)
    payment_status: Mapped[str] = mapped_column(String(20), nullable=False, default='unpaid')
    owner_approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    owner_approved_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    players: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    invites: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)
    cancelled_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    cancelled_by: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    cancellation_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    def __repr__(self) -> str:
        return f'<BookingModel(id={self.id}, court_id={self.court_id}, date={self.date}, status={self.status})>'
