from decimal import ROUND_HALF_UP, Decimal

from src.platform.config.core_setting import settings
from src.service.court_booking.domain.value_object.directory_info import CourtInfo
from src.service.court_booking.domain.value_object.time_slot import TimeSlot


_CENTS = Decimal('0.01')


def is_peak_hour(
    slot: TimeSlot,
    *,
    peak_start: int = settings.PEAK_HOUR_START,
    peak_end: int = settings.PEAK_HOUR_END,
) -> bool:
    """Peak is decided by the start hour alone, a 17:30-18:30 slot is off-peak."""
    return peak_start <= slot.start_hour < peak_end


def hourly_rate_for(slot: TimeSlot, court: CourtInfo) -> Decimal:
    if is_peak_hour(slot) and court.peak_hour_rate is not None:
        return court.peak_hour_rate
    return court.hourly_rate


def calculate_total_amount(slot: TimeSlot, court: CourtInfo) -> Decimal:
    hours = Decimal(slot.duration_minutes) / Decimal(60)
    return (hours * hourly_rate_for(slot, court)).quantize(_CENTS, rounding=ROUND_HALF_UP)
