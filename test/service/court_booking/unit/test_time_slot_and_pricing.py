from decimal import Decimal

import pytest

from src.platform.exception.exceptions import ErrorCode, ValidationError
from src.service.court_booking.domain.service.booking_pricing import (
    calculate_total_amount,
    hourly_rate_for,
    is_peak_hour,
)
from src.service.court_booking.domain.value_object.time_slot import TimeSlot, to_minutes
from test.service.court_booking.helpers import HOURLY_RATE, PEAK_HOUR_RATE, make_court


pytestmark = pytest.mark.unit


def _slot(start: str, end: str) -> TimeSlot:
    return TimeSlot.parse(start_time=start, end_time=end)


class TestTimeSlot:
    @pytest.mark.parametrize(
        'value,minutes',
        [('00:00', 0), ('09:30', 570), ('18:00', 1080), ('23:59', 1439)],
    )
    def test_to_minutes(self, value, minutes):
        assert to_minutes(value) == minutes

    @pytest.mark.parametrize('value', ['24:00', '9:30', '18:60', 'noon', ''])
    def test_to_minutes_rejects_bad_format(self, value):
        with pytest.raises(ValidationError) as exc_info:
            to_minutes(value)

        assert exc_info.value.code == ErrorCode.INVALID_TIME

    @pytest.mark.parametrize('start,end', [('19:00', '18:00'), ('18:00', '18:00')])
    def test_start_must_be_before_end(self, start, end):
        with pytest.raises(ValidationError) as exc_info:
            _slot(start, end)

        assert exc_info.value.code == ErrorCode.INVALID_TIME

    def test_overlapping_windows(self):
        """18:00-19:00 and 18:30-19:30 share half an hour"""
        assert _slot('18:00', '19:00').overlaps(_slot('18:30', '19:30'))
        assert _slot('18:30', '19:30').overlaps(_slot('18:00', '19:00'))
        assert _slot('17:00', '20:00').overlaps(_slot('18:00', '19:00'))

    def test_touching_windows_do_not_overlap(self):
        assert not _slot('10:00', '11:00').overlaps(_slot('11:00', '12:00'))
        assert not _slot('11:00', '12:00').overlaps(_slot('10:00', '11:00'))

    def test_within_opening_hours(self):
        assert _slot('08:00', '23:00').within(opening_time='08:00', closing_time='23:00')
        assert not _slot('07:30', '09:00').within(opening_time='08:00', closing_time='23:00')
        assert not _slot('22:30', '23:30').within(opening_time='08:00', closing_time='23:00')

    def test_str(self):
        assert str(_slot('18:00', '19:30')) == '18:00-19:30'


class TestPricing:
    @pytest.mark.parametrize(
        'start,peak',
        [('17:59', False), ('18:00', True), ('21:30', True), ('22:00', False)],
    )
    def test_peak_is_decided_by_start_hour(self, start, peak):
        slot = TimeSlot(start_time=start, end_time='23:00')

        assert is_peak_hour(slot) is peak

    def test_peak_slot_uses_peak_rate(self):
        """One hour at 18:00 costs one peak hour"""
        assert calculate_total_amount(_slot('18:00', '19:00'), make_court()) == PEAK_HOUR_RATE

    def test_off_peak_partial_hours(self):
        assert calculate_total_amount(_slot('09:00', '10:30'), make_court()) == Decimal('75.00')

    def test_peak_without_peak_rate_falls_back(self):
        court = make_court(peak_hour_rate=None)

        assert hourly_rate_for(_slot('19:00', '20:00'), court) == HOURLY_RATE

    def test_amount_rounds_half_up_to_cents(self):
        court = make_court(hourly_rate=Decimal('10.01'), peak_hour_rate=None)

        # 50 minutes of 10.01 is 8.341666...
        assert calculate_total_amount(_slot('09:00', '09:50'), court) == Decimal('8.34')
