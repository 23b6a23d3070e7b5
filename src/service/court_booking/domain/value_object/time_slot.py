import re

import attrs

from src.platform.exception.exceptions import ErrorCode, ValidationError


_HH_MM = re.compile(r'^([01]\d|2[0-3]):([0-5]\d)$')


def to_minutes(value: str) -> int:
    """`HH:MM` (24h) to minutes since midnight."""
    match = _HH_MM.match(value or '')
    if not match:
        raise ValidationError(
            f'Invalid time format: {value!r}, expected HH:MM',
            ErrorCode.INVALID_TIME,
            {'value': value},
        )
    return int(match.group(1)) * 60 + int(match.group(2))


@attrs.frozen
class TimeSlot:
    """Half-open `[start, end)` window on one day, venue-local wall clock."""

    start_time: str
    end_time: str

    @classmethod
    def parse(cls, *, start_time: str, end_time: str) -> 'TimeSlot':
        start, end = to_minutes(start_time), to_minutes(end_time)
        if start >= end:
            raise ValidationError(
                'start_time must be before end_time',
                ErrorCode.INVALID_TIME,
                {'start_time': start_time, 'end_time': end_time},
            )
        return cls(start_time=start_time, end_time=end_time)

    @property
    def start_minutes(self) -> int:
        return to_minutes(self.start_time)

    @property
    def end_minutes(self) -> int:
        return to_minutes(self.end_time)

    @property
    def start_hour(self) -> int:
        return self.start_minutes // 60

    @property
    def duration_minutes(self) -> int:
        return self.end_minutes - self.start_minutes

    def overlaps(self, other: 'TimeSlot') -> bool:
        # Touching edges (10:00-11:00 and 11:00-12:00) do not overlap
        return self.start_minutes < other.end_minutes and other.start_minutes < self.end_minutes

    def within(self, *, opening_time: str, closing_time: str) -> bool:
        return (
            to_minutes(opening_time) <= self.start_minutes
            and self.end_minutes <= to_minutes(closing_time)
        )

    def __str__(self) -> str:
        return f'{self.start_time}-{self.end_time}'
