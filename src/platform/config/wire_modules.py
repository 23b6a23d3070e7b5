"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.court_booking.app.command import (
    approve_booking_use_case,
    complete_booking_use_case,
    create_booking_use_case,
    decline_invite_use_case,
    invite_players_use_case,
    join_booking_use_case,
    leave_booking_use_case,
    reject_booking_use_case,
)
from src.service.court_booking.app.query import (
    get_booking_use_case,
    get_court_availability_use_case,
    list_bookings_use_case,
    list_group_matches_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    create_booking_use_case,
    join_booking_use_case,
    leave_booking_use_case,
    invite_players_use_case,
    decline_invite_use_case,
    approve_booking_use_case,
    reject_booking_use_case,
    complete_booking_use_case,
    get_booking_use_case,
    list_bookings_use_case,
    list_group_matches_use_case,
    get_court_availability_use_case,
]
