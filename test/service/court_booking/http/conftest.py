from collections.abc import Iterator

from dependency_injector import providers
from fastapi.testclient import TestClient
import pytest

from src.platform.config.di import container
from src.service.court_booking.domain.entity.booking_entity import Booking
from test.service.court_booking.helpers import BookingEngineFakes, RepositoryMocks, make_booking
from test.test_main import app


@pytest.fixture
def seeded_booking() -> Booking:
    return make_booking(max_players=2)


@pytest.fixture
def engine_fakes(seeded_booking: Booking) -> BookingEngineFakes:
    return BookingEngineFakes(seeded_booking)


@pytest.fixture
def query_mocks(seeded_booking: Booking) -> RepositoryMocks:
    return RepositoryMocks(bookings=[seeded_booking])


@pytest.fixture
def client(engine_fakes: BookingEngineFakes, query_mocks: RepositoryMocks) -> Iterator[TestClient]:
    overrides = {
        'booking_command_repo': engine_fakes.booking_command_repo,
        'booking_query_repo': query_mocks.booking_query_repo,
        'court_directory': engine_fakes.court_directory,
        'user_directory': engine_fakes.user_directory,
        'slot_lock': engine_fakes.slot_lock,
        'notification_sink': engine_fakes.notification_sink,
        'notification_dispatcher': engine_fakes.notification_dispatcher,
        'booking_detail_assembler': engine_fakes.detail_assembler,
    }
    for name, fake in overrides.items():
        getattr(container, name).override(providers.Object(fake))
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        for name in overrides:
            getattr(container, name).reset_override()
