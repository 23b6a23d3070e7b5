"""
HTTP tests for the booking and owner routers

Requests go through the real app factory, DI wiring and exception handlers,
with every driven adapter replaced by an in-memory fake.
"""

from datetime import date, timedelta

import pytest

from src.service.court_booking.domain.enum.booking_status import BookingStatus
from src.service.court_booking.domain.enum.notification_type import NotificationType
from test.service.court_booking.helpers import (
    COURT_ID,
    CREATOR_ID,
    OTHER_OWNER_ID,
    OWNER_ID,
    PLAYER_ID,
)


pytestmark = pytest.mark.unit


def _as(user_id: int) -> dict[str, str]:
    return {'X-User-Id': str(user_id)}


def _create_payload(**overrides):
    payload = {
        'court_id': COURT_ID,
        'date': (date.today() + timedelta(days=30)).isoformat(),
        'start_time': '10:00',
        'end_time': '11:00',
        'booking_type': 'PARTIAL_TEAM',
        'group_type': 'public',
    }
    return payload | overrides


class TestCommonEndpoints:
    def test_health(self, client):
        response = client.get('/health')

        assert response.status_code == 200
        assert response.json()['status'] == 'healthy'


class TestCreateBookingApi:
    def test_created_booking_is_returned_with_details(self, client, engine_fakes):
        response = client.post('/api/booking', json=_create_payload(), headers=_as(CREATOR_ID))

        assert response.status_code == 201
        body = response.json()
        assert body['status'] == 'PENDING'
        assert body['created_by'] == CREATOR_ID
        assert body['current_players'] == 1
        assert body['available_slots'] == 9
        assert body['court']['name'] == 'Court A'
        assert body['creator']['full_name'] == 'Sam Creator'
        assert body['id'] in engine_fakes.booking_command_repo.bookings

    def test_overlap_is_rendered_as_conflict(self, client):
        first = client.post('/api/booking', json=_create_payload(), headers=_as(CREATOR_ID))
        assert first.status_code == 201

        response = client.post(
            '/api/booking',
            json=_create_payload(start_time='10:30', end_time='11:30'),
            headers=_as(PLAYER_ID),
        )

        assert response.status_code == 409
        body = response.json()
        assert body['code'] == 'SLOT_UNAVAILABLE'
        assert body['context']['conflicting_booking_id'] == first.json()['id']

    def test_missing_actor_header_is_rejected(self, client):
        response = client.post('/api/booking', json=_create_payload())

        assert response.status_code == 400

    def test_malformed_time_is_rejected(self, client):
        response = client.post(
            '/api/booking', json=_create_payload(start_time='10am'), headers=_as(CREATOR_ID)
        )

        assert response.status_code == 400


class TestRosterApi:
    def test_join_fills_roster_and_confirms(self, client, seeded_booking, engine_fakes):
        response = client.post(f'/api/booking/{seeded_booking.id}/join', headers=_as(PLAYER_ID))

        assert response.status_code == 200
        body = response.json()
        assert body['auto_confirmed'] is True
        assert body['booking']['status'] == 'CONFIRMED'
        assert engine_fakes.stored(seeded_booking.id).status == BookingStatus.CONFIRMED
        assert NotificationType.BOOKING_FULL.value in engine_fakes.notification_sink.kinds_for(
            PLAYER_ID
        )

    def test_creator_cannot_join_own_booking(self, client, seeded_booking):
        response = client.post(f'/api/booking/{seeded_booking.id}/join', headers=_as(CREATOR_ID))

        assert response.status_code == 400
        assert response.json()['code'] == 'CANNOT_JOIN_OWN'

    def test_unknown_booking(self, client):
        response = client.post(
            '/api/booking/0190a6b2-3c4d-7e5f-8a9b-0c1d2e3f4a5b/leave', headers=_as(PLAYER_ID)
        )

        assert response.status_code == 404
        assert response.json()['code'] == 'BOOKING_NOT_FOUND'


class TestQueryApi:
    def test_get_booking(self, client, seeded_booking):
        response = client.get(f'/api/booking/{seeded_booking.id}')

        assert response.status_code == 200
        assert response.json()['id'] == str(seeded_booking.id)

    def test_court_availability(self, client, seeded_booking):
        response = client.get(
            f'/api/booking/court/{COURT_ID}/availability',
            params={'date': seeded_booking.date.isoformat()},
        )

        assert response.status_code == 200
        body = response.json()
        assert body['opening_time'] == '08:00'
        assert [o['start_time'] for o in body['occupied']] == ['18:00']


class TestOwnerApi:
    def test_owner_approves(self, client, seeded_booking, engine_fakes):
        response = client.patch(
            f'/api/owner/booking/{seeded_booking.id}/approve', headers=_as(OWNER_ID)
        )

        assert response.status_code == 200
        assert response.json()['owner_approved'] is True
        assert engine_fakes.stored(seeded_booking.id).status == BookingStatus.CONFIRMED

    def test_reject_without_body_uses_default_reason(self, client, seeded_booking):
        response = client.patch(
            f'/api/owner/booking/{seeded_booking.id}/reject', headers=_as(OWNER_ID)
        )

        assert response.status_code == 200
        assert response.json()['status'] == 'CANCELLED'
        assert response.json()['cancellation_reason'] == 'Rejected by owner'

    def test_other_owner_is_forbidden(self, client, seeded_booking):
        response = client.patch(
            f'/api/owner/booking/{seeded_booking.id}/complete', headers=_as(OTHER_OWNER_ID)
        )

        assert response.status_code == 403
        assert response.json()['code'] == 'NOT_VENUE_OWNER'
