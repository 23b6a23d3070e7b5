import time
from typing import Callable, TypeVar

from uuid_utils import UUID

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import (
    ConcurrentModificationError,
    CustomBaseError,
    ErrorCode,
    NotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.court_booking.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.court_booking.domain.entity.booking_entity import Booking


_R = TypeVar('_R')


async def load_booking(booking_command_repo: IBookingCommandRepo, booking_id: UUID) -> Booking:
    booking = await booking_command_repo.get_by_id(booking_id=booking_id)
    if booking is None:
        raise NotFoundError(
            'Booking not found', ErrorCode.BOOKING_NOT_FOUND, {'booking_id': str(booking_id)}
        )
    return booking


async def mutate_booking(
    *,
    booking_command_repo: IBookingCommandRepo,
    booking_id: UUID,
    operation: str,
    mutate: Callable[[Booking], tuple[Booking, _R]],
) -> tuple[Booking, _R]:
    """
    Load, mutate and conditionally save one booking.

    `mutate` runs against a fresh read on every attempt, so its checks see the
    state the save will overwrite. A lost version race is retried up to
    BOOKING_MUTATION_MAX_RETRIES times, then the conflict is raised.
    When `mutate` hands back the same booking object nothing is written.
    """
    started = time.perf_counter()
    try:
        result = await _mutate_with_retry(
            booking_command_repo=booking_command_repo,
            booking_id=booking_id,
            operation=operation,
            mutate=mutate,
        )
    except CustomBaseError as e:
        metrics.record_operation(
            operation=operation,
            result=str(e.code or type(e).__name__),
            duration=time.perf_counter() - started,
        )
        raise
    metrics.record_operation(
        operation=operation, result='success', duration=time.perf_counter() - started
    )
    return result


async def _mutate_with_retry(
    *,
    booking_command_repo: IBookingCommandRepo,
    booking_id: UUID,
    operation: str,
    mutate: Callable[[Booking], tuple[Booking, _R]],
) -> tuple[Booking, _R]:
    attempts = settings.BOOKING_MUTATION_MAX_RETRIES + 1
    for attempt in range(1, attempts + 1):
        booking = await load_booking(booking_command_repo, booking_id)
        updated, outcome = mutate(booking)
        if updated is booking:
            return booking, outcome
        try:
            saved = await booking_command_repo.save(
                booking=updated, expected_version=booking.version
            )
        except ConcurrentModificationError:
            metrics.record_version_conflict(operation=operation)
            if attempt == attempts:
                raise
            Logger.base.warning(
                f'🔁 [{operation.upper()}] booking {booking_id} changed concurrently, '
                f'retry {attempt}/{attempts - 1}'
            )
            continue
        return saved, outcome

    # The last attempt re-raises, the loop never falls through
    raise ConcurrentModificationError(
        'Booking was modified concurrently', {'booking_id': str(booking_id)}
    )
