import pytest

from src.platform.exception.exceptions import ErrorCode, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.logging.loguru_io_utils import (
    mask_sensitive,
    normalize_args_kwargs,
    should_mask_keyword,
    truncate_content,
)


pytestmark = pytest.mark.unit


def test_secrets_in_strings_are_masked():
    assert mask_sensitive('user=7 password=hunter2') == "user=7 password='********'"
    assert mask_sensitive(42) == 42


def test_sensitive_keywords_hide_the_value():
    assert should_mask_keyword('Token', 'abc') == '********'
    assert should_mask_keyword('court_id', 3) == 3


def test_long_content_is_truncated():
    truncated = truncate_content('x' * 600)

    assert truncated.endswith('(600 chars)')
    assert truncate_content('short') == 'short'


def test_unknown_kwargs_are_dropped():
    def join(*, user_id: int) -> int:
        return user_id

    _, kwargs = normalize_args_kwargs(join, user_id=8, trace_id='t')

    assert kwargs == {'user_id': 8}


@pytest.mark.asyncio
async def test_io_decorator_passes_results_and_errors_through():
    @Logger.io
    async def find(*, booking_id: str) -> str:
        if booking_id == 'missing':
            raise NotFoundError('Booking not found', ErrorCode.BOOKING_NOT_FOUND)
        return booking_id

    assert await find(booking_id='b1') == 'b1'
    with pytest.raises(NotFoundError):
        await find(booking_id='missing')
