"""
Test Configuration and Fixtures

Environment variables are set before any application module is imported,
since settings and the loguru sinks read them at import time.

Architecture:
- Unit tests (test/**/unit/): in-memory fakes and AsyncMock repositories
- HTTP tests: FastAPI TestClient with container providers overridden
"""

import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    if worker_id == 'master':
        os.environ['POSTGRES_DB'] = 'futsal_booking_test_db'
    else:
        os.environ['POSTGRES_DB'] = f'futsal_booking_test_db_{worker_id}'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # Keep lock waits short so timeout paths run fast
    os.environ.setdefault('SLOT_LOCK_WAIT_TIMEOUT', '0.2')
    os.environ.setdefault('SLOT_LOCK_POLL_INTERVAL', '0.01')


_early_setup_test_environment()
