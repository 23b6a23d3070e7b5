"""
Court Booking Service - Main Application
Handles court reservations, player rosters and venue-owner approvals.

Run: granian src.service.court_booking.main:app --interface asgi --host 0.0.0.0 --port 8100
"""

from contextlib import asynccontextmanager

import anyio
from dependency_injector import providers
from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.config.di import cleanup, container, setup
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.orm_db_setting import create_db_and_tables, engine_manager
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.platform.state.redis_client import redis_client

# Register ORM models before create_all
from src.service.court_booking.driven_adapter import model  # noqa: F401


SERVICE_NAME = 'court-booking-service'


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Manage application lifespan: startup and shutdown"""
    Logger.base.info('🚀 [Court Booking] Starting up...')

    tracing = TracingConfig(service_name=SERVICE_NAME)
    tracing.setup()
    tracing.instrument_sqlalchemy(engine=engine_manager.get_engine())
    tracing.instrument_redis()
    Logger.base.info('📊 [Court Booking] OpenTelemetry tracing configured')

    setup()
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Court Booking] Dependency injection wired')

    await create_db_and_tables()
    Logger.base.info('🗄️ [Court Booking] Database tables ready')

    # Slot lock backend (fail-fast)
    await redis_client.initialize()

    async with anyio.create_task_group() as task_group:
        # Notifications are delivered here, off the request path
        container.task_group.override(providers.Object(task_group))
        Logger.base.info('✅ [Court Booking] Startup complete')

        yield

        Logger.base.info('🛑 [Court Booking] Shutting down...')
        container.task_group.reset_override()
        # In-flight notifications get to finish, nothing new is scheduled

    await redis_client.disconnect()
    await container.database().close()
    cleanup()
    tracing.shutdown()
    container.unwire()
    Logger.base.info('👋 [Court Booking] Shutdown complete')


app = create_app(lifespan=lifespan, service_name=SERVICE_NAME)


@app.get('/')
async def root():
    """Root endpoint"""
    return {
        'service': 'Court Booking Service',
        'docs': '/docs',
        'health': '/health',
    }
