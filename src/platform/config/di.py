"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.service.court_booking.app.service.booking_detail_assembler import (
    BookingDetailAssembler,
)
from src.service.court_booking.app.service.notification_dispatcher import (
    NotificationDispatcher,
)
from src.service.court_booking.driven_adapter.directory.court_directory_impl import (
    CourtDirectoryImpl,
)
from src.service.court_booking.driven_adapter.directory.user_directory_impl import (
    UserDirectoryImpl,
)
from src.service.court_booking.driven_adapter.notification.notification_sink_impl import (
    NotificationSinkImpl,
)
from src.service.court_booking.driven_adapter.repo.booking_command_repo_impl import (
    BookingCommandRepoImpl,
)
from src.service.court_booking.driven_adapter.repo.booking_query_repo_impl import (
    BookingQueryRepoImpl,
)
from src.service.court_booking.driven_adapter.state.redis_slot_lock import RedisSlotLock


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager with settings from config_service)
    database = providers.Singleton(Database)

    # Background task group (set by main.py lifespan)
    # Notifications run here after the booking write has committed
    task_group = providers.Object(None)

    # Repositories (stateless - use session_factory per-request)
    booking_command_repo = providers.Singleton(
        BookingCommandRepoImpl, session_factory=database.provided.session
    )
    booking_query_repo = providers.Singleton(
        BookingQueryRepoImpl, session_factory=database.provided.session
    )

    # Catalog and account lookups (read-only)
    court_directory = providers.Singleton(
        CourtDirectoryImpl, session_factory=database.provided.session
    )
    user_directory = providers.Singleton(
        UserDirectoryImpl, session_factory=database.provided.session
    )

    # Court/date lock around conflict check + insert
    slot_lock = providers.Singleton(RedisSlotLock)

    # Notifications
    notification_sink = providers.Singleton(
        NotificationSinkImpl, session_factory=database.provided.session
    )
    # Factory so the task group override made at startup is picked up
    notification_dispatcher = providers.Factory(
        NotificationDispatcher,
        notification_sink=notification_sink,
        task_group=task_group,
    )

    booking_detail_assembler = providers.Singleton(
        BookingDetailAssembler,
        court_directory=court_directory,
        user_directory=user_directory,
    )


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
