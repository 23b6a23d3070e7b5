from typing import Iterable, List, Optional

from anyio.abc import TaskGroup

from src.platform.logging.loguru_io import Logger
from src.platform.metrics.booking_metrics import metrics
from src.service.court_booking.app.interface.i_notification_sink import INotificationSink
from src.service.court_booking.domain.value_object.notification_request import (
    NotificationRequest,
)


class NotificationDispatcher:
    """
    Sends notifications after a booking change has been stored.

    With a task group (installed by the app lifespan) delivery runs in the
    background and the request returns immediately. Without one, delivery is
    awaited inline. Either way a failing sink never fails the caller.
    """

    def __init__(
        self, *, notification_sink: INotificationSink, task_group: Optional[TaskGroup] = None
    ) -> None:
        self.notification_sink = notification_sink
        self.task_group = task_group

    async def dispatch(self, requests: Iterable[NotificationRequest]) -> None:
        pending = list(requests)
        if not pending:
            return
        if self.task_group is not None:
            self.task_group.start_soon(self._deliver_all, pending)
        else:
            await self._deliver_all(pending)

    async def _deliver_all(self, requests: List[NotificationRequest]) -> None:
        metrics.notification_deliveries_in_flight.inc()
        try:
            for request in requests:
                await self._deliver(request)
        finally:
            metrics.notification_deliveries_in_flight.dec()

    async def _deliver(self, request: NotificationRequest) -> None:
        try:
            await self.notification_sink.notify(request=request)
        except Exception as e:
            Logger.base.warning(
                f'⚠️ [NOTIFY] {request.kind} to user {request.user_id} '
                f'for booking {request.booking_id} dropped: {type(e).__name__}: {e}'
            )
            metrics.record_notification(kind=request.kind, sent=False)
            return
        metrics.record_notification(kind=request.kind, sent=True)
