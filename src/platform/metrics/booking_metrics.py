from prometheus_client import Counter, Gauge, Histogram


class BookingMetrics:
    """
    Court booking metrics exposed on /metrics

    Counts booking operations by outcome, slot lock contention and
    notification delivery failures.
    """

    def __init__(self) -> None:
        self.booking_operations = Counter(
            'court_booking_operations_total',
            'Booking operations by outcome',
            ['operation', 'result'],  # result: success/error code
        )

        self.booking_operation_duration = Histogram(
            'court_booking_operation_duration_seconds',
            'Booking operation processing time',
            ['operation'],
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
        )

        self.version_conflicts = Counter(
            'court_booking_version_conflicts_total',
            'Conditional updates that lost the version race and were retried',
            ['operation'],
        )

        self.slot_lock_wait = Histogram(
            'court_booking_slot_lock_wait_seconds',
            'Time spent waiting for the court/date slot lock',
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
        )

        self.slot_lock_timeouts = Counter(
            'court_booking_slot_lock_timeouts_total',
            'Slot lock acquisitions that gave up',
        )

        self.notifications = Counter(
            'court_booking_notifications_total',
            'Notifications dispatched after a committed change',
            ['kind', 'result'],  # result: sent/failed
        )

        self.notification_deliveries_in_flight = Gauge(
            'court_booking_notification_deliveries_in_flight',
            'Notification batches currently being delivered',
        )

    def record_operation(self, *, operation: str, result: str, duration: float) -> None:
        self.booking_operations.labels(operation=operation, result=result).inc()
        self.booking_operation_duration.labels(operation=operation).observe(duration)

    def record_version_conflict(self, *, operation: str) -> None:
        self.version_conflicts.labels(operation=operation).inc()

    def record_slot_lock_wait(self, *, duration: float, acquired: bool) -> None:
        self.slot_lock_wait.observe(duration)
        if not acquired:
            self.slot_lock_timeouts.inc()

    def record_notification(self, *, kind: str, sent: bool) -> None:
        self.notifications.labels(kind=kind, result='sent' if sent else 'failed').inc()


# Global metrics instance
metrics = BookingMetrics()
