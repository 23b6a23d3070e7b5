from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import date


class ISlotLock(ABC):
    """Serializes booking creation per court and day"""

    @abstractmethod
    def hold(self, *, court_id: int, date: date) -> AbstractAsyncContextManager[None]:
        """
        Usage:
            async with slot_lock.hold(court_id=3, date=day):
                ...  # conflict check + insert

        Raises:
            ConflictError(SLOT_LOCKED): The lock could not be taken in time
        """
        pass
