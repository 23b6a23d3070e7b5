from abc import ABC, abstractmethod
from typing import Optional

from src.service.court_booking.domain.value_object.directory_info import UserInfo


class IUserDirectory(ABC):
    @abstractmethod
    async def get_user_by_id(self, *, user_id: int) -> Optional[UserInfo]:
        pass
