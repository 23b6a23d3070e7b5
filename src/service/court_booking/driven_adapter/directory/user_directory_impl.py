from typing import AsyncContextManager, Callable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.court_booking.app.interface.i_user_directory import IUserDirectory
from src.service.court_booking.domain.value_object.directory_info import UserInfo
from src.service.court_booking.driven_adapter.model.catalog_model import UserModel


class UserDirectoryImpl(IUserDirectory):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_user_by_id(self, *, user_id: int) -> Optional[UserInfo]:
        async with self.session_factory() as session:
            result = await session.execute(select(UserModel).where(UserModel.id == user_id))
            user_model = result.scalar_one_or_none()

            if not user_model:
                return None

            return UserInfo(
                id=user_model.id,
                full_name=user_model.full_name,
                profile_image=user_model.profile_image,
            )
