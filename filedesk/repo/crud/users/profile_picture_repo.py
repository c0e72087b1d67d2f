from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from filedesk.models.users.profile_picture import ProfilePicture
from filedesk.repo.crud.common.base_repo import BaseRepository


class ProfilePictureRepository(BaseRepository[ProfilePicture, ProfilePicture]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, ProfilePicture)

    async def get_by_user_id(self, user_id: str) -> Optional[ProfilePicture]:
        return await self.find_by_field(user_id, "user_id")
