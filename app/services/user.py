import uuid

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.schemas.user import UserUpdate, PasswordUpdate
from app.core.security import hash_password, verify_password
from app.core.exceptions import NotFoundError, BadRequestError


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: uuid.UUID) -> User | None:
        """Get a user by ID."""
        result = await self.db.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def update(self, user_id: uuid.UUID, data: UserUpdate) -> User:
        """Update the user's profile."""
        user = await self.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        update_data = data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(user, field, value)

        await self.db.commit()
        await self.db.refresh(user)
        return user

    async def change_password(self, user_id: uuid.UUID, data: PasswordUpdate) -> None:
        """Replace the password after checking the current one."""
        user = await self.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        if not verify_password(data.current_password, user.password_hash):
            raise BadRequestError("Current password is incorrect")

        user.password_hash = hash_password(data.new_password)
        await self.db.commit()
        logger.bind(user_id=str(user_id)).info("Password changed")
