"""User service - identity lookups and account creation."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from meetapp.core.security import check_password, hash_password
from meetapp.models.user import User
from meetapp.services.base_service import BaseService


class UserService(BaseService[User]):
    """User service for authentication and identity lookups."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email."""
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def create_user(self, name: str, email: str, password: str) -> User:
        """Create new user."""
        user = User(
            name=name,
            email=email,
            hashed_password=hash_password(password),
        )
        return await self.create(user)

    @staticmethod
    def password_matches(user: User, password: str) -> bool:
        """Check a password against the user's stored hash."""
        return check_password(password, user.hashed_password)
