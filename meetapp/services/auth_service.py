"""Session service - exchanges credentials for a token."""

from dataclasses import dataclass
from enum import Enum

from sqlalchemy.ext.asyncio import AsyncSession

from meetapp.core.security import issue_token
from meetapp.schemas.auth import SessionToken, SessionUser
from meetapp.services.user_service import UserService


class LoginFailure(str, Enum):
    """Why a login attempt was refused."""

    UNKNOWN_USER = "User does not exist"
    WRONG_PASSWORD = "Wrong password"


@dataclass(frozen=True)
class LoginResult:
    """Either a session token or the failure reason."""

    session: SessionToken | None = None
    failure: LoginFailure | None = None


class AuthService:
    """Authentication service."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.user_service = UserService(db)

    async def login(self, email: str, password: str) -> LoginResult:
        """Authenticate user by email and password."""
        user = await self.user_service.get_by_email(email)
        if not user:
            return LoginResult(failure=LoginFailure.UNKNOWN_USER)

        if not self.user_service.password_matches(user, password):
            return LoginResult(failure=LoginFailure.WRONG_PASSWORD)

        session = SessionToken(
            user=SessionUser.model_validate(user),
            token=issue_token(user.id),
        )
        return LoginResult(session=session)
