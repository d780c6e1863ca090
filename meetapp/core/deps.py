"""FastAPI dependencies for dependency injection."""

from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from meetapp.core.security import read_token_subject
from meetapp.db.session import async_session_maker
from meetapp.workers.mail_queue import MailQueue, NotificationDispatcher

# Security scheme
security = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session."""
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


async def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> int:
    """Authenticated user id from the bearer token, 401 otherwise."""
    user_id = read_token_subject(credentials.credentials) if credentials else None
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id


def get_dispatcher(request: Request) -> NotificationDispatcher:
    """Mail queue started by the application lifespan."""
    queue: MailQueue | None = getattr(request.app.state, "mail_queue", None)
    if queue is None:
        # Not started: submissions fail and are logged by the booking service
        return MailQueue()
    return queue


# Type aliases for cleaner dependency injection
DBSession = Annotated[AsyncSession, Depends(get_db)]
CurrentUserId = Annotated[int, Depends(get_current_user_id)]
Dispatcher = Annotated[NotificationDispatcher, Depends(get_dispatcher)]
