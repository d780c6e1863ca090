"""Session API endpoints."""

from fastapi import APIRouter, HTTPException, status

from meetapp.core.deps import DBSession
from meetapp.schemas.auth import SessionCreate, SessionToken
from meetapp.services.auth_service import AuthService

router = APIRouter()


@router.post("", response_model=SessionToken)
async def create_session(
    credentials: SessionCreate,
    db: DBSession,
) -> SessionToken:
    """
    Login and get JWT access token.

    - **email**: User email
    - **password**: User password
    """
    auth_service = AuthService(db)
    result = await auth_service.login(credentials.email, credentials.password)

    if result.session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=result.failure.value,
        )

    return result.session
