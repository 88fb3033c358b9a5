from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core import security
from app.core.config import settings
from app.db.mongodb import get_database
from app.models.user import User
from app.repositories import UserRepository
from app.services.teams import TeamMembershipService

# Tokens are issued by the authentication service; this backend only verifies them.
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/auth/login", auto_error=False
)


async def get_current_user(
    db: AsyncIOMotorDatabase = Depends(get_database),
    token: Optional[str] = Depends(oauth2_scheme),
) -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized access",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if not token:
        raise credentials_exception

    user_id = security.decode_access_token(token)
    if user_id is None:
        raise credentials_exception

    user = await UserRepository(db).get_by_id(user_id)
    if user is None:
        raise credentials_exception
    return user


async def get_current_active_user(
    current_user: User = Depends(get_current_user),
) -> User:
    if not current_user.is_active:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Inactive user")
    return current_user


async def get_team_service(
    db: AsyncIOMotorDatabase = Depends(get_database),
) -> TeamMembershipService:
    return TeamMembershipService(db)
