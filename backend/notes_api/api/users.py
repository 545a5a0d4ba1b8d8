import structlog
from fastapi import APIRouter, Depends, status

from notes_api.api.auth import create_account
from notes_api.api.deps import get_hasher, get_users
from notes_api.models.auth import RegisterRequest, UserOut
from notes_api.storage.interfaces import AccountDirectory
from notes_api.utils.auth_hash import PasswordHasher

logger = structlog.get_logger()

router = APIRouter(prefix="/users", tags=["users"])


# Older clients register here; /auth/register also returns a token.
@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED, deprecated=True)
def create_user(
    req: RegisterRequest,
    users: AccountDirectory = Depends(get_users),
    hasher: PasswordHasher = Depends(get_hasher),
) -> UserOut:
    user = create_account(req, users, hasher)
    logger.info("users.created", user_id=user.id, username=user.username)
    return UserOut(**user.public_dict())
