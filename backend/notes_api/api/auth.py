from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, status

from notes_api.api.deps import get_hasher, get_tokens, get_users
from notes_api.errors import Conflict, DuplicateKeyError, Unauthorized
from notes_api.models.auth import AuthResponse, LoginRequest, RegisterRequest, UserOut
from notes_api.storage.interfaces import AccountDirectory
from notes_api.storage.users_store import UserRecord
from notes_api.utils.auth_hash import PasswordHasher
from notes_api.utils.jwt_auth import TokenService

logger = structlog.get_logger()

router = APIRouter(prefix="/auth", tags=["auth"])

INVALID_CREDENTIALS = "Invalid username or password"


def create_account(req: RegisterRequest, users: AccountDirectory, hasher: PasswordHasher) -> UserRecord:
    if users.find_by_username(req.username) is not None:
        raise Conflict("Username already exists")

    hpw = hasher.hash(req.password)  # plaintext never reaches the store
    try:
        return users.create(req.username, hpw)
    except DuplicateKeyError:
        # lost a race with a concurrent registration
        raise Conflict("Username already exists") from None


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    req: RegisterRequest,
    users: AccountDirectory = Depends(get_users),
    hasher: PasswordHasher = Depends(get_hasher),
    tokens: TokenService = Depends(get_tokens),
) -> AuthResponse:
    # fail before the username is taken, not after
    tokens.ensure_ready()
    user = create_account(req, users, hasher)
    token = tokens.issue(user.id, user.username)
    logger.info("auth.registered", user_id=user.id, username=user.username)
    return AuthResponse(token=token, user=UserOut(**user.public_dict()))


@router.post("/login", response_model=AuthResponse)
def login(
    req: LoginRequest,
    users: AccountDirectory = Depends(get_users),
    hasher: PasswordHasher = Depends(get_hasher),
    tokens: TokenService = Depends(get_tokens),
) -> AuthResponse:
    user = users.find_by_username(req.username)
    stored_hash = user.password_hash if user is not None else None
    # always runs a full verify, so unknown usernames are not faster to reject
    if not hasher.verify(req.password, stored_hash) or user is None:
        logger.info("auth.login_failed", username=req.username)
        raise Unauthorized(INVALID_CREDENTIALS)

    token = tokens.issue(user.id, user.username)
    logger.info("auth.logged_in", user_id=user.id)
    return AuthResponse(token=token, user=UserOut(**user.public_dict()))
