from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from notes_api.api import auth, notes, users
from notes_api.config import Settings
from notes_api.errors import InternalError, NotesApiError, Unauthorized
from notes_api.log import configure_logging
from notes_api.storage.notes_store import NotesStore
from notes_api.storage.users_store import UsersStore
from notes_api.utils.auth_hash import PasswordHasher
from notes_api.utils.identity import IdentityExtractor
from notes_api.utils.jwt_auth import TokenService

logger = structlog.get_logger()


async def _handle_api_error(request: Request, exc: NotesApiError) -> JSONResponse:
    headers = None
    detail = exc.detail
    if isinstance(exc, InternalError):
        logger.error(
            "internal_error",
            method=request.method,
            path=request.url.path,
            error=type(exc).__name__,
            exc_info=exc,
        )
        detail = InternalError.default_detail
    elif isinstance(exc, Unauthorized):
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(status_code=exc.status_code, content={"detail": detail}, headers=headers)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(title="Notes API")

    tokens = TokenService(settings.token)
    app.state.settings = settings
    app.state.users = UsersStore(settings.data_dir)
    app.state.notes = NotesStore(settings.data_dir)
    app.state.hasher = PasswordHasher(settings.bcrypt_rounds)
    app.state.tokens = tokens
    app.state.identity = IdentityExtractor(tokens)

    if not settings.token.secret:
        logger.warning("config.jwt_secret_missing")

    app.add_exception_handler(NotesApiError, _handle_api_error)

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(notes.router)

    @app.get("/health")
    def health():
        return {"ok": True}

    return app


app = create_app()
