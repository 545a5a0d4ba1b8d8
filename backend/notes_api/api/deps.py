from fastapi import Request

from notes_api.storage.interfaces import AccountDirectory, NoteRepository
from notes_api.utils.auth_hash import PasswordHasher
from notes_api.utils.jwt_auth import TokenService


def get_users(request: Request) -> AccountDirectory:
    return request.app.state.users


def get_notes(request: Request) -> NoteRepository:
    return request.app.state.notes


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_tokens(request: Request) -> TokenService:
    return request.app.state.tokens
