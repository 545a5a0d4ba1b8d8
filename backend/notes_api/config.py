"""Application configuration loaded from environment variables."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# relative to the working directory the server is started from
DEFAULT_DATA_DIR = Path("data")
DEFAULT_EXP_MINUTES = 24 * 60


@dataclass(frozen=True)
class TokenSettings:
    secret: str
    algorithm: str = "HS256"
    ttl: timedelta = timedelta(minutes=DEFAULT_EXP_MINUTES)


class Settings(BaseSettings):
    """Validated settings from env and optional .env file, read once at app creation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    app_data_dir: Path = DEFAULT_DATA_DIR
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    jwt_exp_minutes: int = DEFAULT_EXP_MINUTES
    bcrypt_rounds: Optional[int] = None
    log_level: str = "INFO"

    @field_validator("jwt_exp_minutes", mode="before")
    @classmethod
    def fallback_exp_minutes(cls, v: Any) -> int:
        try:
            minutes = int(v)
        except (TypeError, ValueError):
            return DEFAULT_EXP_MINUTES
        return minutes if minutes >= 1 else DEFAULT_EXP_MINUTES

    @field_validator("bcrypt_rounds", mode="before")
    @classmethod
    def optional_rounds(cls, v: Any) -> Optional[int]:
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        try:
            return int(v)
        except (TypeError, ValueError):
            return None

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return (v or "INFO").strip().upper()

    @property
    def data_dir(self) -> Path:
        return self.app_data_dir

    @property
    def token(self) -> TokenSettings:
        return TokenSettings(
            secret=self.jwt_secret,
            algorithm=self.jwt_algorithm,
            ttl=timedelta(minutes=self.jwt_exp_minutes),
        )

    @classmethod
    def from_env(cls) -> "Settings":
        return cls()
