from pydantic import BaseModel, Field, field_validator


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6)

    @field_validator("password")
    @classmethod
    def no_nul_bytes(cls, v: str) -> str:
        # bcrypt cannot hash NUL
        if "\x00" in v:
            raise ValueError("password must not contain NUL characters")
        return v


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserOut(BaseModel):
    id: int
    username: str
    created_at: str


class AuthResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: UserOut
