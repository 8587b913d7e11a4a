from passlib.utils import MAX_PASSWORD_SIZE
from pydantic import BaseModel, ConfigDict, Field, field_validator


class Credentials(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_hasher(cls, v: str) -> str:
        # passlib refuses to hash more than MAX_PASSWORD_SIZE bytes
        if len(v.encode("utf-8")) > MAX_PASSWORD_SIZE:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_SIZE} bytes")
        return v


class LoginRequest(Credentials):
    pass


class UserCreate(Credentials):
    pass


class UserRead(BaseModel):
    """Public view of a user. The password hash is never serialized."""
    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    user: UserRead
    token: str


class MessageResponse(BaseModel):
    message: str
