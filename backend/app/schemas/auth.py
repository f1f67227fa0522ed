import uuid

from pydantic import BaseModel, EmailStr, field_validator


class _Credentials(BaseModel):
    email: EmailStr | None = None
    password: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_missing(cls, v):
        # "" is reported as a missing field rather than a malformed address
        return None if isinstance(v, str) and not v.strip() else v


class RegisterRequest(_Credentials):
    name: str | None = None


class LoginRequest(_Credentials):
    pass


class UserResponse(BaseModel):
    """Public user projection; the password hash is never part of it."""
    id: uuid.UUID
    name: str
    email: str

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    message: str = "Login successful!"
    token: str
    user: UserResponse
