from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class UserOut(BaseModel):
    id: int
    username: str
    email: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserOut


class MeResponse(BaseModel):
    user: UserOut
