from __future__ import annotations

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=1)
    confirm_password: str | None = None
    full_name: str = Field(default="", max_length=100)


class UserOut(BaseModel):
    id: int
    username: str
    email: str
    full_name: str = ""
    role: str
