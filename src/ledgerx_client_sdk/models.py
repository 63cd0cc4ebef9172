from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class UserResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    username: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    is_staff: bool | None = None
    is_superuser: bool | None = None
    groups: list[str] = Field(default_factory=list)

    @property
    def display_name(self) -> str:
        full = " ".join(part for part in (self.first_name, self.last_name) if part)
        return full or self.username


class LoginResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool = False
    user: UserResponse | None = None
    error: str | None = None


class MeResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool = False
    user: UserResponse | None = None


class LogoutResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    success: bool = False
    message: str | None = None


class SessionData(BaseModel):
    cookies: dict[str, str] = Field(default_factory=dict)
    tenant: str | None = None
    env_name: str | None = None
    user: UserResponse | None = None


class MutationResponse(BaseModel):
    """Generic ``{success, message, error}`` envelope returned by mutating endpoints."""

    model_config = ConfigDict(extra="allow")

    success: bool | None = None
    message: str | None = None
    error: str | None = None
