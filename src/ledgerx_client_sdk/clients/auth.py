from __future__ import annotations

from dataclasses import dataclass

from ..models import LoginResponse, LogoutResponse, MeResponse
from ..models_turnos import TurnoStatus
from .base import BaseClient, expect_dict


@dataclass
class AuthClient(BaseClient):
    def login(self, username: str, password: str) -> LoginResponse:
        data = self._request(
            "POST",
            "/api/auth/login/",
            json_body={"username": username, "password": password},
            module="auth",
            operation="login",
        )
        return LoginResponse.model_validate(expect_dict(data, "login"))

    def logout(self) -> LogoutResponse:
        data = self._request("POST", "/api/auth/logout/", module="auth", operation="logout")
        return LogoutResponse.model_validate(data or {"success": True})

    def me(self) -> MeResponse:
        data = self._request("GET", "/api/auth/me/", module="auth", operation="me", use_get_cache=False)
        payload = expect_dict(data, "me")
        if "user" not in payload and "username" in payload:
            payload = {"success": True, "user": payload}
        return MeResponse.model_validate(payload)

    def turno_activo(self) -> TurnoStatus:
        data = self._request(
            "GET",
            "/api/auth/turno-activo/",
            module="auth",
            operation="turno_activo",
            use_get_cache=False,
        )
        return TurnoStatus.model_validate(expect_dict(data, "active shift"))
