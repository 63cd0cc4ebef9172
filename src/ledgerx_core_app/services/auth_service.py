from __future__ import annotations

import logging

from ledgerx_client_sdk import ApiSession
from ledgerx_client_sdk.exceptions import ApiError
from ledgerx_client_sdk.models import UserResponse

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def has_active_session(self) -> bool:
        return self.session.is_authenticated

    def login(self, username: str, password: str) -> UserResponse:
        logger.info("login_attempt", extra={"username": username})
        try:
            response = self.session.auth_client().login(username, password)
        except Exception:
            logger.exception("login_failure", extra={"username": username})
            raise
        if not response.success or response.user is None:
            logger.warning("login_rejected", extra={"username": username})
            raise ApiError(message=response.error or "Credenciales inválidas", status=401, data=response.model_dump())
        self.session.establish(response.user)
        logger.info("login_success", extra={"username": username, "tenant": self.session.config.tenant})
        return response.user

    def refresh_user(self) -> UserResponse | None:
        response = self.session.auth_client().me()
        if response.user is not None:
            self.session.establish(response.user)
        return response.user

    def logout(self) -> None:
        logger.info("logout")
        try:
            self.session.auth_client().logout()
        except ApiError as exc:
            logger.warning("logout_request_failed", extra={"status": exc.status, "error": exc.message})
        finally:
            self.session.clear()
