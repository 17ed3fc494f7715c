"""Исключения аутентификации в АТОЛ Онлайн."""

from enum import Enum

from ...core.exceptions import AtolBaseException
from ...core.transport import AtolResponse


class AuthErrorKind(str, Enum):
    missing_login = "missing_login"
    missing_password = "missing_password"
    auth_failed = "auth_failed"


class AuthError(AtolBaseException):
    """
    Не удалось получить токен.

    Attributes:
        kind: Причина ошибки
        response: Ответ сервера, если запрос был выполнен
    """

    def __init__(
        self,
        kind: AuthErrorKind,
        message: str,
        response: AtolResponse | None = None,
        details: dict | None = None,
    ) -> None:
        self.kind = kind
        self.response = response
        details = {"kind": kind.value, **(details or {})}
        if response is not None:
            details["status_code"] = response.status_code
            details["error"] = response.error
        super().__init__(message, details)
