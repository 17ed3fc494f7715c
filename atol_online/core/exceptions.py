"""Базовые исключения клиента АТОЛ Онлайн."""

import httpx


class AtolBaseException(Exception):
    """Базовое исключение для всех ошибок клиента."""

    def __init__(self, message: str, details: dict | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


# Сетевые ошибки транспорта пробрасываются вызывающему коду без обёртки
ProtocolError = httpx.HTTPError
