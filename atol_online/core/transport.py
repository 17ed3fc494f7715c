"""HTTP-транспорт и конверт ответа API АТОЛ Онлайн."""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from .config import settings

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json; charset=utf-8"


@dataclass(frozen=True)
class AtolResponse:
    """Конверт ответа сервера АТОЛ (Value Object)."""

    status_code: int
    content: Optional[Dict[str, Any]] = None
    headers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "AtolResponse":
        """
        Разобрать ответ httpx.

        Тело, которое не является JSON-объектом, даёт content=None.
        """
        try:
            content = response.json()
        except (ValueError, UnicodeDecodeError):
            content = None
        if not isinstance(content, dict):
            content = None

        return cls(
            status_code=response.status_code,
            content=content,
            headers=dict(response.headers),
        )

    def is_successful(self) -> bool:
        """Проверить, что ответ 2xx и тело разобрано."""
        return 200 <= self.status_code < 300 and self.content is not None

    def get(self, key: str, default: Any = None) -> Any:
        return (self.content or {}).get(key, default)

    @property
    def error(self) -> Optional[Dict[str, Any]]:
        """Блок error из тела ответа, если сервер его вернул."""
        return self.get("error")


class AtolTransport:
    """
    Транспорт для запросов к API АТОЛ Онлайн.

    Оборачивает синхронный httpx.Client. Ответы с кодами 4xx/5xx не приводят
    к исключению: они возвращаются как AtolResponse с is_successful() == False.
    Сетевые ошибки httpx пробрасываются как есть.
    """

    def __init__(
        self,
        http: httpx.Client | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Инициализировать транспорт.

        Args:
            http: Готовый HTTP-клиент (если не передан, создаётся свой)
            timeout: Таймаут запросов в секундах для собственного клиента
        """
        self._owns_http = http is None
        self._http = http or httpx.Client(
            timeout=timeout if timeout is not None else settings.http_timeout
        )
        self.last_request: Optional[Dict[str, Any]] = None
        self.last_response: Optional[AtolResponse] = None

    def send_request(
        self,
        method: str,
        url: str,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> AtolResponse:
        """
        Отправить запрос и вернуть разобранный ответ.

        Args:
            method: HTTP-метод
            url: Полный URL
            data: Тело запроса (не отправляется для GET)
            headers: Дополнительные заголовки

        Returns:
            Конверт ответа
        """
        method = method.strip().upper()
        request_headers = {"Content-type": CONTENT_TYPE, **(headers or {})}
        self.last_request = {"method": method, "url": url, "headers": request_headers}

        content = None
        if method != "GET":
            self.last_request["json"] = data
            content = json.dumps(data, ensure_ascii=False).encode("utf-8")

        logger.debug("Запрос к АТОЛ: %s %s", method, url)
        response = self._http.request(
            method,
            url,
            headers=request_headers,
            content=content,
        )
        self.last_response = AtolResponse.from_httpx(response)
        logger.debug(
            "Ответ АТОЛ: %s %s -> %s",
            method,
            url,
            self.last_response.status_code,
        )
        return self.last_response

    def close(self) -> None:
        """Закрыть собственный HTTP-клиент."""
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "AtolTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
