import logging
from typing import Optional

from pydantic import ValidationError as SchemaValidationError

from ....core.config import settings
from ....core.transport import AtolTransport
from ..domain.entities import AtolCredentials
from ..domain.value_objects import TokenHeader
from ..exceptions import AuthError, AuthErrorKind
from ..schemas import AtolCredentialsIn, AtolCredentialsOut, TokenContent

logger = logging.getLogger(__name__)


class AtolAuthService:
    """
    Сервис аутентификации в АТОЛ Онлайн.

    Хранит учётные данные и токен. Токен запрашивается один раз
    и переиспользуется, пока не будет сброшен через reset_token().
    """

    def __init__(
        self,
        transport: AtolTransport,
        endpoint: str,
        credentials: AtolCredentialsIn | None = None,
    ) -> None:
        """
        Инициализировать сервис.

        Args:
            transport: HTTP-транспорт
            endpoint: Базовый URL API (без /getToken)
            credentials: Учётные данные; если не переданы, берутся из настроек
        """
        self._transport = transport
        self._endpoint = endpoint.rstrip("/")
        self._credentials: Optional[AtolCredentials] = None
        self._token: Optional[str] = None
        if credentials is not None:
            self.set_credentials(credentials)
        else:
            self._load_from_env()

    def _load_from_env(self) -> None:
        """Загрузить учётные данные из переменных окружения."""
        if self._credentials is not None:
            return

        if settings.login and settings.password:
            logger.info("Загружены учётные данные АТОЛ из ENV: login=%s", settings.login)
            try:
                creds_in = AtolCredentialsIn(login=settings.login, password=settings.password)
            except SchemaValidationError as exc:
                logger.error("Ошибка валидации учётных данных из ENV: %s", exc)
                return
            self.set_credentials(creds_in)
        else:
            logger.debug("Учётные данные АТОЛ не найдены в ENV (ATOL_LOGIN, ATOL_PASSWORD)")

    @property
    def auth_url(self) -> str:
        return f"{self._endpoint}/getToken"

    def set_credentials(self, creds: AtolCredentialsIn) -> None:
        """Установить новые учётные данные. Кэшированный токен сбрасывается."""
        logger.info("Установлены учётные данные АТОЛ: login=%s", creds.login)
        self._credentials = AtolCredentials(login=creds.login, password=creds.password)
        self._token = None

    def set_login_password(self, login: str | None, password: str | None) -> None:
        """
        Проверить и установить логин и пароль.

        Raises:
            AuthError: Если логин или пароль пустой
            pydantic.ValidationError: Если логин или пароль длиннее 100 символов
        """
        if not (login or "").strip():
            raise AuthError(AuthErrorKind.missing_login, "Логин АТОЛ Онлайн не задан")
        if not password:
            raise AuthError(AuthErrorKind.missing_password, "Пароль АТОЛ Онлайн не задан")
        self.set_credentials(AtolCredentialsIn(login=login, password=password))

    def get_credentials(self) -> Optional[AtolCredentialsOut]:
        """Получить учётные данные без пароля."""
        if self._credentials is None:
            return None
        return AtolCredentialsOut(
            login=self._credentials.login,
            has_password=bool(self._credentials.password),
        )

    def get_raw_credentials(self) -> Optional[AtolCredentials]:
        return self._credentials

    @property
    def token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: str) -> None:
        """Установить ранее полученный токен без обращения к API."""
        self._token = token

    def reset_token(self) -> None:
        self._token = None

    def ensure_token(self) -> str:
        """
        Вернуть токен, при необходимости запросив его у API.

        Returns:
            Токен авторизации

        Raises:
            AuthError: Если учётные данные не заданы или API отказал
            httpx.HTTPError: При сетевой ошибке
        """
        if self._token:
            return self._token

        if self._credentials is None:
            raise AuthError(AuthErrorKind.missing_login, "Учётные данные АТОЛ Онлайн не заданы")

        logger.info("Запрос токена АТОЛ для login=%s", self._credentials.login)
        response = self._transport.send_request(
            "POST", self.auth_url, self._credentials.to_auth_payload()
        )
        try:
            content = TokenContent.model_validate(response.content or {})
        except SchemaValidationError as exc:
            logger.warning(
                "Некорректный ответ на запрос токена АТОЛ: status=%s, body=%s",
                response.status_code,
                response.content,
            )
            raise AuthError(
                AuthErrorKind.auth_failed,
                "Некорректный ответ на запрос токена АТОЛ Онлайн",
                response=response,
            ) from exc
        if not response.is_successful() or not content.token:
            logger.warning(
                "Не удалось получить токен АТОЛ: status=%s, error=%s",
                response.status_code,
                content.error,
            )
            raise AuthError(
                AuthErrorKind.auth_failed,
                "Не удалось получить токен АТОЛ Онлайн",
                response=response,
            )

        self._token = content.token
        return self._token

    def get_token_header(self) -> dict:
        """Получить заголовок Token, запросив токен при необходимости."""
        return TokenHeader(token=self.ensure_token()).to_dict()
