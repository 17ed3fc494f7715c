"""Клиент регистрации фискальных документов в АТОЛ Онлайн."""

import logging
import time
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, Optional

import httpx
from pydantic import ValidationError as SchemaValidationError
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from ....core import constraints
from ....core.config import settings
from ....core.transport import AtolResponse, AtolTransport
from ...auth.services.auth_service import AtolAuthService
from ...documents.domain.documents import Correction, Document, Receipt
from ...documents.exceptions import ValidationError, ValidationErrorKind
from ...documents.validators import match_pattern, normalize_text, optional_string
from ..domain.value_objects import SandboxOverrides
from ..schemas import ApiMethod, ReportContent

logger = logging.getLogger(__name__)


def _is_not_complete(response: AtolResponse) -> bool:
    try:
        return not ReportContent.from_response(response).is_complete
    except SchemaValidationError:
        logger.warning("Некорректный ответ на запрос статуса: %s", response.content)
        return True


class Fiscalizer:
    """
    Клиент API АТОЛ Онлайн v5.

    Получает токен один раз через AtolAuthService, отправляет документы
    и опрашивает их статус. В тестовом режиме логин, пароль и группа
    всегда берутся из SandboxOverrides, а ИНН и адрес расчётов
    подменяются в отправляемом JSON.
    """

    def __init__(
        self,
        test_mode: bool | None = None,
        login: str | None = None,
        password: str | None = None,
        group: str | None = None,
        callback_url: str | None = None,
        http: httpx.Client | None = None,
        sandbox: SandboxOverrides | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Инициализировать клиент.

        Args:
            test_mode: Работать с тестовой средой (по умолчанию из настроек)
            login: Логин (в тестовом режиме не используется)
            password: Пароль (в тестовом режиме не используется)
            group: Код группы ККТ (в тестовом режиме не используется)
            callback_url: URL для уведомления о результате регистрации
            http: Готовый httpx.Client
            sandbox: Параметры тестовой среды
            sleep: Функция ожидания между попытками опроса

        Raises:
            AuthError: Если передан пустой логин или пароль
            ValidationError: Если группа или callback_url некорректны
        """
        self._test_mode = settings.test_mode if test_mode is None else test_mode
        self._sandbox = (sandbox or SandboxOverrides.from_settings()) if self._test_mode else None
        self._sleep = sleep
        self._transport = AtolTransport(http, timeout=settings.http_timeout)
        self._auth = AtolAuthService(self._transport, self.endpoint)

        if self._sandbox is not None:
            self._auth.set_login_password(self._sandbox.login, self._sandbox.password)
        elif login is not None or password is not None:
            self._auth.set_login_password(login, password)

        group = group if group is not None else settings.group
        self._group: Optional[str] = None
        if group:
            self.group = group
        self.callback_url = callback_url if callback_url is not None else settings.callback_url

    @property
    def test_mode(self) -> bool:
        return self._test_mode

    @property
    def endpoint(self) -> str:
        """Базовый URL API для текущего режима."""
        return settings.test_endpoint if self._test_mode else settings.prod_endpoint

    @property
    def auth(self) -> AtolAuthService:
        return self._auth

    @property
    def group(self) -> Optional[str]:
        """Код группы ККТ. В тестовом режиме всегда тестовая группа."""
        if self._sandbox is not None:
            return self._sandbox.group
        return self._group

    @group.setter
    def group(self, value: str) -> None:
        group = normalize_text(value, field="group")
        if not group:
            raise ValidationError(
                ValidationErrorKind.empty,
                "Код группы ККТ не может быть пустым",
                field="group",
            )
        self._group = group

    @property
    def callback_url(self) -> Optional[str]:
        return self._callback_url

    @callback_url.setter
    def callback_url(self, value: Optional[str]) -> None:
        url = optional_string(value, "callback_url", constraints.MAX_LENGTH_CALLBACK_URL)
        self._callback_url = match_pattern(url, constraints.PATTERN_CALLBACK_URL, "callback_url")

    @property
    def last_request(self) -> Optional[Dict[str, Any]]:
        return self._transport.last_request

    @property
    def last_response(self) -> Optional[AtolResponse]:
        return self._transport.last_response

    def _require_group(self) -> str:
        group = self.group
        if not group:
            raise ValidationError(
                ValidationErrorKind.empty,
                "Код группы ККТ не задан",
                field="group",
            )
        return group

    def _build_payload(
        self,
        document: Document,
        external_id: Optional[str],
        ism_optional: bool,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "external_id": external_id or str(uuid.uuid4()),
            "timestamp": datetime.now().strftime(constraints.DATETIME_FORMAT),
            "ism_optional": ism_optional,
        }
        if self._callback_url:
            payload["service"] = {"callback_url": self._callback_url}
        payload[document.doc_type.value] = document.to_dict()

        if self._sandbox is not None:
            payload = self._sandbox.apply(payload, document.doc_type)
        return payload

    def register_document(
        self,
        api_method: ApiMethod | str,
        document: Document,
        external_id: Optional[str] = None,
        ism_optional: bool = False,
    ) -> AtolResponse:
        """
        Зарегистрировать документ.

        Args:
            api_method: Метод API (sell, buy_correction, ...)
            document: Чек или чек коррекции
            external_id: Идентификатор документа на стороне клиента (по умолчанию UUID4)
            ism_optional: Не проверять коды маркировки в ИС МП

        Returns:
            Ответ сервера с uuid зарегистрированного документа

        Raises:
            ValidationError: invalid_document, если документ не подходит методу
            AuthError: Если не удалось получить токен
            httpx.HTTPError: При сетевой ошибке
        """
        try:
            method = ApiMethod(api_method)
        except ValueError as exc:
            raise ValidationError(
                ValidationErrorKind.invalid_value,
                f"Неизвестный метод API: {api_method!r}",
                field="api_method",
            ) from exc

        is_document = isinstance(document, (Receipt, Correction))
        if not is_document or document.doc_type is not method.document_type:
            raise ValidationError(
                ValidationErrorKind.invalid_document,
                f"Документ {type(document).__name__} нельзя зарегистрировать методом {method.value}",
                field="document",
                details={"api_method": method.value},
            )

        group = self._require_group()
        headers = self._auth.get_token_header()
        payload = self._build_payload(document, external_id, ism_optional)

        logger.info(
            "Регистрация документа %s: external_id=%s",
            method.value,
            payload["external_id"],
        )
        response = self._transport.send_request(
            "POST",
            f"{self.endpoint}/{group}/{method.value}",
            payload,
            headers,
        )
        if not response.is_successful():
            logger.warning(
                "АТОЛ отклонил документ %s: status=%s, error=%s",
                payload["external_id"],
                response.status_code,
                response.error,
            )
        return response

    def sell(
        self,
        receipt: Receipt,
        external_id: Optional[str] = None,
        ism_optional: bool = False,
    ) -> AtolResponse:
        """Регистрация прихода."""
        return self.register_document(ApiMethod.sell, receipt, external_id, ism_optional)

    def sell_refund(
        self,
        receipt: Receipt,
        external_id: Optional[str] = None,
        ism_optional: bool = False,
    ) -> AtolResponse:
        """Регистрация возврата прихода."""
        return self.register_document(ApiMethod.sell_refund, receipt, external_id, ism_optional)

    def buy(
        self,
        receipt: Receipt,
        external_id: Optional[str] = None,
        ism_optional: bool = False,
    ) -> AtolResponse:
        """Регистрация расхода."""
        return self.register_document(ApiMethod.buy, receipt, external_id, ism_optional)

    def buy_refund(
        self,
        receipt: Receipt,
        external_id: Optional[str] = None,
        ism_optional: bool = False,
    ) -> AtolResponse:
        """Регистрация возврата расхода."""
        return self.register_document(ApiMethod.buy_refund, receipt, external_id, ism_optional)

    def sell_correct(
        self,
        correction: Correction,
        external_id: Optional[str] = None,
        ism_optional: bool = False,
    ) -> AtolResponse:
        """Регистрация коррекции прихода."""
        return self.register_document(ApiMethod.sell_correction, correction, external_id, ism_optional)

    def sell_refund_correct(
        self,
        correction: Correction,
        external_id: Optional[str] = None,
        ism_optional: bool = False,
    ) -> AtolResponse:
        """Регистрация коррекции возврата прихода."""
        return self.register_document(ApiMethod.sell_refund_correction, correction, external_id, ism_optional)

    def buy_correct(
        self,
        correction: Correction,
        external_id: Optional[str] = None,
        ism_optional: bool = False,
    ) -> AtolResponse:
        """Регистрация коррекции расхода."""
        return self.register_document(ApiMethod.buy_correction, correction, external_id, ism_optional)

    def buy_refund_correct(
        self,
        correction: Correction,
        external_id: Optional[str] = None,
        ism_optional: bool = False,
    ) -> AtolResponse:
        """Регистрация коррекции возврата расхода."""
        return self.register_document(ApiMethod.buy_refund_correction, correction, external_id, ism_optional)

    def get_document_status(self, document_uuid: str) -> AtolResponse:
        """
        Запросить статус документа.

        Raises:
            ValidationError: Если document_uuid не является UUID
            httpx.HTTPError: При сетевой ошибке
        """
        normalized = self._validate_uuid(document_uuid)
        group = self._require_group()
        headers = self._auth.get_token_header()
        return self._transport.send_request(
            "GET",
            f"{self.endpoint}/{group}/report/{normalized}",
            headers=headers,
        )

    def poll_document_status(
        self,
        document_uuid: str,
        retry_count: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> AtolResponse:
        """
        Опрашивать статус документа, пока он не станет "complete".

        Делается не больше retry_count запросов с паузой timeout секунд
        между ними. Сетевая ошибка расходует попытку; если ошибкой
        завершилась последняя попытка, она пробрасывается.

        Returns:
            Ответ с status == "complete" или последний полученный ответ
        """
        retry_count = settings.poll_retry_count if retry_count is None else retry_count
        timeout = settings.poll_timeout if timeout is None else timeout
        if retry_count < 1:
            raise ValidationError(
                ValidationErrorKind.out_of_range,
                f"Количество попыток должно быть не меньше 1: {retry_count}",
                field="retry_count",
            )
        if timeout < 0:
            raise ValidationError(
                ValidationErrorKind.negative,
                f"Пауза между попытками не может быть отрицательной: {timeout}",
                field="timeout",
            )
        self._validate_uuid(document_uuid)

        retrying = Retrying(
            stop=stop_after_attempt(retry_count),
            wait=wait_fixed(timeout),
            retry=retry_if_exception_type(httpx.HTTPError) | retry_if_result(_is_not_complete),
            retry_error_callback=lambda state: state.outcome.result(),
            before_sleep=before_sleep_log(logger, logging.DEBUG),
            sleep=self._sleep,
        )
        response = retrying(self.get_document_status, document_uuid)
        logger.info(
            "Статус документа %s: %s",
            document_uuid,
            response.get("status"),
        )
        return response

    @staticmethod
    def _validate_uuid(document_uuid: str) -> str:
        try:
            return str(uuid.UUID(normalize_text(str(document_uuid))))
        except ValueError as exc:
            raise ValidationError(
                ValidationErrorKind.pattern_mismatch,
                f"Некорректный uuid документа: {document_uuid!r}",
                field="uuid",
            ) from exc

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "Fiscalizer":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
