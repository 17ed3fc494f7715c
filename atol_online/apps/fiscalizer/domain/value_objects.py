import copy
from dataclasses import dataclass
from typing import Any, Dict

from ....core.config import settings
from ...documents.schemas import DocumentType


@dataclass(frozen=True)
class SandboxOverrides:
    """
    Параметры тестовой среды АТОЛ Онлайн (Value Object).

    Подставляются в готовый JSON запроса, сами документы не изменяются.
    """

    login: str
    password: str
    group: str
    inn: str
    payment_address: str

    @classmethod
    def from_settings(cls) -> "SandboxOverrides":
        """Тестовые параметры ФФД 1.2 из настроек."""
        return cls(
            login=settings.sandbox_login,
            password=settings.sandbox_password,
            group=settings.sandbox_group,
            inn=settings.sandbox_inn,
            payment_address=settings.sandbox_payment_address,
        )

    def apply(self, payload: Dict[str, Any], doc_type: DocumentType) -> Dict[str, Any]:
        """Вернуть копию запроса с тестовыми ИНН и адресом расчётов."""
        data = copy.deepcopy(payload)
        document = data[doc_type.value]
        document["company"]["inn"] = self.inn
        document["company"]["payment_address"] = self.payment_address
        if doc_type is DocumentType.receipt:
            document.setdefault("client", {})["inn"] = self.inn
        return data
