"""
Агрегат фискального документа: чек (Receipt) и чек коррекции (Correction).

Общие поля вынесены в BaseDocument, различие вариантов задаётся тегом
doc_type. Сериализация выбирает поля варианта по тегу.
"""

import copy
from decimal import Decimal
from typing import Any, ClassVar, Dict, Iterable, List, Optional, Union

from ....core import constraints as c
from ..exceptions import ValidationError, ValidationErrorKind
from ..schemas import DocumentType
from ..validators import match_pattern, optional_string
from .collections import BoundedCollection, Items, Payments, Vats
from .entities import (
    AdditionalUserProps,
    Client,
    Company,
    CorrectionInfo,
    OperatingCheckProps,
    SectoralProps,
    compact,
    ensure_instance,
)
from .value_objects import ZERO, Amount, make_amount


def _attach(collection: Any, collection_cls: type, field: str) -> BoundedCollection:
    """Проверить присваиваемую коллекцию и взять её копию."""
    if not isinstance(collection, collection_cls):
        raise ValidationError(
            ValidationErrorKind.invalid_value,
            f"Поле {field} должно быть {collection_cls.__name__}",
            field=field,
        )
    collection.check_count()
    collection.check_element_types()
    return copy.deepcopy(collection)


class BaseDocument:
    """Общая часть чека и чека коррекции."""

    doc_type: ClassVar[DocumentType]

    def __init__(self, company: Company, items: Items, payments: Payments) -> None:
        self._total: Amount = ZERO
        self._items: Optional[Items] = None
        self._vats: Optional[Vats] = None
        self.company = company
        self.items = items
        self.payments = payments
        self._cashier: Optional[str] = None
        self._cashier_inn: Optional[str] = None
        self._device_number: Optional[str] = None
        self._additional_check_props: Optional[str] = None
        self._additional_user_props: Optional[AdditionalUserProps] = None
        self._operating_check_props: Optional[OperatingCheckProps] = None
        self._sectoral_check_props: Optional[List[SectoralProps]] = None

    @property
    def company(self) -> Company:
        return self._company

    @company.setter
    def company(self, value: Company) -> None:
        self._company = ensure_instance(value, Company, "company", optional=False)

    @property
    def items(self) -> Items:
        return self._items

    @items.setter
    def items(self, value: Items) -> None:
        """
        Присвоить предметы расчёта и пересчитать итог.

        Если стоимость хотя бы одного предмета или итог вне диапазона,
        документ остаётся в прежнем состоянии.
        """
        items = _attach(value, Items, "items")
        total = make_amount(
            sum((item.sum.value for item in items), Decimal("0")),
            "total",
            [c.TAG_ITEM_SUM],
            maximum=c.MAX_ITEM_SUM,
        )
        self._items = items
        self._total = total
        self._rebase_vats()

    @property
    def total(self) -> Amount:
        """Итоговая сумма документа (только чтение)."""
        return self._total

    @property
    def payments(self) -> Payments:
        return self._payments

    @payments.setter
    def payments(self, value: Payments) -> None:
        self._payments = _attach(value, Payments, "payments")

    @property
    def vats(self) -> Optional[Vats]:
        return self._vats

    @vats.setter
    def vats(self, value: Optional[Vats]) -> None:
        """Налоги на чек. База каждой ставки приравнивается итогу документа."""
        if value is None:
            self._vats = None
            return
        self._vats = _attach(value, Vats, "vats")
        self._rebase_vats()

    def _rebase_vats(self) -> None:
        if self._vats is not None:
            for vat in self._vats:
                vat.base = self._total

    @property
    def cashier(self) -> Optional[str]:
        return self._cashier

    @cashier.setter
    def cashier(self, value: Optional[str]) -> None:
        self._cashier = optional_string(
            value, "cashier", c.MAX_LENGTH_CASHIER_NAME, [c.TAG_CASHIER], strip_control=True
        )

    @property
    def cashier_inn(self) -> Optional[str]:
        """ИНН кассира, 12 цифр (1203)."""
        return self._cashier_inn

    @cashier_inn.setter
    def cashier_inn(self, value: Optional[str]) -> None:
        self._cashier_inn = match_pattern(
            value, c.PATTERN_CASHIER_INN, "cashier_inn", [c.TAG_CASHIER_INN]
        )

    @property
    def device_number(self) -> Optional[str]:
        return self._device_number

    @device_number.setter
    def device_number(self, value: Optional[str]) -> None:
        self._device_number = optional_string(
            value, "device_number", c.MAX_LENGTH_DEVICE_NUMBER, [c.TAG_DEVICE_NUMBER]
        )

    @property
    def additional_check_props(self) -> Optional[str]:
        return self._additional_check_props

    @additional_check_props.setter
    def additional_check_props(self, value: Optional[str]) -> None:
        self._additional_check_props = optional_string(
            value,
            "additional_check_props",
            c.MAX_LENGTH_ADD_CHECK_PROP,
            [c.TAG_ADD_CHECK_PROP],
        )

    @property
    def additional_user_props(self) -> Optional[AdditionalUserProps]:
        return self._additional_user_props

    @additional_user_props.setter
    def additional_user_props(self, value: Optional[AdditionalUserProps]) -> None:
        self._additional_user_props = ensure_instance(
            value, AdditionalUserProps, "additional_user_props"
        )

    @property
    def operating_check_props(self) -> Optional[OperatingCheckProps]:
        return self._operating_check_props

    @operating_check_props.setter
    def operating_check_props(self, value: Optional[OperatingCheckProps]) -> None:
        self._operating_check_props = ensure_instance(
            value, OperatingCheckProps, "operating_check_props", [c.TAG_OPERATING_CHECK_PROPS]
        )

    @property
    def sectoral_check_props(self) -> Optional[List[SectoralProps]]:
        return self._sectoral_check_props

    @sectoral_check_props.setter
    def sectoral_check_props(self, value: Optional[Iterable[SectoralProps]]) -> None:
        props = [
            ensure_instance(
                prop,
                SectoralProps,
                "sectoral_check_props",
                [c.TAG_SECTORAL_CHECK_PROPS],
                optional=False,
            )
            for prop in value or []
        ]
        self._sectoral_check_props = props or None

    def add_sectoral_check_props(self, prop: SectoralProps) -> None:
        """Добавить отраслевой реквизит чека."""
        self.sectoral_check_props = [*(self._sectoral_check_props or []), prop]

    def common_dict(self) -> Dict[str, Any]:
        """Поля, общие для всех вариантов документа."""
        return {
            "company": self._company.to_dict(),
            "items": self._items.to_list(),
            "payments": self._payments.to_list(),
            "vats": self._vats.to_list() if self._vats else None,
            "total": float(self._total),
            "cashier": self._cashier,
            "cashier_inn": self._cashier_inn,
            "device_number": self._device_number,
            "additional_check_props": self._additional_check_props,
            "additional_user_props": (
                self._additional_user_props.to_dict() if self._additional_user_props else None
            ),
            "operating_check_props": (
                self._operating_check_props.to_dict() if self._operating_check_props else None
            ),
            "sectoral_check_props": (
                [prop.to_dict() for prop in self._sectoral_check_props]
                if self._sectoral_check_props
                else None
            ),
        }

    def to_dict(self) -> Dict[str, Any]:
        return serialize_document(self)


class Receipt(BaseDocument):
    """Чек прихода, расхода или возврата."""

    doc_type = DocumentType.receipt

    def __init__(
        self,
        company: Company,
        items: Items,
        payments: Payments,
        client: Optional[Client] = None,
    ) -> None:
        super().__init__(company, items, payments)
        self.client = client

    @property
    def client(self) -> Optional[Client]:
        return self._client

    @client.setter
    def client(self, value: Optional[Client]) -> None:
        self._client = ensure_instance(value, Client, "client")


class Correction(BaseDocument):
    """Чек коррекции."""

    doc_type = DocumentType.correction

    def __init__(
        self,
        company: Company,
        correction_info: CorrectionInfo,
        items: Items,
        payments: Payments,
    ) -> None:
        super().__init__(company, items, payments)
        self.correction_info = correction_info

    @property
    def correction_info(self) -> CorrectionInfo:
        return self._correction_info

    @correction_info.setter
    def correction_info(self, value: CorrectionInfo) -> None:
        self._correction_info = ensure_instance(
            value, CorrectionInfo, "correction_info", [c.TAG_CORRECTION_TYPE], optional=False
        )


Document = Union[Receipt, Correction]


def serialize_document(document: Document) -> Dict[str, Any]:
    """
    Собрать JSON-представление документа.

    Ключи со значением None не выводятся.

    Raises:
        ValidationError: invalid_document, если тег документа неизвестен
    """
    if document.doc_type is DocumentType.receipt:
        variant = {"client": document.client.to_dict() if document.client else None}
    elif document.doc_type is DocumentType.correction:
        variant = {"correction_info": document.correction_info.to_dict()}
    else:
        raise ValidationError(
            ValidationErrorKind.invalid_document,
            f"Неизвестный тип документа: {document.doc_type!r}",
            field="doc_type",
        )
    return compact({**variant, **document.common_dict()})
