"""Доменные сущности фискального документа."""

import copy
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Type, TypeVar, Union

from ....core import constraints as c
from ..exceptions import ValidationError, ValidationErrorKind
from ..schemas import (
    AgentType,
    CorrectionType,
    DocumentCode,
    MarkCodeType,
    Measure,
    PaymentMethod,
    PaymentObject,
    PaymentType,
    SnoType,
    VatType,
)
from ..validators import (
    exact_length,
    format_date,
    format_datetime,
    match_pattern,
    normalize_text,
    optional_string,
    required_string,
    validate_email,
    validate_enum,
    validate_inn,
    validate_phones,
)
from .value_objects import Amount, Number, Quantity, make_amount, make_quantity, vat_amount

T = TypeVar("T")

DateLike = Union[date, str]
DateTimeLike = Union[datetime, str]


def compact(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Убрать из словаря ключи со значением None."""
    return {key: value for key, value in fields.items() if value is not None}


def ensure_instance(
    value: Any,
    cls: Type[T],
    field: str,
    ffd_tags: Iterable[int] = (),
    optional: bool = True,
) -> Optional[T]:
    """Проверить тип вложенной сущности и взять её копию."""
    if value is None and optional:
        return None
    if type(value) is not cls:
        raise ValidationError(
            ValidationErrorKind.invalid_value,
            f"Поле {field} должно быть {cls.__name__}, получено {type(value).__name__}",
            field=field,
            ffd_tags=ffd_tags,
        )
    return copy.deepcopy(value)


class Vat:
    """
    Ставка НДС.

    Хранит тип ставки и базу (сумму, от которой считается налог).
    Сумма налога вычисляется при каждом обращении к calculated.
    """

    def __init__(self, type: VatType | str, base: Number = 0) -> None:
        self.type = type
        self.base = base

    @property
    def type(self) -> VatType:
        return self._type

    @type.setter
    def type(self, value: VatType | str) -> None:
        self._type = validate_enum(value, VatType, "vat.type")

    @property
    def base(self) -> Amount:
        return self._base

    @base.setter
    def base(self, value: Number) -> None:
        self._base = make_amount(value, "vat.base", maximum=c.MAX_ITEM_SUM)

    @property
    def calculated(self) -> Amount:
        """Сумма налога в рублях."""
        return vat_amount(self._type, self._base)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self._type.value, "sum": float(self.calculated)}


class Payment:
    """Оплата (1031, 1081, 1215, 1216, 1217)."""

    def __init__(self, type: PaymentType | int, sum: Number) -> None:
        self.type = type
        self.sum = sum

    @property
    def type(self) -> PaymentType:
        return self._type

    @type.setter
    def type(self, value: PaymentType | int) -> None:
        self._type = validate_enum(value, PaymentType, "payment.type")

    @property
    def sum(self) -> Amount:
        return self._sum

    @sum.setter
    def sum(self, value: Number) -> None:
        self._sum = make_amount(value, "payment.sum", [c.TAG_PAYMENT_SUM])

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self._type.value, "sum": float(self._sum)}


class Company:
    """Продавец."""

    def __init__(
        self,
        inn: str,
        sno: SnoType | str,
        payment_address: str,
        email: str,
        location: Optional[str] = None,
    ) -> None:
        self.inn = inn
        self.sno = sno
        self.payment_address = payment_address
        self.email = email
        self.location = location

    @property
    def inn(self) -> str:
        return self._inn

    @inn.setter
    def inn(self, value: str) -> None:
        self._inn = validate_inn(value, "company.inn", [c.TAG_COMPANY_INN], required=True)

    @property
    def sno(self) -> SnoType:
        return self._sno

    @sno.setter
    def sno(self, value: SnoType | str) -> None:
        self._sno = validate_enum(value, SnoType, "company.sno", [c.TAG_COMPANY_SNO])

    @property
    def payment_address(self) -> str:
        return self._payment_address

    @payment_address.setter
    def payment_address(self, value: str) -> None:
        self._payment_address = required_string(
            value,
            "company.payment_address",
            c.MAX_LENGTH_PAYMENT_ADDRESS,
            [c.TAG_COMPANY_PAYMENT_ADDRESS],
        )

    @property
    def email(self) -> str:
        return self._email

    @email.setter
    def email(self, value: str) -> None:
        self._email = validate_email(
            value, "company.email", [c.TAG_COMPANY_EMAIL], required=True
        )

    @property
    def location(self) -> Optional[str]:
        return self._location

    @location.setter
    def location(self, value: Optional[str]) -> None:
        self._location = optional_string(
            value, "company.location", c.MAX_LENGTH_LOCATION, [c.TAG_COMPANY_LOCATION]
        )

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "email": self._email,
            "sno": self._sno.value,
            "inn": self._inn,
            "payment_address": self._payment_address,
            "location": self._location,
        })


class Client:
    """
    Покупатель (клиент).

    Все поля необязательные. Пустые строки сохраняются как None
    и не попадают в JSON.
    """

    def __init__(
        self,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        inn: Optional[str] = None,
        birthdate: Optional[DateLike] = None,
        citizenship: Optional[str] = None,
        document_code: DocumentCode | int | None = None,
        document_data: Optional[str] = None,
        address: Optional[str] = None,
    ) -> None:
        self.name = name
        self.phone = phone
        self.email = email
        self.inn = inn
        self.birthdate = birthdate
        self.citizenship = citizenship
        self.document_code = document_code
        self.document_data = document_data
        self.address = address

    @property
    def name(self) -> Optional[str]:
        return self._name

    @name.setter
    def name(self, value: Optional[str]) -> None:
        self._name = optional_string(
            value,
            "client.name",
            c.MAX_LENGTH_CLIENT_NAME,
            [c.TAG_CLIENT_NAME],
            strip_control=True,
        )

    @property
    def phone(self) -> Optional[str]:
        return self._phone

    @phone.setter
    def phone(self, value: Optional[str]) -> None:
        phones = validate_phones(value, "client.phone", [c.TAG_CLIENT_CONTACT])
        self._phone = phones[0] if phones else None

    @property
    def email(self) -> Optional[str]:
        return self._email

    @email.setter
    def email(self, value: Optional[str]) -> None:
        self._email = validate_email(value, "client.email", [c.TAG_CLIENT_CONTACT])

    @property
    def inn(self) -> Optional[str]:
        return self._inn

    @inn.setter
    def inn(self, value: Optional[str]) -> None:
        self._inn = validate_inn(value, "client.inn", [c.TAG_CLIENT_INN])

    @property
    def birthdate(self) -> Optional[str]:
        """Дата рождения в формате дд.мм.гггг."""
        return self._birthdate

    @birthdate.setter
    def birthdate(self, value: Optional[DateLike]) -> None:
        self._birthdate = format_date(value, "client.birthdate", [c.TAG_CLIENT_BIRTHDATE])

    @property
    def citizenship(self) -> Optional[str]:
        return self._citizenship

    @citizenship.setter
    def citizenship(self, value: Optional[str]) -> None:
        self._citizenship = match_pattern(
            value, c.PATTERN_OKSM_CODE, "client.citizenship", [c.TAG_CLIENT_CITIZENSHIP]
        )

    @property
    def document_code(self) -> Optional[DocumentCode]:
        return self._document_code

    @document_code.setter
    def document_code(self, value: DocumentCode | int | None) -> None:
        self._document_code = (
            None
            if value is None
            else validate_enum(
                value, DocumentCode, "client.document_code", [c.TAG_CLIENT_DOCUMENT_CODE]
            )
        )

    @property
    def document_data(self) -> Optional[str]:
        return self._document_data

    @document_data.setter
    def document_data(self, value: Optional[str]) -> None:
        self._document_data = optional_string(
            value,
            "client.document_data",
            c.MAX_LENGTH_CLIENT_DOCUMENT_DATA,
            [c.TAG_CLIENT_DOCUMENT_DATA],
        )

    @property
    def address(self) -> Optional[str]:
        return self._address

    @address.setter
    def address(self, value: Optional[str]) -> None:
        self._address = optional_string(
            value,
            "client.address",
            c.MAX_LENGTH_CLIENT_ADDRESS,
            [c.TAG_CLIENT_ADDRESS],
            strip_control=True,
        )

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "name": self._name,
            "inn": self._inn,
            "email": self._email,
            "phone": self._phone,
            "birthdate": self._birthdate,
            "citizenship": self._citizenship,
            "document_code": self._document_code.value if self._document_code else None,
            "document_data": self._document_data,
            "address": self._address,
        })


class PayingAgent:
    """Платёжный агент (1044, 1073)."""

    def __init__(
        self,
        operation: Optional[str] = None,
        phones: Optional[Iterable[str]] = None,
    ) -> None:
        self.operation = operation
        self.phones = phones

    @property
    def operation(self) -> Optional[str]:
        return self._operation

    @operation.setter
    def operation(self, value: Optional[str]) -> None:
        self._operation = optional_string(
            value,
            "paying_agent.operation",
            c.MAX_LENGTH_PAYING_AGENT_OPERATION,
            [c.TAG_PAYING_AGENT_OPERATION],
        )

    @property
    def phones(self) -> Optional[List[str]]:
        return self._phones

    @phones.setter
    def phones(self, value: Optional[Iterable[str]]) -> None:
        self._phones = validate_phones(value, "paying_agent.phones", [c.TAG_PAYING_AGENT_PHONES])

    def to_dict(self) -> Dict[str, Any]:
        return compact({"operation": self._operation, "phones": self._phones})


class ReceivePaymentsOperator:
    """Оператор по приёму платежей (1074)."""

    def __init__(self, phones: Optional[Iterable[str]] = None) -> None:
        self.phones = phones

    @property
    def phones(self) -> Optional[List[str]]:
        return self._phones

    @phones.setter
    def phones(self, value: Optional[Iterable[str]]) -> None:
        self._phones = validate_phones(
            value, "receive_payments_operator.phones", [c.TAG_RPO_PHONES]
        )

    def to_dict(self) -> Dict[str, Any]:
        return compact({"phones": self._phones})


class MoneyTransferOperator:
    """Оператор перевода (1005, 1016, 1026, 1075)."""

    def __init__(
        self,
        name: Optional[str] = None,
        inn: Optional[str] = None,
        address: Optional[str] = None,
        phones: Optional[Iterable[str]] = None,
    ) -> None:
        self.name = name
        self.inn = inn
        self.address = address
        self.phones = phones

    @property
    def name(self) -> Optional[str]:
        return self._name

    @name.setter
    def name(self, value: Optional[str]) -> None:
        self._name = optional_string(
            value,
            "money_transfer_operator.name",
            c.MAX_LENGTH_MTO_NAME,
            [c.TAG_MTO_NAME],
            strip_control=True,
        )

    @property
    def inn(self) -> Optional[str]:
        return self._inn

    @inn.setter
    def inn(self, value: Optional[str]) -> None:
        self._inn = validate_inn(value, "money_transfer_operator.inn", [c.TAG_MTO_INN])

    @property
    def address(self) -> Optional[str]:
        return self._address

    @address.setter
    def address(self, value: Optional[str]) -> None:
        self._address = optional_string(
            value,
            "money_transfer_operator.address",
            c.MAX_LENGTH_MTO_ADDRESS,
            [c.TAG_MTO_ADDRESS],
            strip_control=True,
        )

    @property
    def phones(self) -> Optional[List[str]]:
        return self._phones

    @phones.setter
    def phones(self, value: Optional[Iterable[str]]) -> None:
        self._phones = validate_phones(value, "money_transfer_operator.phones", [c.TAG_MTO_PHONES])

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "phones": self._phones,
            "name": self._name,
            "address": self._address,
            "inn": self._inn,
        })


class AgentInfo:
    """Атрибуты агента предмета расчёта."""

    def __init__(
        self,
        type: AgentType | str | None = None,
        paying_agent: Optional[PayingAgent] = None,
        receive_payments_operator: Optional[ReceivePaymentsOperator] = None,
        money_transfer_operator: Optional[MoneyTransferOperator] = None,
    ) -> None:
        self.type = type
        self.paying_agent = paying_agent
        self.receive_payments_operator = receive_payments_operator
        self.money_transfer_operator = money_transfer_operator

    @property
    def type(self) -> Optional[AgentType]:
        return self._type

    @type.setter
    def type(self, value: AgentType | str | None) -> None:
        self._type = None if value is None else validate_enum(value, AgentType, "agent_info.type")

    @property
    def paying_agent(self) -> Optional[PayingAgent]:
        return self._paying_agent

    @paying_agent.setter
    def paying_agent(self, value: Optional[PayingAgent]) -> None:
        self._paying_agent = ensure_instance(value, PayingAgent, "agent_info.paying_agent")

    @property
    def receive_payments_operator(self) -> Optional[ReceivePaymentsOperator]:
        return self._receive_payments_operator

    @receive_payments_operator.setter
    def receive_payments_operator(self, value: Optional[ReceivePaymentsOperator]) -> None:
        self._receive_payments_operator = ensure_instance(
            value, ReceivePaymentsOperator, "agent_info.receive_payments_operator"
        )

    @property
    def money_transfer_operator(self) -> Optional[MoneyTransferOperator]:
        return self._money_transfer_operator

    @money_transfer_operator.setter
    def money_transfer_operator(self, value: Optional[MoneyTransferOperator]) -> None:
        self._money_transfer_operator = ensure_instance(
            value, MoneyTransferOperator, "agent_info.money_transfer_operator"
        )

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "type": self._type.value if self._type else None,
            "paying_agent": self._paying_agent.to_dict() if self._paying_agent else None,
            "receive_payments_operator": (
                self._receive_payments_operator.to_dict()
                if self._receive_payments_operator
                else None
            ),
            "money_transfer_operator": (
                self._money_transfer_operator.to_dict()
                if self._money_transfer_operator
                else None
            ),
        })


class Supplier:
    """Поставщик (1171, 1225, 1226)."""

    def __init__(
        self,
        name: Optional[str] = None,
        inn: Optional[str] = None,
        phones: Optional[Iterable[str]] = None,
    ) -> None:
        self.name = name
        self.inn = inn
        self.phones = phones

    @property
    def name(self) -> Optional[str]:
        return self._name

    @name.setter
    def name(self, value: Optional[str]) -> None:
        self._name = optional_string(
            value,
            "supplier_info.name",
            c.MAX_LENGTH_SUPPLIER_NAME,
            [c.TAG_SUPPLIER_NAME],
            strip_control=True,
        )

    @property
    def inn(self) -> Optional[str]:
        return self._inn

    @inn.setter
    def inn(self, value: Optional[str]) -> None:
        self._inn = validate_inn(value, "supplier_info.inn", [c.TAG_SUPPLIER_INN])

    @property
    def phones(self) -> Optional[List[str]]:
        return self._phones

    @phones.setter
    def phones(self, value: Optional[Iterable[str]]) -> None:
        self._phones = validate_phones(value, "supplier_info.phones", [c.TAG_SUPPLIER_PHONES])

    def to_dict(self) -> Dict[str, Any]:
        return compact({"phones": self._phones, "name": self._name, "inn": self._inn})


# Длина кода маркировки по типу: (длина, строго ли равна)
MARK_CODE_LENGTHS = {
    MarkCodeType.unknown: (32, False),
    MarkCodeType.ean8: (8, True),
    MarkCodeType.ean13: (13, True),
    MarkCodeType.itf14: (14, True),
    MarkCodeType.gs10: (38, False),
    MarkCodeType.gs1m: (200, False),
    MarkCodeType.short: (38, False),
    MarkCodeType.fur: (20, True),
    MarkCodeType.egais20: (23, True),
    MarkCodeType.egais30: (14, True),
}


class MarkCode:
    """
    Код товара (1163).

    В JSON передаётся ровно один код: {"<тип>": "<значение>"}.
    """

    def __init__(self, kind: MarkCodeType | str, value: str) -> None:
        self._kind = validate_enum(kind, MarkCodeType, "mark_code", [c.TAG_ITEM_MARK_CODE])
        self.value = value

    @property
    def kind(self) -> MarkCodeType:
        return self._kind

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, value: str) -> None:
        field = f"mark_code.{self._kind.value}"
        length, strict = MARK_CODE_LENGTHS[self._kind]
        code = normalize_text(value, field=field, ffd_tags=[c.TAG_ITEM_MARK_CODE])
        if strict:
            exact_length(code, field, length, [c.TAG_ITEM_MARK_CODE])
        code = required_string(code, field, length, [c.TAG_ITEM_MARK_CODE])
        if self._kind is MarkCodeType.fur:
            match_pattern(code, c.PATTERN_FUR, field, [c.TAG_ITEM_MARK_CODE])
        self._value = code

    def to_dict(self) -> Dict[str, Any]:
        return {self._kind.value: self._value}


class MarkQuantity:
    """Дробное количество маркированного товара (1291)."""

    def __init__(self, numerator: int, denominator: int) -> None:
        for field, value in (("numerator", numerator), ("denominator", denominator)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValidationError(
                    ValidationErrorKind.invalid_value,
                    f"mark_quantity.{field} должен быть целым положительным числом: {value!r}",
                    field=f"mark_quantity.{field}",
                    ffd_tags=[c.TAG_ITEM_MARK_QUANTITY],
                )
        if numerator >= denominator:
            raise ValidationError(
                ValidationErrorKind.out_of_range,
                "Числитель дробного количества должен быть меньше знаменателя",
                field="mark_quantity",
                ffd_tags=[c.TAG_ITEM_MARK_QUANTITY],
            )
        self._numerator = numerator
        self._denominator = denominator

    @property
    def numerator(self) -> int:
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    def to_dict(self) -> Dict[str, Any]:
        return {"numerator": self._numerator, "denominator": self._denominator}


class SectoralProps:
    """Отраслевой реквизит предмета расчёта (1260) или чека (1261)."""

    def __init__(
        self,
        federal_id: str,
        date: DateLike,
        number: str,
        value: str,
    ) -> None:
        self.federal_id = federal_id
        self.date = date
        self.number = number
        self.value = value

    @property
    def federal_id(self) -> str:
        return self._federal_id

    @federal_id.setter
    def federal_id(self, value: str) -> None:
        federal_id = match_pattern(value, c.PATTERN_FEDERAL_ID, "sectoral_props.federal_id")
        self._federal_id = required_string(federal_id, "sectoral_props.federal_id", 3)

    @property
    def date(self) -> str:
        return self._date

    @date.setter
    def date(self, value: DateLike) -> None:
        formatted = format_date(value, "sectoral_props.date")
        self._date = required_string(formatted, "sectoral_props.date", 10)

    @property
    def number(self) -> str:
        return self._number

    @number.setter
    def number(self, value: str) -> None:
        self._number = required_string(
            value, "sectoral_props.number", c.MAX_LENGTH_SECTORAL_PROP_NUMBER
        )

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, value: str) -> None:
        self._value = required_string(
            value, "sectoral_props.value", c.MAX_LENGTH_SECTORAL_PROP_VALUE
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "federal_id": self._federal_id,
            "date": self._date,
            "number": self._number,
            "value": self._value,
        }


class OperatingCheckProps:
    """Операционный реквизит чека (1270)."""

    def __init__(self, name: str, value: str, timestamp: DateTimeLike) -> None:
        self.name = name
        self.value = value
        self.timestamp = timestamp

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = required_string(
            value,
            "operating_check_props.name",
            c.MAX_LENGTH_OPERATING_PROP_NAME,
            [c.TAG_OPERATING_CHECK_PROPS],
        )

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, value: str) -> None:
        self._value = required_string(
            value,
            "operating_check_props.value",
            c.MAX_LENGTH_OPERATING_PROP_VALUE,
            [c.TAG_OPERATING_CHECK_PROPS],
        )

    @property
    def timestamp(self) -> str:
        return self._timestamp

    @timestamp.setter
    def timestamp(self, value: DateTimeLike) -> None:
        formatted = format_datetime(
            value, "operating_check_props.timestamp", [c.TAG_OPERATING_CHECK_PROPS]
        )
        self._timestamp = required_string(
            formatted, "operating_check_props.timestamp", 19, [c.TAG_OPERATING_CHECK_PROPS]
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self._name, "value": self._value, "timestamp": self._timestamp}


class AdditionalUserProps:
    """Дополнительный реквизит пользователя (1084)."""

    def __init__(self, name: str, value: str) -> None:
        self.name = name
        self.value = value

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = required_string(
            value,
            "additional_user_props.name",
            c.MAX_LENGTH_ADD_USER_PROP_NAME,
            [c.TAG_ADD_USER_PROP_NAME],
        )

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, value: str) -> None:
        self._value = required_string(
            value,
            "additional_user_props.value",
            c.MAX_LENGTH_ADD_USER_PROP_VALUE,
            [c.TAG_ADD_USER_PROP_VALUE],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self._name, "value": self._value}


class CorrectionInfo:
    """Данные коррекции (1173, 1178, 1179)."""

    def __init__(
        self,
        type: CorrectionType | str,
        base_date: DateLike,
        base_number: Optional[str] = None,
    ) -> None:
        self.type = type
        self.base_date = base_date
        self.base_number = base_number

    @property
    def type(self) -> CorrectionType:
        return self._type

    @type.setter
    def type(self, value: CorrectionType | str) -> None:
        self._type = validate_enum(
            value, CorrectionType, "correction_info.type", [c.TAG_CORRECTION_TYPE]
        )

    @property
    def base_date(self) -> str:
        return self._base_date

    @base_date.setter
    def base_date(self, value: DateLike) -> None:
        formatted = format_date(
            value, "correction_info.base_date", [c.TAG_CORRECTION_BASE_DATE]
        )
        self._base_date = required_string(
            formatted, "correction_info.base_date", 10, [c.TAG_CORRECTION_BASE_DATE]
        )

    @property
    def base_number(self) -> Optional[str]:
        return self._base_number

    @base_number.setter
    def base_number(self, value: Optional[str]) -> None:
        self._base_number = optional_string(
            value,
            "correction_info.base_number",
            c.MAX_LENGTH_CORRECTION_BASE_NUMBER,
            [c.TAG_CORRECTION_BASE_NUMBER],
        )

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "type": self._type.value,
            "base_date": self._base_date,
            "base_number": self._base_number,
        })


class Item:
    """
    Предмет расчёта (товар, услуга).

    Стоимость sum = price * quantity + excise вычисляется при каждом изменении
    цены, количества или акциза и не может превышать 42 949 672.95.
    Привязанная ставка НДС получает эту стоимость в качестве базы.
    """

    def __init__(
        self,
        name: str,
        price: Number,
        quantity: Number,
        measure: Measure | int = Measure.piece,
        payment_method: PaymentMethod | str = PaymentMethod.full_payment,
        payment_object: PaymentObject | int = PaymentObject.general_goods,
        vat: Vat | VatType | str | None = None,
    ) -> None:
        self._vat: Optional[Vat] = None
        self._excise: Optional[Amount] = None
        self.name = name

        new_price = make_amount(price, "item.price", [c.TAG_ITEM_PRICE])
        new_quantity = make_quantity(quantity, "item.quantity", [c.TAG_ITEM_QUANTITY])
        self._compute_sum(new_price, new_quantity, None)
        self._price = new_price
        self._quantity = new_quantity

        self.measure = measure
        self.payment_method = payment_method
        self.payment_object = payment_object
        self.vat = vat

        self._user_data: Optional[str] = None
        self._country_code: Optional[str] = None
        self._declaration_number: Optional[str] = None
        self._mark_quantity: Optional[MarkQuantity] = None
        self._mark_processing_mode: Optional[str] = None
        self._sectoral_item_props: Optional[List[SectoralProps]] = None
        self._mark_code: Optional[MarkCode] = None
        self._agent_info: Optional[AgentInfo] = None
        self._supplier_info: Optional[Supplier] = None
        self._wholesale: Optional[bool] = None

    @staticmethod
    def _compute_sum(price: Amount, quantity: Quantity, excise: Optional[Amount]) -> Amount:
        raw = price.value * quantity.value + (excise.value if excise else 0)
        return make_amount(raw, "item.sum", [c.TAG_ITEM_SUM], maximum=c.MAX_ITEM_SUM)

    def _sync_vat(self) -> None:
        if self._vat is not None:
            self._vat.base = self.sum

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = required_string(
            value, "item.name", c.MAX_LENGTH_ITEM_NAME, [c.TAG_ITEM_NAME], strip_control=True
        )

    @property
    def price(self) -> Amount:
        return self._price

    @price.setter
    def price(self, value: Number) -> None:
        price = make_amount(value, "item.price", [c.TAG_ITEM_PRICE])
        self._compute_sum(price, self._quantity, self._excise)
        self._price = price
        self._sync_vat()

    @property
    def quantity(self) -> Quantity:
        return self._quantity

    @quantity.setter
    def quantity(self, value: Number) -> None:
        quantity = make_quantity(value, "item.quantity", [c.TAG_ITEM_QUANTITY])
        self._compute_sum(self._price, quantity, self._excise)
        self._quantity = quantity
        self._sync_vat()

    @property
    def excise(self) -> Optional[Amount]:
        """Сумма акциза, включённая в стоимость (1229)."""
        return self._excise

    @excise.setter
    def excise(self, value: Optional[Number]) -> None:
        excise = None if value is None else make_amount(value, "item.excise", [c.TAG_ITEM_EXCISE])
        self._compute_sum(self._price, self._quantity, excise)
        self._excise = excise
        self._sync_vat()

    @property
    def sum(self) -> Amount:
        return self._compute_sum(self._price, self._quantity, self._excise)

    @property
    def measure(self) -> Measure:
        return self._measure

    @measure.setter
    def measure(self, value: Measure | int) -> None:
        self._measure = validate_enum(value, Measure, "item.measure", [c.TAG_ITEM_MEASURE])

    @property
    def payment_method(self) -> PaymentMethod:
        return self._payment_method

    @payment_method.setter
    def payment_method(self, value: PaymentMethod | str) -> None:
        self._payment_method = validate_enum(value, PaymentMethod, "item.payment_method")

    @property
    def payment_object(self) -> PaymentObject:
        return self._payment_object

    @payment_object.setter
    def payment_object(self, value: PaymentObject | int) -> None:
        self._payment_object = validate_enum(value, PaymentObject, "item.payment_object")

    @property
    def vat(self) -> Optional[Vat]:
        return self._vat

    @vat.setter
    def vat(self, value: Vat | VatType | str | None) -> None:
        """Принимает объект ставки, тип ставки или None для удаления."""
        if value is None:
            self._vat = None
        elif isinstance(value, Vat):
            vat = copy.copy(value)
            vat.base = self.sum
            self._vat = vat
        else:
            self._vat = Vat(value, self.sum)

    @property
    def user_data(self) -> Optional[str]:
        return self._user_data

    @user_data.setter
    def user_data(self, value: Optional[str]) -> None:
        self._user_data = optional_string(
            value,
            "item.user_data",
            c.MAX_LENGTH_USER_DATA,
            [c.TAG_ITEM_USER_DATA],
            strip_control=True,
        )

    @property
    def country_code(self) -> Optional[str]:
        """Цифровой код страны происхождения товара по ОКСМ (1230)."""
        return self._country_code

    @country_code.setter
    def country_code(self, value: Optional[str]) -> None:
        self._country_code = match_pattern(
            value, c.PATTERN_OKSM_CODE, "item.country_code", [c.TAG_ITEM_COUNTRY_CODE]
        )

    @property
    def declaration_number(self) -> Optional[str]:
        return self._declaration_number

    @declaration_number.setter
    def declaration_number(self, value: Optional[str]) -> None:
        self._declaration_number = optional_string(
            value,
            "item.declaration_number",
            c.MAX_LENGTH_DECLARATION_NUMBER,
            [c.TAG_ITEM_DECLARATION_NUMBER],
            min_length=c.MIN_LENGTH_DECLARATION_NUMBER,
        )

    @property
    def mark_quantity(self) -> Optional[MarkQuantity]:
        return self._mark_quantity

    @mark_quantity.setter
    def mark_quantity(self, value: Optional[MarkQuantity]) -> None:
        self._mark_quantity = ensure_instance(
            value, MarkQuantity, "item.mark_quantity", [c.TAG_ITEM_MARK_QUANTITY]
        )

    @property
    def mark_processing_mode(self) -> Optional[str]:
        return self._mark_processing_mode

    @mark_processing_mode.setter
    def mark_processing_mode(self, value: Optional[str]) -> None:
        mode = optional_string(
            value,
            "item.mark_processing_mode",
            c.MAX_LENGTH_MARK_PROCESSING_MODE,
            [c.TAG_ITEM_MARK_PROCESSING_MODE],
        )
        if mode is not None and mode != "0":
            raise ValidationError(
                ValidationErrorKind.invalid_value,
                f"Режим обработки кода маркировки должен быть равен 0: {mode!r}",
                field="item.mark_processing_mode",
                ffd_tags=[c.TAG_ITEM_MARK_PROCESSING_MODE],
            )
        self._mark_processing_mode = mode

    @property
    def sectoral_item_props(self) -> Optional[List[SectoralProps]]:
        return self._sectoral_item_props

    @sectoral_item_props.setter
    def sectoral_item_props(self, value: Optional[Iterable[SectoralProps]]) -> None:
        props = [
            ensure_instance(prop, SectoralProps, "item.sectoral_item_props", optional=False)
            for prop in value or []
        ]
        self._sectoral_item_props = props or None

    @property
    def mark_code(self) -> Optional[MarkCode]:
        return self._mark_code

    @mark_code.setter
    def mark_code(self, value: Optional[MarkCode]) -> None:
        self._mark_code = ensure_instance(value, MarkCode, "item.mark_code", [c.TAG_ITEM_MARK_CODE])

    @property
    def agent_info(self) -> Optional[AgentInfo]:
        return self._agent_info

    @agent_info.setter
    def agent_info(self, value: Optional[AgentInfo]) -> None:
        self._agent_info = ensure_instance(value, AgentInfo, "item.agent_info")

    @property
    def supplier_info(self) -> Optional[Supplier]:
        return self._supplier_info

    @supplier_info.setter
    def supplier_info(self, value: Optional[Supplier]) -> None:
        self._supplier_info = ensure_instance(value, Supplier, "item.supplier_info")

    @property
    def wholesale(self) -> Optional[bool]:
        """Признак объёмно-сортового учёта."""
        return self._wholesale

    @wholesale.setter
    def wholesale(self, value: Optional[bool]) -> None:
        self._wholesale = None if value is None else bool(value)

    def to_dict(self) -> Dict[str, Any]:
        return compact({
            "name": self._name,
            "price": float(self._price),
            "quantity": float(self._quantity),
            "sum": float(self.sum),
            "measure": self._measure.value,
            "payment_method": self._payment_method.value,
            "payment_object": self._payment_object.value,
            "vat": self._vat.to_dict() if self._vat else None,
            "user_data": self._user_data,
            "excise": float(self._excise) if self._excise is not None else None,
            "country_code": self._country_code,
            "declaration_number": self._declaration_number,
            "mark_quantity": self._mark_quantity.to_dict() if self._mark_quantity else None,
            "mark_processing_mode": self._mark_processing_mode,
            "sectoral_item_props": (
                [prop.to_dict() for prop in self._sectoral_item_props]
                if self._sectoral_item_props
                else None
            ),
            "mark_code": self._mark_code.to_dict() if self._mark_code else None,
            "agent_info": self._agent_info.to_dict() if self._agent_info else None,
            "supplier_info": self._supplier_info.to_dict() if self._supplier_info else None,
            "wholesale": self._wholesale,
        })
