"""Общие проверки полей сущностей фискального документа."""

import re
from datetime import date, datetime
from enum import Enum
from typing import Iterable, List, Optional, Pattern, Type, TypeVar

from ...core import constraints
from .exceptions import ValidationError, ValidationErrorKind

E = TypeVar("E", bound=Enum)

CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
NON_DIGITS = re.compile(r"\D")


def normalize_text(
    value: Optional[str],
    strip_control: bool = False,
    field: str = "value",
    ffd_tags: Iterable[int] = (),
) -> str:
    """
    Обрезать пробелы по краям и, при необходимости, удалить управляющие символы.

    Raises:
        ValidationError: Если значение не строка
    """
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(
            ValidationErrorKind.invalid_value,
            f"Значение поля {field} должно быть строкой: {value!r}",
            field=field,
            ffd_tags=ffd_tags,
        )
    text = value.strip()
    if strip_control:
        text = CONTROL_CHARS.sub("", text)
    return text


def _check_length(
    value: str,
    field: str,
    max_length: int,
    min_length: int,
    ffd_tags: Iterable[int],
) -> None:
    if len(value) > max_length:
        raise ValidationError(
            ValidationErrorKind.too_long,
            f"Слишком длинное значение поля {field} (максимум {max_length}): {value!r}",
            field=field,
            ffd_tags=ffd_tags,
            details={"max": max_length, "length": len(value)},
        )
    if len(value) < min_length:
        raise ValidationError(
            ValidationErrorKind.too_short,
            f"Слишком короткое значение поля {field} (минимум {min_length}): {value!r}",
            field=field,
            ffd_tags=ffd_tags,
            details={"min": min_length, "length": len(value)},
        )


def required_string(
    value: Optional[str],
    field: str,
    max_length: int,
    ffd_tags: Iterable[int] = (),
    strip_control: bool = False,
) -> str:
    """
    Проверить обязательную строку.

    Raises:
        ValidationError: Если строка пустая после нормализации или слишком длинная
    """
    text = normalize_text(value, strip_control, field, ffd_tags)
    if not text:
        raise ValidationError(
            ValidationErrorKind.empty,
            f"Поле {field} не может быть пустым",
            field=field,
            ffd_tags=ffd_tags,
        )
    _check_length(text, field, max_length, 1, ffd_tags)
    return text


def optional_string(
    value: Optional[str],
    field: str,
    max_length: int,
    ffd_tags: Iterable[int] = (),
    strip_control: bool = False,
    min_length: int = 1,
) -> Optional[str]:
    """Проверить необязательную строку. Пустое значение превращается в None."""
    text = normalize_text(value, strip_control, field, ffd_tags)
    if not text:
        return None
    _check_length(text, field, max_length, min_length, ffd_tags)
    return text


def exact_length(
    value: Optional[str],
    field: str,
    length: int,
    ffd_tags: Iterable[int] = (),
) -> Optional[str]:
    """Проверить, что непустая строка имеет ровно length символов."""
    text = normalize_text(value, field=field, ffd_tags=ffd_tags)
    if not text:
        return None
    if len(text) != length:
        raise ValidationError(
            ValidationErrorKind.invalid_length,
            f"Значение поля {field} должно содержать ровно {length} символов: {text!r}",
            field=field,
            ffd_tags=ffd_tags,
            details={"length": len(text), "expected": length},
        )
    return text


def match_pattern(
    value: Optional[str],
    pattern: Pattern[str],
    field: str,
    ffd_tags: Iterable[int] = (),
) -> Optional[str]:
    """Проверить непустую строку регулярным выражением."""
    text = normalize_text(value, field=field, ffd_tags=ffd_tags)
    if not text:
        return None
    if not pattern.match(text):
        raise ValidationError(
            ValidationErrorKind.pattern_mismatch,
            f"Значение поля {field} не соответствует формату: {text!r}",
            field=field,
            ffd_tags=ffd_tags,
        )
    return text


def validate_inn(
    value: Optional[str],
    field: str = "inn",
    ffd_tags: Iterable[int] = (),
    required: bool = False,
) -> Optional[str]:
    """ИНН: 10 цифр для организации или 12 для физлица."""
    inn = match_pattern(value, constraints.PATTERN_INN, field, ffd_tags)
    if inn is None and required:
        raise ValidationError(
            ValidationErrorKind.empty,
            f"Поле {field} не может быть пустым",
            field=field,
            ffd_tags=ffd_tags,
        )
    return inn


def validate_email(
    value: Optional[str],
    field: str = "email",
    ffd_tags: Iterable[int] = (),
    required: bool = False,
) -> Optional[str]:
    email = optional_string(value, field, constraints.MAX_LENGTH_EMAIL, ffd_tags)
    if email is None:
        if required:
            raise ValidationError(
                ValidationErrorKind.empty,
                f"Поле {field} не может быть пустым",
                field=field,
                ffd_tags=ffd_tags,
            )
        return None
    return match_pattern(email, constraints.PATTERN_EMAIL, field, ffd_tags)


def validate_phone(
    value: Optional[str],
    field: str = "phone",
    ffd_tags: Iterable[int] = (),
) -> Optional[str]:
    """
    Нормализовать телефон: оставить только цифры и добавить "+".

    Returns:
        Телефон вида +79991234567 или None для пустого значения
    """
    digits = NON_DIGITS.sub("", normalize_text(value, field=field, ffd_tags=ffd_tags))
    if not digits:
        return None
    if len(digits) > constraints.MAX_LENGTH_PHONE_DIGITS:
        raise ValidationError(
            ValidationErrorKind.too_long,
            f"Слишком длинный телефон в поле {field}: {digits}",
            field=field,
            ffd_tags=ffd_tags,
            details={"max": constraints.MAX_LENGTH_PHONE_DIGITS},
        )
    return f"+{digits}"


def validate_phones(
    values: Optional[Iterable[str]],
    field: str = "phones",
    ffd_tags: Iterable[int] = (),
) -> Optional[List[str]]:
    """Нормализовать список телефонов, пустые значения отбрасываются."""
    if values is None or isinstance(values, str):
        values = [values] if values else []
    phones = []
    for value in values:
        phone = validate_phone(value, field, ffd_tags)
        if phone:
            phones.append(phone)
    return phones or None


def validate_enum(
    value: object,
    enum_cls: Type[E],
    field: str,
    ffd_tags: Iterable[int] = (),
) -> E:
    """Привести значение к члену перечисления."""
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise ValidationError(
            ValidationErrorKind.invalid_value,
            f"Недопустимое значение поля {field}: {value!r}",
            field=field,
            ffd_tags=ffd_tags,
            details={"allowed": [member.value for member in enum_cls]},
        ) from exc


def format_date(
    value: date | str | None,
    field: str,
    ffd_tags: Iterable[int] = (),
    fmt: str = constraints.DATE_FORMAT,
) -> Optional[str]:
    """
    Привести дату к строке нужного формата.

    Строка проверяется разбором по тому же формату.
    """
    if value is None or value == "":
        return None
    if isinstance(value, (date, datetime)):
        return value.strftime(fmt)
    text = normalize_text(value, field=field, ffd_tags=ffd_tags)
    try:
        return datetime.strptime(text, fmt).strftime(fmt)
    except ValueError as exc:
        raise ValidationError(
            ValidationErrorKind.pattern_mismatch,
            f"Значение поля {field} не соответствует формату даты: {text!r}",
            field=field,
            ffd_tags=ffd_tags,
        ) from exc


def format_datetime(
    value: datetime | str | None,
    field: str,
    ffd_tags: Iterable[int] = (),
) -> Optional[str]:
    return format_date(value, field, ffd_tags, fmt=constraints.DATETIME_FORMAT)
