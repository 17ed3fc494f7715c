"""Исключения модели фискальных документов."""

from enum import Enum
from typing import Iterable, Optional

from ...core.exceptions import AtolBaseException


class ValidationErrorKind(str, Enum):
    empty = "empty"                                  # Пустое обязательное значение
    too_long = "too_long"                            # Длина больше допустимой
    too_short = "too_short"                          # Длина меньше допустимой
    invalid_length = "invalid_length"                # Длина не равна требуемой
    negative = "negative"                            # Отрицательное число
    out_of_range = "out_of_range"                    # Число за пределами диапазона
    pattern_mismatch = "pattern_mismatch"            # Не соответствует формату
    invalid_value = "invalid_value"                  # Недопустимое значение
    empty_collection = "empty_collection"            # Слишком мало элементов
    too_many_elements = "too_many_elements"          # Слишком много элементов
    heterogeneous_element = "heterogeneous_element"  # Элемент чужого типа
    invalid_document = "invalid_document"            # Документ не подходит методу API


class ValidationError(AtolBaseException):
    """
    Нарушение ограничения схемы в момент установки значения.

    Attributes:
        kind: Вид нарушения
        field: Имя поля, значение которого отвергнуто
        ffd_tags: Теги ФФД, к которым относится поле
    """

    def __init__(
        self,
        kind: ValidationErrorKind,
        message: str,
        field: Optional[str] = None,
        ffd_tags: Iterable[int] = (),
        details: dict | None = None,
    ) -> None:
        self.kind = kind
        self.field = field
        self.ffd_tags = tuple(ffd_tags)
        details = {
            "kind": kind.value,
            "field": field,
            "ffd_tags": list(self.ffd_tags),
            **(details or {}),
        }
        super().__init__(message, details)
