"""Коллекции сущностей документа с ограничением количества элементов."""

from typing import Any, Callable, ClassVar, Dict, Generic, Iterable, Iterator, List, TypeVar

from ....core import constraints
from ..exceptions import ValidationError, ValidationErrorKind
from .entities import Item, Payment, Vat

T = TypeVar("T")


class BoundedCollection(Generic[T]):
    """
    Упорядоченная коллекция однотипных сущностей.

    Добавление элементов ничего не проверяет. Границы количества
    и тип элементов проверяются при присвоении коллекции документу
    через check_count() и check_element_types().
    """

    element_type: ClassVar[type]
    min_count: ClassVar[int] = 0
    max_count: ClassVar[int]
    field: ClassVar[str] = "collection"

    def __init__(self, elements: Iterable[T] = ()) -> None:
        self._elements: List[T] = list(elements)

    def add(self, element: T) -> None:
        self._elements.append(element)

    def count(self) -> int:
        return len(self._elements)

    def each(self, fn: Callable[[T], Any]) -> None:
        """Вызвать fn для каждого элемента по порядку."""
        for element in self._elements:
            fn(element)

    def check_count(self) -> None:
        """
        Проверить количество элементов.

        Raises:
            ValidationError: empty_collection или too_many_elements
        """
        count = len(self._elements)
        if count < self.min_count:
            raise ValidationError(
                ValidationErrorKind.empty_collection,
                f"В коллекции {self.field} должно быть не меньше {self.min_count} элементов",
                field=self.field,
                details={"min": self.min_count, "count": count},
            )
        if count > self.max_count:
            raise ValidationError(
                ValidationErrorKind.too_many_elements,
                f"В коллекции {self.field} должно быть не больше {self.max_count} элементов",
                field=self.field,
                details={"max": self.max_count, "count": count},
            )

    def check_element_types(self) -> None:
        """Проверить, что все элементы ровно типа element_type."""
        for index, element in enumerate(self._elements):
            if type(element) is not self.element_type:
                raise ValidationError(
                    ValidationErrorKind.heterogeneous_element,
                    f"Элемент {index} коллекции {self.field} должен быть "
                    f"{self.element_type.__name__}, получен {type(element).__name__}",
                    field=self.field,
                    details={"index": index},
                )

    def to_list(self) -> List[Dict[str, Any]]:
        return [element.to_dict() for element in self._elements]

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[T]:
        return iter(self._elements)

    def __getitem__(self, index: int) -> T:
        return self._elements[index]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._elements!r})"


class Items(BoundedCollection[Item]):
    element_type = Item
    min_count = 1
    max_count = constraints.MAX_COUNT_DOC_ITEMS
    field = "items"


class Payments(BoundedCollection[Payment]):
    element_type = Payment
    min_count = 1
    max_count = constraints.MAX_COUNT_DOC_PAYMENTS
    field = "payments"


class Vats(BoundedCollection[Vat]):
    element_type = Vat
    min_count = 0
    max_count = constraints.MAX_COUNT_DOC_VATS
    field = "vats"
