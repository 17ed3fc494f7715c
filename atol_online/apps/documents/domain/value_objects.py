"""Value Objects: денежные суммы, количества и расчёт НДС."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Dict, Iterable, Tuple, Union

from ....core import constraints
from ..exceptions import ValidationError, ValidationErrorKind
from ..schemas import VatType

TWO_PLACES = Decimal("0.01")
THREE_PLACES = Decimal("0.001")

# Ставка НДС как дробь: сумма налога = база * числитель / знаменатель
VAT_RATES: Dict[VatType, Tuple[int, int]] = {
    VatType.vat5: (5, 100),
    VatType.vat7: (7, 100),
    VatType.vat10: (10, 100),
    VatType.vat20: (20, 100),
    VatType.vat105: (5, 105),
    VatType.vat107: (7, 107),
    VatType.vat110: (10, 110),
    VatType.vat120: (20, 120),
}


@dataclass(frozen=True, order=True)
class Amount:
    """
    Сумма в рублях (Value Object).

    Создаётся через make_amount(): значение округлено до копеек
    и лежит в диапазоне [0, 42 949 672.95].
    """

    value: Decimal

    @classmethod
    def from_kopecks(cls, kopecks: int) -> "Amount":
        """Создать сумму из целого числа копеек."""
        return make_amount(Decimal(kopecks) / 100)

    @property
    def kopecks(self) -> int:
        return int(self.value * 100)

    def __float__(self) -> float:
        return float(self.value)

    def __str__(self) -> str:
        return f"{self.value:.2f}"


@dataclass(frozen=True, order=True)
class Quantity:
    """Количество (вес) предмета расчёта с точностью до 3 знаков (Value Object)."""

    value: Decimal

    def __float__(self) -> float:
        return float(self.value)

    def __str__(self) -> str:
        return f"{self.value:.3f}"


Number = Union[int, float, str, Decimal, Amount, Quantity]

ZERO = Amount(Decimal("0.00"))


def to_decimal(raw: Number, field: str, ffd_tags: Iterable[int] = ()) -> Decimal:
    """
    Привести входное число к Decimal.

    float переводится через строковое представление, чтобы 1.005
    оставалось 1.005, а не 1.00499999...
    """
    if isinstance(raw, (Amount, Quantity)):
        return raw.value
    if isinstance(raw, bool):
        raise ValidationError(
            ValidationErrorKind.invalid_value,
            f"Значение поля {field} должно быть числом",
            field=field,
            ffd_tags=ffd_tags,
        )
    try:
        value = Decimal(str(raw)) if isinstance(raw, float) else Decimal(raw)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValidationError(
            ValidationErrorKind.invalid_value,
            f"Значение поля {field} должно быть числом: {raw!r}",
            field=field,
            ffd_tags=ffd_tags,
        ) from exc
    if not value.is_finite():
        raise ValidationError(
            ValidationErrorKind.invalid_value,
            f"Значение поля {field} должно быть конечным числом",
            field=field,
            ffd_tags=ffd_tags,
        )
    return value


def _check_range(
    value: Decimal,
    maximum: Decimal,
    field: str,
    ffd_tags: Iterable[int],
) -> None:
    if value < 0:
        raise ValidationError(
            ValidationErrorKind.negative,
            f"Значение поля {field} не может быть отрицательным: {value}",
            field=field,
            ffd_tags=ffd_tags,
            details={"value": str(value)},
        )
    if value > maximum:
        raise ValidationError(
            ValidationErrorKind.out_of_range,
            f"Значение поля {field} превышает {maximum}: {value}",
            field=field,
            ffd_tags=ffd_tags,
            details={"value": str(value), "max": str(maximum)},
        )


def make_amount(
    raw: Number,
    field: str = "amount",
    ffd_tags: Iterable[int] = (),
    maximum: Decimal = constraints.MAX_ITEM_PRICE,
) -> Amount:
    """
    Создать сумму в рублях.

    Округление до 2 знаков половиной от нуля, затем проверка диапазона.

    Raises:
        ValidationError: Если значение не число, отрицательное или больше максимума
    """
    value = to_decimal(raw, field, ffd_tags).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    _check_range(value, maximum, field, ffd_tags)
    return Amount(value)


def make_quantity(
    raw: Number,
    field: str = "quantity",
    ffd_tags: Iterable[int] = (),
) -> Quantity:
    """
    Создать количество с округлением до 3 знаков.

    Raises:
        ValidationError: Если значение отрицательное или больше 99 999.999
    """
    value = to_decimal(raw, field, ffd_tags).quantize(THREE_PLACES, rounding=ROUND_HALF_UP)
    _check_range(value, constraints.MAX_ITEM_QUANTITY, field, ffd_tags)
    return Quantity(value)


def vat_amount(vat_type: VatType | str, base: Amount) -> Amount:
    """
    Рассчитать сумму НДС от базы.

    Расчёт ведётся в целых копейках с округлением половины вверх.
    Для "без НДС" и 0% результат равен нулю.
    """
    rate = VAT_RATES.get(VatType(vat_type))
    if rate is None:
        return ZERO

    numerator, denominator = rate
    scaled = base.kopecks * numerator
    kopecks = (2 * scaled + denominator) // (2 * denominator)
    return Amount.from_kopecks(kopecks)
