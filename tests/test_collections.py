import pytest

from atol_online.apps.documents.domain.collections import Items, Payments, Vats
from atol_online.apps.documents.domain.entities import Item, Payment, Vat
from atol_online.apps.documents.exceptions import ValidationError, ValidationErrorKind
from atol_online.apps.documents.schemas import PaymentType, VatType


def make_items(count: int) -> Items:
    return Items(Item(f"Товар {n}", 1, 1) for n in range(count))


@pytest.mark.parametrize("count", [1, 50, 100])
def test_items_within_bounds_pass_checks(count):
    items = make_items(count)
    items.check_count()
    items.check_element_types()
    assert items.count() == count
    assert len(items) == count


@pytest.mark.parametrize(
    "count, kind",
    [
        (0, ValidationErrorKind.empty_collection),
        (101, ValidationErrorKind.too_many_elements),
    ],
)
def test_items_out_of_bounds_fail_count_check(count, kind):
    with pytest.raises(ValidationError) as exc_info:
        make_items(count).check_count()
    assert exc_info.value.kind is kind
    assert exc_info.value.field == "items"


def test_foreign_element_fails_type_check():
    items = make_items(2)
    items.add(Payment(PaymentType.cash, 1))
    items.check_count()
    with pytest.raises(ValidationError) as exc_info:
        items.check_element_types()
    assert exc_info.value.kind is ValidationErrorKind.heterogeneous_element
    assert exc_info.value.details["index"] == 2


def test_empty_vats_is_legal_but_empty_payments_is_not():
    Vats().check_count()
    with pytest.raises(ValidationError) as exc_info:
        Payments().check_count()
    assert exc_info.value.kind is ValidationErrorKind.empty_collection


def test_vats_upper_bound():
    vats = Vats(Vat(VatType.vat20) for _ in range(7))
    with pytest.raises(ValidationError) as exc_info:
        vats.check_count()
    assert exc_info.value.kind is ValidationErrorKind.too_many_elements


def test_each_and_iteration_keep_insertion_order():
    items = make_items(3)
    names = []
    items.each(lambda item: names.append(item.name))
    assert names == ["Товар 0", "Товар 1", "Товар 2"]
    assert [item.name for item in items] == names
    assert items[1].name == "Товар 1"
    assert [data["name"] for data in items.to_list()] == names
