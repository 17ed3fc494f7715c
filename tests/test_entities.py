from datetime import date, datetime
from decimal import Decimal

import pytest

from atol_online.apps.documents.domain.entities import (
    AgentInfo,
    Client,
    Company,
    CorrectionInfo,
    Item,
    MarkCode,
    MarkQuantity,
    OperatingCheckProps,
    PayingAgent,
    SectoralProps,
    Supplier,
    Vat,
)
from atol_online.apps.documents.exceptions import ValidationError, ValidationErrorKind
from atol_online.apps.documents.schemas import (
    AgentType,
    CorrectionType,
    MarkCodeType,
    Measure,
    PaymentMethod,
    PaymentObject,
    VatType,
)


class TestItem:
    def test_minimal_item_omits_optional_keys(self):
        data = Item("Чай", 10.5, 2).to_dict()

        assert data == {
            "name": "Чай",
            "price": 10.5,
            "quantity": 2.0,
            "sum": 21.0,
            "measure": 0,
            "payment_method": "full_payment",
            "payment_object": 1,
        }
        for key in ("measurement_unit", "vat", "user_data", "excise", "mark_code", "agent_info"):
            assert key not in data

    def test_defaults(self):
        item = Item("Чай", 1, 1)
        assert item.measure is Measure.piece
        assert item.payment_method is PaymentMethod.full_payment
        assert item.payment_object is PaymentObject.general_goods
        assert item.vat is None

    def test_name_is_trimmed_and_control_chars_removed(self):
        assert Item("  Зелёный\n чай\t ", 1, 1).name == "Зелёный чай"

    def test_name_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            Item("я" * 129, 1, 1)
        assert exc_info.value.kind is ValidationErrorKind.too_long
        assert exc_info.value.ffd_tags == (1030,)

    def test_empty_name(self):
        with pytest.raises(ValidationError) as exc_info:
            Item(" \n", 1, 1)
        assert exc_info.value.kind is ValidationErrorKind.empty

    def test_non_string_name(self):
        with pytest.raises(ValidationError) as exc_info:
            Item(123, 1, 1)
        assert exc_info.value.kind is ValidationErrorKind.invalid_value
        assert exc_info.value.field == "item.name"
        assert exc_info.value.ffd_tags == (1030,)

    def test_vat_base_follows_item_sum(self):
        item = Item("Чай", 100, 2, vat=VatType.vat20)
        assert item.vat.base.value == Decimal("200.00")
        assert item.vat.calculated.value == Decimal("40.00")

        item.price = 50
        assert item.to_dict()["vat"] == {"type": "vat20", "sum": 20.0}

        item.quantity = 3
        assert item.vat.base.value == Decimal("150.00")

        item.excise = 10
        assert item.sum.value == Decimal("160.00")
        assert item.vat.base.value == Decimal("160.00")

    def test_vat_object_is_copied(self):
        vat = Vat(VatType.vat10, 5)
        item = Item("Чай", 30, 1, vat=vat)
        assert vat.base.value == Decimal("5.00")
        assert item.vat.base.value == Decimal("30.00")

    def test_sum_overflow_is_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            Item("Чай", "42949672.95", 2)
        assert exc_info.value.kind is ValidationErrorKind.out_of_range
        assert exc_info.value.field == "item.sum"

    def test_failed_setter_keeps_previous_state(self):
        item = Item("Чай", 1000, 2, vat=VatType.vat20)
        with pytest.raises(ValidationError):
            item.quantity = 99999
        assert item.quantity.value == Decimal("2.000")
        assert item.vat.base.value == Decimal("2000.00")

    def test_optional_fields_are_serialized(self):
        item = Item("Шуба", 1000, 1, payment_object=PaymentObject.marked_with_code)
        item.user_data = "артикул 42"
        item.country_code = "643"
        item.declaration_number = "10702070/010121/0000001"
        item.mark_code = MarkCode(MarkCodeType.fur, "RU-430302-ABC1234567")
        item.mark_quantity = MarkQuantity(1, 2)
        item.mark_processing_mode = "0"
        item.agent_info = AgentInfo(
            AgentType.commission_agent, paying_agent=PayingAgent("Оплата", ["+7 999 000-00-00"])
        )
        item.supplier_info = Supplier("ООО Поставщик", "7707083893", ["8 800 100 00 00"])
        item.sectoral_item_props = [SectoralProps("001", date(2024, 1, 15), "12", "значение")]

        data = item.to_dict()
        assert data["payment_object"] == 33
        assert data["country_code"] == "643"
        assert data["mark_code"] == {"fur": "RU-430302-ABC1234567"}
        assert data["mark_quantity"] == {"numerator": 1, "denominator": 2}
        assert data["mark_processing_mode"] == "0"
        assert data["agent_info"] == {
            "type": "commission_agent",
            "paying_agent": {"operation": "Оплата", "phones": ["+79990000000"]},
        }
        assert data["supplier_info"] == {
            "phones": ["+88001000000"],
            "name": "ООО Поставщик",
            "inn": "7707083893",
        }
        assert data["sectoral_item_props"] == [
            {"federal_id": "001", "date": "15.01.2024", "number": "12", "value": "значение"}
        ]

    def test_nested_entities_are_copied(self):
        supplier = Supplier("ООО Поставщик")
        item = Item("Чай", 1, 1)
        item.supplier_info = supplier
        supplier.name = "Другое имя"
        assert item.supplier_info.name == "ООО Поставщик"

    def test_country_code_pattern(self):
        item = Item("Чай", 1, 1)
        with pytest.raises(ValidationError) as exc_info:
            item.country_code = "64"
        assert exc_info.value.kind is ValidationErrorKind.pattern_mismatch
        item.country_code = ""
        assert item.country_code is None

    def test_mark_processing_mode_must_be_zero(self):
        item = Item("Чай", 1, 1)
        with pytest.raises(ValidationError):
            item.mark_processing_mode = "1"

    def test_wrong_nested_type(self):
        item = Item("Чай", 1, 1)
        with pytest.raises(ValidationError) as exc_info:
            item.supplier_info = {"name": "ООО"}
        assert exc_info.value.kind is ValidationErrorKind.invalid_value


class TestMarkCode:
    @pytest.mark.parametrize(
        "kind, value",
        [
            (MarkCodeType.ean8, "46198532"),
            (MarkCodeType.ean13, "4607012345678"),
            (MarkCodeType.itf14, "14601234567890"),
            (MarkCodeType.egais20, "12345678901234567890123"),
            (MarkCodeType.unknown, "произвольный код"),
        ],
    )
    def test_valid_codes(self, kind, value):
        assert MarkCode(kind, value).to_dict() == {kind.value: value}

    def test_exact_length_mismatch(self):
        with pytest.raises(ValidationError) as exc_info:
            MarkCode(MarkCodeType.ean13, "123")
        assert exc_info.value.kind is ValidationErrorKind.invalid_length
        assert exc_info.value.ffd_tags == (1163,)

    def test_max_length_exceeded(self):
        with pytest.raises(ValidationError) as exc_info:
            MarkCode(MarkCodeType.gs10, "x" * 39)
        assert exc_info.value.kind is ValidationErrorKind.too_long

    def test_fur_pattern(self):
        with pytest.raises(ValidationError) as exc_info:
            MarkCode(MarkCodeType.fur, "RU_430302_ABC123456")
        assert exc_info.value.kind in (
            ValidationErrorKind.pattern_mismatch,
            ValidationErrorKind.invalid_length,
        )

    def test_empty_code(self):
        with pytest.raises(ValidationError) as exc_info:
            MarkCode(MarkCodeType.short, "")
        assert exc_info.value.kind is ValidationErrorKind.empty


def test_mark_quantity_requires_proper_fraction():
    with pytest.raises(ValidationError) as exc_info:
        MarkQuantity(2, 2)
    assert exc_info.value.kind is ValidationErrorKind.out_of_range
    with pytest.raises(ValidationError):
        MarkQuantity(0, 2)


class TestClient:
    def test_empty_client_serializes_to_empty_dict(self):
        assert Client().to_dict() == {}

    def test_contacts_are_normalized(self):
        client = Client(
            name="Иванов\tИван",
            phone="+7 (999) 123-45-67",
            email=" buyer@example.ru ",
            inn="500100732259",
            birthdate=date(1990, 5, 17),
            citizenship="643",
            document_code=21,
            document_data="4507 443564",
        )
        assert client.to_dict() == {
            "name": "ИвановИван",
            "inn": "500100732259",
            "email": "buyer@example.ru",
            "phone": "+79991234567",
            "birthdate": "17.05.1990",
            "citizenship": "643",
            "document_code": 21,
            "document_data": "4507 443564",
        }

    def test_invalid_email(self):
        with pytest.raises(ValidationError) as exc_info:
            Client(email="not-an-email")
        assert exc_info.value.kind is ValidationErrorKind.pattern_mismatch
        assert exc_info.value.ffd_tags == (1008,)

    def test_invalid_inn(self):
        with pytest.raises(ValidationError) as exc_info:
            Client(inn="12345")
        assert exc_info.value.kind is ValidationErrorKind.pattern_mismatch

    def test_phone_too_long(self):
        with pytest.raises(ValidationError) as exc_info:
            Client(phone="1" * 18)
        assert exc_info.value.kind is ValidationErrorKind.too_long

    def test_invalid_birthdate_string(self):
        with pytest.raises(ValidationError):
            Client(birthdate="1990-05-17")


class TestCompany:
    def test_to_dict(self, company):
        assert company.to_dict() == {
            "email": "shop@example.ru",
            "sno": "osn",
            "inn": "7707083893",
            "payment_address": "https://shop.example.ru",
        }

    def test_inn_is_required(self):
        with pytest.raises(ValidationError) as exc_info:
            Company("", "osn", "https://shop.example.ru", "shop@example.ru")
        assert exc_info.value.kind is ValidationErrorKind.empty
        assert exc_info.value.field == "company.inn"

    def test_unknown_sno(self):
        with pytest.raises(ValidationError) as exc_info:
            Company("7707083893", "usn", "https://shop.example.ru", "shop@example.ru")
        assert exc_info.value.kind is ValidationErrorKind.invalid_value

    def test_non_string_inn(self):
        with pytest.raises(ValidationError) as exc_info:
            Company(7707083893, "osn", "https://shop.example.ru", "shop@example.ru")
        assert exc_info.value.kind is ValidationErrorKind.invalid_value
        assert exc_info.value.field == "company.inn"


def test_operating_check_props_serialize_values():
    props = OperatingCheckProps("0", "оплата заказа 15", datetime(2024, 3, 1, 12, 30, 5))
    assert props.to_dict() == {
        "name": "0",
        "value": "оплата заказа 15",
        "timestamp": "01.03.2024 12:30:05",
    }


def test_sectoral_props_validation():
    with pytest.raises(ValidationError) as exc_info:
        SectoralProps("1", "15.01.2024", "12", "значение")
    assert exc_info.value.kind is ValidationErrorKind.pattern_mismatch


def test_correction_info():
    info = CorrectionInfo("instruction", date(2024, 2, 1))
    assert info.type is CorrectionType.instruction
    assert info.to_dict() == {"type": "instruction", "base_date": "01.02.2024"}
    assert CorrectionInfo("self", "01.02.2024", "№ 5").to_dict()["type"] == "self"
