"""Unit tests for the Draft form model and its parse step."""

from decimal import Decimal

import pytest

from catalog.domain.exceptions import ValidationError
from catalog.domain.model.draft import Draft
from catalog.domain.model.product import Product
from catalog.domain.model.value_objects import Price, Stock


def _widget() -> Product:
    return Product(
        id="1700000000000",
        name="Widget",
        price=Price.of("9.99"),
        description="Blue",
        stock=Stock(5),
    )


class TestDraftConstruction:

    def test_empty_draft_has_blank_fields(self):
        draft = Draft.empty()
        assert (draft.name, draft.price, draft.description, draft.stock) == ("", "", "", "")
        assert draft.is_new

    def test_from_product_renders_numbers_as_text(self):
        draft = Draft.from_product(_widget())
        assert draft.name == "Widget"
        assert draft.price == "9.99"
        assert draft.stock == "5"
        assert draft.description == "Blue"
        assert draft.product_id == "1700000000000"
        assert not draft.is_new

    def test_with_field_returns_new_draft(self):
        draft = Draft.empty()
        updated = draft.with_field("name", "Gadget")
        assert updated.name == "Gadget"
        assert draft.name == ""

    def test_with_unknown_field_rejected(self):
        with pytest.raises(ValidationError, match="Unknown product field 'colour'"):
            Draft.empty().with_field("colour", "red")

    def test_product_id_is_not_an_editable_field(self):
        with pytest.raises(ValidationError, match="Unknown product field"):
            Draft.empty().with_field("product_id", "42")


class TestDraftParse:

    def test_valid_draft_parses(self):
        result = Draft(name="Widget", price="9.99", stock="5").parse()
        assert result.ok
        assert result.fields.name == "Widget"
        assert result.fields.price.amount == Decimal("9.99")
        assert result.fields.stock.value == 5
        assert result.fields.description == ""

    def test_name_is_stripped(self):
        result = Draft(name="  Widget ", price="1", stock="1").parse()
        assert result.fields.name == "Widget"

    def test_blank_name_is_an_error(self):
        result = Draft(name="   ", price="1", stock="1").parse()
        assert not result.ok
        assert result.errors == {"name": "Product name is required"}

    def test_every_bad_field_is_reported(self):
        result = Draft(name="", price="abc", stock="2.5").parse()
        assert not result.ok
        assert set(result.errors) == {"name", "price", "stock"}

    def test_parse_never_raises(self):
        result = Draft().parse()
        assert result.fields is None
        assert set(result.errors) == {"name", "price", "stock"}

    def test_empty_price_is_not_treated_as_zero(self):
        result = Draft(name="Widget", price="", stock="1").parse()
        assert "price" in result.errors

    def test_raise_for_errors_returns_fields_when_valid(self):
        fields = Draft(name="Widget", price="2", stock="3").parse().raise_for_errors()
        assert fields.stock == Stock(3)

    def test_raise_for_errors_carries_field_messages(self):
        with pytest.raises(ValidationError) as exc_info:
            Draft(name="Widget", price="abc", stock="3").parse().raise_for_errors()
        assert set(exc_info.value.errors) == {"price"}
        assert "Invalid price" in str(exc_info.value)

    def test_to_dict(self):
        draft = Draft.from_product(_widget())
        assert draft.to_dict() == {
            "name": "Widget",
            "price": "9.99",
            "description": "Blue",
            "stock": "5",
            "productId": "1700000000000",
        }
