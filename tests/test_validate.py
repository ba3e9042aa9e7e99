"""Tests for draft validation."""

import pytest

from catalog_import.errors import RowRejected
from catalog_import.models import PartialDraft
from catalog_import.validate import validate_draft


def test_accepts_complete_draft():
    draft = validate_draft(PartialDraft(name="Mug", price="12.50", sku="MUG-1"))
    assert draft.name == "Mug"
    assert draft.price == "12.50"
    assert draft.sku == "MUG-1"
    assert draft.stock == 0


def test_price_string_is_not_reformatted():
    assert validate_draft(PartialDraft(name="Mug", price="49.990")).price == "49.990"


def test_zero_price_is_valid():
    assert validate_draft(PartialDraft(name="Sample", price="0")).price == "0"


def test_stock_is_kept():
    assert validate_draft(PartialDraft(name="Mug", price="1", stock=7)).stock == 7


@pytest.mark.parametrize("name", [None, "", "   "])
def test_rejects_missing_name(name):
    with pytest.raises(RowRejected, match="name is required"):
        validate_draft(PartialDraft(name=name, price="10"))


@pytest.mark.parametrize("price", [None, "", "  "])
def test_rejects_missing_price(price):
    with pytest.raises(RowRejected, match="price is required"):
        validate_draft(PartialDraft(name="Mug", price=price))


@pytest.mark.parametrize("price", ["-5", "abc", "Infinity", "-0.01"])
def test_rejects_invalid_price(price):
    with pytest.raises(RowRejected, match="non-negative number"):
        validate_draft(PartialDraft(name="Mug", price=price))


def test_leading_number_is_enough():
    # parseFloat-style: trailing text after a number does not invalidate it
    assert validate_draft(PartialDraft(name="Mug", price="12 USD")).price == "12 USD"


@pytest.mark.parametrize("price", ["٣", "５", "०.5"])
def test_rejects_non_ascii_digits(price):
    # parseFloat only understands ASCII digits
    with pytest.raises(RowRejected, match="non-negative number"):
        validate_draft(PartialDraft(name="Mug", price=price))
