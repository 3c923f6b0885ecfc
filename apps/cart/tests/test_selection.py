"""Tests for turning a dress page selection into a cart line."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from apps.bookings.domain.availability import BookingWindow
from apps.cart.domain.cart import VariantKind
from apps.cart.domain.exceptions import (
    IncompleteSelectionError,
    InvalidRangeError,
    NotForSaleError,
    UnavailableDateError,
)
from apps.cart.domain.selection import build_line, build_purchase_line, build_quote_line, build_rental_line
from apps.catalog.domain.items import CatalogItem
from shared.domain.value_objects import DateRange


@pytest.fixture
def dress():
    return CatalogItem(
        id=12,
        name="Sirène",
        price_per_day=Decimal("120"),
        is_rent_on_discount=False,
        new_price_per_day=Decimal("90"),
        is_for_sale=True,
        buy_price=Decimal("1500"),
        colors=("Ivoire", "Blanc"),
        sizes=("S", "M"),
    )


@pytest.fixture
def windows():
    return [BookingWindow("12", (DateRange(date(2025, 6, 10), date(2025, 6, 15)),))]


class TestCatalogItem:
    def test_discounted_rate_applies_only_with_a_rate(self, dress):
        assert dress.effective_day_rate == Decimal("120")
        discounted = CatalogItem(id=1, price_per_day=100, is_rent_on_discount=True, new_price_per_day=80)
        assert discounted.effective_day_rate == Decimal("80")
        missing_rate = CatalogItem(id=1, price_per_day=100, is_rent_on_discount=True)
        assert missing_rate.effective_day_rate == Decimal("100")

    def test_sale_price_needs_for_sale_flag(self):
        item = CatalogItem(id=1, buy_price="900", is_for_sale=False)
        assert item.effective_buy_price is None
        item = CatalogItem(id=1, buy_price="900", is_for_sale=True, is_sell_on_discount=True, new_buy_price="700")
        assert item.effective_buy_price == Decimal("700")

    def test_new_collection_has_no_price(self):
        item = CatalogItem(id=1, price_per_day=100, buy_price=900, is_for_sale=True, is_new_collection=True)
        assert item.is_quote_only
        assert item.effective_day_rate is None
        assert item.effective_buy_price is None


class TestRental:
    def test_quantity_is_the_number_of_days(self, dress, windows):
        line = build_rental_line(dress, "Ivoire", "M", "2025-06-16", "2025-06-19", windows)
        assert line.variant_kind is VariantKind.RENTAL
        assert line.item_id == "12"
        assert line.quantity == 3
        assert line.unit_price == Decimal("120")
        assert line.line_total() == Decimal("360")

    def test_missing_fields_are_reported_per_field(self, dress, windows):
        with pytest.raises(IncompleteSelectionError) as exc_info:
            build_rental_line(dress, "", None, None, "2025-06-19", windows)
        assert set(exc_info.value.missing) == {"color", "size", "start_date"}
        assert exc_info.value.as_errors()["size"] == ["Veuillez choisir une taille."]

    def test_unknown_color_or_size_is_rejected(self, dress, windows):
        with pytest.raises(IncompleteSelectionError) as exc_info:
            build_rental_line(dress, "Noir", "XXL", "2025-06-16", "2025-06-19", windows)
        assert set(exc_info.value.missing) == {"color", "size"}

    @pytest.mark.parametrize("end", ["2025-06-16", "2025-06-14"])
    def test_end_must_be_after_start(self, dress, windows, end):
        with pytest.raises(InvalidRangeError) as exc_info:
            build_rental_line(dress, "Ivoire", "M", "2025-06-16", end, windows)
        assert exc_info.value.field == "end_date"

    def test_booked_days_are_rejected_with_the_first_conflict(self, dress, windows):
        with pytest.raises(UnavailableDateError) as exc_info:
            build_rental_line(dress, "Ivoire", "M", "2025-06-08", "2025-06-20", windows)
        assert exc_info.value.date == date(2025, 6, 10)
        assert "2025-06-10" in str(exc_info.value)

    def test_end_day_touching_a_booking_is_rejected(self, dress, windows):
        with pytest.raises(UnavailableDateError):
            build_rental_line(dress, "Ivoire", "M", "2025-06-05", "2025-06-10", windows)

    def test_quote_only_dress_cannot_be_rented(self, windows):
        item = CatalogItem(id=12, price_per_day=100, is_new_collection=True, colors=("Ivoire",))
        with pytest.raises(NotForSaleError):
            build_rental_line(item, "Ivoire", "", "2025-06-16", "2025-06-19", windows)


class TestPurchase:
    def test_purchase_line(self, dress):
        line = build_purchase_line(dress, "Blanc", "S")
        assert line.quantity == 1
        assert line.unit_price == Decimal("1500")
        assert line.start_date is None

    def test_not_for_sale(self, dress):
        item = CatalogItem(id=3, price_per_day=100, colors=("Blanc",))
        with pytest.raises(NotForSaleError):
            build_purchase_line(item, "Blanc", "")

    def test_size_required_when_dress_has_sizes(self, dress):
        with pytest.raises(IncompleteSelectionError) as exc_info:
            build_purchase_line(dress, "Blanc", "")
        assert list(exc_info.value.missing) == ["size"]


class TestQuote:
    def test_only_color_is_required(self, dress):
        line = build_quote_line(dress, "Ivoire")
        assert line.is_quote
        assert line.unit_price is None
        assert line.line_total() == Decimal("0")

    def test_missing_color(self, dress):
        with pytest.raises(IncompleteSelectionError):
            build_quote_line(dress, None)


def test_build_line_dispatches_on_kind(dress, windows):
    assert build_line("quote", dress, color="Blanc").variant_kind is VariantKind.QUOTE
    assert build_line("purchase", dress, color="Blanc", size="S").variant_kind is VariantKind.PURCHASE
    line = build_line(
        "rental", dress, color="Blanc", size="S", start="2025-06-01", end="2025-06-03", windows=windows
    )
    assert line.quantity == 2
    with pytest.raises(ValueError):
        build_line("gift", dress, color="Blanc")
