"""Domain tests for the stock ledger arithmetic."""

import pytest

from storefront.errors import InsufficientStock, SizeNotFound
from storefront.order import ledger
from storefront.order.order import OrderLine
from storefront.product.product import Product


def _product(**overrides):
    defaults = {
        "name": "Linen Shirt",
        "category": "shirts",
        "sizes": [{"size": "M", "stock": 5}, {"size": "L", "stock": 0}],
    }
    defaults.update(overrides)
    return Product.create(**defaults)


def _line(product, size="M", quantity=1):
    return OrderLine(product_id=str(product.id), size=size, quantity=quantity)


class TestCheckAndReserve:
    def test_returns_remaining_stock(self):
        product = _product()
        assert ledger.check_and_reserve(product, _line(product, quantity=2)) == 3

    def test_taking_everything_leaves_zero(self):
        product = _product()
        assert ledger.check_and_reserve(product, _line(product, quantity=5)) == 0

    def test_does_not_mutate_the_product(self):
        product = _product()
        ledger.check_and_reserve(product, _line(product, quantity=2))
        assert product.size_entry("M").stock == 5

    def test_unknown_size_is_refused(self):
        product = _product()
        with pytest.raises(SizeNotFound) as exc:
            ledger.check_and_reserve(product, _line(product, size="XXL"), line_index=3)
        assert exc.value.message == "Size XXL not found for Linen Shirt"
        assert exc.value.context["line_index"] == 3

    def test_size_labels_are_case_sensitive(self):
        product = _product()
        with pytest.raises(SizeNotFound):
            ledger.check_and_reserve(product, _line(product, size="m"))

    def test_more_than_available_is_refused(self):
        product = _product()
        with pytest.raises(InsufficientStock) as exc:
            ledger.check_and_reserve(product, _line(product, quantity=6))
        assert exc.value.context["requested"] == 6
        assert exc.value.context["available"] == 5
        assert "quantity" in exc.value.messages

    def test_out_of_stock_size_is_refused(self):
        product = _product()
        with pytest.raises(InsufficientStock):
            ledger.check_and_reserve(product, _line(product, size="L"))


class TestRelease:
    def test_returns_increased_stock(self):
        product = _product()
        assert ledger.release(product, _line(product, quantity=4)) == 9

    def test_release_into_empty_size(self):
        product = _product()
        assert ledger.release(product, _line(product, size="L", quantity=2)) == 2

    def test_missing_size_returns_none_and_warns(self, monkeypatch):
        warnings = []

        class _Recorder:
            def warning(self, event, **kw):
                warnings.append((event, kw))

        monkeypatch.setattr(ledger, "logger", _Recorder())
        product = _product()

        assert ledger.release(product, _line(product, size="S", quantity=1)) is None
        assert len(warnings) == 1
        assert warnings[0][1]["size"] == "S"
