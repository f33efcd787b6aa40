"""Domain tests for the Product aggregate."""

import pytest
from protean.exceptions import ValidationError

from storefront.product.events import ProductAdded, SizeRestocked, StockLevelChanged
from storefront.product.product import Product


def _product(**overrides):
    defaults = {
        "name": "Denim Jacket",
        "category": "jackets",
        "price": 89.0,
        "sizes": [{"size": "S", "stock": 2}, {"size": "M", "stock": 4}],
    }
    defaults.update(overrides)
    return Product.create(**defaults)


class TestProductCreation:
    def test_create_with_sizes(self):
        product = _product()
        assert product.name == "Denim Jacket"
        assert [(s.size, s.stock) for s in product.sizes] == [("S", 2), ("M", 4)]
        assert product.is_new_arrival is False

    def test_create_without_sizes(self):
        product = _product(sizes=None)
        assert len(product.sizes) == 0

    def test_timestamps_are_timezone_aware(self):
        product = _product()
        assert product.created_at.tzinfo is not None
        assert product.updated_at.tzinfo is not None

    def test_create_raises_product_added(self):
        product = _product()
        events = [e for e in product._events if isinstance(e, ProductAdded)]
        assert len(events) == 1
        assert events[0].category == "jackets"

    def test_duplicate_size_labels_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            _product(sizes=[{"size": "M", "stock": 1}, {"size": "M", "stock": 2}])
        assert "sizes" in exc_info.value.messages

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError):
            _product(sizes=[{"size": "M", "stock": -1}])

    def test_name_is_required(self):
        with pytest.raises(ValidationError):
            _product(name=None)


class TestProductDetails:
    def test_update_details_leaves_stock_alone(self):
        product = _product()
        product.update_details(name="Washed Denim Jacket", discount_price=69.0)
        assert product.name == "Washed Denim Jacket"
        assert product.discount_price == 69.0
        assert product.size_entry("M").stock == 4

    def test_clear_discount(self):
        product = _product(discount_price=50.0)
        product.update_details(clear_discount=True)
        assert product.discount_price is None


class TestStockWrites:
    def test_set_stock_records_event(self):
        product = _product()
        product.set_stock("M", 1, order_id="ord-1", reason="order_placed")
        assert product.size_entry("M").stock == 1

        events = [e for e in product._events if isinstance(e, StockLevelChanged)]
        assert len(events) == 1
        assert events[0].previous_stock == 4
        assert events[0].new_stock == 1
        assert events[0].reason == "order_placed"

    def test_set_stock_on_unknown_size(self):
        product = _product()
        with pytest.raises(ValidationError) as exc_info:
            product.set_stock("XL", 1)
        assert "size" in exc_info.value.messages

    def test_set_stock_below_zero(self):
        product = _product()
        with pytest.raises(ValidationError):
            product.set_stock("M", -1)

    def test_restock_existing_size(self):
        product = _product()
        entry = product.restock("S", 3)
        assert entry.stock == 5

    def test_restock_introduces_new_size(self):
        product = _product()
        product.restock("XL", 7)
        assert product.size_entry("XL").stock == 7
        events = [e for e in product._events if isinstance(e, SizeRestocked)]
        assert events[-1].new_stock == 7

    def test_restock_needs_a_positive_quantity(self):
        product = _product()
        with pytest.raises(ValidationError):
            product.restock("S", 0)
