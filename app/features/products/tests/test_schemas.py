"""Tests for product schemas."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.features.products.schemas import BulkStockUpdate, ProductCreate, ProductUpdate


class TestProductCreate:
    """Tests for ProductCreate validation."""

    def test_price_from_string(self, sample_product_data):
        """Price keeps exact decimal value."""
        product = ProductCreate.model_validate(sample_product_data)

        assert product.price == Decimal("2.99")
        assert product.store_id == 1

    def test_price_from_number(self, sample_product_data):
        """Numeric price is accepted too."""
        sample_product_data["price"] = 15

        product = ProductCreate.model_validate(sample_product_data)

        assert product.price == Decimal("15")

    def test_stock_defaults_to_zero(self, sample_product_data):
        """Omitted stock means nothing on hand."""
        del sample_product_data["quantityInStock"]

        product = ProductCreate.model_validate(sample_product_data)

        assert product.quantity_in_stock == 0

    def test_rejects_three_decimal_places(self, sample_product_data):
        """Prices are exact to the cent."""
        sample_product_data["price"] = "2.999"

        with pytest.raises(ValidationError):
            ProductCreate.model_validate(sample_product_data)

    def test_rejects_negative_price(self, sample_product_data):
        """Price cannot be negative."""
        sample_product_data["price"] = "-1.00"

        with pytest.raises(ValidationError):
            ProductCreate.model_validate(sample_product_data)

    def test_rejects_negative_stock(self, sample_product_data):
        """Stock cannot be negative."""
        sample_product_data["quantityInStock"] = -1

        with pytest.raises(ValidationError):
            ProductCreate.model_validate(sample_product_data)

    @pytest.mark.parametrize("field", ["storeId", "name", "category", "price", "sku"])
    def test_required_fields(self, sample_product_data, field):
        """Each required field is rejected when missing."""
        del sample_product_data[field]

        with pytest.raises(ValidationError) as exc_info:
            ProductCreate.model_validate(sample_product_data)

        assert exc_info.value.errors()[0]["loc"] == (field,)


class TestProductUpdate:
    """Tests for ProductUpdate."""

    def test_store_id_is_ignored(self):
        """Ownership cannot be moved through an update."""
        update = ProductUpdate.model_validate({"storeId": 2, "price": "3.49"})

        assert update.model_dump(exclude_unset=True) == {"price": Decimal("3.49")}

    @pytest.mark.parametrize("field", ["name", "category", "price", "quantityInStock", "sku"])
    def test_rejects_null_required_column(self, field):
        with pytest.raises(ValidationError):
            ProductUpdate.model_validate({field: None})

    def test_description_can_be_cleared(self):
        update = ProductUpdate.model_validate({"description": None})

        assert update.model_dump(exclude_unset=True) == {"description": None}


class TestBulkStockUpdate:
    """Tests for BulkStockUpdate body shapes."""

    def test_wrapped_list(self):
        """``{"products": [...]}`` form."""
        body = BulkStockUpdate.model_validate(
            {"products": [{"id": 1, "quantityInStock": 0}, {"id": 2, "quantityInStock": 5}]}
        )

        assert [(item.id, item.quantity_in_stock) for item in body.products] == [(1, 0), (2, 5)]

    def test_bare_list(self):
        """A bare list is wrapped automatically."""
        body = BulkStockUpdate.model_validate([{"id": 3, "quantityInStock": 7}])

        assert body.products[0].id == 3
        assert body.products[0].quantity_in_stock == 7

    def test_rejects_empty_list(self):
        """At least one update is required."""
        with pytest.raises(ValidationError):
            BulkStockUpdate.model_validate({"products": []})

    def test_rejects_negative_stock(self):
        """Stock levels are never negative."""
        with pytest.raises(ValidationError):
            BulkStockUpdate.model_validate([{"id": 1, "quantityInStock": -5}])
