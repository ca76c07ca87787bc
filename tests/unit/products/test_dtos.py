"""Unit tests for Product DTOs.

Covers:
- ProductFilterDTO / CreateProductDTO: defaults, frozen immutability.
- UpdateProductDTO: optional fields, ``changes`` keeps explicit zeros.
- ProductOutputDTO: from_document factory.
"""

from __future__ import annotations

import pytest
from bson import ObjectId
from pydantic import ValidationError

from modules.products.dtos import (
    CreateProductDTO,
    ProductFilterDTO,
    ProductOutputDTO,
    UpdateProductDTO,
)

pytestmark = pytest.mark.unit


# ===========================================================================
# ProductFilterDTO
# ===========================================================================


class TestProductFilterDTO:
    def test_defaults(self):
        dto = ProductFilterDTO()
        assert dto.page == 0
        assert dto.limit == 0
        assert dto.name == ""

    def test_is_immutable(self):
        dto = ProductFilterDTO(page=2)
        with pytest.raises(ValidationError):
            dto.page = 3


# ===========================================================================
# CreateProductDTO
# ===========================================================================


class TestCreateProductDTO:
    def test_id_defaults_to_empty(self):
        dto = CreateProductDTO(name="Pen", stock=100, price=1.5)
        assert dto.id == ""
        assert dto.name == "Pen"
        assert dto.stock == 100
        assert dto.price == 1.5

    def test_is_immutable(self):
        dto = CreateProductDTO(name="Pen")
        with pytest.raises(ValidationError):
            dto.name = "Changed"


# ===========================================================================
# UpdateProductDTO
# ===========================================================================


class TestUpdateProductDTO:
    def test_all_fields_optional(self):
        dto = UpdateProductDTO()
        assert dto.name is None
        assert dto.stock is None
        assert dto.price is None
        assert dto.changes() == {}

    def test_changes_only_contains_supplied_fields(self):
        dto = UpdateProductDTO(price=2.0)
        assert dto.changes() == {"price": 2.0}

    def test_explicit_zero_stock_is_a_change(self):
        dto = UpdateProductDTO(stock=0)
        assert dto.changes() == {"stock": 0}

    def test_explicit_empty_name_is_a_change(self):
        dto = UpdateProductDTO(name="")
        assert dto.changes() == {"name": ""}

    def test_is_immutable(self):
        dto = UpdateProductDTO(name="Test")
        with pytest.raises(ValidationError):
            dto.name = "Changed"


# ===========================================================================
# ProductOutputDTO
# ===========================================================================


class TestProductOutputDTOFromDocument:
    def test_from_document(self):
        oid = ObjectId()
        dto = ProductOutputDTO.from_document(
            {"_id": oid, "name": "Pen", "stock": 100, "price": 1.5}
        )
        assert dto.id == str(oid)
        assert dto.name == "Pen"
        assert dto.stock == 100
        assert dto.price == 1.5

    def test_missing_fields_decode_to_zero_values(self):
        oid = ObjectId()
        dto = ProductOutputDTO.from_document({"_id": oid})
        assert dto.name == ""
        assert dto.stock == 0
        assert dto.price == 0.0

    def test_integer_price_is_coerced(self):
        dto = ProductOutputDTO.from_document({"_id": ObjectId(), "price": 2})
        assert dto.price == 2.0
        assert isinstance(dto.price, float)

    def test_wrong_field_type_raises(self):
        with pytest.raises(ValidationError):
            ProductOutputDTO.from_document({"_id": ObjectId(), "name": ["x"]})

    @pytest.mark.parametrize("stock", [-1, 2**32])
    def test_stock_outside_uint32_raises(self, stock):
        with pytest.raises(ValidationError):
            ProductOutputDTO.from_document({"_id": ObjectId(), "stock": stock})

    def test_stock_at_uint32_max(self):
        dto = ProductOutputDTO.from_document({"_id": ObjectId(), "stock": 2**32 - 1})
        assert dto.stock == 2**32 - 1
