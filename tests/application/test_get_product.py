"""Tests for the GetProduct query handler."""

from decimal import Decimal

from catalog.application.commands import GetProductQuery
from catalog.application.get_product import GetProductHandler
from catalog.application.result import ErrorKind
from catalog.domain.model.product import Product
from tests.fakes import FakeProductRepository


def _setup() -> tuple[GetProductHandler, Product]:
    product = Product.create("WID-001", "Widget", "A useful widget", "15.00", 10)
    return GetProductHandler(FakeProductRepository([product])), product


class TestGetProduct:

    def test_returns_full_projection(self):
        handler, product = _setup()
        result = handler.handle(GetProductQuery(product.id))
        assert result.is_success
        dto = result.value
        assert dto.id == product.id
        assert dto.code == "WID-001"
        assert dto.name == "Widget"
        assert dto.description == "A useful widget"
        assert dto.price == Decimal("15.00")
        assert dto.stock == 10
        assert dto.created_at == product.created_at
        assert dto.updated_at is None

    def test_unknown_id_not_found(self):
        handler, _ = _setup()
        result = handler.handle(GetProductQuery("missing"))
        assert result.is_failure
        assert result.error == "Product with ID missing not found"
        assert result.error_kind is ErrorKind.NOT_FOUND

    def test_deleted_product_not_found(self):
        product = Product.create("WID-001", "Widget", "", "1", 1)
        product.delete()
        handler = GetProductHandler(FakeProductRepository([product]))
        result = handler.handle(GetProductQuery(product.id))
        assert result.is_failure
        assert result.error_kind is ErrorKind.NOT_FOUND
