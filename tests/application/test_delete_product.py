"""Tests for the DeleteProduct use case."""

from catalog.application.commands import DeleteProductCommand, GetProductQuery
from catalog.application.delete_product import DeleteProductHandler
from catalog.application.get_product import GetProductHandler
from catalog.application.result import ErrorKind
from catalog.domain.exceptions import StoreError
from catalog.domain.model.product import Product
from tests.fakes import FakeProductRepository


def _setup() -> tuple[DeleteProductHandler, FakeProductRepository, Product]:
    product = Product.create("WID-001", "Widget", "", "15.00", 10)
    repo = FakeProductRepository([product])
    return DeleteProductHandler(repo), repo, product


class TestDeleteProduct:

    def test_soft_deletes(self):
        handler, repo, product = _setup()
        result = handler.handle(DeleteProductCommand(product.id))
        assert result.is_success
        saved = repo.committed(product.id)
        assert saved is not None
        assert saved.is_deleted is True
        assert saved.deleted_at is not None

    def test_deleted_product_no_longer_readable(self):
        handler, repo, product = _setup()
        handler.handle(DeleteProductCommand(product.id))
        result = GetProductHandler(repo).handle(GetProductQuery(product.id))
        assert result.is_failure
        assert result.error_kind is ErrorKind.NOT_FOUND

    def test_unknown_id_not_found(self):
        handler, _, _ = _setup()
        result = handler.handle(DeleteProductCommand("missing"))
        assert result.is_failure
        assert result.error == "Product with ID missing not found"
        assert result.error_kind is ErrorKind.NOT_FOUND

    def test_second_delete_not_found(self):
        handler, repo, product = _setup()
        handler.handle(DeleteProductCommand(product.id))
        deleted_at = repo.committed(product.id).deleted_at

        result = handler.handle(DeleteProductCommand(product.id))
        assert result.is_failure
        assert result.error_kind is ErrorKind.NOT_FOUND
        assert repo.committed(product.id).deleted_at == deleted_at
        assert repo.commits == 1

    def test_store_error_becomes_failure(self):
        handler, repo, product = _setup()
        repo.fail_next_save = StoreError("read-only database")
        result = handler.handle(DeleteProductCommand(product.id))
        assert result.is_failure
        assert result.error_kind is ErrorKind.STORE
        assert repo.committed(product.id).is_deleted is False
