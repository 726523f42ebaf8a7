"""Tests for the SQLAlchemy product repository (in-memory SQLite)."""

from decimal import Decimal

import pytest

from catalog.domain.exceptions import DuplicateCodeError
from catalog.domain.model.product import Product
from catalog.infrastructure.persistence.database import (
    create_engine_for,
    create_session_factory,
    init_schema,
)
from catalog.infrastructure.persistence.sql_product_repository import (
    SqlAlchemyProductRepository,
)


@pytest.fixture
def open_repo():
    engine = create_engine_for("sqlite://")
    init_schema(engine)
    factory = create_session_factory(engine)
    sessions = []

    def _open() -> SqlAlchemyProductRepository:
        session = factory()
        sessions.append(session)
        return SqlAlchemyProductRepository(session)

    yield _open

    for session in sessions:
        session.close()
    engine.dispose()


def _product(code: str = "WID-001", name: str = "Widget") -> Product:
    return Product.create(code, name, "A useful widget", "15.00", 10)


class TestSqlRepositoryRoundTrip:

    def test_add_and_load(self, open_repo):
        product = _product()
        repo = open_repo()
        repo.add(product)
        assert repo.save_changes() == 1

        loaded = open_repo().get_by_id(product.id)
        assert loaded is not None
        assert loaded.code == "WID-001"
        assert loaded.description == "A useful widget"
        assert loaded.price.amount == Decimal("15.00")
        assert loaded.stock == 10
        assert loaded.created_at == product.created_at
        assert loaded.created_at.tzinfo is not None

    @pytest.mark.parametrize("price", ["19.99", "19.9", "0.01"])
    def test_price_round_trips_exactly(self, open_repo, price):
        product = Product.create("WID-001", "Widget", "", price, 1)
        repo = open_repo()
        repo.add(product)
        repo.save_changes()

        loaded = open_repo().get_by_id(product.id)
        assert loaded.price.amount == Decimal(price)

    def test_missing_returns_none(self, open_repo):
        assert open_repo().get_by_id("missing") is None

    def test_update_tracked_product(self, open_repo):
        product = _product()
        writer = open_repo()
        writer.add(product)
        writer.save_changes()

        repo = open_repo()
        loaded = repo.get_by_id(product.id)
        loaded.update("Gadget", "", "29.99", 3)
        assert repo.save_changes() == 1

        reloaded = open_repo().get_by_id(product.id)
        assert reloaded.name == "Gadget"
        assert reloaded.price.amount == Decimal("29.99")
        assert reloaded.updated_at is not None

    def test_loaded_but_unchanged_is_not_written(self, open_repo):
        writer = open_repo()
        writer.add(_product())
        writer.save_changes()

        repo = open_repo()
        repo.query().all()
        assert repo.save_changes() == 0

    def test_rollback_discards_changes(self, open_repo):
        product = _product()
        writer = open_repo()
        writer.add(product)
        writer.save_changes()

        repo = open_repo()
        repo.get_by_id(product.id).adjust_stock(5)
        repo.rollback()
        assert repo.get_by_id(product.id).stock == 10

    def test_remove(self, open_repo):
        product = _product()
        repo = open_repo()
        repo.add(product)
        repo.save_changes()

        repo.remove(product)
        repo.save_changes()
        assert open_repo().get_by_id(product.id) is None


class TestSqlRepositoryCodeUniqueness:

    def test_duplicate_live_code_rejected(self, open_repo):
        first = open_repo()
        first.add(_product("WID-001", "First"))
        first.save_changes()

        second = open_repo()
        second.add(_product("WID-001", "Second"))
        with pytest.raises(DuplicateCodeError, match="WID-001"):
            second.save_changes()

        names = [p.name for p in open_repo().query().all()]
        assert names == ["First"]

    def test_code_of_deleted_product_reusable(self, open_repo):
        old = _product("WID-001", "Old")
        repo = open_repo()
        repo.add(old)
        repo.save_changes()
        old.delete()
        repo.save_changes()

        repo.add(_product("WID-001", "New"))
        repo.save_changes()
        assert open_repo().query().filter_by(code="WID-001").count() == 2


class TestSqlRepositoryQuery:

    def _seed(self, open_repo) -> SqlAlchemyProductRepository:
        repo = open_repo()
        for code, price in [("C", "3"), ("A", "1"), ("B", "2")]:
            repo.add(Product.create(code, f"Product {code}", "", price, 1))
        repo.save_changes()
        return open_repo()

    def test_live_products_ordered_and_windowed(self, open_repo):
        repo = self._seed(open_repo)
        query = repo.query().filter_by(is_deleted=False).order_by("code")
        assert query.count() == 3
        assert [p.code for p in query.skip(1).take(2).all()] == ["B", "C"]

    def test_order_by_price_descending(self, open_repo):
        repo = self._seed(open_repo)
        codes = [p.code for p in repo.query().order_by("price", descending=True).all()]
        assert codes == ["C", "B", "A"]

    def test_count_respects_window(self, open_repo):
        repo = self._seed(open_repo)
        assert repo.query().skip(2).count() == 1

    def test_query_returns_tracked_instances(self, open_repo):
        repo = self._seed(open_repo)
        product = repo.query().filter_by(code="A").first()
        assert repo.get_by_id(product.id) is product

    def test_unknown_field_rejected(self, open_repo):
        repo = self._seed(open_repo)
        with pytest.raises(ValueError, match="Unknown product field"):
            repo.query().filter_by(colour="red")
