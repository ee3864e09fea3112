"""Tests for catalog queries and the AddToCart use case."""

import pytest

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.cart_store import CartStore
from storefront.application.list_products import ListProductsHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.show_product import ShowProductHandler
from storefront.domain.exceptions import EntityNotFoundError, ValidationError
from tests.fakes import FakeCartRepository, FakeProductCatalog, make_product


def _catalog() -> FakeProductCatalog:
    return FakeProductCatalog([
        make_product("1", name="Croissant", price="4.50", stock=3, category="pastries"),
        make_product("2", name="Baguette", price="3.00", stock=0, category="breads"),
        make_product("3", name="Ciabatta", price="3.50", stock=8, category="breads"),
    ])


def _store() -> CartStore:
    store = CartStore(FakeCartRepository())
    store.load()
    return store


class TestListProducts:

    def test_lists_all(self):
        page = ListProductsHandler(_catalog()).handle()
        assert [p.name for p in page.products] == ["Croissant", "Baguette", "Ciabatta"]
        assert page.total == 3
        assert page.total_pages == 1

    def test_filters_by_category(self):
        page = ListProductsHandler(_catalog()).handle(category="breads")
        assert [p.id for p in page.products] == ["2", "3"]

    def test_paginates(self):
        page = ListProductsHandler(_catalog()).handle(page=2, page_size=2)
        assert [p.id for p in page.products] == ["3"]
        assert page.total_pages == 2

    def test_formats_price(self):
        page = ListProductsHandler(_catalog()).handle()
        assert page.products[0].price == "S/ 4.50"

    def test_bad_page_rejected(self):
        with pytest.raises(ValidationError):
            ListProductsHandler(_catalog()).handle(page=0)


class TestShowProduct:

    def test_found(self):
        assert ShowProductHandler(_catalog()).handle("3").name == "Ciabatta"

    def test_not_found(self):
        with pytest.raises(EntityNotFoundError, match="not found"):
            ShowProductHandler(_catalog()).handle("99")


class TestAddToCart:

    def test_adds_live_product(self):
        store = _store()
        line = AddToCartHandler(store, _catalog()).handle("1", 2)
        assert line.quantity == 2
        assert line.line_total == "S/ 9.00"
        assert store.get_item_count() == 2

    def test_silently_clamps_to_live_stock(self):
        store = _store()
        handler = AddToCartHandler(store, _catalog())
        handler.handle("1", 2)
        line = handler.handle("1", 5)
        assert line.quantity == 3

    def test_unknown_product(self):
        with pytest.raises(EntityNotFoundError):
            AddToCartHandler(_store(), _catalog()).handle("99")

    def test_sold_out_product(self):
        with pytest.raises(ValidationError, match="out of stock"):
            AddToCartHandler(_store(), _catalog()).handle("2")

    def test_non_positive_quantity(self):
        with pytest.raises(ValidationError, match="must be positive"):
            AddToCartHandler(_store(), _catalog()).handle("1", 0)


class TestShowCart:

    def test_summary(self):
        store = _store()
        AddToCartHandler(store, _catalog()).handle("1", 2)
        AddToCartHandler(store, _catalog()).handle("3", 1)
        dto = ShowCartHandler(store).handle()
        assert [line.product_name for line in dto.lines] == ["Croissant", "Ciabatta"]
        assert dto.item_count == 3
        assert dto.subtotal == "S/ 12.50"
