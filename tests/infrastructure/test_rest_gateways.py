"""Tests for the REST-backed catalog and order gateway."""

from decimal import Decimal

import pytest
import requests

from storefront.domain.exceptions import InsufficientStockError, OrderRejectedError
from storefront.domain.model.address import Address
from storefront.domain.model.checkout import PaymentMethod
from storefront.domain.model.order import OrderLine, OrderRequest, OrderStatus
from storefront.domain.model.pricing import PricingPolicy
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.http.api_client import ApiClient, ApiError
from storefront.infrastructure.http.rest_order_gateway import (
    RestOrderGateway,
    is_insufficient_stock,
)
from storefront.infrastructure.http.rest_product_catalog import RestProductCatalog
from tests.fakes import FakeResponse, FakeSession

CROISSANT = {
    "id": 1,
    "name": "Croissant",
    "price": "4.50",
    "stock": 8,
    "category": {"id": 3, "name": "pastries"},
    "available": True,
}


def _client(session: FakeSession) -> ApiClient:
    return ApiClient("http://shop.test/api", session=session)


def _order_request() -> OrderRequest:
    return OrderRequest(
        items=[OrderLine(product_id="1", quantity=2)],
        address=Address.create("Av. Larco 123", "15074", "999888777"),
        payment_method=PaymentMethod.CARD,
        pricing=PricingPolicy().quote(Money.of("12.00")),
        payment_intent_id="pi_1",
    )


class TestInsufficientStockDetection:

    def test_structured_code_wins(self):
        error = ApiError("anything", status=409, payload={"code": "INSUFFICIENT_STOCK"})
        assert is_insufficient_stock(error)

    def test_other_code_is_not_a_stock_conflict(self):
        error = ApiError("Stock insuficiente", status=400, payload={"code": "BAD_ADDRESS"})
        assert not is_insufficient_stock(error)

    @pytest.mark.parametrize(
        "message",
        ["Stock insuficiente para Croissant", "Insufficient stock for product 3"],
    )
    def test_message_markers(self, message):
        assert is_insufficient_stock(ApiError(message, status=400))

    def test_unrelated_message(self):
        assert not is_insufficient_stock(ApiError("Invalid address", status=400))


class TestRestProductCatalog:

    def test_get_by_id(self):
        session = FakeSession(FakeResponse(200, {"data": CROISSANT}))
        product = RestProductCatalog(_client(session)).get_by_id("1")

        assert product.id == "1"
        assert product.category == "pastries"
        assert product.price == Money.of("4.50")
        assert product.stock == 8
        assert session.calls[0]["url"] == "http://shop.test/api/products/1"

    def test_missing_product_is_none(self):
        session = FakeSession(FakeResponse(404, {"message": "Not found"}))
        assert RestProductCatalog(_client(session)).get_by_id("9") is None

    def test_server_error_propagates(self):
        session = FakeSession(FakeResponse(500, {"message": "db down"}))
        with pytest.raises(ApiError, match="db down"):
            RestProductCatalog(_client(session)).get_by_id("1")

    def test_list_products_reads_envelope_metadata(self):
        body = {"data": [CROISSANT], "total": 41, "page": 2, "pageSize": 20}
        session = FakeSession(FakeResponse(200, body))

        page = RestProductCatalog(_client(session)).list_products(category="pastries", page=2)

        assert [p.name for p in page.products] == ["Croissant"]
        assert page.total == 41
        assert page.total_pages == 3
        assert session.calls[0]["params"] == {"category": "pastries", "page": 2, "pageSize": 20}

    def test_list_products_bare_list(self):
        session = FakeSession(FakeResponse(200, [CROISSANT, {**CROISSANT, "id": 2}]))
        page = RestProductCatalog(_client(session)).list_products()
        assert page.total == 2
        assert "category" not in session.calls[0]["params"]

    def test_malformed_record(self):
        session = FakeSession(FakeResponse(200, {"id": 1, "price": "x"}))
        with pytest.raises(ApiError, match="Malformed product"):
            RestProductCatalog(_client(session)).get_by_id("1")


class TestRestOrderGateway:

    def test_submit_posts_payload(self):
        session = FakeSession(FakeResponse(201, {"id": 77, "status": "pendiente", "total": 18.2}))

        confirmation = RestOrderGateway(_client(session)).submit(_order_request())

        assert confirmation.id == "77"
        assert confirmation.status == OrderStatus.PENDING
        assert confirmation.total == Money.of("18.2")
        body = session.calls[0]["json"]
        assert body["items"] == [{"productId": "1", "quantity": 2}]
        assert body["address"]["city"] == "Lima"
        assert body["address"]["zipCode"] == "15074"
        assert body["paymentIntentId"] == "pi_1"
        assert Decimal(str(body["total"])) == Decimal("18.20")

    def test_stock_conflict_maps_to_insufficient_stock(self):
        session = FakeSession(FakeResponse(400, {"message": "Stock insuficiente"}))
        with pytest.raises(InsufficientStockError, match="Stock insuficiente"):
            RestOrderGateway(_client(session)).submit(_order_request())

    def test_other_rejection(self):
        session = FakeSession(FakeResponse(422, {"error": "Invalid phone"}))
        with pytest.raises(OrderRejectedError, match="Invalid phone"):
            RestOrderGateway(_client(session)).submit(_order_request())

    def test_unreachable_backend_is_a_rejection(self):
        session = FakeSession(requests.ConnectionError("refused"))
        with pytest.raises(OrderRejectedError, match="Could not reach"):
            RestOrderGateway(_client(session)).submit(_order_request())

    def test_missing_order_number(self):
        session = FakeSession(FakeResponse(201, {"status": "PENDING"}))
        with pytest.raises(OrderRejectedError, match="order number"):
            RestOrderGateway(_client(session)).submit(_order_request())

    def test_list_orders(self):
        body = {"data": [{
            "id": 5,
            "status": "En camino",
            "total": 22.5,
            "createdAt": "2024-03-01T10:00:00Z",
            "items": [{"productId": 1, "name": "Croissant", "quantity": 5}],
        }]}
        session = FakeSession(FakeResponse(200, body))

        [summary] = RestOrderGateway(_client(session)).list_orders()

        assert summary.id == "5"
        assert summary.status == OrderStatus.ON_THE_WAY
        assert summary.total == Money.of("22.5")
        assert summary.items == [OrderLine(product_id="1", quantity=5, product_name="Croissant")]

    def test_get_by_id_missing(self):
        session = FakeSession(FakeResponse(404, ""))
        assert RestOrderGateway(_client(session)).get_by_id("404") is None
