"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from storefront.application.cart_store import CartStore
from storefront.application.checkout import CheckoutSequencer
from storefront.infrastructure.config import Settings, load_settings
from storefront.infrastructure.http.api_client import ApiClient
from storefront.infrastructure.http.rest_order_gateway import RestOrderGateway
from storefront.infrastructure.http.rest_product_catalog import RestProductCatalog
from storefront.infrastructure.payments.payment_factory import get_payment_processor
from storefront.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)


@lru_cache(maxsize=1)
def settings() -> Settings:
    return load_settings()


@lru_cache(maxsize=1)
def api_client() -> ApiClient:
    cfg = settings()
    return ApiClient(cfg.api_url, token=cfg.api_token, timeout=cfg.http_timeout)


def product_catalog() -> RestProductCatalog:
    return RestProductCatalog(api_client())


def order_gateway() -> RestOrderGateway:
    return RestOrderGateway(api_client())


def cart_store() -> CartStore:
    store = CartStore(JsonCartRepository(settings().cart_file))
    store.load()
    return store


def checkout_sequencer(store: CartStore) -> CheckoutSequencer:
    return CheckoutSequencer(
        store=store,
        payment_processor=get_payment_processor(settings(), api_client()),
        order_gateway=order_gateway(),
        catalog=product_catalog(),
    )
