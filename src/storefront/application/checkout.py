"""Application service: the Checkout Sequencer.

Walks the shopper through address -> payment -> review and submits the
order.  The sequencer reads the cart through the CartStore and writes to it
only twice: clearing it after a successful order, and applying stock
adjustments after the backend reports a stock conflict.
"""

from __future__ import annotations

import logging

from storefront.application.cart_store import CartStore
from storefront.application.dto import OrderConfirmationDTO, QuoteDTO
from storefront.domain.exceptions import (
    CartAdjustedError,
    InsufficientStockError,
    OrderSubmissionError,
    PaymentDeclinedError,
    ValidationError,
)
from storefront.domain.model.address import DELIVERY_AREA, Address, DeliveryArea
from storefront.domain.model.checkout import CheckoutSession, CheckoutStep, PaymentMethod
from storefront.domain.model.order import OrderLine, OrderRequest
from storefront.domain.model.pricing import PriceBreakdown, PricingPolicy
from storefront.domain.repository.order_gateway import OrderGateway
from storefront.domain.repository.payment_processor import PaymentProcessor
from storefront.domain.repository.product_catalog import ProductCatalog
from storefront.domain.service.stock_reconciliation_service import (
    AdjustmentKind,
    ReconciliationReport,
    StockReconciliationService,
)

logger = logging.getLogger(__name__)


class CheckoutSequencer:

    def __init__(
        self,
        store: CartStore,
        payment_processor: PaymentProcessor,
        order_gateway: OrderGateway,
        catalog: ProductCatalog,
        policy: PricingPolicy | None = None,
        area: DeliveryArea = DELIVERY_AREA,
    ) -> None:
        self._store = store
        self._payment_processor = payment_processor
        self._order_gateway = order_gateway
        self._catalog = catalog
        self._policy = policy or PricingPolicy()
        self._area = area
        self._session = CheckoutSession()

    @property
    def session(self) -> CheckoutSession:
        return self._session

    @property
    def step(self) -> CheckoutStep:
        return self._session.step

    # --- Steps ----------------------------------------------------------------

    def start(self) -> CheckoutSession:
        """Begin a fresh checkout on the address step."""
        if self._store.cart.is_empty:
            raise ValidationError("Your cart is empty")
        self._session = CheckoutSession()
        return self._session

    def submit_address(self, street: str, postal_code: str, phone: str) -> Address:
        address = Address.create(street, postal_code, phone, area=self._area)
        self._session.submit_address(address)
        return address

    def authorize_payment(self, method: PaymentMethod) -> str:
        """Ask the processor to authorize the current total.

        A decline keeps the session on the payment step and is re-raised
        with the processor's message.
        """
        self._session.ensure_ready_to_pay()
        amount = self.pricing().total
        try:
            authorization = self._payment_processor.authorize(amount, method)
        except PaymentDeclinedError as exc:
            logger.info("Payment of %s declined: %s", amount, exc)
            self._session.record_payment_failure(str(exc))
            raise

        self._session.record_authorization(method, authorization.reference)
        return authorization.reference

    def go_back(self) -> CheckoutStep:
        self._session.go_back()
        return self._session.step

    def confirm_order(self) -> OrderConfirmationDTO:
        """Submit the order from the review step.

        On success the cart is cleared.  On a stock conflict the cart is
        re-synced with live stock and CartAdjustedError is raised; the
        shopper stays on review and has to confirm again.  Any other
        failure propagates untouched, leaving cart and session as they were.
        """
        self._session.ensure_ready_to_submit()
        if self._store.cart.is_empty:
            raise ValidationError("Your cart is empty")

        pricing = self.pricing()
        request = self._build_request(pricing)

        try:
            confirmation = self._order_gateway.submit(request)
        except InsufficientStockError as exc:
            logger.info("Order rejected for insufficient stock, re-syncing cart")
            report = self._reconcile()
            raise CartAdjustedError(report) from exc
        except OrderSubmissionError as exc:
            logger.info("Order rejected: %s", exc)
            raise

        self._store.clear_cart()
        logger.info(
            "Order %s placed (pricing policy %s)", confirmation.id, self._policy.version
        )
        return OrderConfirmationDTO(
            order_id=confirmation.id,
            status=confirmation.status.value,
            total=str(pricing.settle(confirmation.total)),
        )

    # --- Queries --------------------------------------------------------------

    def pricing(self) -> PriceBreakdown:
        return self._policy.quote(self._store.get_total())

    def quote(self) -> QuoteDTO:
        pricing = self.pricing()
        return QuoteDTO(
            subtotal=str(pricing.subtotal),
            shipping=str(pricing.shipping),
            tax=str(pricing.tax),
            total=str(pricing.total),
        )

    # --- Internal helpers -----------------------------------------------------

    def _build_request(self, pricing: PriceBreakdown) -> OrderRequest:
        return OrderRequest(
            items=[
                OrderLine(
                    product_id=entry.product_id,
                    quantity=entry.quantity,
                    product_name=entry.product.name,
                )
                for entry in self._store.entries
            ],
            address=self._session.address,  # type: ignore[arg-type]
            payment_method=self._session.payment_method,  # type: ignore[arg-type]
            pricing=pricing,
            payment_intent_id=self._session.payment_reference,  # type: ignore[arg-type]
        )

    def _reconcile(self) -> ReconciliationReport:
        svc = StockReconciliationService(self._catalog)
        report = svc.plan(self._store.cart)

        for adjustment in report.adjustments:
            if adjustment.kind == AdjustmentKind.REMOVE:
                self._store.remove_item(adjustment.product_id)
            else:
                self._store.restock(adjustment.product_id, adjustment.available)

        if report.failed:
            logger.warning(
                "Stock re-sync incomplete, %d product(s) not checked",
                len(report.failed),
            )
        return report
