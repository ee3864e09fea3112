"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from storefront.domain.service.stock_reconciliation_service import (
        ReconciliationReport,
    )


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class StorageUnavailableError(DomainException):
    """Durable cart storage could not be read or written."""


class CheckoutStateError(DomainException):
    """A checkout step was attempted out of sequence."""


class PaymentDeclinedError(DomainException):
    """The payment processor refused or failed to authorize the charge."""


class OrderSubmissionError(DomainException):
    """The backend refused the order."""


class InsufficientStockError(OrderSubmissionError):
    """The backend reported that some product no longer has enough stock."""


class OrderRejectedError(OrderSubmissionError):
    """Any other order failure; the message is the server's, verbatim."""


class CartAdjustedError(DomainException):
    """The cart was re-synced against live stock after a stock conflict."""

    def __init__(self, report: ReconciliationReport) -> None:
        super().__init__(
            "Some products no longer have enough stock, so your cart was "
            "adjusted. Please review it and confirm the order again."
        )
        self.report = report
