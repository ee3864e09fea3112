"""Money, the one value object every price, subtotal and total is made of.

Amounts are kept as Decimal and only rounded where the shop rounds: tax is
rounded half-up to the cent, and payment processors are sent whole cents.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from functools import total_ordering

from storefront.domain.exceptions import ValidationError

CENT = Decimal("0.01")
CURRENCY = "PEN"
CURRENCY_SYMBOL = "S/"


@total_ordering
@dataclass(frozen=True)
class Money:
    """An amount in soles (or another currency, never mixed)."""

    amount: Decimal
    currency: str = CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money needs a Decimal amount, not {type(self.amount).__name__}"
            )
        if self.amount.is_signed() and self.amount != 0:
            raise ValidationError(f"Prices cannot be negative, got {self.amount}")

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Build from whatever the backend or storage handed us."""
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        return Money(value)

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0.00"))

    # --- Arithmetic -----------------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + self._amount_of(other), self.currency)

    def __sub__(self, other: Money) -> Money:
        difference = self.amount - self._amount_of(other)
        if difference < 0:
            raise ValidationError(f"{self} - {other} would be a negative amount")
        return Money(difference, self.currency)

    def __mul__(self, units: int) -> Money:
        if not isinstance(units, int):
            raise TypeError(f"Money can only be multiplied by a unit count, got {units!r}")
        return Money(self.amount * units, self.currency)

    def __lt__(self, other: Money) -> bool:
        return self.amount < self._amount_of(other)

    def scaled(self, rate: Decimal) -> Money:
        """``self * rate`` rounded half-up to the cent (used for tax)."""
        return Money(self.amount * rate, self.currency).rounded()

    def rounded(self) -> Money:
        return Money(self.amount.quantize(CENT, rounding=ROUND_HALF_UP), self.currency)

    def is_close_to(self, other: Money, tolerance: Decimal = CENT) -> bool:
        return abs(self.amount - self._amount_of(other)) <= tolerance

    @property
    def cents(self) -> int:
        return int(self.rounded().amount / CENT)

    def __str__(self) -> str:
        return f"{CURRENCY_SYMBOL} {self.amount:.2f}"

    def _amount_of(self, other: Money) -> Decimal:
        if self.currency != other.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")
        return other.amount
