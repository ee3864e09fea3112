"""Delivery address value object.

The bakery delivers inside a single city, so city, region and country come
from the delivery area; the shopper only supplies street, postal code and a
contact phone.
"""

from __future__ import annotations

from dataclasses import dataclass

from storefront.domain.exceptions import ValidationError


@dataclass(frozen=True)
class DeliveryArea:
    city: str
    state: str
    country: str


DELIVERY_AREA = DeliveryArea(city="Lima", state="Lima", country="Perú")


@dataclass(frozen=True)
class Address:

    street: str
    city: str
    state: str
    postal_code: str
    country: str
    phone: str

    @staticmethod
    def create(
        street: str,
        postal_code: str,
        phone: str,
        area: DeliveryArea = DELIVERY_AREA,
    ) -> Address:
        """Build an address inside *area*, validating the shopper's fields."""
        fields = {"Street": street, "Postal code": postal_code, "Phone": phone}
        for label, value in fields.items():
            if not value or not value.strip():
                raise ValidationError(f"{label} is required")

        return Address(
            street=street.strip(),
            city=area.city,
            state=area.state,
            postal_code=postal_code.strip(),
            country=area.country,
            phone=phone.strip(),
        )

    def to_payload(self) -> dict:
        return {
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "zipCode": self.postal_code,
            "country": self.country,
            "phone": self.phone,
        }

    def __str__(self) -> str:
        return f"{self.street}, {self.city} {self.postal_code}, {self.country}"
