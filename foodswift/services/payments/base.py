"""
Payment provider contract.

Checkout only needs one operation from the processor: create a payment intent
for the order total and hand its client secret back to the browser, which
confirms the payment on its own.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Optional


class PaymentError(Exception):
    """Raised when the processor rejects or fails a request."""

    def __init__(self, message: str, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.code = code


@dataclass
class PaymentIntent:
    id: str
    client_secret: str
    amount: int  # centavos
    currency: str
    status: str = "requires_payment_method"
    metadata: Dict[str, str] = field(default_factory=dict)


def to_minor_units(amount: Decimal) -> int:
    """Convert a decimal amount to integer cents (29.99 -> 2999)."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class BasePaymentProvider(ABC):
    @property
    @abstractmethod
    def provider_name(self) -> str:
        ...

    @abstractmethod
    def create_payment_intent(
        self,
        amount: Decimal,
        currency: str,
        metadata: Optional[Dict[str, str]] = None,
    ) -> PaymentIntent:
        """Create an intent for ``amount`` (major units) and return it.

        Raises:
            PaymentError: the processor refused the request.
        """
