from __future__ import annotations

import logging
import secrets
from decimal import Decimal
from typing import Dict, List, Optional

from foodswift.services.payments.base import (
    BasePaymentProvider,
    PaymentError,
    PaymentIntent,
    to_minor_units,
)

logger = logging.getLogger(__name__)


class MockPaymentProvider(BasePaymentProvider):
    """In-process stand-in for Stripe used in development and tests."""

    def __init__(self) -> None:
        self.intents: List[PaymentIntent] = []

    @property
    def provider_name(self) -> str:
        return "mock"

    def create_payment_intent(
        self,
        amount: Decimal,
        currency: str,
        metadata: Optional[Dict[str, str]] = None,
    ) -> PaymentIntent:
        cents = to_minor_units(amount)
        if cents <= 0:
            raise PaymentError("Amount must be greater than 0", code="invalid_amount")

        intent_id = f"pi_mock_{secrets.token_hex(12)}"
        intent = PaymentIntent(
            id=intent_id,
            client_secret=f"{intent_id}_secret_{secrets.token_hex(12)}",
            amount=cents,
            currency=currency,
            metadata=dict(metadata or {}),
        )
        self.intents.append(intent)
        logger.info("mock payment intent created id=%s amount=%s currency=%s", intent.id, cents, currency)
        return intent
