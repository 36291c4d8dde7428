from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict, Optional

import stripe

from foodswift.services.payments.base import (
    BasePaymentProvider,
    PaymentError,
    PaymentIntent,
    to_minor_units,
)

logger = logging.getLogger(__name__)


class StripePaymentProvider(BasePaymentProvider):
    """Creates PaymentIntents through the official Stripe SDK."""

    def __init__(self, secret_key: str, api_version: Optional[str] = None) -> None:
        if not secret_key:
            raise ValueError("STRIPE_SECRET_KEY is required for the stripe payment provider")
        stripe.api_key = secret_key
        if api_version:
            stripe.api_version = api_version
        logger.info("stripe payment provider initialized api_version=%s", api_version)

    @property
    def provider_name(self) -> str:
        return "stripe"

    def create_payment_intent(
        self,
        amount: Decimal,
        currency: str,
        metadata: Optional[Dict[str, str]] = None,
    ) -> PaymentIntent:
        cents = to_minor_units(amount)
        try:
            intent = stripe.PaymentIntent.create(
                amount=cents,
                currency=currency,
                automatic_payment_methods={"enabled": True},
                metadata=metadata or {},
            )
        except stripe.StripeError as exc:
            message = getattr(exc, "user_message", None) or str(exc)
            logger.warning("stripe payment intent failed code=%s message=%s", getattr(exc, "code", None), message)
            raise PaymentError(message, code=getattr(exc, "code", None)) from exc

        logger.info("stripe payment intent created id=%s status=%s", intent.id, intent.status)
        return PaymentIntent(
            id=intent.id,
            client_secret=intent.client_secret,
            amount=intent.amount,
            currency=intent.currency,
            status=intent.status,
            metadata=dict(metadata or {}),
        )
