"""
Payment provider factory.

    PAYMENT_PROVIDER=mock   -> MockPaymentProvider (no network calls)
    PAYMENT_PROVIDER=stripe -> StripePaymentProvider (needs STRIPE_SECRET_KEY)

Without an explicit PAYMENT_PROVIDER, stripe is used whenever a secret key is
configured. Production never falls back to the mock.
"""
import logging
from functools import lru_cache

from foodswift.core.config import IS_PROD, PAYMENT_PROVIDER, STRIPE_API_VERSION, STRIPE_SECRET_KEY
from foodswift.services.payments.base import BasePaymentProvider, PaymentError, PaymentIntent
from foodswift.services.payments.mock import MockPaymentProvider
from foodswift.services.payments.stripe_provider import StripePaymentProvider

logger = logging.getLogger(__name__)

__all__ = [
    "BasePaymentProvider",
    "MockPaymentProvider",
    "PaymentError",
    "PaymentIntent",
    "StripePaymentProvider",
    "build_payment_provider",
    "get_payment_provider",
]


def build_payment_provider(provider: str = PAYMENT_PROVIDER, *, production: bool = IS_PROD) -> BasePaymentProvider:
    provider = (provider or "").strip().lower()
    if provider == "stripe":
        return StripePaymentProvider(STRIPE_SECRET_KEY, api_version=STRIPE_API_VERSION)
    if provider == "mock":
        if production:
            raise RuntimeError("Mock payment provider is not allowed in production")
        logger.warning("using mock payment provider; no real charges will be created")
        return MockPaymentProvider()
    raise ValueError(f"Unknown payment provider: {provider!r}")


@lru_cache()
def get_payment_provider() -> BasePaymentProvider:
    return build_payment_provider()
