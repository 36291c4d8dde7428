import os
from decimal import Decimal

from dotenv import load_dotenv

# Carrega o .env da raiz do projeto
load_dotenv()

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: str = "") -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./foodswift.db")
ENV = os.getenv("ENV", "dev")
ENV_NORMALIZED = ENV.lower()
IS_DEV = ENV_NORMALIZED in {"dev", "development", "local", "test"}
IS_STAGE = ENV_NORMALIZED in {"stage", "staging"}
IS_PROD = ENV_NORMALIZED in {"prod", "production"}
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# CORS
_cors_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS = [origin.strip() for origin in _cors_env.split(",") if origin.strip() and origin.strip() != "*"]

if not CORS_ORIGINS and IS_DEV:
    CORS_ORIGINS = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:3000",
    ]

CORS_ALLOW_ORIGIN_REGEX = os.getenv("CORS_ALLOW_ORIGIN_REGEX", "").strip() or None

# Session cookie
SESSION_COOKIE_NAME = "session"
SESSION_SECRET = os.getenv("SESSION_SECRET", "")
SESSION_MAX_AGE_SECONDS = int(os.getenv("SESSION_MAX_AGE_SECONDS", "604800"))
SESSION_COOKIE_SECURE = _env_flag("SESSION_COOKIE_SECURE", "0" if IS_DEV else "1")
SESSION_COOKIE_SAMESITE = os.getenv("SESSION_COOKIE_SAMESITE", "lax").strip().lower()
if SESSION_COOKIE_SAMESITE not in {"lax", "strict", "none"}:
    SESSION_COOKIE_SAMESITE = "lax"

# Login de desenvolvimento (substitui o callback OIDC fora de produção)
AUTH_DEV_LOGIN = _env_flag("AUTH_DEV_LOGIN")

# Payments
STRIPE_SECRET_KEY = os.getenv("STRIPE_SECRET_KEY", "").strip()
STRIPE_API_VERSION = os.getenv("STRIPE_API_VERSION", "2024-12-18.acacia")
PAYMENT_PROVIDER = os.getenv("PAYMENT_PROVIDER", "stripe" if STRIPE_SECRET_KEY else "mock").strip().lower()
PAYMENT_CURRENCY = os.getenv("PAYMENT_CURRENCY", "usd").strip().lower()

# Checkout
ORDER_ETA_MINUTES = int(os.getenv("ORDER_ETA_MINUTES", "30"))
CHECKOUT_DELIVERY_FEE = Decimal(os.getenv("CHECKOUT_DELIVERY_FEE", "4.99"))
CHECKOUT_TAX_RATE = Decimal(os.getenv("CHECKOUT_TAX_RATE", "0.08"))
