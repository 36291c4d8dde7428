import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from foodswift.core.config import CORS_ALLOW_ORIGIN_REGEX, CORS_ORIGINS
from foodswift.core.database import Base, engine
from foodswift.core.logging_setup import configure_logging
from foodswift.core.startup_checks import create_sqlite_schema, validate_database_environment
from foodswift.middleware.observability import ObservabilityMiddleware
from foodswift.middleware.session import SessionMiddleware
from foodswift.services.order_events import register_default_handlers
import foodswift.models  # garante que os models são importados antes do create_all

from foodswift.routers.addresses import router as addresses_router
from foodswift.routers.auth import router as auth_router
from foodswift.routers.internal_metrics import router as internal_metrics_router
from foodswift.routers.menu_items import router as menu_items_router
from foodswift.routers.orders import router as orders_router
from foodswift.routers.restaurants import router as restaurants_router

configure_logging()
register_default_handlers()

logger = logging.getLogger(__name__)
STARTUP_PREFIX = "[STARTUP]"


@asynccontextmanager
async def lifespan(_: FastAPI):
    _startup_tasks()
    yield


app = FastAPI(
    title="FoodSwift Delivery API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_origin_regex=CORS_ALLOW_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SessionMiddleware)
app.add_middleware(ObservabilityMiddleware)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": _format_validation_errors(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("unhandled error endpoint=%s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def _startup_tasks() -> None:
    try:
        validate_database_environment()
        create_sqlite_schema(engine=engine, metadata=Base.metadata)
    except Exception:
        logger.exception("%s ERROR startup failed", STARTUP_PREFIX)
        raise


# Routers
app.include_router(auth_router)
app.include_router(restaurants_router)
app.include_router(menu_items_router)
app.include_router(addresses_router)
app.include_router(orders_router)
app.include_router(internal_metrics_router)


@app.get("/")
def root():
    return {"status": "ok"}


@app.get("/health")
def health():
    return {"status": "healthy"}
