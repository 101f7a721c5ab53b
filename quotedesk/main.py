# quotedesk/main.py
import time
import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from quotedesk import __version__
from quotedesk import models  # noqa: F401  (registers SQLAlchemy models)
from quotedesk.core.errors import register_error_handlers
from quotedesk.core.logging_config import logger, setup_logging
from quotedesk.core.settings import settings
from quotedesk.db import Base, engine
from quotedesk.routers import (
    approve_page,
    customers,
    pin,
    pins,
    products,
    quote_approvals,
    quotes,
    telegram,
)

# ----------------------------------------------------
# App init
# ----------------------------------------------------
app = FastAPI(title=settings.company_name, version=__version__)

setup_logging(settings.log_level)
logger.info("startup", service="quotedesk", env=settings.app_env)


# ----------------------------------------------------
# Health
# ----------------------------------------------------
@app.get("/health", include_in_schema=True)
def health() -> dict:
    return {"status": "ok"}


# ----------------------------------------------------
# Logging middleware
# ----------------------------------------------------
@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    start = time.time()

    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    client_ip = request.client.host if request.client else "unknown"

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id)

    bound_logger = logger.bind(
        ip=client_ip,
        endpoint=str(request.url.path),
        method=request.method,
    )

    bound_logger.info("request_started")
    response = await call_next(request)
    latency_ms = round((time.time() - start) * 1000, 2)

    bound_logger.bind(status_code=response.status_code, latency_ms=latency_ms).info(
        "request_finished"
    )
    response.headers["X-Request-ID"] = request_id
    return response


# ----------------------------------------------------
# Middleware / errors
# ----------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


# ----------------------------------------------------
# Routers
# ----------------------------------------------------
app.include_router(pin.router)
app.include_router(pins.router)
app.include_router(customers.router)
app.include_router(products.router)
app.include_router(quotes.router)
app.include_router(quote_approvals.router)
app.include_router(approve_page.router)
app.include_router(telegram.router)


# ----------------------------------------------------
# Startup
# ----------------------------------------------------
@app.on_event("startup")
def on_startup():
    Base.metadata.create_all(bind=engine)
