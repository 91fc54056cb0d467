"""
ChainFlow FastAPI Application Entry Point

- Domain exceptions, HTTP errors and validation failures share one JSON envelope
- The EventBus gets its audit and logging handlers in the lifespan hook
- Routers stay thin and delegate to the service layer
"""
import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from chainflow.config import settings
from chainflow.core.exceptions import ChainFlowException, to_http_exception
from chainflow.database import SessionLocal, create_tables
from chainflow.routers import analytics, auth, health, inventory, orders, suppliers
from chainflow.utils.events import configure_event_bus
from chainflow.utils.logging import configure_logging

configure_logging(log_level=settings.LOG_LEVEL, log_format=settings.LOG_FORMAT)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


@asynccontextmanager
async def lifespan(_: FastAPI):
    logger.info("app_starting name=%s version=%s", settings.APP_NAME, settings.APP_VERSION)
    create_tables()
    configure_event_bus(db_session_factory=SessionLocal)
    logger.info("event_bus_configured handlers=audit,logging")
    yield
    logger.info("app_stopping name=%s", settings.APP_NAME)


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Supply chain management API: inventory, suppliers, orders and analytics",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    """Correlation id, timing and security headers for every response."""
    started = time.perf_counter()
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    request.state.request_id = request_id

    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000

    if settings.ENABLE_REQUEST_ID:
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time-Ms"] = f"{elapsed_ms:.2f}"
    if settings.ENABLE_SECURITY_HEADERS:
        response.headers.update(SECURITY_HEADERS)
        if not settings.DEBUG:
            response.headers["Strict-Transport-Security"] = (
                f"max-age={settings.STRICT_TRANSPORT_SECURITY_SECONDS}; includeSubDomains"
            )
    if settings.ENABLE_REQUEST_LOGGING:
        logger.info(
            "request_completed method=%s path=%s status=%s duration_ms=%.2f request_id=%s",
            request.method, request.url.path, response.status_code, elapsed_ms, request_id,
        )
    return response


# ── Error envelope ────────────────────────────────────────────────────────────

def _error_response(status_code: int, error: dict, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error}, headers=headers)


@app.exception_handler(ChainFlowException)
async def domain_exception_handler(request: Request, exc: ChainFlowException) -> JSONResponse:
    logger.warning(
        "domain_error code=%s status=%s path=%s message=%s",
        exc.code, exc.status_code, request.url.path, exc.message,
    )
    http_exc = to_http_exception(exc)
    return _error_response(http_exc.status_code, http_exc.detail, http_exc.headers)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc.detail, dict):
        error = exc.detail
    else:
        error = {"code": "HTTP_ERROR", "message": str(exc.detail)}
    return _error_response(exc.status_code, error, getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(400, {
        "code": "VALIDATION_ERROR",
        "message": "Request validation failed",
        "details": jsonable_encoder(exc.errors()),
    })


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    return _error_response(400, {"code": "VALIDATION_ERROR", "message": str(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "unhandled_error path=%s request_id=%s",
        request.url.path, getattr(request.state, "request_id", None),
    )
    error = {"code": "INTERNAL_ERROR", "message": "Internal server error"}
    if settings.expose_error_details:
        error["details"] = {"exception": str(exc)}
    return _error_response(500, error)


# ── Routers ───────────────────────────────────────────────────────────────────

app.include_router(health.router)
for module in (auth, inventory, orders, suppliers, analytics):
    app.include_router(module.router, prefix=API_PREFIX)
