"""
Mobile Money Payment Relay — FastAPI Application Entry Point

Registers the payment routes and error handlers, configures logging and
request timing, and manages the database on startup and shutdown.
"""
import logging
import os
import time
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from payrelay.config import get_settings
from payrelay.database import dispose_db, init_db
from payrelay.exceptions import PaymentRelayError
from payrelay.routes import payment_router
from payrelay.schemas.schemas import HealthResponse

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# ─── Application Instance ───────────────────────────────────────────
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=(
        "Relays mobile-money payments to a banking gateway: authenticates, "
        "verifies the destination account name, submits the collection and "
        "records the outcome."
    ),
    docs_url="/docs",
    redoc_url="/redoc",
)


# ─── Startup / Shutdown ──────────────────────────────────────────────
@app.on_event("startup")
def on_startup():
    """Initialize database tables and log boot info."""
    init_db()

    os.makedirs(settings.LOG_DIR, exist_ok=True)

    boot_msg = (
        f"\n{'='*60}\n"
        f"  {settings.APP_NAME} v{settings.APP_VERSION}\n"
        f"  TIME: {datetime.now().isoformat()}\n"
        f"  DATABASE: {settings.DATABASE_URL}\n"
        f"  GATEWAY AUTH: {settings.AUTH_API_URL or '[!] Missing'}\n"
        f"  Health check:  http://localhost:{settings.PORT}/health\n"
        f"  Payment:       http://localhost:{settings.PORT}/pay\n"
        f"  Query payment: http://localhost:{settings.PORT}/payment/:transactionId\n"
        f"{'='*60}\n"
    )
    logger.info(boot_msg)

    log_file = os.path.join(settings.LOG_DIR, "server.log")
    with open(log_file, "a") as f:
        f.write(boot_msg)


@app.on_event("shutdown")
def on_shutdown():
    logger.info("Shutting down gracefully...")
    dispose_db()


# ─── Middleware ──────────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request with timing."""
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 1)

    logger.info("%s %s -> %s (%sms)", request.method, request.url.path, response.status_code, duration)
    return response


# ─── Error Handlers ──────────────────────────────────────────────────
@app.exception_handler(PaymentRelayError)
async def relay_error_handler(request: Request, exc: PaymentRelayError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are client errors, reported in the relay's error shape."""
    first = exc.errors()[0] if exc.errors() else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    reason = first.get("msg", "Invalid request")
    message = f"Invalid field {location}: {reason}" if location else f"Invalid request body: {reason}"
    return JSONResponse(status_code=400, content={"success": False, "message": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Internal server error", "error": str(exc)},
    )


# ─── API Routers ─────────────────────────────────────────────────────
app.include_router(payment_router)


@app.get("/health", response_model=HealthResponse, tags=["Health"])
def health():
    """Liveness check."""
    return HealthResponse(
        status="OK",
        message="Payment Gateway is running",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )
