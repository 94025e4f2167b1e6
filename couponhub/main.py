import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from couponhub.api.router import api_router
from couponhub.config import settings
from couponhub.core.database import init_db
from couponhub.core.exceptions import CouponHubError
from couponhub.core.messages import get_message, resolve_locale


def setup_logging() -> None:
    """Configure application logging."""
    # Format: timestamp - level - logger name - message
    log_format = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    date_format = "%H:%M:%S"

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,
    )

    # Reduce noise from third-party libraries
    for noisy in ("httpx", "httpcore", "hpack", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    setup_logging()
    logger.info("CouponHub API starting up")
    if settings.debug:
        await init_db()
    yield
    logger.info("CouponHub API shutting down")


app = FastAPI(
    title="CouponHub API",
    description="Coupon publishing, redemption and point-of-sale validation",
    version="0.1.0",
    lifespan=lifespan,
)

# Trust X-Forwarded-Proto from the TLS-terminating proxy
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts=["*"])

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CouponHubError)
async def coupon_hub_error_handler(request: Request, exc: CouponHubError) -> JSONResponse:
    """Turn a domain error into a localized JSON response with a stable code."""
    locale = resolve_locale(request.headers.get("accept-language"))
    if exc.status_code >= 500:
        logger.warning(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": get_message(exc.code, locale), "code": exc.code},
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log failed requests and coupon state changes, skipping OPTIONS preflight."""
    if request.method == "OPTIONS" or request.url.path == "/health":
        return await call_next(request)

    response = await call_next(request)

    path = request.url.path
    if response.status_code >= 400 or (
        request.method != "GET" and any(keyword in path for keyword in ["redeem", "resolve"])
    ):
        logger.info(f"{request.method} {path} -> {response.status_code}")

    return response


app.include_router(api_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
