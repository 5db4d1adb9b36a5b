"""
MyEzz Partner API - Main FastAPI Application
"""
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from contextlib import asynccontextmanager
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

import logging

from app.config import settings
from app.error_handlers import register_exception_handlers
from app.repositories import build_repositories

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)
from app.api.v1 import menu, metrics, orders, reports, restaurants

# Rate limiter instance (shared with route-level decorators)
limiter = Limiter(key_func=get_remote_address, default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"])


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup: choose the data source once. Tests may preload app.state.repositories.
    logger.info("Starting up %s...", settings.APP_NAME)
    owned = getattr(app.state, "repositories", None) is None
    if owned:
        app.state.repositories = build_repositories(settings)
    logger.info("Data source mode: %s", app.state.repositories.mode)
    yield
    # Shutdown
    logger.info("Shutting down...")
    if owned:
        app.state.repositories.close()
        app.state.repositories = None


app = FastAPI(
    title=settings.APP_NAME,
    description="Restaurant partner dashboard API: orders, menu, reports and live metrics",
    version=settings.APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan
)

# Attach limiter to app state (required by slowapi)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
register_exception_handlers(app)

# Trusted Host Middleware: reject requests with spoofed Host headers
app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

# CORS Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "Accept"],
)


# Security headers middleware
@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    response: Response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


# Include routers
app.include_router(metrics.router, prefix="/api/metrics", tags=["Metrics"])
app.include_router(reports.router, prefix="/api/reports", tags=["Reports"])
app.include_router(orders.router, prefix="/api/orders", tags=["Orders"])
app.include_router(menu.router, prefix="/api", tags=["Menu"])
app.include_router(restaurants.router, prefix="/api/restaurant", tags=["Restaurant"])


@app.get("/health")
async def health_check(request: Request):
    """Health check endpoint"""
    return {"status": "ok", "mode": request.app.state.repositories.mode}
