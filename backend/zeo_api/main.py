from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
import os
import time
import uuid
import logging
from contextlib import asynccontextmanager

from zeo_api.core.config import settings
from zeo_api.core.json_store import store, StorageError
from zeo_api.api import (
    health,
    auth,
    tours,
    destinations,
    activities,
    testimonials,
    posts,
    sliders,
    team,
    enquiries,
    contact,
    gallery,
    uploads,
    search,
    trip_planning,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info("Starting Zeo Tourism API")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Data directory: {settings.data_dir}")

    # Every collection is read into memory once
    store.load(settings.data_dir)

    yield

    # Shutdown
    logger.info("Shutting down Zeo Tourism API")


# Create FastAPI app
app = FastAPI(
    title="Zeo Tourism API",
    description="Content API for the Zeo Tourism website and admin panel",
    version=settings.version,
    lifespan=lifespan
)


# Security headers middleware
@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    """Add security headers to all responses."""
    response = await call_next(request)

    # Security headers
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["X-XSS-Protection"] = "1; mode=block"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

    return response


# Logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests with timing."""
    start_time = time.time()

    logger.info(
        f"{request.method} {request.url.path}",
        extra={
            "request_id": getattr(request.state, "request_id", "unknown"),
            "method": request.method,
            "url": str(request.url),
            "client_ip": request.client.host if request.client else "unknown"
        }
    )

    response = await call_next(request)

    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} ({duration_ms:.2f}ms)",
        extra={
            "request_id": getattr(request.state, "request_id", "unknown"),
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 2)
        }
    )

    return response


# Request ID middleware, registered last so it wraps the others
@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add unique request ID for tracing."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    return response


# CORS middleware - any origin is echoed back, the allow-list is informational
logger.info(f"CORS allowed origins: {settings.allowed_origins}")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[] if settings.cors_allow_all else settings.allowed_origins,
    allow_origin_regex=".*" if settings.cors_allow_all else None,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=["*"],
)

# Trusted host middleware (optional, for production)
if settings.environment == "production":
    app.add_middleware(
        TrustedHostMiddleware,
        allowed_hosts=["*"]  # Configure with actual hosts in production
    )


def error_response(request: Request, status_code: int, message, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": message,
            "status_code": status_code,
            "request_id": getattr(request.state, "request_id", "unknown")
        },
        headers=headers
    )


# Exception handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions with consistent format."""
    message = exc.detail
    if exc.status_code == 404 and message == "Not Found" and request.url.path.startswith("/api/"):
        message = "API endpoint not found"
    return error_response(request, exc.status_code, message, getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report the first validation problem as a 400."""
    errors = exc.errors()
    if not errors:
        return error_response(request, 400, "Invalid request")

    first = errors[0]
    field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    message = f"{field}: {first.get('msg')}" if field else first.get("msg")
    return error_response(request, 400, message)


@app.exception_handler(StorageError)
async def storage_exception_handler(request: Request, exc: StorageError):
    logger.error(
        f"Storage failure: {str(exc)}",
        extra={"request_id": getattr(request.state, "request_id", "unknown")}
    )
    return error_response(request, 500, str(exc))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(
        f"Unhandled exception: {str(exc)}",
        extra={
            "request_id": getattr(request.state, "request_id", "unknown"),
            "exception_type": type(exc).__name__
        },
        exc_info=True
    )

    return error_response(request, 500, "Internal server error")


# Include routers
app.include_router(health.router, tags=["health"])
app.include_router(auth.router, tags=["auth"])
app.include_router(tours.router)
app.include_router(destinations.router)
app.include_router(activities.router)
app.include_router(testimonials.router)
app.include_router(posts.router)
app.include_router(sliders.router)
app.include_router(team.router)
app.include_router(enquiries.router)
app.include_router(trip_planning.router)
app.include_router(contact.router)
app.include_router(gallery.router)
app.include_router(uploads.router)
app.include_router(search.router)

# Uploaded media
os.makedirs(settings.uploads_dir, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.uploads_dir), name="uploads")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Zeo Tourism API Server",
        "version": settings.version,
        "docs": "/docs",
        "health": "/api/health"
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "zeo_api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True if settings.environment == "development" else False,
        log_level="info"
    )
