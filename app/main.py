# main.py
# Main application file for the FastAPI recipe catalog service.

import logging.config
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
import uvicorn
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

# Import the CORS middleware
from fastapi.middleware.cors import CORSMiddleware

# Import local modules
from app.db import session
from app.api import health, recipes
from app.core.config import settings
from app.core.errors import RecipeServiceError
from app.core.logging_middleware import StructuredLoggingMiddleware
from app.core.state import ServiceState, require_ready
from app.uploads import ensure_upload_dir

# Load logging configuration
logging.config.fileConfig(settings.LOG_CONFIG_FILE, disable_existing_loggers=False)

# Get the logger instance
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.service_state = ServiceState.INITIALIZING
    ensure_upload_dir()
    try:
        session.initialize_schema()
    except Exception:
        app.state.service_state = ServiceState.FAILED
        logger.exception("Database initialization failed; refusing to serve traffic")
        raise
    app.state.service_state = ServiceState.READY
    logger.info("Database initialized successfully")
    try:
        yield
    finally:
        session.shutdown()


# Initialize the FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="API for browsing and adding recipes.",
    version="1.0.0",
    root_path=settings.ROOT_PATH,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)
app.state.service_state = ServiceState.INITIALIZING


# --- Exception Handlers ---

@app.exception_handler(RecipeServiceError)
async def recipe_service_error_handler(request: Request, exc: RecipeServiceError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"{request.method} {request.url.path} rejected: {exc.errors()}")
    return JSONResponse(status_code=400, content={"detail": "Invalid request parameters"})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})

# --- End of Exception Handlers ---

# --- Add Structured Logging Middleware ---
app.add_middleware(StructuredLoggingMiddleware)
# --- End of Structured Logging Middleware ---

# --- Add CORS Middleware ---
# Origins loaded from settings

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,  # Allows specified origins
    allow_credentials=True,  # Allows cookies to be included in requests
    allow_methods=["GET", "POST", "OPTIONS"],  # Explicit HTTP methods
    allow_headers=["Content-Type", "Accept"],  # Explicit headers
)

# --- End of CORS Middleware Section ---

# --- Security Headers Middleware ---


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response: Response = await call_next(request)
        # Prevent clickjacking
        response.headers["X-Frame-Options"] = "DENY"
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        # Control referrer information
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # Content Security Policy - restrict resource loading
        if settings.ENVIRONMENT in ["development", "testing"]:
            # Relaxed to allow FastAPI Swagger UI assets
            response.headers["Content-Security-Policy"] = (
                "default-src 'self'; "
                "img-src 'self' data: https://fastapi.tiangolo.com; "
                "style-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net; "
                "script-src 'self' 'unsafe-inline' https://cdn.jsdelivr.net"
            )
        else:
            response.headers["Content-Security-Policy"] = "default-src 'self'"
        return response


app.add_middleware(SecurityHeadersMiddleware)

# --- End of Security Headers Middleware ---

# Include API routers
app.include_router(health.router, prefix=settings.API_PREFIX, tags=["Health"])
app.include_router(
    recipes.router,
    prefix=f"{settings.API_PREFIX}/recipes",
    tags=["Recipes"],
    dependencies=[Depends(require_ready)],
)

# Uploaded pictures; the directory is created during startup
app.mount(
    settings.UPLOAD_URL_PREFIX,
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)


if __name__ == "__main__":
    # This block allows running the app directly with uvicorn for development.
    # In production, you would typically use a process manager like Gunicorn.
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
