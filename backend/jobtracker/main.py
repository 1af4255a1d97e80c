from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobtracker.api import auth, job_applications, stats
from jobtracker.bootstrap import run_runtime_migrations
from jobtracker.config import settings
from jobtracker.database import engine
from jobtracker.errors import AppError, InternalError, ValidationError, error_response
from jobtracker.logging_config import setup_logging
from jobtracker.middleware import add_security_headers, enforce_rate_limits, limit_body_size
from jobtracker.rate_limit import SlidingWindowLimiter


setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)
app.state.general_limiter = SlidingWindowLimiter(
    settings.rate_limit_max_requests,
    settings.rate_limit_window_seconds,
)
app.state.auth_limiter = SlidingWindowLimiter(
    settings.auth_rate_limit_max_attempts,
    settings.rate_limit_window_seconds,
)

# the last middleware added runs first
app.middleware("http")(enforce_rate_limits)
app.middleware("http")(limit_body_size)
app.add_middleware(GZipMiddleware, minimum_size=1024)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(add_security_headers)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    return error_response(ValidationError(message))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(InternalError())


@app.on_event("startup")
def on_startup() -> None:
    settings.ensure_directories()
    run_runtime_migrations(engine)


@app.get("/health")
def health() -> dict[str, str]:
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
    }


app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(job_applications.router, prefix="/api/jobs", tags=["jobs"])
app.include_router(stats.router, prefix="/api/stats", tags=["stats"])

frontend_dir = Path(__file__).resolve().parents[2] / "frontend" / "build"
if frontend_dir.exists():
    app.mount("/", StaticFiles(directory=str(frontend_dir), html=True), name="frontend")
