"""
Jobly API - FastAPI application entry point.

Companies and the jobs they post. Reads are open; creating, changing and
deleting companies or jobs takes an admin token.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobly.core.config import settings
from jobly.core.database import close_db, init_db
from jobly.core.exceptions import APIException, BadRequestException, ValidationException
from jobly.core.logging import RequestIDMiddleware, get_logger, setup_logging
from jobly.core.rate_limit import limiter
from jobly.api.routes import api_router

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("starting_app", app_name=settings.app_name, env=settings.environment)
    await init_db()

    yield

    await close_db()
    logger.info("shutting_down")


app = FastAPI(
    title=settings.app_name,
    description="Companies and jobs, with token auth and admin-gated mutations",
    version=settings.app_version,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
)


def error_response(exc: APIException) -> JSONResponse:
    """Every error leaves in the same envelope: error code, message, details."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message, "details": exc.details},
    )


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    return error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Body, path and query validation failures are a 400 listing every violation."""
    error = ValidationException.from_errors(exc.errors())
    logger.info("request_invalid", errors=error.details)
    return error_response(error)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Framework errors (unknown route, wrong method) in the API envelope."""
    return error_response(
        APIException(
            str(exc.detail), code=f"HTTP_{exc.status_code}", status_code=exc.status_code
        )
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    """A storage constraint the repositories did not translate is still bad input."""
    logger.warning("constraint_violation", path=request.url.path, error=str(exc.orig))
    return error_response(
        BadRequestException("Request violates a data constraint", code="CONSTRAINT_VIOLATION")
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Log full detail; the client only sees the message when DEBUG is on."""
    logger.error(
        "unhandled_exception",
        exc_type=type(exc).__name__,
        exc_message=str(exc),
        path=request.url.path,
        exc_info=True,
    )
    message = str(exc) if settings.debug else "An unexpected error occurred"
    return JSONResponse(
        status_code=500,
        content={"error": "internal_error", "message": message},
    )


app.include_router(api_router)


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs" if settings.debug else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("jobly.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
