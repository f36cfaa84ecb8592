"""
FastAPI application entry point for the portfolio backend.
"""

from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from portfolio.config import Settings, get_settings
from portfolio.errors import PortfolioError
from portfolio.logging_config import setup_logging
from portfolio.routes import router

logger = logging.getLogger("portfolio.api")


def _register_handlers(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every request and response."""
        path = request.url.path
        method = request.method
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        status = response.status_code
        level = logging.WARNING if status >= 400 else logging.INFO
        logger.log(level, "%s %s %d %.0fms", method, path, status, elapsed_ms)
        return response

    @app.exception_handler(PortfolioError)
    async def portfolio_error_handler(request: Request, exc: PortfolioError):
        level = logging.WARNING if exc.status_code < 500 else logging.ERROR
        if exc.detail is None:
            logger.log(level, "%s %s: %s", request.method, request.url.path, exc.message)
        else:
            logger.log(
                level, "%s %s: %s: %s", request.method, request.url.path, exc.message, exc.detail
            )
        return JSONResponse(status_code=exc.status_code, content=exc.as_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning("%s %s: invalid request body", request.method, request.url.path)
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid request body", "error": str(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=500,
            content={"message": "Internal server error", "error": str(exc)},
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title="Portfolio Backend", version="0.1.0")
    _register_handlers(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins.split(","),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router, prefix=settings.api_prefix)

    uploads_dir = Path(settings.uploads_dir)
    uploads_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=uploads_dir), name="uploads")

    logger.info(
        "Portfolio API config: %s",
        {
            "api_prefix": settings.api_prefix,
            "DATABASE_URL_set": bool(settings.database_url),
            "MAIL_USERNAME_set": bool(settings.mail_username),
            "mail_host": settings.mail_host,
            "uploads_dir": str(uploads_dir),
            "in_memory_backends": settings.use_in_memory_backends,
        },
    )
    return app


def main() -> int:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file or None)
    parser = argparse.ArgumentParser(description="Run the portfolio backend")
    parser.add_argument("--host", type=str, default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    args = parser.parse_args()

    logger.info("Server is running on port %d", args.port)
    uvicorn.run(
        "portfolio.app:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
