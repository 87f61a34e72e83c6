"""
FastAPI application entry point for the portfolio backend.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.config import Settings, get_settings
from backend.dependencies import build_rate_limiter, client_id
from backend.errors import ApiError
from backend.routes import router

logger = logging.getLogger(__name__)

CONTENT_SECURITY_POLICY = "; ".join(
    [
        "default-src 'self'",
        "style-src 'self' 'unsafe-inline' https://cdnjs.cloudflare.com https://fonts.googleapis.com",
        "script-src 'self' https://cdnjs.cloudflare.com https://cdn.jsdelivr.net",
        "font-src 'self' https://fonts.gstatic.com https://cdnjs.cloudflare.com",
        "img-src 'self' data: https: http:",
        "connect-src 'self' https://api.github.com",
    ]
)

SECURITY_HEADERS = {
    "Content-Security-Policy": CONTENT_SECURITY_POLICY,
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
}


def _register_error_handlers(app: FastAPI, settings: Settings) -> None:
    @app.exception_handler(ApiError)
    async def _api_error(request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.as_dict())

    @app.exception_handler(RequestValidationError)
    async def _invalid_payload(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected payload for %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request payload"})

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code in (404, 405):
            return JSONResponse(
                status_code=404,
                content={
                    "error": "Endpoint not found",
                    "message": (
                        f"The requested endpoint {request.method} {request.url.path} "
                        "was not found."
                    ),
                },
            )
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Server error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "message": "Something went wrong!" if settings.is_production else str(exc),
            },
        )


def create_app() -> FastAPI:
    settings = get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Server running on port %d", settings.port)
        logger.info("Environment: %s", settings.app_env)
        logger.info("Health check: http://localhost:%d%s/health", settings.port, settings.api_prefix)
        yield
        logger.info("Server closed.")

    app = FastAPI(title="Portfolio Backend", version=settings.app_version, lifespan=lifespan)
    app.state.start_time = time.monotonic()
    app.state.rate_limiter = build_rate_limiter(
        settings,
        scope="global",
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.state.contact_limiter = build_rate_limiter(
        settings,
        scope="contact",
        max_requests=settings.contact_limit_max_requests,
        window_seconds=settings.contact_limit_window_seconds,
    )

    @app.middleware("http")
    async def _rate_limit(request: Request, call_next):
        decision = request.app.state.rate_limiter.hit(client_id(request))
        if not decision.allowed:
            logger.warning("Rate limit exceeded for %s", client_id(request))
            return JSONResponse(
                status_code=429,
                content={"error": "Too many requests from this IP, please try again later."},
                headers=decision.headers(),
            )
        response = await call_next(request)
        response.headers.update(decision.headers())
        return response

    @app.middleware("http")
    async def _security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app, settings)
    app.include_router(router, prefix=settings.api_prefix)

    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")
    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(name)s %(levelname)s %(asctime)s %(message)s",
        datefmt="%m/%d/%Y %I:%M:%S %p",
    )
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


app = create_app()
