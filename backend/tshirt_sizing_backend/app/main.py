"""FastAPI application factory for the T-shirt sizing backend."""

from __future__ import annotations

import time
import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import socketio
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from tshirt_sizing_backend import __version__
from tshirt_sizing_backend.app.api.router import api_router
from tshirt_sizing_backend.app.core.config import get_settings, SizingSettings
from tshirt_sizing_backend.app.services.boards import get_boards_repository, get_boards_service
from tshirt_sizing_backend.app.services.realtime.socketio import sio

_STARTED_AT = time.monotonic()


def _configure_logging(settings: SizingSettings) -> None:
    """Configure application logging destinations."""

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file is not None:
        settings.log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(settings.log_file, encoding="utf-8"))

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=handlers,
        force=True,
    )


@asynccontextmanager
async def _lifespan(app: FastAPI):
    repo = get_boards_repository()
    logging.info("board_store_ready boards=%s", repo.count())
    yield
    # Boards are not persisted; drop them with the process.
    repo.clear()
    get_boards_service.cache_clear()
    get_boards_repository.cache_clear()
    logging.info("board_store_closed")


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""

    settings = get_settings()

    _configure_logging(settings)

    app = FastAPI(
        title="T-shirt Sizing API",
        version=__version__,
        lifespan=_lifespan,
    )

    request_logger = logging.getLogger("tshirt_sizing_backend.http")

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.time()
        try:
            response = await call_next(request)
        except Exception:
            request_logger.exception("request_failed method=%s path=%s", request.method, request.url.path)
            raise
        finally:
            duration_ms = int((time.time() - start) * 1000)
            request_logger.info(
                "request method=%s path=%s status=%s duration_ms=%s",
                request.method,
                request.url.path,
                getattr(locals().get("response"), "status_code", "ERR"),
                duration_ms,
            )
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        allow_credentials=False,
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
        return JSONResponse(status_code=400, content={"error": message})

    @app.get("/health", tags=["health"], summary="Health check")
    def health() -> dict[str, object]:
        """Return a simple status payload for readiness checks."""

        return {
            "status": "healthy",
            "timestamp": datetime.now(UTC).isoformat(),
            "uptime": round(time.monotonic() - _STARTED_AT, 3),
            "version": __version__,
        }

    app.include_router(api_router)

    return app


# FastAPI app for tests and tooling
app = create_app()

# ASGI entrypoint for uvicorn / hypercorn: Socket.IO in front, FastAPI behind it
asgi_app = socketio.ASGIApp(
    sio,
    other_asgi_app=app,
    socketio_path=get_settings().realtime.socketio_path,
)
