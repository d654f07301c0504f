"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api import auth, games, pages, steam
from src.config import Settings, get_settings
from src.database import check_connection, create_db_engine, create_session_factory

logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    # Startup: a failed check is logged and the server keeps running
    check_connection(app.state.engine)
    yield
    # Shutdown: release pooled connections
    app.state.engine.dispose()


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": "Invalid request body"},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "message": "Internal server error"},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application around an explicit settings object.

    The engine and session factory are created here and kept on ``app.state``;
    request handlers reach them only through dependencies.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Steam Game Catalog API",
        description="Login/signup and a searchable catalog of Steam games",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_db_engine(settings)
    app.state.session_factory = create_session_factory(app.state.engine)

    # CORS middleware for development
    if settings.is_development:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["http://localhost:3000", f"http://localhost:{settings.port}"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Register routers
    app.include_router(pages.router)
    app.include_router(auth.router)
    app.include_router(games.router)
    app.include_router(steam.router)

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "success": True,
            "message": "Server is running",
            "timestamp": datetime.now(UTC).isoformat(),
        }

    app.mount(
        "/static", StaticFiles(directory=settings.static_dir, check_dir=False), name="static"
    )

    # Must stay last: anything not matched above is an unknown endpoint
    @app.api_route("/{path:path}", methods=ALL_METHODS, include_in_schema=False)
    async def endpoint_not_found(path: str):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "message": "Endpoint not found"},
        )

    return app


def run() -> None:
    """Serve the application with uvicorn."""
    settings = get_settings()
    uvicorn.run("src.main:create_app", factory=True, host=settings.host, port=settings.port)
