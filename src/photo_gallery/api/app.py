"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from photo_gallery.api.auth import router as auth_router
from photo_gallery.api.categories import router as categories_router
from photo_gallery.api.gallery import router as gallery_router
from photo_gallery.api.photos import router as photos_router
from photo_gallery.api.users import router as users_router
from photo_gallery.app_logging import configure_logging
from photo_gallery.config import parse_cors_origins
from photo_gallery.containers import AppContainer
from photo_gallery.errors import GalleryError

GENERIC_ERROR = "Internal server error"


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)
    settings = container.settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        if settings.seed_admin_password:
            try:
                state_container.user_service.ensure_seed_admin(
                    username=settings.seed_admin_username,
                    password=settings.seed_admin_password,
                    email=settings.seed_admin_email,
                )
            except GalleryError:
                logger.exception("Default admin cannot be seeded; refusing to start")
                raise
            except Exception:
                logger.exception("Failed to seed the default admin")
        else:
            logger.warning("SEED_ADMIN_PASSWORD not set; skipping admin seeding")
        yield

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    origins = parse_cors_origins(settings.cors_origins)
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=origins != ["*"],
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(GalleryError)
    async def gallery_error_handler(request: Request, exc: GalleryError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.payload())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400, content={"error": _describe_validation(exc)}
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled error", extra={"path": request.url.path, "method": request.method}
        )
        return JSONResponse(status_code=500, content={"error": _format_error(exc)})

    def _format_error(exc: Exception) -> str:
        if settings.environment == "local":
            detail = f"{type(exc).__name__}: {exc}".strip()
            if detail:
                return f"{GENERIC_ERROR} (debug: {detail})"
        return GENERIC_ERROR

    app.include_router(auth_router)
    app.include_router(categories_router)
    app.include_router(photos_router)
    app.include_router(users_router)
    app.include_router(gallery_router)
    app.mount(
        "/uploads",
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _describe_validation(exc: RequestValidationError) -> str:
    """Return a short, human-readable message for the first invalid field."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(location[1:] if location[:1] in (["path"], ["query"]) else location)
    message = first.get("msg", "invalid value")
    return f"Invalid value for {field}: {message}" if field else str(message)
