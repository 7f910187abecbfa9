from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.dependencies import ProcessorRegistry
from app.api.exceptions import ApiError
from app.api.responses import error_envelope
from app.api.routes import router
from app.config.settings import Settings
from app.logging.logger import Log


def create_app(settings: Settings, registry: ProcessorRegistry | None = None) -> FastAPI:
    """Build the HTTP application around an explicit Settings object."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        Log.info(f"{settings.app_name} starting", env=settings.app_env, port=settings.port)
        yield
        await app.state.registry.aclose()
        Log.info(f"{settings.app_name} stopped")

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    app.state.settings = settings
    app.state.registry = registry or ProcessorRegistry(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept"],
        max_age=86400,
    )

    @app.exception_handler(ApiError)
    async def api_error_handler(_: Request, exc: ApiError) -> JSONResponse:
        if exc.status_code < 500:
            Log.warning(f"Rejected request: {exc.message}")
        return JSONResponse(error_envelope(exc.message), status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
        Log.warning(f"Rejected request: {exc.errors()}")
        return JSONResponse(error_envelope("Invalid upload request"), status_code=400)

    app.include_router(router)
    return app
