import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, get_settings
from app.core.errors import CatalogError, StoreUnavailable
from app.core.logging import setup_logging
from app.core.security import CredentialChecker, build_credential_checker
from app.database import DatabaseConnector
from app.routers import (
    dashboard_router,
    health_router,
    products_router,
    recommendations_router,
)
from app.services.revalidation_service import PageRevalidator

logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _describe_request_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    error = errors[0]
    location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
    message = error.get("msg", "invalid")
    if not location:
        return "Invalid request body: {}".format(message)
    return "Invalid value for {}: {}".format(location, message)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError):
        if exc.status_code >= 500:
            logger.error(
                "%s %s failed: %s",
                request.method,
                request.url.path,
                exc.message,
                exc_info=exc,
            )
        else:
            logger.warning(
                "%s %s rejected (%s): %s",
                request.method,
                request.url.path,
                exc.status_code,
                exc.message,
            )
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        message = _describe_request_error(exc)
        logger.warning("%s %s rejected (400): %s", request.method, request.url.path, message)
        return _error_response(400, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("%s %s failed unexpectedly", request.method, request.url.path)
        return _error_response(500, "Internal server error")


def create_app(
    settings: Optional[Settings] = None,
    credential_checker: Optional[CredentialChecker] = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            app.state.connector.connect()
        except StoreUnavailable:
            logger.warning("Starting without a product store connection; requests will retry.")
        try:
            yield
        finally:
            app.state.connector.disconnect()

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)
    app.state.settings = settings
    app.state.connector = DatabaseConnector(settings.DATABASE_URL)
    app.state.credential_checker = credential_checker or build_credential_checker(settings)
    app.state.revalidator = PageRevalidator()

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(products_router)
    app.include_router(dashboard_router)
    app.include_router(recommendations_router)
    return app


app = create_app()


__all__ = ["app", "create_app"]
