from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from employee_api.api.v1.router import api_router
from employee_api.core.config import Settings, settings as default_settings
from employee_api.core.errors import EmployeeError, RecordValidationError
from employee_api.repositories import build_repository
from employee_api.repositories.base import EmployeeRepository
from employee_api.services.employee_service import Clock, EmployeeService

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


async def employee_error_handler(request: Request, exc: EmployeeError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "Request %s %s failed: %s",
            request.method,
            request.url.path,
            exc.message,
            exc_info=exc,
        )
        return JSONResponse(status_code=exc.status_code, content={"message": SERVER_ERROR_MESSAGE})

    content: dict[str, object] = {"message": exc.message}
    if isinstance(exc, RecordValidationError):
        content["errors"] = [e.model_dump() for e in exc.errors]
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected malformed request %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Request body must be a JSON object"},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": SERVER_ERROR_MESSAGE},
    )


def create_app(
    settings: Settings | None = None,
    repository: EmployeeRepository | None = None,
    clock: Clock | None = None,
) -> FastAPI:
    settings = settings or default_settings
    repository = repository or build_repository(settings)
    employee_service = EmployeeService(repository, clock=clock)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        try:
            await repository.initialize(settings)
        except Exception:
            logger.exception("Failed to initialize %s storage, continuing without it", repository.name)
        yield
        await repository.close()

    application = FastAPI(
        title="Employee Directory API",
        description="CRUD and search over employee records",
        version=settings.APP_VERSION,
        lifespan=lifespan,
    )
    application.state.settings = settings
    application.state.employee_service = employee_service

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_exception_handler(EmployeeError, employee_error_handler)
    application.add_exception_handler(RequestValidationError, request_validation_handler)
    application.add_exception_handler(StarletteHTTPException, http_exception_handler)
    application.add_exception_handler(Exception, unhandled_exception_handler)

    application.include_router(api_router)

    @application.get("/")
    async def root():
        return {"message": "Employee Directory API"}

    return application


configure_logging(default_settings)
app = create_app()
