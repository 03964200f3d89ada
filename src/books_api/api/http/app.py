"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from starlette.responses import JSONResponse

from src.books_api.api.http.app_data import ApplicationDependencies
from src.books_api.api.http.routers.books import router as books_router
from src.books_api.api.http.routers.health import router as health_router
from src.books_api.api.http.routers.info import router as info_router
from src.books_api.api.utils.app_startup import configure_logging
from src.books_api.core.exceptions import BookError
from src.books_api.core.services.book_service import BookService
from src.books_api.core.services.database.db_manage import DbManageService
from src.books_api.core.services.database.db_session import DbSessionService
from src.books_api.entities.book import SqlBookRepository
from src.books_api.runtime.config.config_data import ConfigData
from src.books_api.runtime.context import get_config

__all__ = ["app", "create_app", "shutdown", "startup"]


# --- Lifecycle hooks ---
async def startup(app: FastAPI, config: ConfigData) -> None:
    """Open the database, make sure the books table exists and wire the services.

    Any failure is logged and re-raised so that the server never starts
    serving requests without a working database.
    """
    logger.info("Starting up application in {} environment", config.app.environment)

    try:
        database_service = DbSessionService(config.database, config.app.environment)
        database_service.ping()
        logger.info("Connected to {} database", config.database.backend)

        if config.app.create_tables:
            DbManageService(database_service.engine).create_all()
    except Exception:
        logger.exception("Database bootstrap failed, aborting startup")
        raise

    repository = SqlBookRepository(database_service)
    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
        book_service=BookService(repository),
    )


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        app_dependencies.database_service.dispose()


# --- Error handlers ---
async def handle_book_error(request: Request, exc: BookError) -> JSONResponse:
    logger.bind(status_code=exc.status_code, error_type=type(exc).__name__).warning(
        "request.failed: {}", exc.message
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def handle_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    if any(error["loc"] and error["loc"][0] == "path" for error in errors):
        content = {"error": "Invalid ID"}
    else:
        content = {
            "error": "Invalid data",
            "details": [
                {
                    "field": ".".join(str(part) for part in error["loc"][1:]),
                    "message": error["msg"],
                }
                for error in errors
            ],
        }
    logger.bind(status_code=400).info("request.invalid: {}", content["error"])
    return JSONResponse(status_code=400, content=content)


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    xff = request.headers.get("x-forwarded-for")
    client_ip = (
        xff.split(",")[0].strip()
        if xff
        else request.client.host
        if request.client
        else "unknown"
    )

    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": client_ip,
    }

    start = time.perf_counter()

    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return JSONResponse(
                status_code=500,
                content={"error": "Internal Server Error", "request_id": request_id},
                headers={"X-Request-ID": request_id},
            )


def create_app(config: ConfigData | None = None) -> FastAPI:
    """Build the application for ``config`` (the current context's by default)."""
    config = config or get_config()
    configure_logging(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await startup(app, config)
        try:
            yield
        finally:
            await shutdown(app)

    app = FastAPI(
        title="Books API",
        lifespan=lifespan,
        docs_url=None if config.app.environment == "production" else "/docs",
        redoc_url=None if config.app.environment == "production" else "/redoc",
    )
    app.state.config = config

    # --- CORS configuration ---
    cors = config.app.cors
    if "*" in cors.origins and cors.allow_credentials:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True"
        )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors.origins,
        allow_credentials=cors.allow_credentials,
        allow_methods=cors.allow_methods,
        allow_headers=cors.allow_headers,
        expose_headers=cors.expose_headers,
        max_age=cors.max_age,
    )
    app.middleware("http")(log_requests)

    app.add_exception_handler(BookError, handle_book_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    # --- Router registration ---
    app.include_router(info_router)
    app.include_router(books_router)
    app.include_router(health_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=app.state.config.app.host,
        port=app.state.config.app.port,
        access_log=False,  # We handle access logging in middleware
    )
