from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import time
import uuid
from contextlib import asynccontextmanager

from catalog_service.config import get_settings
from catalog_service.utils.logger import configure_logging, get_logger
from catalog_service.utils.exceptions import AppException
from catalog_service.infrastructure.store.factory import create_store
from catalog_service.api.routers import auth, catalog, content, health, services, users


# Configure logging
configure_logging()
logger = get_logger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler for startup and shutdown events.

    Args:
        app: FastAPI application instance
    """
    logger.info(f"Starting {settings.SERVICE_NAME} service")
    app.state.store = create_store(settings)

    yield

    logger.info(f"Shutting down {settings.SERVICE_NAME} service")
    await app.state.store.close()


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title=f"{settings.SERVICE_NAME.capitalize()} API",
        description="Service catalog and admin content API for the travel services app",
        version=settings.VERSION,
        lifespan=lifespan,
        debug=settings.DEBUG
    )

    configure_middleware(app)
    register_routers(app)
    configure_exception_handlers(app)

    return app


def configure_middleware(app: FastAPI) -> None:
    """
    Configure middleware for the application.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request timing middleware
    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        return response

    # Correlation ID middleware
    @app.middleware("http")
    async def add_correlation_id(request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id
        return response


def register_routers(app: FastAPI) -> None:
    """
    Register API routers with the application.

    Args:
        app: FastAPI application instance
    """
    app.include_router(health.router, tags=["Health"])
    app.include_router(
        auth.router,
        prefix=f"{settings.API_PREFIX}/auth",
        tags=["Auth"]
    )
    app.include_router(
        services.router,
        prefix=f"{settings.API_PREFIX}/services",
        tags=["Services"]
    )
    app.include_router(
        content.router,
        prefix=f"{settings.API_PREFIX}/services",
        tags=["Content"]
    )
    app.include_router(
        users.router,
        prefix=f"{settings.API_PREFIX}/users",
        tags=["Users"]
    )
    app.include_router(
        catalog.router,
        prefix=f"{settings.API_PREFIX}/catalog",
        tags=["Catalog"]
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """
    Configure global exception handlers.

    Args:
        app: FastAPI application instance
    """
    @app.exception_handler(AppException)
    async def handle_app_exception(request: Request, exc: AppException):
        log = logger.warning if exc.status_code < 500 else logger.error
        log(
            f"Application exception: {exc.message}",
            extra={
                "status_code": exc.status_code,
                "details": exc.details,
                "path": request.url.path
            }
        )

        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.message,
                "details": exc.details,
                "status_code": exc.status_code
            }
        )

    @app.exception_handler(Exception)
    async def handle_unhandled_exception(request: Request, exc: Exception):
        logger.exception(
            f"Unhandled exception: {str(exc)}",
            extra={"path": request.url.path}
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "message": str(exc) if settings.DEBUG else "An unexpected error occurred",
                "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR
            }
        )


# Create application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "catalog_service.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
