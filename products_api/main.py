from typing import Sequence
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import uvicorn

from products_api import __version__
from products_api.core.config import Settings, settings
from products_api.core.database import create_db_and_tables, close_db
from products_api.core.exceptions import InvalidProductError, ProductAPIError
from products_api.core.logging import setup_logging
from products_api.core.routing import RouteSpec, build_router
from products_api.controllers.product_controller import PRODUCT_ROUTES
from products_api.middleware.logging_middleware import LoggingMiddleware

logger = setup_logging()

OPENAPI_TAGS = [
    {"name": "Products", "description": "The products managing API"},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup", environment=settings.environment)
    try:
        await create_db_and_tables()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Application shutdown")
    try:
        await close_db()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error("Error during shutdown", error=str(e))


async def root():
    return {
        "message": "Products API is running",
        "version": __version__,
        "environment": settings.environment,
        "docs_url": "/docs" if settings.serve_docs else "Documentation disabled in production"
    }


async def health_check():
    return {
        "status": "healthy",
        "environment": settings.environment,
    }


def _error_body(status_code: int, message: str, **extra) -> dict:
    body = {
        "message": message,
        "success": False,
        "status_code": status_code
    }
    body.update(extra)
    return body


async def product_api_exception_handler(request: Request, exc: ProductAPIError):
    extra = {}
    if isinstance(exc, InvalidProductError):
        extra["errors"] = exc.errors

    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Product API error",
        status_code=exc.status_code,
        error=str(exc),
        path=request.url.path,
        method=request.method
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, exc.message, **extra)
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    logger.warning(
        "Request validation failed",
        errors=errors,
        path=request.url.path,
        method=request.method
    )
    return JSONResponse(
        status_code=400,
        content=_error_body(400, "Invalid input", errors=errors)
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(
        "HTTP Exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
        method=request.method
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, exc.detail),
        headers=getattr(exc, "headers", None)
    )


async def general_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled Exception",
        error=str(exc),
        path=request.url.path,
        method=request.method
    )
    return JSONResponse(
        status_code=500,
        content=_error_body(500, "Internal server error")
    )


def create_app(routes: Sequence[RouteSpec] = PRODUCT_ROUTES, app_settings: Settings = settings) -> FastAPI:
    """Build the application from an explicit route table."""
    app = FastAPI(
        title="Products API",
        description="CRUD API for the products resource",
        version=__version__,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
        docs_url="/docs" if app_settings.serve_docs else None,
        redoc_url="/redoc" if app_settings.serve_docs else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.get_cors_origins_list(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    app.include_router(build_router(routes))
    app.add_api_route("/", root, methods=["GET"], include_in_schema=False)
    app.add_api_route("/health", health_check, methods=["GET"], include_in_schema=False)

    app.add_exception_handler(ProductAPIError, product_api_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    def product_openapi():
        if app.openapi_schema:
            return app.openapi_schema
        schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
            tags=app.openapi_tags,
        )
        # Request validation failures answer 400, never 422
        for operations in schema.get("paths", {}).values():
            for operation in operations.values():
                operation.get("responses", {}).pop("422", None)
        component_schemas = schema.get("components", {}).get("schemas", {})
        component_schemas.pop("HTTPValidationError", None)
        component_schemas.pop("ValidationError", None)
        app.openapi_schema = schema
        return schema

    app.openapi = product_openapi

    return app


app = create_app()


def run():
    uvicorn.run(
        "products_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "local",
        log_config=None
    )


if __name__ == "__main__":
    run()
