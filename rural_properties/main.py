"""
FastAPI application entry point.
Main application setup and configuration.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError as PydanticValidationError
import logging

from rural_properties.config import settings, validate_startup_configuration
from rural_properties.database import check_database_connection, create_tables, close_db_connection
from rural_properties.routers import (
    access_router,
    admin_router,
    agents_router,
    auth_router,
    inquiries_router,
    properties_router,
    reviews_router,
    saved_searches_router,
    site_router,
    users_router,
)
from rural_properties.utils.exceptions import APIException
from rural_properties.services.error_handler import ErrorHandlerService
from rural_properties.middleware import RequestLoggingMiddleware

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


API_TAGS = (
    ("Authentication", "Sign-up, sign-in and token management"),
    ("Properties", "Listing management and catalog queries"),
    ("Users", "Profile, preferences and saved listings of the signed-in user"),
    ("Agents", "Agent directory and agent self-service"),
    ("Inquiries", "Buyer inquiries and agent responses"),
    ("Reviews", "Agent and listing reviews with moderation"),
    ("Saved Searches", "Stored listing filters"),
    ("Access", "Route visibility decisions for the current session"),
    ("Admin", "Seeding and user administration"),
    ("Site", "Public site configuration"),
    ("Health", "System health endpoints"),
)

ROUTERS = (
    auth_router,
    properties_router,
    users_router,
    agents_router,
    inquiries_router,
    reviews_router,
    saved_searches_router,
    access_router,
    admin_router,
    site_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    # Refuse to serve with missing project or identity configuration
    validate_startup_configuration(settings)

    db_connected = await check_database_connection()
    if not db_connected:
        logger.error("Failed to connect to database on startup")
    else:
        await create_tables()

    yield

    # Shutdown
    logger.info("Shutting down application")
    await close_db_connection()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Listing backend for farms, smallholdings, plots and rural homes.

    ## Features

    * **Listings**: Browse, filter and page through rural property listings
    * **Accounts**: Email/password and federated sign-in with role-based dashboards
    * **Agents**: Agent profiles, ratings and reviews
    * **Inquiries**: Buyer inquiries with agent responses
    * **Saved Searches**: Stored filter sets with new-match counts
    * **Administration**: Seeding, clearing and role management utilities

    ## Authentication

    Use the `/api/v1/auth/signin` endpoint to obtain a JWT token,
    then include it in the Authorization header as `Bearer <token>`.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[{"name": name, "description": description} for name, description in API_TAGS],
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Processing-Time"],
)

app.add_middleware(
    RequestLoggingMiddleware,
    slow_request_threshold=settings.slow_request_threshold,
)

# Include API routers
for router in ROUTERS:
    app.include_router(router, prefix=settings.api_v1_prefix)


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Handle custom API exceptions with structured error responses."""
    return ErrorHandlerService.handle_api_exception(exc, request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors with detailed field information."""
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(PydanticValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: PydanticValidationError):
    return ErrorHandlerService.handle_validation_error(exc, request)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    return ErrorHandlerService.handle_database_error(exc, request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return ErrorHandlerService.handle_http_exception(exc, request)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with secure error responses."""
    return ErrorHandlerService.handle_unexpected_error(exc, request)


@app.get("/", tags=["Health"])
async def root():
    """
    Root endpoint providing basic API information.
    """
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.environment,
        "status": "healthy",
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json"
        },
        "api_prefix": settings.api_v1_prefix
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint with database connectivity test.
    Used by container health checks and load balancers.
    """
    db_healthy = await check_database_connection()
    if not db_healthy:
        raise HTTPException(
            status_code=503,
            detail="Database connection failed"
        )

    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "database": "connected"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "rural_properties.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
