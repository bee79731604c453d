import logging
import traceback
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.v1 import api_router
from app.core.config import settings
from app.core.exceptions import StaffingError
from app.core.logging_config import RequestLoggingMiddleware, setup_logging
from app.core.version import APP_VERSION, get_full_version
from app.db.session import check_db_connection, engine
from app.schemas.common import ErrorResponse, HealthResponse

# Configure structured logging (JSON in production, colored in development)
setup_logging()
logger = logging.getLogger("staffing")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Application starting up (environment={settings.ENVIRONMENT}, timezone={settings.TIMEZONE})")
    try:
        yield
    finally:
        logger.info("Closing database connections...")
        await engine.dispose()
        logger.info("Application shut down")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Employee staffing, allocation and PO amendment tracking API",
    version=APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)


@app.exception_handler(StaffingError)
async def staffing_error_handler(request: Request, exc: StaffingError) -> JSONResponse:
    """Translate domain errors into their HTTP status with the standard error body."""
    logger.info(f"{exc.__class__.__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(
            error=exc.__class__.__name__,
            detail=exc.message,
            field=exc.field,
            timestamp=datetime.now(timezone.utc).isoformat(),
            path=request.url.path,
        ).model_dump(),
    )


# Global exception handler - catches all unhandled exceptions
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler that returns consistent error responses.
    In production, internal details are replaced by a reference ID.
    """
    error_id = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S%f")

    logger.error(
        f"Unhandled exception [{error_id}]: {exc}\n"
        f"Path: {request.url.path}\n"
        f"Method: {request.method}\n"
        f"Traceback: {traceback.format_exc()}"
    )

    if settings.ENVIRONMENT.lower() == "production":
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="Internal server error",
                detail=f"An unexpected error occurred. Reference ID: {error_id}",
                timestamp=datetime.now(timezone.utc).isoformat(),
                path=request.url.path,
            ).model_dump(),
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error=exc.__class__.__name__,
            detail=str(exc),
            timestamp=datetime.now(timezone.utc).isoformat(),
            path=request.url.path,
        ).model_dump(),
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request logging middleware with timing and request IDs
app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint. Returns 503 when the database is unreachable.
    """
    db_healthy = await check_db_connection()
    checks = {"database": db_healthy}

    response = HealthResponse(
        status="healthy" if db_healthy else "unhealthy",
        service="staffing-backend",
        version=get_full_version(),
        environment=settings.ENVIRONMENT,
        checks=checks,
    )

    if not db_healthy:
        logger.warning(f"Health check failed: {checks}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(),
        )
    return response


@app.get("/")
async def root():
    return {"message": f"Welcome to the {settings.PROJECT_NAME} API"}
