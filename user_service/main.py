"""
User Service - Main application module.
"""
import logging
import time
from typing import Any, Dict

from fastapi import Depends, FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings
from .core.database import check_db_connection, get_db, init_db
from .core.events import event_publisher
from .routers import users

# Get settings
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI application
app = FastAPI(
    title="User Service",
    description="Layered CRUD service for users and their tasks",
    version=settings.service_version
)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Log all requests with timing"""
    start_time = time.time()

    response = await call_next(request)
    process_time = time.time() - start_time

    response.headers["X-Process-Time"] = str(process_time)

    # Skip logging for health checks to reduce noise
    if request.url.path != "/health":
        client = request.client.host if request.client else "unknown"
        logger.info(
            f"{request.method} {request.url.path} - {response.status_code} "
            f"({process_time:.3f}s) - Client: {client}"
        )

    return response


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors as {"message": ...}"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None)
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    """Map store constraint violations to 409"""
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    # Unique violations name the column (sqlite) or index ix_users_email (postgres, mysql)
    if "email" in str(exc.orig).lower():
        message = "Email already in use"
    else:
        message = "Request conflicts with existing data"
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"message": message}
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions"""
    logger.exception(f"Unhandled exception: {exc}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": str(exc) if settings.debug else "Internal server error"}
    )


app.include_router(users.router, tags=["users"])


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup"""
    logger.info("Starting User Service...")
    init_db()
    if settings.events_enabled and not event_publisher.connect():
        logger.warning("RabbitMQ connection failed - events will not be published")
    logger.info("User Service startup completed")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info("Shutting down User Service...")
    event_publisher.close()
    logger.info("User Service shutdown completed")


@app.get("/", tags=["service"])
async def root() -> Dict[str, Any]:
    """Root endpoint"""
    return {
        "service": settings.service_name,
        "version": settings.service_version,
        "status": "running",
        "message": "User Service is operational"
    }


@app.get("/health", tags=["service"])
def health_check(db: Session = Depends(get_db)) -> Dict[str, Any]:
    """Health check endpoint"""
    db_healthy = check_db_connection(db)

    return {
        "service": settings.service_name,
        "version": settings.service_version,
        "status": "healthy" if db_healthy else "unhealthy",
        "database": "connected" if db_healthy else "disconnected",
        "timestamp": time.time()
    }


def main():
    import uvicorn
    uvicorn.run(
        "user_service.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
