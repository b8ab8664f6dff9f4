from dotenv import load_dotenv

load_dotenv()

from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import health, jobs
from .config.settings import Settings, get_settings
from .exceptions import JobTrackerError
from .models.db import job_application as job_application_model  # noqa: F401  registers the table
from .models.db.database import Base, create_db_engine, create_session_factory
from .security.access_gate import AccessGate, AccessGateMiddleware
from .utils.logging_config import setup_logging, get_logger

logger = get_logger(__name__)


async def job_tracker_error_handler(request: Request, exc: JobTrackerError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(
        f"{'.'.join(str(item) for item in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    logger.info("Rejected malformed request to %s: %s", request.url.path, errors)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": errors})


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the tracker application around an explicit configuration object.

    Args:
        settings: Configuration to use; defaults to the cached environment settings

    Raises:
        RuntimeError: If the configuration is invalid in production
    """
    settings = settings or get_settings()

    setup_logging(level=settings.log_level, log_file=settings.log_file, echo_sql=settings.database_echo)

    missing_settings = settings.validate_required_settings()
    if missing_settings:
        for setting in missing_settings:
            logger.error("Configuration error: %s", setting)
        if settings.is_production():
            raise RuntimeError("Invalid configuration for production environment")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url="/docs" if settings.api_docs_enabled else None,
        redoc_url="/redoc" if settings.api_docs_enabled else None,
    )

    engine = create_db_engine(settings.get_database_url())
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables initialized successfully")

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    # Added first so CORS, added last, wraps it and can answer preflights.
    app.add_middleware(AccessGateMiddleware, gate=AccessGate(settings))
    if settings.cors_enabled:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(JobTrackerError, job_tracker_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    # Routers
    app.include_router(health.router, prefix="/api", tags=["Health Check"])
    app.include_router(jobs.router, prefix="/api/jobs", tags=["Job Applications"])

    logger.info(
        "Job Application Tracker ready (demo_mode=%s, read_only=%s)",
        settings.demo_mode, settings.is_read_only(),
    )
    return app


app = create_app()


def serve() -> None:
    """Run the tracker with uvicorn using host/port from the environment."""
    import os

    import uvicorn

    uvicorn.run(
        "job_tracker_app.backend.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=get_settings().is_development() and get_settings().debug,
    )
