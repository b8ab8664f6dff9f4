"""
Health check and system status API endpoints.
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config.settings import Settings
from ..models.db.database import get_db
from .dependencies import get_app_settings

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/health", summary="Health Check")
def health_check(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> Dict[str, Any]:
    """
    Basic health check endpoint.
    Returns system status, access mode and database reachability.
    """
    try:
        db.execute(text("SELECT 1"))
        database_ok = True
    except SQLAlchemyError:
        logger.exception("Database health probe failed")
        database_ok = False

    health_status = {
        "status": "healthy" if database_ok else "degraded",
        "app_info": {
            "name": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
        },
        "access": {
            "demo_mode": settings.demo_mode,
            "read_only": settings.is_read_only(),
        },
        "database_reachable": database_ok,
    }

    # The endpoint is reachable without credentials, so issues are only logged.
    config_issues = settings.validate_required_settings()
    if config_issues:
        logger.warning("Configuration issues found: %s", config_issues)

    return health_status
