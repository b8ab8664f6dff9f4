from fastapi import Depends, Request
from sqlalchemy.orm import Session

from ..config.settings import Settings
from ..models.db.database import get_db
from ..services.job_mutation import JobMutationService
from ..services.job_query import JobQueryService


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with."""
    return request.app.state.settings


def get_query_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> JobQueryService:
    return JobQueryService(db, settings)


def get_mutation_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> JobMutationService:
    return JobMutationService(db, settings)
