"""
Create and partial-update operations for job applications.
"""
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config.settings import Settings
from ..exceptions import ForbiddenError, NotFoundError, TransientStoreError, ValidationError
from ..models.db.job_application import JobApplication
from .. import schemas

logger = logging.getLogger(__name__)


def describe_validation_error(exc: PydanticValidationError) -> str:
    """Flatten pydantic errors into a single client-facing message."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error["loc"])
        message = error["msg"]
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


class JobMutationService:
    """Write side of the tracker. Every operation honours the read-only switch first."""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings

    def _ensure_writable(self) -> None:
        if self.settings.is_read_only():
            logger.info("Rejected write while in read-only mode")
            raise ForbiddenError("Read-only demo")

    def create_job(self, payload: Optional[Dict[str, Any]]) -> JobApplication:
        """
        Persist a new application.

        Raises:
            ForbiddenError: If the tracker is read-only
            ValidationError: If company or position is missing or any field is invalid
            TransientStoreError: If the store write fails
        """
        self._ensure_writable()
        try:
            job_in = schemas.JobApplicationCreate.model_validate(payload)
        except PydanticValidationError as e:
            message = describe_validation_error(e)
            logger.info("Rejected job creation: %s", message)
            raise ValidationError(message)

        db_job = JobApplication(**job_in.model_dump())
        self.db.add(db_job)
        self._commit(db_job, "create job")
        logger.info("Created job application %s (%s / %s)", db_job.id, db_job.company, db_job.position)
        return db_job

    def update_job(self, job_id: str, payload: Optional[Dict[str, Any]]) -> JobApplication:
        """
        Apply exactly the supplied fields to an existing application.

        Raises:
            ForbiddenError: If the tracker is read-only
            ValidationError: If the payload is empty or contains invalid values
            NotFoundError: If no application has ``job_id``
            TransientStoreError: If the store write fails
        """
        self._ensure_writable()
        if not payload:
            raise ValidationError("No data provided")
        try:
            changes = schemas.JobApplicationUpdate.model_validate(payload).model_dump(exclude_unset=True)
        except PydanticValidationError as e:
            message = describe_validation_error(e)
            logger.info("Rejected update for job application %s: %s", job_id, message)
            raise ValidationError(message)

        try:
            db_job = self.db.get(JobApplication, job_id)
        except SQLAlchemyError:
            logger.exception("Failed to load job application %s", job_id)
            raise TransientStoreError("Failed to update job")
        if db_job is None:
            raise NotFoundError("Job not found")

        for key, value in changes.items():
            setattr(db_job, key, value)
        self._commit(db_job, "update job")
        logger.info("Updated job application %s: %s", job_id, sorted(changes))
        return db_job

    def _commit(self, db_job: JobApplication, action: str) -> None:
        try:
            self.db.commit()
            self.db.refresh(db_job)
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception("Failed to %s", action)
            raise TransientStoreError(f"Failed to {action}")
