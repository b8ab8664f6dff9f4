"""
Paginated, searchable, sortable listing of job applications.
"""
import logging
import math
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..config.settings import Settings
from ..exceptions import NotFoundError, TransientStoreError, ValidationError
from ..models.db.job_application import JobApplication
from .. import schemas

logger = logging.getLogger(__name__)

# Wire name -> model attribute. Anything outside this map sorts by createdAt.
SORTABLE_FIELDS = {
    "company": "company",
    "position": "position",
    "positionType": "position_type",
    "location": "location",
    "dateApplied": "date_applied",
    "createdAt": "created_at",
    "status": "status",
}
DEFAULT_SORT_FIELD = "createdAt"
DEFAULT_ORDER = "desc"

# Text columns whose ordering must ignore case.
CASE_INSENSITIVE_FIELDS = ("company", "position", "location")

# Largest OFFSET a 64-bit signed integer column binding accepts.
MAX_OFFSET = 2 ** 63 - 1


def resolve_sort_field(sort_by: Optional[str]) -> str:
    return sort_by if sort_by in SORTABLE_FIELDS else DEFAULT_SORT_FIELD


def resolve_order(order: Optional[str]) -> str:
    return "asc" if order == "asc" else DEFAULT_ORDER


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def sort_page_case_insensitive(jobs: List[JobApplication], attribute: str, order: str) -> List[JobApplication]:
    """
    Re-sort one fetched page by the lower-cased value of ``attribute``.

    Missing values sort as the empty string. The sort is stable, so rows the
    store already ordered case-insensitively keep their relative order.
    """
    return sorted(
        jobs,
        key=lambda job: (getattr(job, attribute) or "").lower(),
        reverse=(order == "desc"),
    )


class JobQueryService:
    """Read side of the tracker. Never mutates the store."""

    def __init__(self, db: Session, settings: Settings):
        self.db = db
        self.settings = settings

    def list_jobs(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        order: Optional[str] = None,
    ) -> schemas.JobPage:
        """
        Return one page of applications plus the filtered total.

        Args:
            page: 1-based page number, defaults to 1
            limit: Page size, defaults to the configured page size
            search: Case-insensitive substring matched against company or position
            sort_by: One of SORTABLE_FIELDS; anything else falls back to createdAt
            order: "asc" or "desc"; anything else falls back to "desc"

        Raises:
            ValidationError: If page or limit is below 1, limit exceeds the
                configured maximum, or the page offset is out of range
            TransientStoreError: If the store query fails
        """
        page = 1 if page is None else page
        limit = self.settings.default_page_size if limit is None else limit
        if page < 1 or limit < 1:
            raise ValidationError("Invalid pagination params")
        if limit > self.settings.max_page_size:
            raise ValidationError(f"limit must not exceed {self.settings.max_page_size}")
        if (page - 1) * limit > MAX_OFFSET:
            raise ValidationError("page is out of range")

        sort_field = resolve_sort_field(sort_by)
        order = resolve_order(order)
        attribute = SORTABLE_FIELDS[sort_field]
        search = (search or "").strip()

        query = self.db.query(JobApplication)
        if search:
            pattern = f"%{_escape_like(search)}%"
            query = query.filter(
                or_(
                    JobApplication.company.ilike(pattern, escape="\\"),
                    JobApplication.position.ilike(pattern, escape="\\"),
                )
            )

        column = getattr(JobApplication, attribute)
        if sort_field in CASE_INSENSITIVE_FIELDS:
            column = func.lower(func.coalesce(column, ""))
        direction = column.asc() if order == "asc" else column.desc()
        tiebreak = JobApplication.id.asc() if order == "asc" else JobApplication.id.desc()

        try:
            total = query.count()
            jobs = (
                query.order_by(direction, tiebreak)
                .offset((page - 1) * limit)
                .limit(limit)
                .all()
            )
        except SQLAlchemyError:
            logger.exception("Failed to list job applications")
            raise TransientStoreError("Failed to fetch jobs")

        if sort_field in CASE_INSENSITIVE_FIELDS:
            jobs = sort_page_case_insensitive(jobs, attribute, order)

        logger.debug(
            "Listed %d of %d job applications (page=%d, limit=%d, search=%r, sortBy=%s, order=%s)",
            len(jobs), total, page, limit, search, sort_field, order,
        )
        return schemas.JobPage(
            data=[schemas.JobApplication.model_validate(job) for job in jobs],
            total=total,
            page=page,
            total_pages=math.ceil(total / limit),
        )

    def get_job(self, job_id: str) -> JobApplication:
        try:
            job = self.db.get(JobApplication, job_id)
        except SQLAlchemyError:
            logger.exception("Failed to load job application %s", job_id)
            raise TransientStoreError("Failed to fetch job")
        if job is None:
            raise NotFoundError("Job not found")
        return job
