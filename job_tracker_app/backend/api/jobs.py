from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query

from .. import schemas
from ..services.job_mutation import JobMutationService
from ..services.job_query import JobQueryService
from .dependencies import get_mutation_service, get_query_service

router = APIRouter()


@router.get("", response_model=schemas.JobPage)
def list_jobs(
    page: int = 1,
    limit: Optional[int] = None,
    search: str = "",
    sort_by: str = Query("createdAt", alias="sortBy"),
    order: str = "desc",
    service: JobQueryService = Depends(get_query_service),
):
    """
    Retrieve one page of job applications, optionally filtered and sorted.
    """
    return service.list_jobs(page=page, limit=limit, search=search, sort_by=sort_by, order=order)


@router.get("/{job_id}", response_model=schemas.JobApplication)
def read_job(job_id: str, service: JobQueryService = Depends(get_query_service)):
    """
    Retrieve a specific job application by its ID.
    """
    return service.get_job(job_id)


@router.post("", response_model=schemas.JobApplication)
def create_job(
    payload: Optional[Dict[str, Any]] = Body(None),
    service: JobMutationService = Depends(get_mutation_service),
):
    """
    Create a new job application entry.
    """
    return service.create_job(payload)


@router.patch("/{job_id}", response_model=schemas.JobApplication)
def update_job(
    job_id: str,
    payload: Optional[Dict[str, Any]] = Body(None),
    service: JobMutationService = Depends(get_mutation_service),
):
    """
    Update only the supplied fields of a job application.
    """
    return service.update_job(job_id, payload)
