"""
Job management router.
Handles job lookup, line items and cost configuration.
"""

from typing import Annotated, List, Optional
from fastapi import APIRouter, Depends, Query, status

from blinds_app.application.dto.job_dto import (
    BlindRequestDTO,
    BlindResponseDTO,
    TaskRequestDTO,
    TaskResponseDTO,
    UpdateCostSummaryRequestDTO,
    CostBreakdownResponseDTO,
    JobSummaryResponseDTO,
    JobResponseDTO,
)
from blinds_app.application.use_cases.job_use_cases import (
    ListJobsUseCase,
    GetJobUseCase,
    GetCostBreakdownUseCase,
    UpdateCostSummaryUseCase,
    AddBlindUseCase,
    UpdateBlindUseCase,
    DuplicateBlindUseCase,
    RemoveBlindUseCase,
    AddTaskUseCase,
    UpdateTaskUseCase,
    RemoveTaskUseCase,
)
from blinds_app.domain.models.job import BlindCategory, JobStatus
from blinds_app.domain.repositories.job_repository import JobRepository
from blinds_app.infrastructure.web.dependencies import get_job_repository


router = APIRouter()

Repository = Annotated[JobRepository, Depends(get_job_repository)]


@router.get("", response_model=List[JobSummaryResponseDTO])
async def list_jobs(
    repository: Repository,
    job_status: Optional[JobStatus] = Query(None, alias="status", description="Filter by job status")
):
    """
    List jobs.

    - **status**: Filter by status (active, completed, cancelled)
    """
    jobs = await ListJobsUseCase(repository).execute(job_status)
    return [JobSummaryResponseDTO.model_validate(job.to_dict()) for job in jobs]


@router.get("/{job_id}", response_model=JobResponseDTO)
async def get_job(job_id: str, repository: Repository):
    """Get a job with its line items."""
    job = await GetJobUseCase(repository).execute(job_id)
    return JobResponseDTO.model_validate(job.to_dict())


@router.get("/{job_id}/costs", response_model=CostBreakdownResponseDTO)
async def get_cost_breakdown(job_id: str, repository: Repository):
    """
    Get the full cost breakdown of a job.
    """
    breakdown = await GetCostBreakdownUseCase(repository).execute(job_id)
    return CostBreakdownResponseDTO(job_id=job_id, **breakdown.to_dict())


@router.put("/{job_id}/costs", response_model=CostBreakdownResponseDTO)
async def update_cost_summary(
    job_id: str,
    request: UpdateCostSummaryRequestDTO,
    repository: Repository
):
    """
    Replace the cost configuration of a job and return the new breakdown.

    - **carriage**, **fast_track**: Flat fees (>= 0)
    - **vat_rate**, **profit_rate**: Percentages (0-100)
    - **additional_costs**: Extra flat charges, each with a description and amount
    """
    breakdown = await UpdateCostSummaryUseCase(repository).execute(job_id, request)
    return CostBreakdownResponseDTO(job_id=job_id, **breakdown.to_dict())


# Blinds

@router.post(
    "/{job_id}/blinds/{category}",
    status_code=status.HTTP_201_CREATED,
    response_model=BlindResponseDTO
)
async def add_blind(job_id: str, category: BlindCategory, request: BlindRequestDTO, repository: Repository):
    blind = await AddBlindUseCase(repository).execute(job_id, category, request)
    return BlindResponseDTO.model_validate(blind.to_dict())


@router.put("/{job_id}/blinds/{category}/{blind_id}", response_model=BlindResponseDTO)
async def update_blind(
    job_id: str,
    category: BlindCategory,
    blind_id: str,
    request: BlindRequestDTO,
    repository: Repository
):
    blind = await UpdateBlindUseCase(repository).execute(job_id, category, blind_id, request)
    return BlindResponseDTO.model_validate(blind.to_dict())


@router.post(
    "/{job_id}/blinds/{category}/{blind_id}/duplicate",
    status_code=status.HTTP_201_CREATED,
    response_model=BlindResponseDTO
)
async def duplicate_blind(job_id: str, category: BlindCategory, blind_id: str, repository: Repository):
    """Copy a blind to a new line item with the next free id."""
    blind = await DuplicateBlindUseCase(repository).execute(job_id, category, blind_id)
    return BlindResponseDTO.model_validate(blind.to_dict())


@router.delete("/{job_id}/blinds/{category}/{blind_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_blind(job_id: str, category: BlindCategory, blind_id: str, repository: Repository):
    await RemoveBlindUseCase(repository).execute(job_id, category, blind_id)


# Tasks

@router.post("/{job_id}/tasks", status_code=status.HTTP_201_CREATED, response_model=TaskResponseDTO)
async def add_task(job_id: str, request: TaskRequestDTO, repository: Repository):
    task = await AddTaskUseCase(repository).execute(job_id, request)
    return TaskResponseDTO.model_validate(task.to_dict())


@router.put("/{job_id}/tasks/{task_id}", response_model=TaskResponseDTO)
async def update_task(job_id: str, task_id: str, request: TaskRequestDTO, repository: Repository):
    task = await UpdateTaskUseCase(repository).execute(job_id, task_id, request)
    return TaskResponseDTO.model_validate(task.to_dict())


@router.delete("/{job_id}/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_task(job_id: str, task_id: str, repository: Repository):
    await RemoveTaskUseCase(repository).execute(job_id, task_id)
