"""
Job use cases for the application layer.
Implements job lookup, line item maintenance and cost configuration.
"""

import logging
from typing import List, Optional

from blinds_app.application.dto.job_dto import (
    BlindRequestDTO,
    TaskRequestDTO,
    UpdateCostSummaryRequestDTO,
)
from blinds_app.domain.models.base import EntityNotFoundError
from blinds_app.domain.models.job import Job, JobStatus, BlindCategory, BlindLineItem, Task
from blinds_app.domain.repositories.job_repository import JobRepository
from blinds_app.domain.services.cost_engine import CostEngine, CostBreakdown

logger = logging.getLogger(__name__)


class JobUseCase:
    """Shared lookup for use cases that operate on one job."""

    def __init__(self, job_repository: JobRepository):
        self.job_repository = job_repository

    async def _get_job(self, job_id: str) -> Job:
        job = await self.job_repository.find_by_id(job_id)
        if not job:
            raise EntityNotFoundError("Job", job_id)
        return job


class ListJobsUseCase(JobUseCase):
    """Use case for listing jobs."""

    async def execute(self, status: Optional[JobStatus] = None) -> List[Job]:
        return await self.job_repository.list_all(status)


class GetJobUseCase(JobUseCase):
    """Use case for getting a job by id."""

    async def execute(self, job_id: str) -> Job:
        return await self._get_job(job_id)


class GetCostBreakdownUseCase(JobUseCase):
    """Use case for pricing a job."""

    def __init__(self, job_repository: JobRepository, cost_engine: Optional[CostEngine] = None):
        super().__init__(job_repository)
        self.cost_engine = cost_engine or CostEngine()

    async def execute(self, job_id: str) -> CostBreakdown:
        job = await self._get_job(job_id)
        return self.cost_engine.compute(job)


class UpdateCostSummaryUseCase(JobUseCase):
    """
    Use case for replacing a job's cost configuration.
    The cached totals are recomputed before the job is saved.
    """

    async def execute(self, job_id: str, request: UpdateCostSummaryRequestDTO) -> CostBreakdown:
        job = await self._get_job(job_id)

        job.update_cost_configuration(
            carriage=request.carriage,
            fast_track=request.fast_track,
            vat_rate=request.vat_rate,
            profit_rate=request.profit_rate,
            additional_costs=[cost.model_dump() for cost in request.additional_costs],
            quote_date=request.quote_date,
            invoice_date=request.invoice_date,
            receipt_date=request.receipt_date
        )
        breakdown = job.recalculate_costs()

        await self.job_repository.save(job)
        logger.info(f"Updated cost configuration for job {job_id}: total {breakdown.grand_total:.2f}")

        return breakdown


class AddBlindUseCase(JobUseCase):
    """Use case for adding a blind to a job."""

    async def execute(self, job_id: str, category: BlindCategory, request: BlindRequestDTO) -> BlindLineItem:
        job = await self._get_job(job_id)
        blind = job.add_blind(category, **request.model_dump())
        await self.job_repository.save(job)
        return blind


class UpdateBlindUseCase(JobUseCase):
    """Use case for replacing a blind's details."""

    async def execute(
        self,
        job_id: str,
        category: BlindCategory,
        blind_id: str,
        request: BlindRequestDTO
    ) -> BlindLineItem:
        job = await self._get_job(job_id)
        blind = job.update_blind(category, blind_id, **request.model_dump())
        await self.job_repository.save(job)
        return blind


class DuplicateBlindUseCase(JobUseCase):
    """Use case for copying a blind under a new id."""

    async def execute(self, job_id: str, category: BlindCategory, blind_id: str) -> BlindLineItem:
        job = await self._get_job(job_id)
        blind = job.duplicate_blind(category, blind_id)
        await self.job_repository.save(job)
        return blind


class RemoveBlindUseCase(JobUseCase):
    """Use case for removing a blind."""

    async def execute(self, job_id: str, category: BlindCategory, blind_id: str) -> None:
        job = await self._get_job(job_id)
        job.remove_blind(category, blind_id)
        await self.job_repository.save(job)


class AddTaskUseCase(JobUseCase):
    """Use case for adding a task to a job."""

    async def execute(self, job_id: str, request: TaskRequestDTO) -> Task:
        job = await self._get_job(job_id)
        task = job.add_task(**request.model_dump())
        await self.job_repository.save(job)
        return task


class UpdateTaskUseCase(JobUseCase):
    """Use case for replacing a task's details."""

    async def execute(self, job_id: str, task_id: str, request: TaskRequestDTO) -> Task:
        job = await self._get_job(job_id)
        task = job.update_task(task_id, **request.model_dump())
        await self.job_repository.save(job)
        return task


class RemoveTaskUseCase(JobUseCase):
    """Use case for removing a task."""

    async def execute(self, job_id: str, task_id: str) -> None:
        job = await self._get_job(job_id)
        job.remove_task(task_id)
        await self.job_repository.save(job)
