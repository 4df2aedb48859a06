"""
Job repository interface.
Defines the contract for job data access operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from blinds_app.domain.models.job import Job, JobStatus


class JobRepository(ABC):
    """
    Repository interface for the Job aggregate.
    """

    @abstractmethod
    async def save(self, job: Job) -> Job:
        """
        Save a job entity.
        Jobs without an id are assigned the next job number.
        """
        pass

    @abstractmethod
    async def find_by_id(self, job_id: str) -> Optional[Job]:
        """
        Find a job by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    async def list_all(self, status: Optional[JobStatus] = None) -> List[Job]:
        """
        List jobs in id order, optionally filtered by status.
        """
        pass

    @abstractmethod
    async def delete(self, job_id: str) -> bool:
        """
        Delete a job.
        Returns True if a job was removed.
        """
        pass

    @abstractmethod
    async def exists(self, job_id: str) -> bool:
        pass
