"""
In-memory job repository seeded from a JSON file.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from blinds_app.domain.models.base import ValidationError
from blinds_app.domain.models.job import Job, JobStatus
from blinds_app.domain.repositories.job_repository import JobRepository as JobRepositoryInterface
from blinds_app.domain.services.numbering_service import NumberingService
from blinds_app.infrastructure.mappers.job_mapper import JobMapper

logger = logging.getLogger(__name__)


class InMemoryJobRepository(JobRepositoryInterface):
    """
    Job repository holding records in memory.
    Records are stored in their serialized form so callers never share
    aggregate instances.
    """

    def __init__(self, records: Optional[List[Dict]] = None):
        self.mapper = JobMapper()
        self.numbering_service = NumberingService()
        self._records: Dict[str, Dict] = {}

        for record in records or []:
            if not record.get("id"):
                logger.warning("Skipping job record without an id")
                continue
            self._records[record["id"]] = record

    @classmethod
    def from_file(cls, path: Path) -> "InMemoryJobRepository":
        """Create a repository seeded from a JSON list of job records."""
        path = Path(path)
        if not path.exists():
            logger.warning(f"Job fixture {path} not found, starting with no jobs")
            return cls()

        with open(path, 'r', encoding='utf-8') as f:
            records = json.load(f)

        logger.info(f"Loaded {len(records)} jobs from {path}")
        return cls(records)

    async def save(self, job: Job) -> Job:
        """Save a job entity."""
        if job.is_new:
            job.id = self.numbering_service.generate_job_id(list(self._records))

        job.validate()
        self._records[job.id] = self.mapper.domain_to_record(job)
        return job

    async def find_by_id(self, job_id: str) -> Optional[Job]:
        """Get job by ID."""
        record = self._records.get(job_id)
        if record is None:
            return None
        return self.mapper.record_to_domain(record)

    async def list_all(self, status: Optional[JobStatus] = None) -> List[Job]:
        """List jobs in id order. Records that cannot be mapped are logged and left out."""
        jobs = []
        for job_id in sorted(self._records):
            try:
                jobs.append(self.mapper.record_to_domain(self._records[job_id]))
            except ValidationError as e:
                logger.warning(f"Leaving job {job_id} out of the listing: {e.message}")
        if status is not None:
            jobs = [job for job in jobs if job.status == status]
        return jobs

    async def delete(self, job_id: str) -> bool:
        """Delete job by ID."""
        return self._records.pop(job_id, None) is not None

    async def exists(self, job_id: str) -> bool:
        return job_id in self._records
