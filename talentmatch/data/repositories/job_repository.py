"""
Job repository for TalentMatch.

Provides read access to job postings and maintenance of their cached
job embeddings.
"""

from datetime import datetime
from typing import Iterator, Optional

from bson import ObjectId

from talentmatch.data.database import JOBS_COLLECTION
from talentmatch.data.models.job import JobPosting, JobStatus
from talentmatch.utils.logger import get_logger

from .base import BaseRepository

logger = get_logger(__name__)


class JobRepository(BaseRepository[JobPosting]):
    """Repository for job posting documents."""

    @property
    def collection_name(self) -> str:
        return JOBS_COLLECTION

    @property
    def model_class(self) -> type[JobPosting]:
        return JobPosting

    @property
    def entity_name(self) -> str:
        return "job"

    def iter_open_jobs(self, batch_size: int = 100) -> Iterator[JobPosting]:
        """Iterate over open postings, newest first."""
        cursor = (
            self._get_sync_collection()
            .find({"status": JobStatus.OPEN.value})
            .sort("created_at", -1)
            .batch_size(batch_size)
        )
        for document in cursor:
            yield self._to_model(document)

    def find_by_company(self, company_id: str, limit: int = 100) -> list[JobPosting]:
        """Find postings belonging to a company."""
        return self.find({"company_id": company_id}, limit=limit)

    def save_embedding(
        self,
        job_id: str | ObjectId,
        embedding: list[float],
        model_name: Optional[str] = None,
    ) -> bool:
        """Cache a job embedding on the posting."""
        updated = self.update(
            job_id,
            {
                "job_embedding": [float(v) for v in embedding],
                "embedding_model": model_name,
                "embedding_updated_at": datetime.utcnow(),
            },
        )
        logger.debug(f"Cached job embedding for job {job_id} (dim={len(embedding)})")
        return updated


# Singleton instance
_job_repository: Optional[JobRepository] = None


def get_job_repository() -> JobRepository:
    """Get the job repository singleton instance."""
    global _job_repository
    if _job_repository is None:
        _job_repository = JobRepository()
    return _job_repository
