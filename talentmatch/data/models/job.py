"""
Job posting data models for TalentMatch.

Job postings are owned by the platform's job store; the fields here are
the ones match scoring reads, plus the cached job embedding.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from .base import BaseDocument
from .match import JobInput


class JobStatus(str, Enum):
    """Status of a job posting."""

    DRAFT = "draft"
    OPEN = "open"
    PAUSED = "paused"
    CLOSED = "closed"
    FILLED = "filled"


class JobPosting(BaseDocument):
    """Job document stored in the ``jobs`` collection."""

    title: str
    description: str = ""
    company_id: Optional[str] = None
    company_name: Optional[str] = None
    department: Optional[str] = None
    location: Optional[str] = None
    status: JobStatus = JobStatus.OPEN

    # Cached embedding
    job_embedding: Optional[list[float]] = None
    embedding_model: Optional[str] = None
    embedding_updated_at: Optional[datetime] = None

    @property
    def has_embedding(self) -> bool:
        return bool(self.job_embedding)

    @property
    def is_open(self) -> bool:
        return self.status == JobStatus.OPEN

    def to_match_input(self) -> JobInput:
        """Build the ephemeral scoring input for this posting."""
        return JobInput(
            job_id=self.str_id or None,
            title=self.title,
            description_text=self.description,
            location=self.location,
        )
