"""
Database repositories for TalentMatch data access.

Implements the repository pattern over the candidate and job collections.
"""

# Base repository
from .base import BaseRepository

# Entity repositories
from .candidate_repository import CandidateRepository, get_candidate_repository
from .job_repository import JobRepository, get_job_repository

__all__ = [
    # Base
    "BaseRepository",
    # Candidate
    "CandidateRepository",
    "get_candidate_repository",
    # Job
    "JobRepository",
    "get_job_repository",
]
