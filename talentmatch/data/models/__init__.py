"""
Pydantic data models for TalentMatch.

Includes:
- Base: Document and embedded model foundations
- Candidate: Stored candidate profiles with cached embeddings
- Job: Stored job postings with cached embeddings
- Match: Scoring inputs and the MatchResult structure
"""

from .base import BaseDocument, EmbeddedModel, PyObjectId, TimestampMixin
from .candidate import CandidateProfile
from .job import JobPosting, JobStatus
from .match import (
    CandidateInput,
    ExperienceMatch,
    JobInput,
    MatchResult,
    SemanticMatch,
    SkillsMatch,
)

__all__ = [
    # Base
    "BaseDocument",
    "EmbeddedModel",
    "PyObjectId",
    "TimestampMixin",
    # Candidate
    "CandidateProfile",
    # Job
    "JobPosting",
    "JobStatus",
    # Match
    "CandidateInput",
    "ExperienceMatch",
    "JobInput",
    "MatchResult",
    "SemanticMatch",
    "SkillsMatch",
]
