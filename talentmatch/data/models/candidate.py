"""
Candidate profile data models for TalentMatch.

Candidate profiles are owned by the platform's profile store; the fields
here are the ones match scoring reads, plus the cached resume embedding.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from .base import BaseDocument
from .match import CandidateInput


class CandidateProfile(BaseDocument):
    """
    Candidate document stored in the ``candidates`` collection.

    ``resume_embedding`` caches the vector of the profile text so repeated
    scoring calls skip the embedding model.
    """

    full_name: str = ""
    email: Optional[str] = None
    current_title: str = ""
    summary: str = ""
    skills: list[str] = Field(default_factory=list)
    location: Optional[str] = None
    availability: Optional[str] = None

    # Cached embedding
    resume_embedding: Optional[list[float]] = None
    embedding_model: Optional[str] = None
    embedding_updated_at: Optional[datetime] = None

    @field_validator("skills")
    @classmethod
    def strip_skills(cls, v: list[str]) -> list[str]:
        """Strip skill names, keeping their display casing."""
        return [s.strip() for s in v if s and s.strip()]

    @property
    def has_embedding(self) -> bool:
        return bool(self.resume_embedding)

    def to_match_input(self) -> CandidateInput:
        """Build the ephemeral scoring input for this profile."""
        return CandidateInput(
            candidate_id=self.str_id or None,
            skills=list(self.skills),
            current_title=self.current_title,
            summary_text=self.summary,
            location=self.location,
        )
