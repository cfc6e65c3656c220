"""
Match scoring data models for TalentMatch.

Defines the ephemeral scoring inputs and the MatchResult returned by the
matching engine. Results are created per scoring call and never persisted
by the engine itself.
"""

from typing import Optional

from pydantic import Field, field_validator

from talentmatch.utils.constants import MatchAssessment

from .base import EmbeddedModel


class CandidateInput(EmbeddedModel):
    """Candidate fields consumed by the matching engine."""

    candidate_id: Optional[str] = None
    skills: list[str] = Field(default_factory=list)
    current_title: str = ""
    summary_text: str = ""
    location: Optional[str] = None

    @field_validator("skills")
    @classmethod
    def drop_blank_skills(cls, v: list[str]) -> list[str]:
        """Strip whitespace and drop empty skill names."""
        return [s.strip() for s in v if s and s.strip()]

    def embedding_text(self) -> str:
        """Text embedded for semantic matching: title, summary, and skills."""
        parts = [self.current_title, self.summary_text, " ".join(self.skills)]
        return " ".join(p.strip() for p in parts if p and p.strip())


class JobInput(EmbeddedModel):
    """Job fields consumed by the matching engine."""

    job_id: Optional[str] = None
    title: str
    description_text: str = ""
    location: Optional[str] = None

    def embedding_text(self) -> str:
        """Text embedded for semantic matching: title and description."""
        parts = [self.title, self.description_text]
        return " ".join(p.strip() for p in parts if p and p.strip())

    def skills_source(self) -> str:
        """Text searched for required skills; the title when no description."""
        return self.description_text or self.title


class SkillsMatch(EmbeddedModel):
    """Overlap between candidate skills and skills the job asks for."""

    matching_skills: list[str] = Field(default_factory=list)
    candidate_skills: list[str] = Field(default_factory=list)
    job_required_skills: list[str] = Field(default_factory=list)
    score: int = Field(0, ge=0, le=100)


class ExperienceMatch(EmbeddedModel):
    """Role and seniority fit with the reason shown to recruiters."""

    score: int = Field(0, ge=0, le=100)
    reason: str = ""


class SemanticMatch(EmbeddedModel):
    """Embedding similarity expressed as a score with a confidence label."""

    score: int = Field(0, ge=0, le=100)
    confidence: str = "low"  # high, medium, low


class MatchResult(EmbeddedModel):
    """
    Complete result of scoring one candidate against one job.

    Serialize with ``model_dump(by_alias=True)`` for camelCase JSON.
    """

    candidate_id: Optional[str] = None
    job_id: Optional[str] = None

    match_score: int = Field(0, ge=0, le=100)
    semantic_score: int = Field(0, ge=0, le=100)

    skills_match: SkillsMatch = Field(default_factory=SkillsMatch)
    experience_match: ExperienceMatch = Field(default_factory=ExperienceMatch)
    semantic_match: SemanticMatch = Field(default_factory=SemanticMatch)

    match_reasons: list[str] = Field(default_factory=list)
    overall_assessment: str = ""
    assessment_level: MatchAssessment = MatchAssessment.LIMITED

    @property
    def matched_skills(self) -> list[str]:
        return self.skills_match.matching_skills
