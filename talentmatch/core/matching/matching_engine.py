"""
Candidate-Job matching engine.

Combines three signals into one 0-100 match score:
- semantic similarity of candidate and job embeddings (weight 0.5)
- overlap of candidate skills with skills named in the job (weight 0.3)
- role title and seniority fit (weight 0.2)

The engine holds no mutable state between calls; identical inputs and
embeddings always produce an identical MatchResult.
"""

import asyncio
from typing import Optional, Sequence

import numpy as np

from talentmatch.data.models import (
    CandidateInput,
    ExperienceMatch,
    JobInput,
    MatchResult,
    SemanticMatch,
    SkillsMatch,
)
from talentmatch.ml.embeddings import (
    EmbeddingProvider,
    get_embedding_provider,
    semantic_confidence,
    semantic_score,
)
from talentmatch.utils.constants import (
    DEFAULT_MATCH_WEIGHTS,
    EXPERIENCE_REASON_THRESHOLD,
    OVERALL_FIT_LABELS,
    SEMANTIC_CONFIDENCE_THRESHOLDS,
    AuditAction,
    MatchAssessment,
)
from talentmatch.utils.config import get_settings
from talentmatch.utils.logger import audit_log, get_logger
from talentmatch.utils.scoring import clamp_score

from .heuristics import (
    experience_match,
    extract_skills,
    location_matches,
    skills_match,
    skills_overlap,
)

logger = get_logger(__name__)

Vector = Sequence[float] | np.ndarray


class MatchingEngine:
    """
    Engine for scoring a candidate against a job.

    Missing embeddings are generated through the embedding provider. A
    provider failure propagates as EmbeddingUnavailable; no score is ever
    built from partial data.
    """

    def __init__(
        self,
        embedding_provider: Optional[EmbeddingProvider] = None,
        weights: Optional[dict[str, float]] = None,
    ):
        """
        Initialize the matching engine.

        Args:
            embedding_provider: Backend used when an embedding is not supplied.
                Defaults to the configured provider, created on first use.
            weights: Optional custom weights for "semantic", "skills" and
                "experience".
        """
        self._embedding_provider = embedding_provider
        self.weights = dict(weights or DEFAULT_MATCH_WEIGHTS)

    @property
    def embedding_provider(self) -> EmbeddingProvider:
        """Get the embedding provider (lazy initialization)."""
        if self._embedding_provider is None:
            self._embedding_provider = get_embedding_provider()
        return self._embedding_provider

    # -------------------------------------------------------------------------
    # Scoring
    # -------------------------------------------------------------------------

    def score(
        self,
        candidate: CandidateInput,
        job: JobInput,
        candidate_embedding: Optional[Vector] = None,
        job_embedding: Optional[Vector] = None,
        include_reasons: bool = True,
    ) -> MatchResult:
        """
        Score a candidate against a job.

        Args:
            candidate: Candidate skills, title, summary and location.
            job: Job title, description and location.
            candidate_embedding: Pre-computed candidate vector, if cached.
            job_embedding: Pre-computed job vector, if cached.
            include_reasons: Whether to generate human-readable reasons.

        Returns:
            MatchResult with component scores, reasons and assessment.

        Raises:
            EmbeddingUnavailable: If a missing embedding cannot be generated.
            DimensionMismatch: If the two vectors differ in dimensionality.
        """
        if candidate_embedding is None:
            candidate_embedding = self.embedding_provider.embed(candidate.embedding_text())
        if job_embedding is None:
            job_embedding = self.embedding_provider.embed(job.embedding_text())

        return self.build_result(
            candidate,
            job,
            semantic_score(candidate_embedding, job_embedding),
            include_reasons=include_reasons,
        )

    async def ascore(
        self,
        candidate: CandidateInput,
        job: JobInput,
        candidate_embedding: Optional[Vector] = None,
        job_embedding: Optional[Vector] = None,
        include_reasons: bool = True,
    ) -> MatchResult:
        """Async variant of score() that embeds candidate and job concurrently."""
        candidate_task = (
            asyncio.to_thread(self.embedding_provider.embed, candidate.embedding_text())
            if candidate_embedding is None
            else _ready(candidate_embedding)
        )
        job_task = (
            asyncio.to_thread(self.embedding_provider.embed, job.embedding_text())
            if job_embedding is None
            else _ready(job_embedding)
        )
        candidate_vector, job_vector = await asyncio.gather(candidate_task, job_task)

        return self.build_result(
            candidate,
            job,
            semantic_score(candidate_vector, job_vector),
            include_reasons=include_reasons,
        )

    def build_result(
        self,
        candidate: CandidateInput,
        job: JobInput,
        semantic: int,
        include_reasons: bool = True,
    ) -> MatchResult:
        """Combine a semantic score with the heuristic signals into a MatchResult."""
        semantic = clamp_score(semantic)

        required_skills = extract_skills(job.skills_source())
        skills = skills_match(candidate.skills, required_skills)
        experience = experience_match(
            candidate.current_title,
            candidate.summary_text,
            job.title,
            job.description_text,
        )

        overall = self.combine(semantic, skills.score, experience.score)
        level = MatchAssessment.from_score(overall)

        reasons: list[str] = []
        if include_reasons:
            reasons = self.generate_reasons(
                skills,
                experience,
                semantic,
                overall,
                location_match=location_matches(candidate.location, job.location),
            )

        result = MatchResult(
            candidate_id=candidate.candidate_id,
            job_id=job.job_id,
            match_score=overall,
            semantic_score=semantic,
            skills_match=skills,
            experience_match=experience,
            semantic_match=SemanticMatch(
                score=semantic,
                confidence=semantic_confidence(semantic),
            ),
            match_reasons=reasons,
            overall_assessment=level.label,
            assessment_level=level,
        )

        audit_log(
            AuditAction.CANDIDATE_SCORED.value,
            {
                "candidate_id": candidate.candidate_id,
                "job_id": job.job_id,
                "match_score": overall,
                "semantic_score": semantic,
                "skills_score": skills.score,
                "experience_score": experience.score,
            },
        )
        return result

    def combine(self, semantic: int, skills: int, experience: int) -> int:
        """Weighted average of the three component scores, clamped to 0-100."""
        total = (
            semantic * self.weights["semantic"]
            + skills * self.weights["skills"]
            + experience * self.weights["experience"]
        )
        # Float products can land just below an exact half (9.4999... for 9.5).
        return clamp_score(round(total, 9))

    # -------------------------------------------------------------------------
    # Explanation
    # -------------------------------------------------------------------------

    def generate_reasons(
        self,
        skills: SkillsMatch,
        experience: ExperienceMatch,
        semantic: int,
        overall: int,
        location_match: bool = False,
    ) -> list[str]:
        """
        Build the ordered list of reasons behind a score.

        The overall-fit label is always appended, so the list is never empty.
        """
        reasons = []

        if skills.matching_skills:
            # Several candidate skills can cover one required skill.
            covered = sum(
                1 for required in skills.job_required_skills
                if any(skills_overlap(skill, required) for skill in skills.matching_skills)
            )
            reasons.append(
                f"{covered}/{len(skills.job_required_skills)} "
                f"required skills match: {', '.join(skills.matching_skills[:3])}"
            )

        if experience.score >= EXPERIENCE_REASON_THRESHOLD:
            reasons.append(experience.reason)

        if semantic >= SEMANTIC_CONFIDENCE_THRESHOLDS["high"]:
            reasons.append("Strong semantic match in resume content")
        elif semantic >= SEMANTIC_CONFIDENCE_THRESHOLDS["medium"]:
            reasons.append("Good semantic match in resume content")

        if location_match:
            reasons.append("Location match")

        reasons.append(overall_fit_label(overall))
        return reasons

    @staticmethod
    def assess(score: int) -> str:
        """Qualitative assessment label for an overall score."""
        return MatchAssessment.from_score(score).label

    def rank(self, results: list[MatchResult]) -> list[MatchResult]:
        """
        Rank match results by overall score.

        Args:
            results: List of match results

        Returns:
            Sorted list with highest scores first
        """
        return sorted(results, key=lambda r: r.match_score, reverse=True)


def overall_fit_label(score: int) -> str:
    """Recruiter-facing fit label for an overall score."""
    for minimum, label in OVERALL_FIT_LABELS:
        if score >= minimum:
            return label
    return OVERALL_FIT_LABELS[-1][1]


async def _ready(value: Vector) -> Vector:
    return value


# Singleton instance
_matching_engine: Optional[MatchingEngine] = None


def get_matching_engine() -> MatchingEngine:
    """Get the matching engine singleton instance."""
    global _matching_engine
    if _matching_engine is None:
        _matching_engine = MatchingEngine(weights=get_settings().matching.weights)
    return _matching_engine
