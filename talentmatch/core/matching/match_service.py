"""
Match service: scoring stored candidates and jobs.

Loads profiles and postings from the repositories, reuses their cached
embeddings (generating and caching them when absent or built by another
model) and delegates the scoring itself to the MatchingEngine. All
collaborators are injected.
"""

from datetime import datetime
from typing import Optional

import numpy as np

from talentmatch.core.exceptions import DimensionMismatch
from talentmatch.data.models import CandidateProfile, JobPosting, MatchResult
from talentmatch.data.repositories import CandidateRepository, JobRepository
from talentmatch.ml.embeddings import EmbeddingProvider
from talentmatch.utils.constants import AuditAction
from talentmatch.utils.logger import LoggerMixin, audit_log

from .matching_engine import MatchingEngine

MAX_TOP_N = 100


def _validate_ranking_args(top_n: int, min_score: int) -> None:
    if not 1 <= top_n <= MAX_TOP_N:
        raise ValueError(f"top_n must be between 1 and {MAX_TOP_N}, got {top_n}")
    if not 0 <= min_score <= 100:
        raise ValueError(f"min_score must be between 0 and 100, got {min_score}")


class MatchService(LoggerMixin):
    """Scores stored candidates against stored jobs."""

    def __init__(
        self,
        engine: MatchingEngine,
        candidate_repository: CandidateRepository,
        job_repository: JobRepository,
        embedding_provider: Optional[EmbeddingProvider] = None,
    ):
        self.engine = engine
        self.candidates = candidate_repository
        self.jobs = job_repository
        self._embedding_provider = embedding_provider

    @property
    def embedding_provider(self) -> EmbeddingProvider:
        if self._embedding_provider is None:
            self._embedding_provider = self.engine.embedding_provider
        return self._embedding_provider

    # -------------------------------------------------------------------------
    # Embeddings
    # -------------------------------------------------------------------------

    def _cache_usable(self, vector: Optional[list[float]], model_name: Optional[str]) -> bool:
        # Records cached without a model name predate model tracking and are kept.
        if not vector:
            return False
        return model_name is None or model_name == self.embedding_provider.model_name

    def candidate_embedding(self, profile: CandidateProfile) -> np.ndarray:
        """Cached resume embedding, regenerated when absent or built by another model."""
        if self._cache_usable(profile.resume_embedding, profile.embedding_model):
            return np.asarray(profile.resume_embedding, dtype=np.float64)

        if profile.has_embedding:
            self.logger.warning(
                f"Cached embedding of candidate {profile.str_id} was built by "
                f"{profile.embedding_model}, regenerating with {self.embedding_provider.model_name}"
            )
        else:
            self.logger.info(f"Generating missing embedding for candidate {profile.str_id}")
        vector = self.embedding_provider.embed(profile.to_match_input().embedding_text())
        model_name = self.embedding_provider.model_name
        self.candidates.save_embedding(profile.id, vector.tolist(), model_name)
        profile.resume_embedding = vector.tolist()
        profile.embedding_model = model_name
        profile.embedding_updated_at = datetime.utcnow()
        audit_log(
            AuditAction.EMBEDDING_GENERATED.value,
            {"entity": "candidate", "entity_id": profile.str_id, "dimension": int(vector.size)},
        )
        return vector

    def job_embedding(self, posting: JobPosting) -> np.ndarray:
        """Cached job embedding, regenerated when absent or built by another model."""
        if self._cache_usable(posting.job_embedding, posting.embedding_model):
            return np.asarray(posting.job_embedding, dtype=np.float64)

        if posting.has_embedding:
            self.logger.warning(
                f"Cached embedding of job {posting.str_id} was built by "
                f"{posting.embedding_model}, regenerating with {self.embedding_provider.model_name}"
            )
        else:
            self.logger.info(f"Generating missing embedding for job {posting.str_id}")
        vector = self.embedding_provider.embed(posting.to_match_input().embedding_text())
        model_name = self.embedding_provider.model_name
        self.jobs.save_embedding(posting.id, vector.tolist(), model_name)
        posting.job_embedding = vector.tolist()
        posting.embedding_model = model_name
        posting.embedding_updated_at = datetime.utcnow()
        audit_log(
            AuditAction.EMBEDDING_GENERATED.value,
            {"entity": "job", "entity_id": posting.str_id, "dimension": int(vector.size)},
        )
        return vector

    # -------------------------------------------------------------------------
    # Scoring
    # -------------------------------------------------------------------------

    def score_profile(
        self,
        profile: CandidateProfile,
        posting: JobPosting,
        include_reasons: bool = True,
        job_vector: Optional[np.ndarray] = None,
        candidate_vector: Optional[np.ndarray] = None,
    ) -> MatchResult:
        """Score one loaded profile against one loaded posting."""
        if candidate_vector is None:
            candidate_vector = self.candidate_embedding(profile)
        if job_vector is None:
            job_vector = self.job_embedding(posting)

        try:
            return self.engine.score(
                profile.to_match_input(),
                posting.to_match_input(),
                candidate_embedding=candidate_vector,
                job_embedding=job_vector,
                include_reasons=include_reasons,
            )
        except DimensionMismatch:
            self.logger.error(
                f"Cached embeddings of candidate {profile.str_id} and job {posting.str_id} "
                f"have different dimensions ({candidate_vector.size} vs {job_vector.size})"
            )
            raise

    def score_candidate_for_job(
        self,
        candidate_id: str,
        job_id: str,
        include_reasons: bool = True,
    ) -> MatchResult:
        """
        Score a stored candidate against a stored job.

        Raises:
            NotFound: If the candidate or job does not exist.
            EmbeddingUnavailable: If a missing embedding cannot be generated.
            DimensionMismatch: If the cached vectors cannot be compared.
        """
        profile = self.candidates.require(candidate_id)
        posting = self.jobs.require(job_id)

        self.logger.info(f"Match score requested: candidate={candidate_id} job={job_id}")
        result = self.score_profile(profile, posting, include_reasons=include_reasons)
        self.logger.info(
            f"Match score calculated: candidate={candidate_id} job={job_id} "
            f"score={result.match_score} semantic={result.semantic_score}"
        )
        return result

    def match_candidates_for_job(
        self,
        job_id: str,
        top_n: int = 20,
        min_score: int = 60,
        include_reasons: bool = True,
    ) -> list[MatchResult]:
        """
        Find the best-matching stored candidates for a job.

        Every candidate is scored; results below min_score are dropped and
        the top_n highest remain, best first.
        """
        _validate_ranking_args(top_n, min_score)
        posting = self.jobs.require(job_id)
        job_vector = self.job_embedding(posting)

        results = [
            self.score_profile(profile, posting, include_reasons, job_vector=job_vector)
            for profile in self.candidates.iter_profiles()
        ]
        qualified = [r for r in results if r.match_score >= min_score]
        ranked = self.engine.rank(qualified)[:top_n]

        audit_log(
            AuditAction.CANDIDATES_RANKED.value,
            {
                "job_id": job_id,
                "total_candidates": len(results),
                "qualified_matches": len(qualified),
                "top_score": ranked[0].match_score if ranked else None,
            },
        )
        return ranked

    def match_jobs_for_candidate(
        self,
        candidate_id: str,
        top_n: int = 20,
        min_score: int = 60,
        include_reasons: bool = True,
    ) -> list[MatchResult]:
        """Find the best-matching open jobs for a stored candidate."""
        _validate_ranking_args(top_n, min_score)
        profile = self.candidates.require(candidate_id)
        candidate_vector = self.candidate_embedding(profile)

        results = [
            self.score_profile(profile, posting, include_reasons, candidate_vector=candidate_vector)
            for posting in self.jobs.iter_open_jobs()
        ]
        qualified = [r for r in results if r.match_score >= min_score]
        ranked = self.engine.rank(qualified)[:top_n]

        audit_log(
            AuditAction.JOBS_RANKED.value,
            {
                "candidate_id": candidate_id,
                "total_jobs": len(results),
                "qualified_matches": len(qualified),
                "top_score": ranked[0].match_score if ranked else None,
            },
        )
        return ranked


def create_match_service(
    engine: Optional[MatchingEngine] = None,
    candidate_repository: Optional[CandidateRepository] = None,
    job_repository: Optional[JobRepository] = None,
) -> MatchService:
    """Build a MatchService from the default collaborators."""
    from talentmatch.data.repositories import get_candidate_repository, get_job_repository

    from .matching_engine import get_matching_engine

    return MatchService(
        engine=engine or get_matching_engine(),
        candidate_repository=candidate_repository or get_candidate_repository(),
        job_repository=job_repository or get_job_repository(),
    )
