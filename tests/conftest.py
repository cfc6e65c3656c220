"""
Shared test fixtures for the TalentMatch test suite.

Sets environment variables before any talentmatch imports so settings
never touch real services, then provides a deterministic embedding
provider and factory fixtures for scoring inputs and stored documents.
"""

import os

# === Set environment BEFORE any talentmatch imports ===
os.environ.setdefault("APP_ENVIRONMENT", "testing")
os.environ.setdefault("DB_NAME", "talentmatch_test")
os.environ.setdefault("ML_DEVICE", "cpu")
os.environ.setdefault("LOG_FILE_OUTPUT", "false")

from typing import Optional
from unittest.mock import MagicMock

import numpy as np
import pytest
from bson import ObjectId

from talentmatch.core.matching.matching_engine import MatchingEngine
from talentmatch.data.models import CandidateInput, CandidateProfile, JobInput, JobPosting
from talentmatch.ml.embeddings import EmbeddingProvider


class FakeEmbeddingProvider(EmbeddingProvider):
    """
    Deterministic provider for tests.

    Returns vectors registered per text, falling back to a default vector,
    and records every text it was asked to embed.
    """

    def __init__(
        self,
        vectors: Optional[dict[str, list[float]]] = None,
        default: Optional[list[float]] = None,
        fail: bool = False,
    ):
        super().__init__()
        self.vectors = vectors or {}
        self.default = default if default is not None else [1.0, 0.0, 0.0]
        self.fail = fail
        self.calls: list[str] = []

    @property
    def model_name(self) -> str:
        return "fake-embedder"

    def _embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.fail:
            raise ConnectionError("embedding service unreachable")
        return self.vectors.get(text, self.default)


@pytest.fixture
def make_provider():
    """Factory for FakeEmbeddingProvider instances."""
    return FakeEmbeddingProvider


@pytest.fixture
def fake_provider():
    return FakeEmbeddingProvider()


@pytest.fixture
def failing_provider():
    return FakeEmbeddingProvider(fail=True)


@pytest.fixture
def matching_engine(fake_provider):
    return MatchingEngine(embedding_provider=fake_provider)


# ---------------------------------------------------------------------------
# Factory fixtures for scoring inputs
# ---------------------------------------------------------------------------


@pytest.fixture
def make_candidate_input():
    """Factory that returns a callable to build CandidateInput models."""

    def _factory(
        skills: Optional[list[str]] = None,
        current_title: str = "Senior Backend Engineer",
        summary_text: str = "Builds APIs and data pipelines in Python on AWS.",
        location: Optional[str] = "Berlin",
        candidate_id: Optional[str] = "cand-1",
    ) -> CandidateInput:
        if skills is None:
            skills = ["Python", "AWS", "Docker"]
        return CandidateInput(
            candidate_id=candidate_id,
            skills=skills,
            current_title=current_title,
            summary_text=summary_text,
            location=location,
        )

    return _factory


@pytest.fixture
def make_job_input():
    """Factory that returns a callable to build JobInput models."""

    def _factory(
        title: str = "Senior Backend Engineer",
        description_text: str = "We need Python, AWS and Docker experience to scale our REST API.",
        location: Optional[str] = "Berlin, Germany",
        job_id: Optional[str] = "job-1",
    ) -> JobInput:
        return JobInput(
            job_id=job_id,
            title=title,
            description_text=description_text,
            location=location,
        )

    return _factory


# ---------------------------------------------------------------------------
# Stored documents and repositories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_candidate_profile():
    """Factory that returns a callable to build stored CandidateProfile documents."""

    def _factory(
        resume_embedding: Optional[list[float]] = None,
        skills: Optional[list[str]] = None,
        current_title: str = "Senior Backend Engineer",
        summary: str = "Builds APIs in Python.",
        **kwargs,
    ) -> CandidateProfile:
        return CandidateProfile(
            _id=kwargs.pop("id", ObjectId()),
            full_name=kwargs.pop("full_name", "Jane Smith"),
            current_title=current_title,
            summary=summary,
            skills=skills if skills is not None else ["Python", "AWS"],
            resume_embedding=resume_embedding,
            **kwargs,
        )

    return _factory


@pytest.fixture
def make_job_posting():
    """Factory that returns a callable to build stored JobPosting documents."""

    def _factory(
        job_embedding: Optional[list[float]] = None,
        title: str = "Senior Backend Engineer",
        description: str = "Python and AWS services.",
        **kwargs,
    ) -> JobPosting:
        return JobPosting(
            _id=kwargs.pop("id", ObjectId()),
            title=title,
            description=description,
            job_embedding=job_embedding,
            **kwargs,
        )

    return _factory


@pytest.fixture
def candidate_repository():
    return MagicMock(name="CandidateRepository")


@pytest.fixture
def job_repository():
    return MagicMock(name="JobRepository")


@pytest.fixture
def unit_vector():
    def _factory(*values: float) -> np.ndarray:
        vec = np.asarray(values, dtype=np.float64)
        return vec / np.linalg.norm(vec)

    return _factory

