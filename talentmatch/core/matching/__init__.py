"""Candidate-job matching engine module."""

from .heuristics import (
    classify_experience_level,
    experience_match,
    extract_skills,
    location_matches,
    skills_match,
    title_similarity,
)
from .matching_engine import (
    MatchingEngine,
    get_matching_engine,
    overall_fit_label,
)
from .match_service import (
    MatchService,
    create_match_service,
)

__all__ = [
    # Heuristics
    "classify_experience_level",
    "experience_match",
    "extract_skills",
    "location_matches",
    "skills_match",
    "title_similarity",
    # Engine
    "MatchingEngine",
    "get_matching_engine",
    "overall_fit_label",
    # Service
    "MatchService",
    "create_match_service",
]
