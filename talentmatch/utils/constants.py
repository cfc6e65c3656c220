"""
Application-wide constants for TalentMatch.

This module contains the constant values used by the match-scoring pipeline.
Modify these values to customize behavior without changing code logic.
"""

from enum import Enum
from typing import Final


# =============================================================================
# Application Constants
# =============================================================================

APP_NAME: Final[str] = "talentmatch"
APP_DISPLAY_NAME: Final[str] = "TalentMatch"
VERSION: Final[str] = "0.1.0"


# =============================================================================
# Skill Extraction
# =============================================================================

# Closed reference vocabulary matched against job descriptions
SKILL_VOCABULARY: Final[tuple[str, ...]] = (
    "JavaScript", "TypeScript", "React", "Node.js", "Python", "Java", "SQL",
    "AWS", "Docker", "Git", "REST API", "GraphQL", "MongoDB", "PostgreSQL",
    "CSS", "HTML", "Vue.js", "Angular", "Express", "Next.js", "Kubernetes",
    "Machine Learning", "Data Science", "DevOps", "Agile", "Scrum",
)

# Score used when a job lists no recognizable skills
NEUTRAL_SKILLS_SCORE: Final[int] = 50

# Title tokens of this length or shorter are ignored ("of", "sr", "ii")
MIN_TITLE_TOKEN_LENGTH: Final[int] = 3


# =============================================================================
# Scoring Constants
# =============================================================================

DEFAULT_MATCH_WEIGHTS: Final[dict[str, float]] = {
    "semantic": 0.5,
    "skills": 0.3,
    "experience": 0.2,
}

MIN_SCORE: Final[int] = 0
MAX_SCORE: Final[int] = 100

# Title-similarity bands for the experience score
TITLE_SIMILARITY_HIGH: Final[float] = 0.7
TITLE_SIMILARITY_RELATED: Final[float] = 0.4

# Experience reasons are only surfaced above this score
EXPERIENCE_REASON_THRESHOLD: Final[int] = 80

SEMANTIC_CONFIDENCE_THRESHOLDS: Final[dict[str, int]] = {
    "high": 80,
    "medium": 60,
}

# (minimum overall score, reason) checked top-down
OVERALL_FIT_LABELS: Final[tuple[tuple[int, str], ...]] = (
    (90, "Excellent overall candidate fit"),
    (75, "Strong overall candidate fit"),
    (60, "Good overall candidate fit"),
    (0, "Limited overall candidate fit"),
)

ASSESSMENT_THRESHOLDS: Final[dict[str, int]] = {
    "exceptional": 90,
    "strong": 80,
    "good": 70,
    "fair": 60,
}


# =============================================================================
# Enums
# =============================================================================


class ExperienceLevel(str, Enum):
    """Seniority tier inferred from a title and description."""

    JUNIOR = "junior"
    MID_LEVEL = "mid-level"
    SENIOR = "senior"
    MANAGEMENT = "management"


# Checked in order: the most senior tier whose keyword appears wins
EXPERIENCE_LEVEL_KEYWORDS: Final[tuple[tuple[ExperienceLevel, tuple[str, ...]], ...]] = (
    (ExperienceLevel.MANAGEMENT, ("manager", "director", "head")),
    (ExperienceLevel.SENIOR, ("senior", "lead", "principal")),
    (ExperienceLevel.JUNIOR, ("junior", "entry", "associate")),
)


class MatchAssessment(str, Enum):
    """Qualitative tier for an overall match score."""

    EXCEPTIONAL = "exceptional"
    STRONG = "strong"
    GOOD = "good"
    FAIR = "fair"
    LIMITED = "limited"

    @classmethod
    def from_score(cls, score: float) -> "MatchAssessment":
        """Convert a 0-100 score to an assessment tier."""
        if score >= ASSESSMENT_THRESHOLDS["exceptional"]:
            return cls.EXCEPTIONAL
        elif score >= ASSESSMENT_THRESHOLDS["strong"]:
            return cls.STRONG
        elif score >= ASSESSMENT_THRESHOLDS["good"]:
            return cls.GOOD
        elif score >= ASSESSMENT_THRESHOLDS["fair"]:
            return cls.FAIR
        return cls.LIMITED

    @property
    def label(self) -> str:
        return ASSESSMENT_LABELS[self]

    @property
    def rank(self) -> int:
        """Ordinal position, LIMITED lowest."""
        return len(ASSESSMENT_LABELS) - list(ASSESSMENT_LABELS).index(self) - 1


ASSESSMENT_LABELS: Final[dict[MatchAssessment, str]] = {
    MatchAssessment.EXCEPTIONAL: "Exceptional match — highly recommended for interview",
    MatchAssessment.STRONG: "Strong match — recommended for interview",
    MatchAssessment.GOOD: "Good match — consider for interview",
    MatchAssessment.FAIR: "Fair match — review carefully",
    MatchAssessment.LIMITED: "Limited match — may not be suitable",
}


class AuditAction(str, Enum):
    """Types of actions that can be audited."""

    CANDIDATE_SCORED = "candidate_scored"
    CANDIDATES_RANKED = "candidates_ranked"
    JOBS_RANKED = "jobs_ranked"
    EMBEDDING_GENERATED = "embedding_generated"
