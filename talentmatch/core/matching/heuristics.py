"""
Skill and experience heuristics for candidate-job matching.

These signals are independent of embeddings: a closed-vocabulary skill
extractor, substring-tolerant skill overlap, title token similarity and a
keyword-based seniority classifier.
"""

from typing import Iterable, Optional

from talentmatch.data.models import ExperienceMatch, SkillsMatch
from talentmatch.utils.constants import (
    EXPERIENCE_LEVEL_KEYWORDS,
    MIN_TITLE_TOKEN_LENGTH,
    NEUTRAL_SKILLS_SCORE,
    SKILL_VOCABULARY,
    TITLE_SIMILARITY_HIGH,
    TITLE_SIMILARITY_RELATED,
    ExperienceLevel,
)
from talentmatch.utils.scoring import clamp_score, round_half_up


def extract_skills(
    text: str,
    vocabulary: Iterable[str] = SKILL_VOCABULARY,
) -> list[str]:
    """
    Find the vocabulary skills mentioned in a job description or title.

    Matching is a case-insensitive substring test, so "Java" is also found
    in "JavaScript". Results keep vocabulary order and casing.
    """
    if not text:
        return []
    lowered = text.lower()
    return [skill for skill in vocabulary if skill.lower() in lowered]


def skills_overlap(skill_a: str, skill_b: str) -> bool:
    """True when either skill name contains the other, ignoring case."""
    a = skill_a.strip().lower()
    b = skill_b.strip().lower()
    if not a or not b:
        return False
    return a in b or b in a


def skills_match(
    candidate_skills: list[str],
    job_required_skills: list[str],
) -> SkillsMatch:
    """
    Score candidate skills against the skills a job requires.

    Every candidate skill overlapping at least one required skill counts as
    matching. Score is the matching share of required skills, or 50 when the
    job requires nothing recognizable.
    """
    matching = [
        skill for skill in candidate_skills
        if any(skills_overlap(skill, required) for required in job_required_skills)
    ]

    if job_required_skills:
        score = clamp_score(len(matching) / len(job_required_skills) * 100)
    else:
        score = NEUTRAL_SKILLS_SCORE

    return SkillsMatch(
        matching_skills=matching,
        candidate_skills=list(candidate_skills),
        job_required_skills=list(job_required_skills),
        score=score,
    )


def _title_tokens(title: str) -> list[str]:
    return [t for t in (title or "").lower().split() if len(t) >= MIN_TITLE_TOKEN_LENGTH]


def title_similarity(title1: str, title2: str) -> float:
    """
    Share of meaningful words two job titles have in common.

    Tokens of two characters or fewer are ignored. Returns 0.0 when either
    title has no meaningful tokens.
    """
    words1 = _title_tokens(title1)
    words2 = _title_tokens(title2)

    if not words1 or not words2:
        return 0.0

    common = [word for word in words1 if word in words2]
    return len(common) / max(len(words1), len(words2))


def classify_experience_level(*texts: Optional[str]) -> ExperienceLevel:
    """
    Infer a seniority tier from titles and descriptions.

    Keywords are matched as case-insensitive substrings. When keywords of
    several tiers appear, the most senior tier wins: management, then
    senior, then junior. Text without any keyword is mid-level.
    """
    text = " ".join(t for t in texts if t).lower()

    for level, keywords in EXPERIENCE_LEVEL_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return level
    return ExperienceLevel.MID_LEVEL


def experience_match(
    candidate_title: str,
    candidate_summary: str,
    job_title: str,
    job_description: str,
) -> ExperienceMatch:
    """Score how well the candidate's role and seniority fit the job."""
    similarity = title_similarity(candidate_title, job_title)
    title_score = round_half_up(similarity * 100)

    if similarity >= TITLE_SIMILARITY_HIGH:
        return ExperienceMatch(
            score=clamp_score(min(95, title_score + 10)),
            reason="Very similar role title and responsibilities",
        )

    if similarity >= TITLE_SIMILARITY_RELATED:
        return ExperienceMatch(
            score=clamp_score(min(85, title_score + 5)),
            reason="Related role with transferable experience",
        )

    candidate_level = classify_experience_level(candidate_title, candidate_summary)
    job_level = classify_experience_level(job_title, job_description)

    if candidate_level == job_level:
        return ExperienceMatch(
            score=clamp_score(max(60, title_score)),
            reason=f"Matching experience level ({candidate_level.value})",
        )

    return ExperienceMatch(
        score=clamp_score(max(40, title_score)),
        reason="Different role but may have relevant skills",
    )


def location_matches(candidate_location: Optional[str], job_location: Optional[str]) -> bool:
    """True when either location contains the other, ignoring case."""
    if not candidate_location or not job_location:
        return False
    return skills_overlap(candidate_location, job_location)
