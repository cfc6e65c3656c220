"""
Tests for talentmatch.core.matching.heuristics — skill extraction, skill
overlap, title similarity and experience classification.
"""

import itertools

import pytest

from talentmatch.core.matching.heuristics import (
    classify_experience_level,
    experience_match,
    extract_skills,
    location_matches,
    skills_match,
    skills_overlap,
    title_similarity,
)
from talentmatch.utils.constants import ExperienceLevel


# ── extract_skills ───────────────────────────────────────────────────────────


class TestExtractSkills:
    def test_finds_vocabulary_skills_in_order(self):
        text = "We need Python, AWS and Docker experience to scale our REST API."
        assert extract_skills(text) == ["Python", "AWS", "Docker", "REST API"]

    def test_case_insensitive(self):
        assert extract_skills("KUBERNETES and graphql") == ["GraphQL", "Kubernetes"]

    def test_substring_match(self):
        # "Java" is a substring of "JavaScript"
        assert extract_skills("JavaScript developer") == ["JavaScript", "Java"]

    def test_empty_text(self):
        assert extract_skills("") == []

    def test_no_known_skills(self):
        assert extract_skills("Friendly barista wanted") == []

    def test_custom_vocabulary(self):
        assert extract_skills("Rust and Go", vocabulary=["Rust", "Elixir"]) == ["Rust"]


# ── skills_match ─────────────────────────────────────────────────────────────


class TestSkillsMatch:
    def test_two_of_three(self):
        result = skills_match(["React", "Node.js"], ["React", "Node.js", "AWS"])
        assert result.matching_skills == ["React", "Node.js"]
        assert result.score == 67

    def test_all_matched(self):
        result = skills_match(["Python", "AWS"], ["Python", "AWS"])
        assert result.score == 100

    def test_none_matched(self):
        result = skills_match(["Rust"], ["Java", "SQL"])
        assert result.matching_skills == []
        assert result.score == 0

    def test_no_required_skills_is_neutral(self):
        result = skills_match(["Python"], [])
        assert result.score == 50
        assert result.matching_skills == []

    def test_no_skills_at_all_is_neutral(self):
        assert skills_match([], []).score == 50

    def test_substring_either_direction(self):
        result = skills_match(["react native", "SQL Server"], ["React", "SQL"])
        assert result.matching_skills == ["react native", "SQL Server"]

    def test_keeps_candidate_casing_and_lists(self):
        result = skills_match(["python"], ["Python", "Docker"])
        assert result.matching_skills == ["python"]
        assert result.candidate_skills == ["python"]
        assert result.job_required_skills == ["Python", "Docker"]
        assert result.score == 50

    def test_score_clamped_when_candidate_overlaps_more_than_required(self):
        # Three candidate skills all overlap the single required "SQL"
        result = skills_match(["SQL", "PostgreSQL", "MySQL"], ["SQL"])
        assert result.score == 100

    def test_matching_is_subset_of_both_lists(self):
        candidate_pool = ["React", "react native", "Node.js", "AWS", "Go", "SQL", "Scrum"]
        job_pool = ["React", "Node.js", "AWS", "PostgreSQL", "Agile"]
        for n in range(len(candidate_pool) + 1):
            for candidate_skills in itertools.combinations(candidate_pool, n):
                result = skills_match(list(candidate_skills), job_pool)
                assert set(result.matching_skills) <= set(candidate_skills)
                for skill in result.matching_skills:
                    assert any(skills_overlap(skill, job_skill) for job_skill in job_pool)


class TestSkillsOverlap:
    def test_blank_never_overlaps(self):
        assert skills_overlap("", "Python") is False
        assert skills_overlap("  ", "Python") is False

    def test_whitespace_ignored(self):
        assert skills_overlap(" AWS ", "aws") is True


# ── title_similarity ─────────────────────────────────────────────────────────


class TestTitleSimilarity:
    def test_identical_titles(self):
        assert title_similarity("Senior Backend Engineer", "Senior Backend Engineer") == 1.0

    def test_partial_overlap(self):
        sim = title_similarity("Senior Software Engineer", "Software Engineer")
        assert sim == pytest.approx(2 / 3)

    def test_case_insensitive(self):
        assert title_similarity("DATA ENGINEER", "data engineer") == 1.0

    def test_short_tokens_dropped(self):
        assert title_similarity("QA Engineer II", "Engineer") == 1.0

    def test_only_short_tokens(self):
        assert title_similarity("QA", "QA") == 0.0

    def test_empty_title(self):
        assert title_similarity("", "Software Engineer") == 0.0

    def test_no_overlap(self):
        assert title_similarity("Product Designer", "Backend Developer") == 0.0


# ── classify_experience_level ────────────────────────────────────────────────


class TestClassifyExperienceLevel:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Senior Engineer", ExperienceLevel.SENIOR),
            ("Team Lead", ExperienceLevel.SENIOR),
            ("Principal Architect", ExperienceLevel.SENIOR),
            ("Junior Developer", ExperienceLevel.JUNIOR),
            ("Entry level analyst", ExperienceLevel.JUNIOR),
            ("Associate Consultant", ExperienceLevel.JUNIOR),
            ("Engineering Manager", ExperienceLevel.MANAGEMENT),
            ("Director of Sales", ExperienceLevel.MANAGEMENT),
            ("Head of Data", ExperienceLevel.MANAGEMENT),
            ("Software Engineer", ExperienceLevel.MID_LEVEL),
            ("", ExperienceLevel.MID_LEVEL),
        ],
    )
    def test_tiers(self, text, expected):
        assert classify_experience_level(text) == expected

    def test_case_insensitive(self):
        assert classify_experience_level("SENIOR DEVELOPER") == ExperienceLevel.SENIOR

    def test_most_senior_tier_wins(self):
        assert classify_experience_level("Junior to Senior Developer") == ExperienceLevel.SENIOR
        assert classify_experience_level("Senior Manager") == ExperienceLevel.MANAGEMENT

    def test_combines_title_and_description(self):
        assert classify_experience_level("Developer", "Lead a small team") == ExperienceLevel.SENIOR

    def test_ignores_none(self):
        assert classify_experience_level(None, "Director of Sales") == ExperienceLevel.MANAGEMENT


# ── experience_match ─────────────────────────────────────────────────────────


class TestExperienceMatch:
    def test_identical_titles_capped_at_95(self):
        result = experience_match(
            "Senior Backend Engineer", "", "Senior Backend Engineer", ""
        )
        assert result.score == 95
        assert result.reason == "Very similar role title and responsibilities"

    def test_related_role(self):
        result = experience_match("Senior Software Engineer", "", "Software Engineer", "")
        # round(66.67) + 5
        assert result.score == 72
        assert result.reason == "Related role with transferable experience"

    def test_related_role_lower_boundary(self):
        # 2 common tokens out of 5 == 0.4
        result = experience_match(
            "Staff Platform Engineer Backend Systems", "", "Backend Engineer", ""
        )
        assert result.score == 45
        assert result.reason == "Related role with transferable experience"

    def test_same_level_floor_of_60(self):
        result = experience_match(
            "Product Designer", "Designs onboarding flows", "Backend Developer", "Build services"
        )
        assert result.score == 60
        assert result.reason == "Matching experience level (mid-level)"

    def test_different_level_floor_of_40(self):
        result = experience_match("Junior Designer", "", "Principal Architect", "")
        assert result.score == 40
        assert result.reason == "Different role but may have relevant skills"

    def test_scores_within_bounds(self):
        titles = ["Senior Backend Engineer", "Junior Designer", "Engineering Manager", "", "QA"]
        for a, b in itertools.product(titles, repeat=2):
            result = experience_match(a, "", b, "")
            assert 0 <= result.score <= 100


# ── location_matches ─────────────────────────────────────────────────────────


class TestLocationMatches:
    def test_contained(self):
        assert location_matches("Berlin", "Berlin, Germany") is True

    def test_case_insensitive(self):
        assert location_matches("berlin", "BERLIN") is True

    def test_missing_location(self):
        assert location_matches(None, "Berlin") is False
        assert location_matches("", "") is False

    def test_different(self):
        assert location_matches("Paris", "Berlin") is False
