"""
Tests for talentmatch.core.matching.matching_engine — MatchingEngine business logic.

All tests use the deterministic FakeEmbeddingProvider from conftest, so no
model is downloaded and no external service is contacted.
"""

import asyncio

import pytest

from talentmatch.core.exceptions import DimensionMismatch, EmbeddingUnavailable
from talentmatch.core.matching.matching_engine import MatchingEngine, overall_fit_label
from talentmatch.data.models import ExperienceMatch, MatchResult, SkillsMatch
from talentmatch.utils.constants import MatchAssessment


# ── combine / assess ─────────────────────────────────────────────────────────


class TestCombine:
    def test_default_weights(self, matching_engine):
        # 90*0.5 + 80*0.3 + 70*0.2
        assert matching_engine.combine(90, 80, 70) == 83

    def test_rounds_halves_up(self, matching_engine):
        # 100*0.5 + 75*0.3 + 95*0.2 == 91.5
        assert matching_engine.combine(100, 75, 95) == 92

    def test_bounds(self, matching_engine):
        assert matching_engine.combine(0, 0, 0) == 0
        assert matching_engine.combine(100, 100, 100) == 100

    def test_half_not_lost_to_float_drift(self, matching_engine):
        # 31*0.3 + 1*0.2 sums to 9.4999... in floats
        assert matching_engine.combine(0, 31, 1) == 10

    def test_custom_weights(self, fake_provider):
        engine = MatchingEngine(
            embedding_provider=fake_provider,
            weights={"semantic": 1.0, "skills": 0.0, "experience": 0.0},
        )
        assert engine.combine(70, 10, 10) == 70


class TestAssess:
    def test_strong_match(self):
        assert MatchingEngine.assess(83) == "Strong match — recommended for interview"

    @pytest.mark.parametrize(
        "score,expected",
        [
            (100, MatchAssessment.EXCEPTIONAL),
            (90, MatchAssessment.EXCEPTIONAL),
            (89, MatchAssessment.STRONG),
            (80, MatchAssessment.STRONG),
            (79, MatchAssessment.GOOD),
            (70, MatchAssessment.GOOD),
            (69, MatchAssessment.FAIR),
            (60, MatchAssessment.FAIR),
            (59, MatchAssessment.LIMITED),
            (0, MatchAssessment.LIMITED),
        ],
    )
    def test_thresholds(self, score, expected):
        assert MatchAssessment.from_score(score) == expected

    def test_monotonic(self):
        ranks = [MatchAssessment.from_score(s).rank for s in range(0, 101)]
        assert ranks == sorted(ranks)


class TestOverallFitLabel:
    @pytest.mark.parametrize(
        "score,expected",
        [
            (95, "Excellent overall candidate fit"),
            (90, "Excellent overall candidate fit"),
            (89, "Strong overall candidate fit"),
            (75, "Strong overall candidate fit"),
            (74, "Good overall candidate fit"),
            (60, "Good overall candidate fit"),
            (59, "Limited overall candidate fit"),
            (0, "Limited overall candidate fit"),
        ],
    )
    def test_labels(self, score, expected):
        assert overall_fit_label(score) == expected


# ── generate_reasons ─────────────────────────────────────────────────────────


class TestGenerateReasons:
    def _skills(self, matching, required):
        return SkillsMatch(
            matching_skills=matching,
            candidate_skills=matching,
            job_required_skills=required,
            score=50,
        )

    def test_full_reason_list(self, matching_engine):
        reasons = matching_engine.generate_reasons(
            self._skills(["React", "Node.js"], ["React", "Node.js", "AWS"]),
            ExperienceMatch(score=95, reason="Very similar role title and responsibilities"),
            semantic=85,
            overall=84,
        )
        assert reasons == [
            "2/3 required skills match: React, Node.js",
            "Very similar role title and responsibilities",
            "Strong semantic match in resume content",
            "Strong overall candidate fit",
        ]

    def test_lists_first_three_skills(self, matching_engine):
        skills = ["Python", "AWS", "Docker", "SQL", "Git"]
        reasons = matching_engine.generate_reasons(
            self._skills(skills, skills),
            ExperienceMatch(score=40, reason="Different role but may have relevant skills"),
            semantic=50,
            overall=50,
        )
        assert reasons[0] == "5/5 required skills match: Python, AWS, Docker"

    def test_counts_each_required_skill_once(self, matching_engine):
        reasons = matching_engine.generate_reasons(
            self._skills(["SQL", "PostgreSQL", "MySQL"], ["SQL"]),
            ExperienceMatch(score=40, reason="Different role but may have relevant skills"),
            semantic=50,
            overall=50,
        )
        assert reasons[0] == "1/1 required skills match: SQL, PostgreSQL, MySQL"

    def test_experience_reason_threshold(self, matching_engine):
        reasons = matching_engine.generate_reasons(
            self._skills([], []),
            ExperienceMatch(score=79, reason="Related role with transferable experience"),
            semantic=50,
            overall=50,
        )
        assert "Related role with transferable experience" not in reasons

    def test_good_semantic_match(self, matching_engine):
        reasons = matching_engine.generate_reasons(
            self._skills([], []),
            ExperienceMatch(score=40, reason=""),
            semantic=60,
            overall=61,
        )
        assert reasons == ["Good semantic match in resume content", "Good overall candidate fit"]

    def test_location_match(self, matching_engine):
        reasons = matching_engine.generate_reasons(
            self._skills([], []),
            ExperienceMatch(score=40, reason=""),
            semantic=10,
            overall=30,
            location_match=True,
        )
        assert reasons == ["Location match", "Limited overall candidate fit"]

    def test_never_empty(self, matching_engine):
        reasons = matching_engine.generate_reasons(
            self._skills([], []),
            ExperienceMatch(score=0, reason=""),
            semantic=0,
            overall=0,
        )
        assert reasons == ["Limited overall candidate fit"]


# ── score ────────────────────────────────────────────────────────────────────


class TestScore:
    def test_strong_candidate(self, matching_engine, make_candidate_input, make_job_input):
        result = matching_engine.score(make_candidate_input(), make_job_input())

        assert isinstance(result, MatchResult)
        assert result.semantic_score == 100
        assert result.skills_match.matching_skills == ["Python", "AWS", "Docker"]
        assert result.skills_match.job_required_skills == ["Python", "AWS", "Docker", "REST API"]
        assert result.skills_match.score == 75
        assert result.experience_match.score == 95
        assert result.match_score == 92
        assert result.assessment_level == MatchAssessment.EXCEPTIONAL
        assert result.overall_assessment == "Exceptional match — highly recommended for interview"
        assert result.match_reasons == [
            "3/4 required skills match: Python, AWS, Docker",
            "Very similar role title and responsibilities",
            "Strong semantic match in resume content",
            "Location match",
            "Excellent overall candidate fit",
        ]

    def test_ids_carried_through(self, matching_engine, make_candidate_input, make_job_input):
        result = matching_engine.score(make_candidate_input(), make_job_input())
        assert result.candidate_id == "cand-1"
        assert result.job_id == "job-1"

    def test_precomputed_embeddings_skip_provider(
        self, matching_engine, fake_provider, make_candidate_input, make_job_input
    ):
        result = matching_engine.score(
            make_candidate_input(),
            make_job_input(),
            candidate_embedding=[1.0, 0.0],
            job_embedding=[0.0, 1.0],
        )
        assert fake_provider.calls == []
        assert result.semantic_score == 50
        assert result.semantic_match.confidence == "low"
        # 50*0.5 + 75*0.3 + 95*0.2 == 66.5
        assert result.match_score == 67
        assert result.overall_assessment == "Fair match — review carefully"

    def test_missing_embeddings_are_generated(
        self, matching_engine, fake_provider, make_candidate_input, make_job_input
    ):
        candidate = make_candidate_input()
        job = make_job_input()
        matching_engine.score(candidate, job)
        assert fake_provider.calls == [candidate.embedding_text(), job.embedding_text()]

    def test_weak_candidate(self, matching_engine, make_candidate_input, make_job_input):
        candidate = make_candidate_input(
            skills=["Baking"],
            current_title="Pastry Chef",
            summary_text="Makes croissants.",
            location=None,
        )
        result = matching_engine.score(
            candidate, make_job_input(), candidate_embedding=[1.0, 0.0], job_embedding=[-1.0, 0.0]
        )
        assert result.semantic_score == 0
        assert result.skills_match.score == 0
        assert result.experience_match.score == 40
        assert result.match_score == 8
        assert result.assessment_level == MatchAssessment.LIMITED
        assert result.match_reasons == ["Limited overall candidate fit"]

    def test_job_without_description_uses_title_for_skills(
        self, matching_engine, make_candidate_input, make_job_input
    ):
        job = make_job_input(title="Python Developer", description_text="")
        result = matching_engine.score(make_candidate_input(), job)
        assert result.skills_match.job_required_skills == ["Python"]
        assert result.skills_match.score == 100

    def test_job_without_recognized_skills(self, matching_engine, make_candidate_input, make_job_input):
        job = make_job_input(description_text="Join a friendly team.")
        result = matching_engine.score(make_candidate_input(), job)
        assert result.skills_match.score == 50
        assert not any("required skills match" in r for r in result.match_reasons)

    def test_without_reasons(self, matching_engine, make_candidate_input, make_job_input):
        result = matching_engine.score(
            make_candidate_input(), make_job_input(), include_reasons=False
        )
        assert result.match_reasons == []
        assert result.match_score == 92

    def test_idempotent(self, matching_engine, make_candidate_input, make_job_input):
        first = matching_engine.score(make_candidate_input(), make_job_input())
        second = matching_engine.score(make_candidate_input(), make_job_input())
        assert first.model_dump() == second.model_dump()

    def test_scores_within_bounds(self, make_provider, make_candidate_input, make_job_input):
        vectors = [[1.0, 0.0], [0.0, 1.0], [-1.0, 0.0], [0.6, 0.8], [0.0, 0.0]]
        engine = MatchingEngine(embedding_provider=make_provider())
        for cv in vectors:
            for jv in vectors:
                result = engine.score(
                    make_candidate_input(), make_job_input(), candidate_embedding=cv, job_embedding=jv
                )
                for value in (
                    result.match_score,
                    result.semantic_score,
                    result.skills_match.score,
                    result.experience_match.score,
                ):
                    assert 0 <= value <= 100

    def test_provider_failure_propagates(self, failing_provider, make_candidate_input, make_job_input):
        engine = MatchingEngine(embedding_provider=failing_provider)
        with pytest.raises(EmbeddingUnavailable) as exc_info:
            engine.score(make_candidate_input(), make_job_input())
        assert exc_info.value.model_name == "fake-embedder"

    def test_provider_failure_with_one_cached_vector(
        self, failing_provider, make_candidate_input, make_job_input
    ):
        engine = MatchingEngine(embedding_provider=failing_provider)
        with pytest.raises(EmbeddingUnavailable):
            engine.score(make_candidate_input(), make_job_input(), candidate_embedding=[1.0, 0.0, 0.0])

    def test_dimension_mismatch(self, matching_engine, make_candidate_input, make_job_input):
        with pytest.raises(DimensionMismatch):
            matching_engine.score(
                make_candidate_input(),
                make_job_input(),
                candidate_embedding=[1.0, 0.0, 0.0],
                job_embedding=[1.0, 0.0],
            )

    def test_camel_case_serialization(self, matching_engine, make_candidate_input, make_job_input):
        data = matching_engine.score(make_candidate_input(), make_job_input()).model_dump(by_alias=True)
        assert data["matchScore"] == 92
        assert data["semanticScore"] == 100
        assert data["skillsMatch"]["matchingSkills"] == ["Python", "AWS", "Docker"]
        assert data["skillsMatch"]["jobRequiredSkills"] == ["Python", "AWS", "Docker", "REST API"]
        assert data["experienceMatch"]["reason"] == "Very similar role title and responsibilities"
        assert data["semanticMatch"]["confidence"] == "high"
        assert data["overallAssessment"].startswith("Exceptional match")
        assert "matchReasons" in data


class TestAsyncScore:
    def test_matches_sync_result(self, matching_engine, make_candidate_input, make_job_input):
        sync_result = matching_engine.score(make_candidate_input(), make_job_input())
        async_result = asyncio.run(matching_engine.ascore(make_candidate_input(), make_job_input()))
        assert async_result.model_dump() == sync_result.model_dump()

    def test_precomputed_embeddings(self, matching_engine, fake_provider, make_candidate_input, make_job_input):
        result = asyncio.run(
            matching_engine.ascore(
                make_candidate_input(),
                make_job_input(),
                candidate_embedding=[1.0, 0.0],
                job_embedding=[0.0, 1.0],
            )
        )
        assert fake_provider.calls == []
        assert result.semantic_score == 50

    def test_provider_failure(self, failing_provider, make_candidate_input, make_job_input):
        engine = MatchingEngine(embedding_provider=failing_provider)
        with pytest.raises(EmbeddingUnavailable):
            asyncio.run(engine.ascore(make_candidate_input(), make_job_input()))


# ── rank ─────────────────────────────────────────────────────────────────────


class TestRank:
    def test_highest_first(self, matching_engine):
        results = [MatchResult(candidate_id=str(s), match_score=s) for s in (40, 90, 65)]
        ranked = matching_engine.rank(results)
        assert [r.match_score for r in ranked] == [90, 65, 40]

    def test_empty(self, matching_engine):
        assert matching_engine.rank([]) == []
