"""Unit tests for the FitScoringService."""

from __future__ import annotations

import pytest


class TestScoreJob:
    """Test weighted fit score aggregation."""

    def test_strong_frontend_match_scores_high(
        self, make_criteria, make_job, scoring_config
    ):
        """React/TypeScript candidate with 5 years against a 3-year role."""
        from src.scoring.service import FitScoringService

        fit = FitScoringService(config=scoring_config).score_job(
            make_criteria(skills=["React", "TypeScript"], experience=5),
            make_job(required_skills=["React", "TypeScript"], experience_required=3),
        )

        assert fit.skills == 100.0
        assert fit.experience >= 90.0
        assert fit.overall > 80
        assert fit.overall == pytest.approx(98.75)
        assert fit.confidence == 1.0

    def test_overall_is_weighted_sum_of_components(
        self, make_criteria, make_job, scoring_config
    ):
        from src.scoring.service import FitScoringService

        fit = FitScoringService(config=scoring_config).score_job(
            make_criteria(skills=["React"], experience=1, location="Munich"),
            make_job(remote=False, experience_required=4),
        )
        w = scoring_config.weights
        expected = (
            w.skills * fit.skills
            + w.experience * fit.experience
            + w.education * fit.education
            + w.location * fit.location
            + w.salary * fit.salary
            + w.industry * fit.industry
        )

        assert fit.overall == pytest.approx(expected, abs=0.01)

    def test_custom_weights_change_overall(self, make_criteria, make_job, scoring_config):
        from src.scoring.config import WeightVector
        from src.scoring.service import FitScoringService

        skills_only = WeightVector(
            skills=1.0, experience=0, education=0, location=0, salary=0, industry=0
        )
        fit = FitScoringService(config=scoring_config).score_job(
            make_criteria(skills=["React"]), make_job(), weights=skills_only
        )

        assert fit.overall == 50.0

    def test_weights_mapping_is_accepted(self, make_criteria, make_job, scoring_config):
        from src.scoring.service import FitScoringService

        weights = {
            "skills": 0,
            "experience": 0,
            "education": 0,
            "location": 0,
            "salary": 1.0,
            "industry": 0,
        }
        fit = FitScoringService(config=scoring_config).score_job(
            make_criteria(), make_job(), weights=weights
        )

        assert fit.overall == 100.0

    def test_invalid_weights_raise_validation_error(
        self, make_criteria, make_job, scoring_config
    ):
        from src.scoring.errors import ValidationError
        from src.scoring.service import FitScoringService

        service = FitScoringService(config=scoring_config)

        with pytest.raises(ValidationError):
            service.score_job(make_criteria(), make_job(), weights={"skills": 2.0})
        with pytest.raises(ValidationError):
            service.score_job(make_criteria(), make_job(), weights=[0.5, 0.5])

    def test_scoring_is_idempotent(self, make_criteria, make_job, scoring_config):
        from src.scoring.service import FitScoringService

        service = FitScoringService(config=scoring_config)
        criteria = make_criteria(skills=["React"], experience=2)
        job = make_job(salary_min=None, salary_max=None)

        assert service.score_job(criteria, job) == service.score_job(criteria, job)

    def test_module_level_score_job_matches_service(
        self, make_criteria, make_job, scoring_config
    ):
        from src.scoring.service import FitScoringService, score_job

        criteria, job = make_criteria(), make_job()

        assert score_job(criteria, job, config=scoring_config) == FitScoringService(
            config=scoring_config
        ).score_job(criteria, job)

    def test_industry_component_blends_job_type(
        self, make_criteria, make_job, scoring_config
    ):
        from src.scoring.service import FitScoringService

        fit = FitScoringService(config=scoring_config).score_job(
            make_criteria(), make_job(job_type="Internship")
        )

        assert fit.industry == 50.0


class TestConfidence:
    """Test confidence computation."""

    def test_missing_salary_lowers_confidence(
        self, make_criteria, make_job, scoring_config
    ):
        from src.scoring.service import FitScoringService

        service = FitScoringService(config=scoring_config)
        criteria = make_criteria()

        with_salary = service.score_job(criteria, make_job())
        without_salary = service.score_job(
            criteria, make_job(salary_min=None, salary_max=None)
        )

        assert without_salary.salary == 50.0
        assert without_salary.confidence < with_salary.confidence
        assert without_salary.confidence == pytest.approx(6 / 7 * 0.95, abs=1e-4)

    def test_missing_description_lowers_confidence(
        self, make_criteria, make_job, scoring_config
    ):
        from src.scoring.service import FitScoringService

        fit = FitScoringService(config=scoring_config).score_job(
            make_criteria(), make_job(description=None)
        )

        assert fit.confidence == pytest.approx(0.95)

    def test_confidence_is_independent_of_overall(
        self, make_criteria, make_job, scoring_config
    ):
        """A poor fit backed by complete data keeps full confidence."""
        from src.scoring.service import FitScoringService

        fit = FitScoringService(config=scoring_config).score_job(
            make_criteria(
                skills=["Cobol"],
                experience=0,
                education=["High School"],
                location="Tokyo",
                remote=False,
                salary_range=(10, 20),
                industries=["Mining"],
                job_types=["Contract"],
            ),
            make_job(remote=False),
        )

        assert fit.overall < 20
        assert fit.confidence == 1.0

    def test_sparse_job_has_low_confidence(self, make_criteria, scoring_config):
        from src.scoring.models import Job
        from src.scoring.service import FitScoringService

        fit = FitScoringService(config=scoring_config).score_job(
            make_criteria(), Job(id="sparse")
        )

        assert 0.0 <= fit.confidence < 0.2
        assert 0.0 <= fit.overall <= 100.0


class TestEvaluate:
    """Test the Match narrative produced by evaluate."""

    def test_reasons_ordered_by_score_then_priority(
        self, make_criteria, make_job, scoring_config
    ):
        from src.scoring.service import FitScoringService

        match = FitScoringService(config=scoring_config).evaluate(
            make_criteria(experience=5), make_job(experience_required=3)
        )

        assert [r.split(":")[0] for r in match.reasons] == [
            "Strong skills fit",
            "Strong education fit",
            "Strong salary fit",
            "Strong location fit",
            "Strong industry fit",
            "Strong experience fit",
        ]
        assert match.improvements == []
        assert match.gaps == []

    def test_improvements_ordered_ascending_with_priority_ties(
        self, make_criteria, make_job, scoring_config
    ):
        from src.scoring.models import Dimension
        from src.scoring.service import FitScoringService

        match = FitScoringService(config=scoring_config).evaluate(
            make_criteria(skills=["Go"], experience=1, location="Munich", remote=False),
            make_job(
                remote=False,
                experience_required=5,
                salary_min=None,
                salary_max=None,
            ),
        )

        assert match.gaps == [Dimension.SKILLS, Dimension.LOCATION, Dimension.EXPERIENCE]
        assert len(match.improvements) == 3
        assert match.improvements[0].startswith("Develop the required skills")
        assert "experience" in match.improvements[2]

    def test_low_experience_appears_in_improvements(
        self, make_criteria, make_job, scoring_config
    ):
        from src.scoring.models import Dimension
        from src.scoring.service import FitScoringService

        match = FitScoringService(config=scoring_config).evaluate(
            make_criteria(experience=1), make_job(experience_required=5)
        )

        assert match.dimensions[Dimension.EXPERIENCE].value == pytest.approx(0.2)
        assert match.fit_score.experience == 20.0
        assert Dimension.EXPERIENCE in match.gaps
        assert any("experience" in item for item in match.improvements)

    def test_strong_match_has_skills_reason(self, make_criteria, make_job, scoring_config):
        from src.scoring.service import FitScoringService

        match = FitScoringService(config=scoring_config).evaluate(
            make_criteria(), make_job()
        )

        assert any("skills" in reason for reason in match.reasons)

    def test_perfect_match_tier_and_tags(self, make_criteria, make_job, scoring_config):
        from src.scoring.service import FitScoringService

        match = FitScoringService(config=scoring_config).evaluate(
            make_criteria(), make_job()
        )

        assert match.tier == "perfect_match"
        assert match.tags == [
            "High Match",
            "High Confidence",
            "Salary Match",
            "Location Match",
            "Remote",
            "Software",
            "Full-time",
        ]

    def test_weak_match_is_stretch(self, make_criteria, make_job, scoring_config):
        from src.scoring.service import FitScoringService

        match = FitScoringService(config=scoring_config).evaluate(
            make_criteria(skills=[], experience=0, remote=False, location="Oslo"),
            make_job(remote=False),
        )

        assert match.tier == "stretch"

    def test_missing_fields_become_data_quality_warnings(
        self, make_criteria, make_job, scoring_config
    ):
        from src.scoring.service import FitScoringService

        match = FitScoringService(config=scoring_config).evaluate(
            make_criteria(),
            make_job(id="job-9", salary_min=None, salary_max=None, description=""),
        )

        assert [w.field for w in match.warnings] == ["salary", "description"]
        assert all(w.job_id == "job-9" for w in match.warnings)

    def test_format_match_includes_summary(self, make_criteria, make_job, scoring_config):
        from src.scoring.service import FitScoringService

        service = FitScoringService(config=scoring_config)
        output = service.format_match(service.evaluate(make_criteria(), make_job()))

        assert "Acme - Frontend Engineer" in output
        assert "Tier: PERFECT_MATCH" in output
        assert "+ Strong skills fit" in output

    def test_match_to_dict_is_json_friendly(self, make_criteria, make_job, scoring_config):
        import json

        from src.scoring.service import FitScoringService

        match = FitScoringService(config=scoring_config).evaluate(
            make_criteria(), make_job(salary_min=None, salary_max=None)
        )
        payload = json.loads(json.dumps(match.to_dict()))

        assert payload["job"]["id"] == "job-1"
        assert payload["dimensions"]["salary"]["low_evidence"] is True
        assert payload["warnings"][0]["field"] == "salary"
