"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest


@pytest.fixture
def make_job():
    """Factory for a fully populated job; override any field by keyword."""
    from src.scoring.models import Job

    def _make(**overrides) -> Job:
        data = {
            "id": "job-1",
            "title": "Frontend Engineer",
            "company": "Acme",
            "location": "Berlin",
            "remote": True,
            "salary_min": 90000,
            "salary_max": 120000,
            "experience_required": 3,
            "required_skills": ["React", "TypeScript"],
            "education_required": ["Bachelor"],
            "industry": "Software",
            "job_type": "Full-time",
            "description": "Build and ship product UI.",
            "posted_at": datetime(2026, 1, 10, tzinfo=UTC),
        }
        data.update(overrides)
        return Job(**data)

    return _make


@pytest.fixture
def make_criteria():
    """Factory for match criteria that fit `make_job` defaults."""
    from src.scoring.models import MatchCriteria

    def _make(**overrides) -> MatchCriteria:
        data = {
            "skills": ["React", "TypeScript"],
            "experience": 5,
            "education": ["Bachelor of Science"],
            "location": "Berlin",
            "salary_range": (100000, 120000),
            "job_types": ["full-time"],
            "industries": ["software"],
            "remote": True,
        }
        data.update(overrides)
        return MatchCriteria.build(**data)

    return _make


@pytest.fixture
def scoring_config():
    """Scoring config isolated from any local .env file."""
    from src.scoring.config import ScoringConfig

    return ScoringConfig(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def recommendation_settings():
    """Recommendation settings isolated from any local .env file."""
    from src.recommendations.config import RecommendationSettings

    return RecommendationSettings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def engine(scoring_config, recommendation_settings):
    """Recommendation engine with default, env-independent settings."""
    from src.recommendations.service import RecommendationEngine

    return RecommendationEngine(
        scoring_config=scoring_config, settings=recommendation_settings
    )
