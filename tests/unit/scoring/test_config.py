"""Tests for scoring configuration."""

import pytest


class TestScoringConfig:
    """Test ScoringConfig settings."""

    def test_scoring_config_has_defaults(self):
        """ScoringConfig should load with sensible defaults."""
        from src.scoring.config import ScoringConfig

        config = ScoringConfig(_env_file=None)  # type: ignore[call-arg]

        assert config.weight_skills == 0.30
        assert config.weight_experience == 0.25
        assert config.weight_location == 0.15
        assert config.weight_salary == 0.15
        assert config.weight_education == 0.10
        assert config.weight_industry == 0.05

        assert config.strong_threshold == 0.75
        assert config.weak_threshold == 0.40
        assert config.experience_decay_per_year == 0.025
        assert config.experience_decay_floor == 0.80
        assert config.missing_field_confidence_penalty == 0.05

    def test_skills_and_experience_weigh_most(self):
        from src.scoring.config import ScoringConfig

        weights = ScoringConfig(_env_file=None).weights  # type: ignore[call-arg]
        others = (weights.education, weights.location, weights.salary, weights.industry)

        assert all(weights.skills > w and weights.experience > w for w in others)

    def test_scoring_config_reads_from_environment_variables(self, monkeypatch):
        """ScoringConfig should read from environment variables."""
        from src.scoring.config import ScoringConfig

        monkeypatch.setenv("SCORING_STRONG_THRESHOLD", "0.8")
        monkeypatch.setenv("SCORING_WEAK_THRESHOLD", "0.3")
        monkeypatch.setenv("SCORING_WEIGHT_SKILLS", "0.35")
        monkeypatch.setenv("SCORING_WEIGHT_INDUSTRY", "0.0")

        config = ScoringConfig(_env_file=None)  # type: ignore[call-arg]

        assert config.strong_threshold == 0.8
        assert config.weak_threshold == 0.3
        assert config.weights.skills == 0.35
        assert config.weights.industry == 0.0

    def test_weights_must_sum_to_one(self):
        from src.scoring.config import ScoringConfig

        with pytest.raises(ValueError, match="sum to 1.0"):
            ScoringConfig(_env_file=None, weight_skills=0.9)  # type: ignore[call-arg]

    def test_weak_threshold_must_be_below_strong(self):
        from src.scoring.config import ScoringConfig

        with pytest.raises(ValueError):
            ScoringConfig(  # type: ignore[call-arg]
                _env_file=None, strong_threshold=0.5, weak_threshold=0.6
            )

    def test_threshold_out_of_range_raises(self):
        from src.scoring.config import ScoringConfig

        with pytest.raises(ValueError):
            ScoringConfig(_env_file=None, strong_threshold=1.5)  # type: ignore[call-arg]


class TestWeightVector:
    """Test WeightVector validation."""

    def test_weight_vector_accepts_valid_weights(self):
        from src.scoring.config import WeightVector

        vector = WeightVector(
            skills=1.0, experience=0, education=0, location=0, salary=0, industry=0
        )

        assert vector.skills == 1.0

    def test_weight_vector_rejects_bad_sum(self):
        from src.scoring.config import WeightVector

        with pytest.raises(ValueError, match="sum to 1.0"):
            WeightVector(
                skills=0.5, experience=0.1, education=0, location=0, salary=0, industry=0
            )

    def test_weight_vector_rejects_negative_weight(self):
        from src.scoring.config import WeightVector

        with pytest.raises(ValueError):
            WeightVector(
                skills=1.2,
                experience=-0.2,
                education=0,
                location=0,
                salary=0,
                industry=0,
            )
