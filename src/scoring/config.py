"""Configuration settings for the Fit Scoring system."""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_WEIGHT_TOLERANCE = 1e-6

Weight = Annotated[float, Field(ge=0.0, le=1.0)]


class WeightVector(BaseModel):
    """Relative importance of each fit component (must sum to 1.0)."""

    model_config = ConfigDict(frozen=True)

    skills: Weight
    experience: Weight
    education: Weight
    location: Weight
    salary: Weight
    industry: Weight

    @model_validator(mode="after")
    def validate_weights_sum_to_one(self) -> WeightVector:
        """Ensure weights sum to 1.0 (within tolerance)."""
        weight_sum = (
            self.skills
            + self.experience
            + self.education
            + self.location
            + self.salary
            + self.industry
        )
        if abs(weight_sum - 1.0) > _WEIGHT_TOLERANCE:
            raise ValueError(
                "Scoring weights must sum to 1.0. "
                f"Got {weight_sum:.6f} "
                f"(skills={self.skills}, experience={self.experience}, "
                f"education={self.education}, location={self.location}, "
                f"salary={self.salary}, industry={self.industry})."
            )
        return self


class ScoringConfig(BaseSettings):
    """Fit scoring configuration settings.

    All settings have sensible defaults and can be overridden via
    environment variables with `SCORING_` prefix or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SCORING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Scoring weights (must sum to 1.0)
    weight_skills: Weight = Field(
        default=0.30,
        description="Weight for required skills match",
    )
    weight_experience: Weight = Field(
        default=0.25,
        description="Weight for experience match",
    )
    weight_location: Weight = Field(
        default=0.15,
        description="Weight for location / remote match",
    )
    weight_salary: Weight = Field(
        default=0.15,
        description="Weight for salary range overlap",
    )
    weight_education: Weight = Field(
        default=0.10,
        description="Weight for education match",
    )
    weight_industry: Weight = Field(
        default=0.05,
        description="Weight for industry / job type match",
    )

    # Narrative thresholds (dimension values in [0, 1])
    strong_threshold: Weight = Field(
        default=0.75,
        description="Dimension value at or above which a reason is emitted",
    )
    weak_threshold: Weight = Field(
        default=0.40,
        description="Dimension value at or below which an improvement is emitted",
    )

    # Experience shaping
    experience_decay_per_year: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.025,
        description="Score lost per year of experience beyond the requirement",
    )
    experience_decay_floor: Weight = Field(
        default=0.80,
        description="Lowest score an over-qualified candidate can receive",
    )

    # Confidence shaping
    missing_field_confidence_penalty: Weight = Field(
        default=0.05,
        description="Confidence multiplier loss per missing high-value job field",
    )
    industry_job_type_blend: Weight = Field(
        default=0.5,
        description="Share of the industry component taken from the industry scorer",
    )

    # Tier thresholds (overall in [0, 100], confidence in [0, 1])
    perfect_match_score: Annotated[float, Field(ge=0.0, le=100.0)] = 90.0
    perfect_match_confidence: Weight = 0.8
    good_match_score: Annotated[float, Field(ge=0.0, le=100.0)] = 70.0
    good_match_confidence: Weight = 0.6
    explore_score: Annotated[float, Field(ge=0.0, le=100.0)] = 50.0
    explore_confidence: Weight = 0.5

    @model_validator(mode="after")
    def validate_settings(self) -> ScoringConfig:
        """Ensure weights sum to 1.0 and thresholds are ordered."""
        weight_sum = (
            self.weight_skills
            + self.weight_experience
            + self.weight_education
            + self.weight_location
            + self.weight_salary
            + self.weight_industry
        )
        if abs(weight_sum - 1.0) > _WEIGHT_TOLERANCE:
            raise ValueError(
                f"Scoring weights must sum to 1.0. Got {weight_sum:.6f}."
            )
        if self.weak_threshold >= self.strong_threshold:
            raise ValueError(
                "weak_threshold must be below strong_threshold "
                f"(weak={self.weak_threshold}, strong={self.strong_threshold})."
            )
        return self

    @property
    def weights(self) -> WeightVector:
        """Default weight vector built from the `weight_*` settings."""
        return WeightVector(
            skills=self.weight_skills,
            experience=self.weight_experience,
            education=self.weight_education,
            location=self.weight_location,
            salary=self.weight_salary,
            industry=self.weight_industry,
        )
