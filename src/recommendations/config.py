"""Configuration for recommendation runs."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.scoring.config import WeightVector
from src.scoring.errors import ValidationError
from src.scoring.service import coerce_weights


@dataclass(frozen=True)
class RecommendationConfig:
    """Thresholds and limits for one recommendation run.

    Validated on construction; an invalid config raises `ValidationError`
    before any job is scored.
    """

    max_recommendations: int = 20
    min_fit_score: float = 30.0
    min_confidence: float = 0.4
    weights: WeightVector | Mapping[str, float] | None = None

    def __post_init__(self) -> None:
        if isinstance(self.max_recommendations, bool) or not isinstance(
            self.max_recommendations, int
        ):
            raise ValidationError(
                "max_recommendations must be an integer "
                f"(got {self.max_recommendations!r})"
            )
        if self.max_recommendations <= 0:
            raise ValidationError(
                f"max_recommendations must be > 0 (got {self.max_recommendations})"
            )
        if not _in_range(self.min_fit_score, 0.0, 100.0):
            raise ValidationError(
                f"min_fit_score must be between 0 and 100 (got {self.min_fit_score})"
            )
        if not _in_range(self.min_confidence, 0.0, 1.0):
            raise ValidationError(
                f"min_confidence must be between 0.0 and 1.0 (got {self.min_confidence})"
            )
        if self.weights is not None:
            # Normalize mappings into a validated, immutable vector.
            vector = coerce_weights(self.weights)
            object.__setattr__(self, "weights", vector)


def _in_range(value: object, low: float, high: float) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and low <= value <= high


class RecommendationSettings(BaseSettings):
    """Default recommendation settings.

    All settings can be overridden via environment variables with the
    `RECOMMEND_` prefix or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="RECOMMEND_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    max_recommendations: Annotated[int, Field(gt=0)] = Field(
        default=20,
        description="Maximum matches returned per run",
    )
    min_fit_score: Annotated[float, Field(ge=0.0, le=100.0)] = Field(
        default=30.0,
        description="Discard matches with an overall score below this",
    )
    min_confidence: Annotated[float, Field(ge=0.0, le=1.0)] = Field(
        default=0.4,
        description="Discard matches with a confidence below this",
    )

    # Insight list caps
    insights_top_gaps: Annotated[int, Field(gt=0)] = 3
    insights_top_skills: Annotated[int, Field(gt=0)] = 10
    insights_top_industries: Annotated[int, Field(gt=0)] = 5
    insights_top_locations: Annotated[int, Field(gt=0)] = 5

    def to_config(self, **overrides: object) -> RecommendationConfig:
        """Build a RecommendationConfig from these defaults."""
        values: dict[str, object] = {
            "max_recommendations": self.max_recommendations,
            "min_fit_score": self.min_fit_score,
            "min_confidence": self.min_confidence,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return RecommendationConfig(**values)  # type: ignore[arg-type]
