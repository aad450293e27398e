"""Named weight presets for what-if re-ranking."""

from __future__ import annotations

from src.scoring.config import ScoringConfig, WeightVector

BALANCED = "balanced"

SCENARIO_PRESETS: dict[str, WeightVector] = {
    "skills-first": WeightVector(
        skills=0.50,
        experience=0.20,
        education=0.10,
        location=0.08,
        salary=0.07,
        industry=0.05,
    ),
    "salary-first": WeightVector(
        skills=0.20,
        experience=0.15,
        education=0.05,
        location=0.10,
        salary=0.45,
        industry=0.05,
    ),
    "location-first": WeightVector(
        skills=0.20,
        experience=0.15,
        education=0.05,
        location=0.45,
        salary=0.10,
        industry=0.05,
    ),
    "growth": WeightVector(
        skills=0.25,
        experience=0.35,
        education=0.20,
        location=0.05,
        salary=0.05,
        industry=0.10,
    ),
}


def scenario_weights(config: ScoringConfig) -> dict[str, WeightVector]:
    """Return every scenario in run order, `balanced` first.

    `balanced` is the configured default weight vector.
    """
    return {BALANCED: config.weights, **SCENARIO_PRESETS}
