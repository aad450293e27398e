"""Recommendation engine: rank a job pool for one candidate."""

from __future__ import annotations

from collections.abc import Sequence

from src.recommendations.config import RecommendationConfig, RecommendationSettings
from src.recommendations.insights import Insights, generate_insights
from src.recommendations.scenarios import scenario_weights
from src.scoring.config import ScoringConfig, WeightVector
from src.scoring.errors import ValidationError
from src.scoring.models import Job, Match, MatchCriteria
from src.scoring.service import FitScoringService
from src.utils.logging import get_logger

logger = get_logger("recommendations")


def ranking_key(match: Match) -> tuple[float, float, float, str]:
    """Sort key: overall desc, confidence desc, newest first, then job id."""
    return (
        -match.fit_score.overall,
        -match.fit_score.confidence,
        -match.job.posted_timestamp,
        match.job.id,
    )


class RecommendationEngine:
    """Score, filter and rank a job pool against one candidate's criteria.

    The engine holds configuration only; every call recomputes from its
    inputs, so one instance can be shared between concurrent callers.
    """

    def __init__(
        self,
        scoring_config: ScoringConfig | None = None,
        settings: RecommendationSettings | None = None,
    ) -> None:
        self.scoring = FitScoringService(config=scoring_config)
        self.settings = settings or RecommendationSettings()

    def default_config(self) -> RecommendationConfig:
        """Recommendation config built from the engine's settings."""
        return self.settings.to_config()

    def score_pool(
        self,
        criteria: MatchCriteria,
        jobs: Sequence[Job],
        weights: WeightVector | None = None,
    ) -> list[Match]:
        """Evaluate every job in the pool (unfiltered, in input order)."""
        return [self.scoring.evaluate(criteria, job, weights) for job in jobs]

    def generate_recommendations(
        self,
        criteria: MatchCriteria,
        jobs: Sequence[Job],
        config: RecommendationConfig | None = None,
    ) -> list[Match]:
        """Return the top matches that clear the config's thresholds.

        Matches are ranked by `ranking_key` and truncated to
        `config.max_recommendations`. Raises ValidationError before scoring
        if the config is not a RecommendationConfig.
        """
        config = self._resolve_config(config)

        matches = self.score_pool(criteria, jobs, config.weights)
        kept = [
            match
            for match in matches
            if match.fit_score.overall >= config.min_fit_score
            and match.fit_score.confidence >= config.min_confidence
        ]
        kept.sort(key=ranking_key)
        results = kept[: config.max_recommendations]

        logger.info(
            f"Scored {len(matches)} job(s): {len(kept)} passed thresholds "
            f"(min_fit_score={config.min_fit_score}, "
            f"min_confidence={config.min_confidence}), returning {len(results)}"
        )
        return results

    def generate_insights(self, matches: Sequence[Match]) -> Insights:
        """Aggregate statistics over a ranked match list."""
        return generate_insights(
            list(matches),
            top_gaps=self.settings.insights_top_gaps,
            top_skills=self.settings.insights_top_skills,
            top_industries=self.settings.insights_top_industries,
            top_locations=self.settings.insights_top_locations,
        )

    def get_scenario_recommendations(
        self,
        criteria: MatchCriteria,
        jobs: Sequence[Job],
        config: RecommendationConfig | None = None,
    ) -> dict[str, list[Match]]:
        """Re-run the ranking once per weight preset.

        Each scenario uses the thresholds of `config` with its own weights;
        a `weights` value on `config` is ignored here.
        """
        config = self._resolve_config(config)

        results: dict[str, list[Match]] = {}
        for name, weights in scenario_weights(self.scoring.config).items():
            scenario_config = RecommendationConfig(
                max_recommendations=config.max_recommendations,
                min_fit_score=config.min_fit_score,
                min_confidence=config.min_confidence,
                weights=weights,
            )
            results[name] = self.generate_recommendations(
                criteria, jobs, scenario_config
            )
            logger.debug(f"Scenario {name}: {len(results[name])} match(es)")
        return results

    def _resolve_config(
        self, config: RecommendationConfig | None
    ) -> RecommendationConfig:
        if config is None:
            return self.default_config()
        if not isinstance(config, RecommendationConfig):
            raise ValidationError(
                "config must be a RecommendationConfig "
                f"(got {type(config).__name__})"
            )
        return config


def generate_recommendations(
    criteria: MatchCriteria,
    jobs: Sequence[Job],
    config: RecommendationConfig | None = None,
) -> list[Match]:
    """Rank a job pool with default scoring settings."""
    return RecommendationEngine().generate_recommendations(criteria, jobs, config)


def get_scenario_recommendations(
    criteria: MatchCriteria,
    jobs: Sequence[Job],
    config: RecommendationConfig | None = None,
) -> dict[str, list[Match]]:
    """Rank a job pool once per scenario preset with default scoring settings."""
    return RecommendationEngine().get_scenario_recommendations(criteria, jobs, config)
