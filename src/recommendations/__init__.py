"""Job recommendations.

Runs the fit scorer across a whole job pool for one candidate, filters by
score and confidence thresholds, ranks deterministically, summarizes the
result, and re-ranks under alternate weighting scenarios.

Public API:
    - RecommendationEngine: Ranking, insights and scenarios
    - generate_recommendations / get_scenario_recommendations: Shortcuts
    - RecommendationConfig / RecommendationSettings: Run configuration
    - Insights / generate_insights: Aggregate statistics
    - SCENARIO_PRESETS: Named weight presets
"""

from src.recommendations.config import RecommendationConfig, RecommendationSettings
from src.recommendations.insights import Insights, generate_insights
from src.recommendations.scenarios import SCENARIO_PRESETS
from src.recommendations.service import (
    RecommendationEngine,
    generate_recommendations,
    get_scenario_recommendations,
    ranking_key,
)

__all__ = [
    "RecommendationEngine",
    "generate_recommendations",
    "get_scenario_recommendations",
    "ranking_key",
    "RecommendationConfig",
    "RecommendationSettings",
    "Insights",
    "generate_insights",
    "SCENARIO_PRESETS",
]
