"""Job fit scoring.

This module compares a candidate's match criteria against a job posting
along seven dimensions and combines them into a 0-100 fit score with a
confidence value and a human-readable narrative.

Public API:
    - FitScoringService: Dimension scoring, aggregation and narrative
    - score_job: Score one job with default settings
    - ProfileService: Load profiles and job pools from disk
    - CandidateProfile / Job / MatchCriteria: Input models
    - FitScore / Match / DimensionScore: Output models
    - ScoringConfig / WeightVector: Configuration
    - ValidationError: Malformed criteria, weights or config
"""

from src.scoring.config import ScoringConfig, WeightVector
from src.scoring.errors import ValidationError
from src.scoring.models import (
    CandidatePreferences,
    CandidateProfile,
    DataQualityWarning,
    Dimension,
    DimensionScore,
    FitScore,
    Job,
    Match,
    MatchCriteria,
)
from src.scoring.profile import ProfileService
from src.scoring.service import FitScoringService, score_job

__all__ = [
    "FitScoringService",
    "score_job",
    "ProfileService",
    "CandidatePreferences",
    "CandidateProfile",
    "Job",
    "MatchCriteria",
    "Dimension",
    "DimensionScore",
    "FitScore",
    "Match",
    "DataQualityWarning",
    "ScoringConfig",
    "WeightVector",
    "ValidationError",
]
