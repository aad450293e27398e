"""Fit scoring service implementation."""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import ValidationError as PydanticValidationError

from src.scoring.config import ScoringConfig, WeightVector
from src.scoring.dimensions import score_dimensions
from src.scoring.errors import ValidationError
from src.scoring.models import (
    COMPONENTS,
    DataQualityWarning,
    Dimension,
    DimensionScore,
    FitScore,
    Job,
    Match,
    MatchCriteria,
    Tier,
)
from src.utils.logging import get_logger

logger = get_logger("scoring")

_IMPROVEMENT_ADVICE: dict[Dimension, str] = {
    Dimension.SKILLS: "Develop the required skills",
    Dimension.EXPERIENCE: "Gain more relevant experience",
    Dimension.EDUCATION: "Consider additional education or certifications",
    Dimension.SALARY: "Consider adjusting salary expectations or negotiating",
    Dimension.LOCATION: "Consider relocating or looking for remote opportunities",
    Dimension.INDUSTRY: "Consider broadening industry or job type preferences",
}


def coerce_weights(
    weights: WeightVector | Mapping[str, float] | None,
    default: WeightVector | None = None,
) -> WeightVector | None:
    """Return a validated weight vector, raising ValidationError if malformed.

    `None` resolves to `default`.
    """
    if weights is None:
        return default
    if isinstance(weights, WeightVector):
        return weights
    if isinstance(weights, Mapping):
        try:
            return WeightVector.model_validate(dict(weights))
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid weight vector: {e}") from e
    raise ValidationError(
        f"weights must be a WeightVector or mapping (got {type(weights).__name__})"
    )


class FitScoringService:
    """Service for computing fit scores and match narratives."""

    def __init__(self, config: ScoringConfig | None = None) -> None:
        self.config = config or ScoringConfig()

    def score_dimensions(
        self, criteria: MatchCriteria, job: Job
    ) -> dict[Dimension, DimensionScore]:
        """Evaluate all seven dimensions for a job."""
        return score_dimensions(criteria, job, self.config)

    def component_scores(
        self, dimensions: dict[Dimension, DimensionScore]
    ) -> dict[Dimension, DimensionScore]:
        """Collapse the seven dimensions into the six weighted components.

        The industry component blends the industry and job type scorers.
        """
        blend = self.config.industry_job_type_blend
        industry = dimensions[Dimension.INDUSTRY]
        job_type = dimensions[Dimension.JOB_TYPE]
        combined = DimensionScore(
            value=min(1.0, blend * industry.value + (1.0 - blend) * job_type.value),
            evidence=f"{industry.evidence}; {job_type.evidence}",
            low_evidence=industry.low_evidence and job_type.low_evidence,
        )

        components = {dim: dimensions[dim] for dim in COMPONENTS}
        components[Dimension.INDUSTRY] = combined
        return components

    def compute_confidence(
        self, dimensions: dict[Dimension, DimensionScore], job: Job
    ) -> float:
        """Share of dimensions backed by real data, less missing-field penalties."""
        if not dimensions:
            return 0.0
        grounded = sum(1 for score in dimensions.values() if not score.low_evidence)
        confidence = grounded / len(dimensions)

        penalty = self.config.missing_field_confidence_penalty
        if not job.has_salary:
            confidence *= 1.0 - penalty
        if not (job.description or "").strip():
            confidence *= 1.0 - penalty

        return round(min(1.0, max(0.0, confidence)), 4)

    def calculate_fit_score(
        self,
        job: Job,
        dimensions: dict[Dimension, DimensionScore],
        weights: WeightVector,
    ) -> FitScore:
        """Calculate the weighted fit score with its component breakdown."""
        components = self.component_scores(dimensions)
        values = {dim: components[dim].value for dim in COMPONENTS}

        total = sum(
            getattr(weights, dim.value) * values[dim] for dim in COMPONENTS
        )
        overall = round(min(100.0, max(0.0, 100.0 * total)), 2)

        return FitScore(
            overall=overall,
            skills=round(100.0 * values[Dimension.SKILLS], 2),
            experience=round(100.0 * values[Dimension.EXPERIENCE], 2),
            location=round(100.0 * values[Dimension.LOCATION], 2),
            salary=round(100.0 * values[Dimension.SALARY], 2),
            education=round(100.0 * values[Dimension.EDUCATION], 2),
            industry=round(100.0 * values[Dimension.INDUSTRY], 2),
            confidence=self.compute_confidence(dimensions, job),
        )

    def score_job(
        self,
        criteria: MatchCriteria,
        job: Job,
        weights: WeightVector | Mapping[str, float] | None = None,
    ) -> FitScore:
        """Score one job against the criteria."""
        vector = coerce_weights(weights, self.config.weights)
        dimensions = self.score_dimensions(criteria, job)
        return self.calculate_fit_score(job, dimensions, vector)

    def build_narrative(
        self, components: dict[Dimension, DimensionScore]
    ) -> tuple[list[str], list[str], list[Dimension]]:
        """Return reasons, improvements, and the gap dimensions behind them.

        Reasons are ordered by descending score and improvements by
        ascending score; ties follow the component priority order.
        """
        priority = {dim: index for index, dim in enumerate(COMPONENTS)}

        strong = [
            dim
            for dim in COMPONENTS
            if components[dim].value >= self.config.strong_threshold
        ]
        strong.sort(key=lambda dim: (-components[dim].value, priority[dim]))

        weak = [
            dim
            for dim in COMPONENTS
            if components[dim].value <= self.config.weak_threshold
        ]
        weak.sort(key=lambda dim: (components[dim].value, priority[dim]))

        reasons = [
            f"Strong {dim.label} fit: {components[dim].evidence}" for dim in strong
        ]
        improvements = [
            f"{_IMPROVEMENT_ADVICE[dim]}: {components[dim].evidence}" for dim in weak
        ]
        return reasons, improvements, weak

    def determine_tier(self, fit_score: FitScore) -> Tier:
        """Bucket a fit score into a recommendation tier."""
        cfg = self.config
        if (
            fit_score.overall >= cfg.perfect_match_score
            and fit_score.confidence >= cfg.perfect_match_confidence
        ):
            return "perfect_match"
        if (
            fit_score.overall >= cfg.good_match_score
            and fit_score.confidence >= cfg.good_match_confidence
        ):
            return "good_match"
        if (
            fit_score.overall >= cfg.explore_score
            and fit_score.confidence >= cfg.explore_confidence
        ):
            return "explore"
        return "stretch"

    def generate_tags(self, job: Job, fit_score: FitScore) -> list[str]:
        """Short labels summarizing what stands out about a match."""
        tags: list[str] = []
        if fit_score.overall >= self.config.perfect_match_score:
            tags.append("High Match")
        if fit_score.confidence >= self.config.perfect_match_confidence:
            tags.append("High Confidence")
        if fit_score.salary > 70:
            tags.append("Salary Match")
        if fit_score.location > 70:
            tags.append("Location Match")
        if job.remote:
            tags.append("Remote")
        if job.industry and job.industry.strip():
            tags.append(job.industry.strip())
        if job.job_type and job.job_type.strip():
            tags.append(job.job_type.strip())
        return tags

    def collect_warnings(self, job: Job) -> list[DataQualityWarning]:
        """List the job fields whose absence lowered confidence."""
        missing: list[tuple[str, str]] = []
        if not job.required_skills:
            missing.append(("required_skills", "No required skills listed"))
        if job.experience_required is None:
            missing.append(("experience_required", "Experience requirement missing"))
        if not job.education_required:
            missing.append(("education_required", "Education requirement missing"))
        if not job.remote and not (job.location or "").strip():
            missing.append(("location", "Location missing for an on-site job"))
        if not job.has_salary:
            missing.append(("salary", "Salary range not disclosed"))
        if not (job.industry or "").strip():
            missing.append(("industry", "Industry missing"))
        if not (job.job_type or "").strip():
            missing.append(("job_type", "Job type missing"))
        if not (job.description or "").strip():
            missing.append(("description", "Description missing"))

        return [
            DataQualityWarning(job_id=job.id, field=name, message=message)
            for name, message in missing
        ]

    def evaluate(
        self,
        criteria: MatchCriteria,
        job: Job,
        weights: WeightVector | Mapping[str, float] | None = None,
    ) -> Match:
        """Run full evaluation: dimension scores, fit score, and narrative."""
        vector = coerce_weights(weights, self.config.weights)
        dimensions = self.score_dimensions(criteria, job)
        fit_score = self.calculate_fit_score(job, dimensions, vector)
        reasons, improvements, gaps = self.build_narrative(
            self.component_scores(dimensions)
        )
        warnings = self.collect_warnings(job)
        if warnings:
            logger.debug(
                f"Job {job.id} has data quality gaps: "
                f"{', '.join(w.field for w in warnings)}"
            )
        logger.debug(
            f"Scored job {job.id}: overall={fit_score.overall:.2f} "
            f"confidence={fit_score.confidence:.2f}"
        )

        return Match(
            job=job,
            fit_score=fit_score,
            reasons=reasons,
            improvements=improvements,
            gaps=gaps,
            dimensions=dimensions,
            tier=self.determine_tier(fit_score),
            tags=self.generate_tags(job, fit_score),
            warnings=warnings,
        )

    def format_match(self, match: Match) -> str:
        """Format a Match for CLI output."""
        job = match.job
        score = match.fit_score
        lines: list[str] = []
        title = job.title or job.id
        lines.append(f"{job.company} - {title}" if job.company else title)
        lines.append(
            f"Tier: {match.tier.upper()} "
            f"(overall={score.overall:.2f}, confidence={score.confidence:.2f})"
        )
        lines.append(
            "Scores: "
            f"skills={score.skills:.0f} "
            f"experience={score.experience:.0f} "
            f"education={score.education:.0f} "
            f"location={score.location:.0f} "
            f"salary={score.salary:.0f} "
            f"industry={score.industry:.0f}"
        )
        if match.tags:
            lines.append(f"Tags: {', '.join(match.tags)}")
        for reason in match.reasons:
            lines.append(f"+ {reason}")
        for improvement in match.improvements:
            lines.append(f"- {improvement}")
        if match.warnings:
            lines.append(
                f"Data gaps: {', '.join(w.field for w in match.warnings)}"
            )
        return "\n".join(lines)


def score_job(
    criteria: MatchCriteria,
    job: Job,
    weights: WeightVector | Mapping[str, float] | None = None,
    config: ScoringConfig | None = None,
) -> FitScore:
    """Score one job with a fresh service (see `FitScoringService.score_job`)."""
    return FitScoringService(config=config).score_job(criteria, job, weights)
