"""Per-dimension scorers.

Every scorer is a pure function of `(MatchCriteria, Job)` returning a
`DimensionScore` in [0, 1]. A score of 0 is a normal "no match" result,
never an error. Scorers mark `low_evidence=True` when the value was
defaulted because the data needed to compare was missing.
"""

from __future__ import annotations

from collections.abc import Callable

from src.scoring.config import ScoringConfig
from src.scoring.matchers import (
    credential_satisfies,
    find_matching_skills,
    normalize_label,
)
from src.scoring.models import Dimension, DimensionScore, Job, MatchCriteria

NEUTRAL_SCORE = 0.5

DimensionScorer = Callable[[MatchCriteria, Job, ScoringConfig], DimensionScore]


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


def _format_years(value: float) -> str:
    return f"{value:g}"


def score_skills(
    criteria: MatchCriteria, job: Job, config: ScoringConfig
) -> DimensionScore:
    """Fraction of the job's required skills the candidate holds."""
    matched, missing = find_matching_skills(job.required_skills, criteria.skills)
    total = len(matched) + len(missing)

    if total == 0:
        return DimensionScore(1.0, "No required skills listed", low_evidence=True)
    if not criteria.skills:
        return DimensionScore(
            0.0,
            f"No candidate skills to compare; missing {', '.join(missing)}",
            low_evidence=True,
        )

    score = len(matched) / max(1, total)
    if missing:
        evidence = (
            f"Matched {len(matched)}/{total} required skills; "
            f"missing {', '.join(missing)}"
        )
    else:
        evidence = f"Matched all {total} required skills ({', '.join(matched)})"
    return DimensionScore(score, evidence)


def score_experience(
    criteria: MatchCriteria, job: Job, config: ScoringConfig
) -> DimensionScore:
    """Compare years of experience against the requirement.

    Meeting the requirement scores 1.0 minus a per-year decay for excess
    experience, never below `experience_decay_floor`. Falling short scores
    the ratio of held to required years.
    """
    years = criteria.experience
    required = job.experience_required

    if required is None:
        return DimensionScore(
            1.0, "No experience requirement listed", low_evidence=True
        )
    if required == 0:
        return DimensionScore(1.0, "No experience required")

    if years >= required:
        excess = years - required
        score = max(
            config.experience_decay_floor,
            1.0 - config.experience_decay_per_year * excess,
        )
        if excess == 0:
            evidence = f"Meets the {_format_years(required)}-year requirement exactly"
        else:
            evidence = (
                f"{_format_years(years)} years against {_format_years(required)} "
                f"required ({_format_years(excess)} above)"
            )
        return DimensionScore(_clamp(score), evidence)

    score = years / max(1.0, required)
    return DimensionScore(
        _clamp(score),
        f"{_format_years(years)} years against {_format_years(required)} required "
        f"({_format_years(required - years)} short)",
    )


def score_education(
    criteria: MatchCriteria, job: Job, config: ScoringConfig
) -> DimensionScore:
    """All-or-nothing credential containment check."""
    required = [r for r in job.education_required if normalize_label(r)]
    if not required:
        return DimensionScore(
            1.0, "No education requirement listed", low_evidence=True
        )

    for held in criteria.education:
        for wanted in required:
            if credential_satisfies(held, wanted):
                return DimensionScore(1.0, f"'{held}' satisfies '{wanted}'")

    if not criteria.education:
        return DimensionScore(
            0.0,
            f"No credentials listed; requires {', '.join(required)}",
            low_evidence=True,
        )
    return DimensionScore(0.0, f"No credential satisfies {', '.join(required)}")


def score_location(
    criteria: MatchCriteria, job: Job, config: ScoringConfig
) -> DimensionScore:
    """Remote acceptance or exact (case-insensitive) location match."""
    if job.remote and criteria.remote:
        return DimensionScore(1.0, "Remote role and candidate accepts remote work")

    job_location = normalize_label(job.location)
    candidate_location = normalize_label(criteria.location)

    if not job_location:
        if job.remote:
            return DimensionScore(0.0, "Remote role but candidate does not accept remote")
        return DimensionScore(0.0, "Job location is missing", low_evidence=True)
    if not candidate_location:
        return DimensionScore(
            0.0, "Candidate location is missing", low_evidence=True
        )
    if job_location == candidate_location:
        return DimensionScore(1.0, f"Located in {job.location.strip()}")

    if job.remote:
        return DimensionScore(
            0.0,
            f"Remote role based in {job.location.strip()}, "
            "and candidate does not accept remote",
        )
    return DimensionScore(
        0.0,
        f"Job is in {job.location.strip()}, candidate is in {criteria.location}",
    )


def score_salary(
    criteria: MatchCriteria, job: Job, config: ScoringConfig
) -> DimensionScore:
    """Share of the candidate's salary range covered by the job's range.

    A missing bound on one side of the job range is treated as open-ended.
    A fixed job salary covers none of a wider candidate range; a fixed
    candidate salary scores 1.0 when the job range contains it.
    """
    if not job.has_salary:
        return DimensionScore(
            NEUTRAL_SCORE, "Salary not disclosed", low_evidence=True
        )
    if criteria.salary_range is None:
        return DimensionScore(1.0, "No salary preference given", low_evidence=True)

    cand_min, cand_max = criteria.salary_range
    job_min = job.salary_min if job.salary_min is not None else 0.0
    job_max = job.salary_max if job.salary_max is not None else float("inf")

    candidate_span = cand_max - cand_min
    if candidate_span == 0:
        score = 1.0 if job_min <= cand_min <= job_max else 0.0
    else:
        overlap = min(cand_max, job_max) - max(cand_min, job_min)
        score = _clamp(overlap / candidate_span)

    job_range = _format_salary_range(job.salary_min, job.salary_max)
    if score == 0.0:
        evidence = (
            f"Job pays {job_range}, covering none of the desired "
            f"{cand_min:,.0f}-{cand_max:,.0f}"
        )
    else:
        evidence = (
            f"Job pays {job_range}, covering {score:.0%} of the desired "
            f"{cand_min:,.0f}-{cand_max:,.0f}"
        )
    return DimensionScore(score, evidence)


def _format_salary_range(low: float | None, high: float | None) -> str:
    if low is None:
        return f"up to {high:,.0f}"
    if high is None:
        return f"from {low:,.0f}"
    return f"{low:,.0f}-{high:,.0f}"


def _score_membership(
    *, preferred: frozenset[str], value: str | None, label: str
) -> DimensionScore:
    if not preferred:
        return DimensionScore(1.0, f"No {label} preference given", low_evidence=True)

    token = normalize_label(value)
    if not token:
        return DimensionScore(
            NEUTRAL_SCORE, f"Job {label} not listed", low_evidence=True
        )
    if token in preferred:
        return DimensionScore(1.0, f"{value.strip()} is a preferred {label}")
    return DimensionScore(0.0, f"{value.strip()} is not a preferred {label}")


def score_industry(
    criteria: MatchCriteria, job: Job, config: ScoringConfig
) -> DimensionScore:
    """Exact membership of the job's industry in the preferred set."""
    return _score_membership(
        preferred=criteria.industries, value=job.industry, label="industry"
    )


def score_job_type(
    criteria: MatchCriteria, job: Job, config: ScoringConfig
) -> DimensionScore:
    """Exact membership of the job's type in the preferred set."""
    return _score_membership(
        preferred=criteria.job_types, value=job.job_type, label="job type"
    )


SCORERS: dict[Dimension, DimensionScorer] = {
    Dimension.SKILLS: score_skills,
    Dimension.EXPERIENCE: score_experience,
    Dimension.EDUCATION: score_education,
    Dimension.LOCATION: score_location,
    Dimension.SALARY: score_salary,
    Dimension.INDUSTRY: score_industry,
    Dimension.JOB_TYPE: score_job_type,
}


def score_dimensions(
    criteria: MatchCriteria, job: Job, config: ScoringConfig
) -> dict[Dimension, DimensionScore]:
    """Run every dimension scorer for one job."""
    return {dim: scorer(criteria, job, config) for dim, scorer in SCORERS.items()}
