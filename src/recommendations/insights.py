"""Aggregate statistics over a ranked match list."""

from __future__ import annotations

import statistics
from collections import Counter
from dataclasses import dataclass, field

from src.scoring.models import COMPONENTS, Dimension, Match

LOW_CONFIDENCE = 0.5
HIGH_CONFIDENCE = 0.8


@dataclass
class SalaryInsights:
    """Midpoint salary statistics across matches with a full salary range."""

    average: float = 0.0
    range: tuple[float, float] = (0.0, 0.0)
    sample_size: int = 0


@dataclass
class LocationInsights:
    remote_percentage: float = 0.0
    top_locations: list[str] = field(default_factory=list)


@dataclass
class Insights:
    """Summary of one recommendation list."""

    total_matches: int = 0
    tier_counts: dict[str, int] = field(default_factory=dict)
    mean_fit_score: float = 0.0
    median_fit_score: float = 0.0
    mean_confidence: float = 0.0
    median_confidence: float = 0.0
    confidence_distribution: dict[str, int] = field(
        default_factory=lambda: {"low": 0, "medium": 0, "high": 0}
    )
    top_gaps: list[tuple[Dimension, int]] = field(default_factory=list)
    top_skills: list[str] = field(default_factory=list)
    top_industries: list[str] = field(default_factory=list)
    salary: SalaryInsights = field(default_factory=SalaryInsights)
    location: LocationInsights = field(default_factory=LocationInsights)

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "total_matches": self.total_matches,
            "tier_counts": dict(self.tier_counts),
            "mean_fit_score": self.mean_fit_score,
            "median_fit_score": self.median_fit_score,
            "mean_confidence": self.mean_confidence,
            "median_confidence": self.median_confidence,
            "confidence_distribution": dict(self.confidence_distribution),
            "top_gaps": [
                {"dimension": dim.value, "count": count} for dim, count in self.top_gaps
            ],
            "top_skills": list(self.top_skills),
            "top_industries": list(self.top_industries),
            "salary": {
                "average": self.salary.average,
                "range": list(self.salary.range),
                "sample_size": self.salary.sample_size,
            },
            "location": {
                "remote_percentage": self.location.remote_percentage,
                "top_locations": list(self.location.top_locations),
            },
        }


def _ranked(counts: Counter[str], first_seen: dict[str, int], limit: int) -> list[str]:
    # Most frequent first; ties keep the order values first appeared in.
    ordered = sorted(counts, key=lambda key: (-counts[key], first_seen[key]))
    return ordered[:limit]


def _count(values: list[str]) -> tuple[Counter[str], dict[str, int]]:
    counts: Counter[str] = Counter()
    first_seen: dict[str, int] = {}
    for value in values:
        counts[value] += 1
        first_seen.setdefault(value, len(first_seen))
    return counts, first_seen


def generate_insights(
    matches: list[Match],
    *,
    top_gaps: int = 3,
    top_skills: int = 10,
    top_industries: int = 5,
    top_locations: int = 5,
) -> Insights:
    """Compute aggregate statistics across a match list.

    An empty list yields zeroed insights rather than an error.
    """
    if not matches:
        return Insights(tier_counts=_empty_tiers())

    fits = [m.fit_score.overall for m in matches]
    confidences = [m.fit_score.confidence for m in matches]

    tier_counts = _empty_tiers()
    for match in matches:
        tier_counts[match.tier] += 1

    distribution = {"low": 0, "medium": 0, "high": 0}
    for confidence in confidences:
        if confidence < LOW_CONFIDENCE:
            distribution["low"] += 1
        elif confidence < HIGH_CONFIDENCE:
            distribution["medium"] += 1
        else:
            distribution["high"] += 1

    gap_counts: Counter[Dimension] = Counter(gap for m in matches for gap in m.gaps)
    priority = {dim: index for index, dim in enumerate(COMPONENTS)}
    gaps = sorted(gap_counts, key=lambda dim: (-gap_counts[dim], priority[dim]))

    # Skills are counted case-insensitively but reported as first spelled.
    skill_display: dict[str, str] = {}
    skill_tokens: list[str] = []
    for match in matches:
        for skill in dict.fromkeys(s.strip() for s in match.job.required_skills):
            if not skill:
                continue
            token = skill.lower()
            skill_display.setdefault(token, skill)
            skill_tokens.append(token)
    skill_counts, skill_order = _count(skill_tokens)

    industry_counts, industry_order = _count(
        [m.job.industry.strip() for m in matches if (m.job.industry or "").strip()]
    )

    midpoints = [
        (m.job.salary_min + m.job.salary_max) / 2
        for m in matches
        if m.job.salary_min is not None and m.job.salary_max is not None
    ]
    salary = SalaryInsights()
    if midpoints:
        salary = SalaryInsights(
            average=round(statistics.fmean(midpoints), 2),
            range=(min(midpoints), max(midpoints)),
            sample_size=len(midpoints),
        )

    remote_jobs = sum(1 for m in matches if m.job.remote)
    location_counts, location_order = _count(
        [
            m.job.location.split(",")[0].strip()
            for m in matches
            if not m.job.remote and (m.job.location or "").strip()
        ]
    )

    return Insights(
        total_matches=len(matches),
        tier_counts=tier_counts,
        mean_fit_score=round(statistics.fmean(fits), 2),
        median_fit_score=round(statistics.median(fits), 2),
        mean_confidence=round(statistics.fmean(confidences), 4),
        median_confidence=round(statistics.median(confidences), 4),
        confidence_distribution=distribution,
        top_gaps=[(dim, gap_counts[dim]) for dim in gaps[:top_gaps]],
        top_skills=[
            skill_display[token]
            for token in _ranked(skill_counts, skill_order, top_skills)
        ],
        top_industries=_ranked(industry_counts, industry_order, top_industries),
        salary=salary,
        location=LocationInsights(
            remote_percentage=round(100.0 * remote_jobs / len(matches), 2),
            top_locations=_ranked(location_counts, location_order, top_locations),
        ),
    )


def _empty_tiers() -> dict[str, int]:
    return {"perfect_match": 0, "good_match": 0, "explore": 0, "stretch": 0}
