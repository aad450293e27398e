"""Data models for the Fit Scoring system."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.scoring.errors import ValidationError
from src.scoring.matchers import normalize_label, normalize_skill


class CandidatePreferences(BaseModel):
    """Job-search preferences attached to a candidate profile."""

    salary_range: tuple[float, float] | None = Field(
        default=None, description="Acceptable salary range as (min, max)"
    )
    job_types: list[str] = Field(
        default_factory=list, description="Acceptable job types (empty = any)"
    )
    industries: list[str] = Field(
        default_factory=list, description="Preferred industries (empty = any)"
    )
    remote_ok: bool = Field(default=False, description="Whether remote work is acceptable")

    @field_validator("salary_range")
    @classmethod
    def validate_salary_range(
        cls, value: tuple[float, float] | None
    ) -> tuple[float, float] | None:
        if value is None:
            return value
        low, high = value
        if low < 0 or high < 0:
            raise ValueError("salary_range bounds must be non-negative")
        if low > high:
            raise ValueError(f"salary_range min must be <= max (got {low} > {high})")
        return value


class CandidateProfile(BaseModel):
    """Candidate profile as resolved by the profile storage layer."""

    id: str = Field(..., description="Candidate identifier")
    skills: list[str] = Field(default_factory=list, description="Skills/technologies")
    experience_years: float = Field(
        default=0.0, ge=0, description="Total years of experience"
    )
    education: list[str] = Field(
        default_factory=list, description="Credentials held (any order)"
    )
    location: str = Field(default="", description="Current location")
    preferences: CandidatePreferences = Field(default_factory=CandidatePreferences)

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> CandidateProfile:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


class Job(BaseModel):
    """A normalized, de-duplicated job posting.

    Only `id` is mandatory; every other field degrades the job's confidence
    when absent instead of excluding it from scoring.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Unique job identifier")
    title: str = Field(default="", description="Job title")
    company: str = Field(default="", description="Hiring company")
    location: str | None = Field(default=None, description="Job location")
    remote: bool = Field(default=False, description="Whether the job is remote")
    salary_min: float | None = Field(default=None, ge=0, description="Salary floor")
    salary_max: float | None = Field(default=None, ge=0, description="Salary ceiling")
    experience_required: float | None = Field(
        default=None, ge=0, description="Years of experience required"
    )
    required_skills: list[str] = Field(default_factory=list)
    education_required: list[str] = Field(default_factory=list)
    industry: str | None = Field(default=None)
    job_type: str | None = Field(default=None)
    description: str | None = Field(default=None)
    posted_at: datetime | None = Field(default=None)

    @field_validator("posted_at")
    @classmethod
    def ensure_timezone(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @model_validator(mode="after")
    def validate_salary_bounds(self) -> Job:
        if (
            self.salary_min is not None
            and self.salary_max is not None
            and self.salary_min > self.salary_max
        ):
            raise ValueError(
                f"salary_min must be <= salary_max "
                f"(got {self.salary_min} > {self.salary_max})"
            )
        return self

    @property
    def has_salary(self) -> bool:
        return self.salary_min is not None or self.salary_max is not None

    @property
    def posted_timestamp(self) -> float:
        """Posting time as a POSIX timestamp (unknown sorts as oldest)."""
        if self.posted_at is None:
            return -math.inf
        return self.posted_at.timestamp()

    def to_dict(self) -> dict:
        """Serialize to a dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict) -> Job:
        """Deserialize from a dictionary."""
        return cls.model_validate(data)


@dataclass(frozen=True)
class MatchCriteria:
    """The normalized slice of a profile that a scoring run compares against.

    Never mutated after construction. Skills, industries and job types are
    stored as lowercase tokens however they are passed in; education keeps
    its first-seen order with case-insensitive duplicates dropped.
    """

    skills: frozenset[str] = frozenset()
    experience: float = 0.0
    education: tuple[str, ...] = ()
    location: str = ""
    salary_range: tuple[float, float] | None = None
    job_types: frozenset[str] = frozenset()
    industries: frozenset[str] = frozenset()
    remote: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.experience, bool) or not isinstance(
            self.experience, (int, float)
        ):
            raise ValidationError(
                f"experience must be a number (got {self.experience!r})"
            )
        if not math.isfinite(self.experience) or self.experience < 0:
            raise ValidationError(
                f"experience must be a non-negative number (got {self.experience})"
            )

        salary_range = self.salary_range
        if salary_range is not None:
            low, high = (float(bound) for bound in salary_range)
            if low < 0 or high < 0:
                raise ValidationError(
                    f"salary_range bounds must be non-negative (got {salary_range})"
                )
            if low > high:
                raise ValidationError(
                    f"salary_range min must be <= max (got {low} > {high})"
                )
            salary_range = (low, high)

        seen: dict[str, None] = {}
        for credential in self.education:
            cleaned = " ".join(str(credential).split())
            if cleaned and cleaned.lower() not in {c.lower() for c in seen}:
                seen[cleaned] = None

        # Frozen: normalized values are written back through object.__setattr__.
        normalized = {
            "skills": frozenset(s for s in map(normalize_skill, self.skills) if s),
            "experience": float(self.experience),
            "education": tuple(seen),
            "location": (self.location or "").strip(),
            "salary_range": salary_range,
            "job_types": frozenset(
                t for t in map(normalize_label, self.job_types) if t
            ),
            "industries": frozenset(
                i for i in map(normalize_label, self.industries) if i
            ),
            "remote": bool(self.remote),
        }
        for name, value in normalized.items():
            object.__setattr__(self, name, value)

    @classmethod
    def build(
        cls,
        *,
        skills: list[str] | set[str] | frozenset[str] = (),
        experience: float = 0.0,
        education: list[str] | tuple[str, ...] = (),
        location: str = "",
        salary_range: tuple[float, float] | None = None,
        job_types: list[str] | set[str] | frozenset[str] = (),
        industries: list[str] | set[str] | frozenset[str] = (),
        remote: bool = False,
    ) -> MatchCriteria:
        """Keyword-only constructor accepting lists and sets."""
        return cls(
            skills=frozenset(skills),
            experience=experience,
            education=tuple(education),
            location=location,
            salary_range=tuple(salary_range) if salary_range is not None else None,
            job_types=frozenset(job_types),
            industries=frozenset(industries),
            remote=remote,
        )

    @classmethod
    def from_profile(cls, profile: CandidateProfile) -> MatchCriteria:
        """Derive match criteria from a candidate profile."""
        prefs = profile.preferences
        return cls.build(
            skills=profile.skills,
            experience=profile.experience_years,
            education=profile.education,
            location=profile.location,
            salary_range=prefs.salary_range,
            job_types=prefs.job_types,
            industries=prefs.industries,
            remote=prefs.remote_ok,
        )


class Dimension(str, Enum):
    """One independent axis of candidate/job comparison."""

    SKILLS = "skills"
    EXPERIENCE = "experience"
    EDUCATION = "education"
    LOCATION = "location"
    SALARY = "salary"
    INDUSTRY = "industry"
    JOB_TYPE = "job_type"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")


# Fit components in tie-break priority order.
COMPONENTS: tuple[Dimension, ...] = (
    Dimension.SKILLS,
    Dimension.EXPERIENCE,
    Dimension.EDUCATION,
    Dimension.SALARY,
    Dimension.LOCATION,
    Dimension.INDUSTRY,
)


@dataclass(frozen=True)
class DimensionScore:
    """Sub-score for a single dimension plus the note explaining it."""

    value: float
    evidence: str
    low_evidence: bool = False

    def __post_init__(self) -> None:
        if not (0.0 <= self.value <= 1.0):
            raise ValueError(f"value must be between 0.0 and 1.0 (got {self.value})")


@dataclass(frozen=True)
class FitScore:
    """Overall fit plus the per-component breakdown, all on a 0-100 scale."""

    overall: float
    skills: float
    experience: float
    location: float
    salary: float
    education: float
    industry: float
    confidence: float

    def __post_init__(self) -> None:
        for name in (
            "overall",
            "skills",
            "experience",
            "location",
            "salary",
            "education",
            "industry",
        ):
            value = getattr(self, name)
            if not (0.0 <= value <= 100.0):
                raise ValueError(f"{name} must be between 0 and 100 (got {value})")
        if not (0.0 <= self.confidence <= 1.0):
            raise ValueError(
                f"confidence must be between 0.0 and 1.0 (got {self.confidence})"
            )

    def component(self, dimension: Dimension) -> float:
        """Return a component score (0-100) by dimension."""
        return getattr(self, dimension.value)


@dataclass(frozen=True)
class DataQualityWarning:
    """A missing or unusable job field that lowered a match's confidence."""

    job_id: str
    field: str
    message: str


Tier = Literal["perfect_match", "good_match", "explore", "stretch"]


@dataclass
class Match:
    """One job annotated with its fit score and narrative."""

    job: Job
    fit_score: FitScore
    reasons: list[str] = field(default_factory=list)
    improvements: list[str] = field(default_factory=list)
    gaps: list[Dimension] = field(default_factory=list)
    dimensions: dict[Dimension, DimensionScore] = field(default_factory=dict)
    tier: Tier = "stretch"
    tags: list[str] = field(default_factory=list)
    warnings: list[DataQualityWarning] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.tier not in {"perfect_match", "good_match", "explore", "stretch"}:
            raise ValueError(
                "tier must be one of: perfect_match, good_match, explore, stretch "
                f"(got {self.tier})"
            )

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "job": self.job.to_dict(),
            "fit_score": {
                "overall": self.fit_score.overall,
                "skills": self.fit_score.skills,
                "experience": self.fit_score.experience,
                "education": self.fit_score.education,
                "location": self.fit_score.location,
                "salary": self.fit_score.salary,
                "industry": self.fit_score.industry,
                "confidence": self.fit_score.confidence,
            },
            "reasons": list(self.reasons),
            "improvements": list(self.improvements),
            "gaps": [gap.value for gap in self.gaps],
            "dimensions": {
                dim.value: {
                    "value": score.value,
                    "evidence": score.evidence,
                    "low_evidence": score.low_evidence,
                }
                for dim, score in self.dimensions.items()
            },
            "tier": self.tier,
            "tags": list(self.tags),
            "warnings": [
                {"job_id": w.job_id, "field": w.field, "message": w.message}
                for w in self.warnings
            ],
        }
