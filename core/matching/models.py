#!/usr/bin/env python3
"""
Matching Models - Data structures for scoring inputs and results.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

# Component maxima
EDUCATION_POINTS = 25
EXPERIENCE_POINTS = 30
SKILLS_POINTS = 30
CERTIFICATIONS_POINTS = 15
MAX_TOTAL_SCORE = EDUCATION_POINTS + EXPERIENCE_POINTS + SKILLS_POINTS + CERTIFICATIONS_POINTS


class EducationLevel(str, Enum):
    HIGH_SCHOOL = "high_school"
    TECHNOLOGIST = "technologist"
    BACHELORS = "bachelors"
    POSTGRADUATE = "postgraduate"
    MBA = "mba"
    MASTERS = "masters"
    DOCTORATE = "doctorate"
    POSTDOCTORATE = "postdoctorate"


class MatchStatus(str, Enum):
    PENDING_VALIDATION = "pending_validation"
    VALIDATED = "validated"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self in (MatchStatus.VALIDATED, MatchStatus.REJECTED)


class CompletionStatus(str, Enum):
    """Staffing state of a requirement, derived from its validated matches."""
    COMPLETE = "complete"
    PARTIAL = "partial"
    PENDING = "pending"


@dataclass(frozen=True)
class Actor:
    """The user on whose behalf an operation runs."""
    user_id: Any
    role: str = "user"

    def is_privileged(self, privileged_roles) -> bool:
        return self.role in privileged_roles


@dataclass(frozen=True)
class EducationEntry:
    level: Optional[str]
    field_of_study: Optional[str] = None


@dataclass(frozen=True)
class ExperienceInterval:
    start_date: date
    end_date: Optional[date] = None  # None = ongoing


@dataclass
class CandidateProfile:
    """Snapshot of one user's scoring inputs, rebuilt on every pass."""
    user_id: Any
    educations: List[EducationEntry] = field(default_factory=list)
    experiences: List[ExperienceInterval] = field(default_factory=list)
    skill_ids: List[Any] = field(default_factory=list)
    certification_ids: List[Any] = field(default_factory=list)


def normalize_id(value: Any) -> str:
    # UUIDs come back from the ORM as uuid.UUID and from JSON columns as str
    return str(value).lower()


def coerce_uuid(value: Any) -> uuid.UUID:
    """Parse an id given as UUID or string; raises ValueError when malformed."""
    if isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


@dataclass(frozen=True)
class RequirementCriteria:
    """Immutable view of a requirement's thresholds, as used by scoring."""
    requirement_id: Any
    required_experience_years: int = 0
    required_education_levels: FrozenSet[str] = frozenset()
    required_fields_of_study: Tuple[str, ...] = ()
    required_skills: FrozenSet[str] = frozenset()
    required_certifications: FrozenSet[str] = frozenset()

    @classmethod
    def build(
        cls,
        requirement_id: Any,
        required_experience_years: Optional[int] = 0,
        required_education_levels=None,
        required_fields_of_study=None,
        required_skills=None,
        required_certifications=None,
    ) -> "RequirementCriteria":
        levels = frozenset(
            lvl.value if isinstance(lvl, EducationLevel) else str(lvl)
            for lvl in (required_education_levels or [])
        )
        return cls(
            requirement_id=requirement_id,
            required_experience_years=max(0, int(required_experience_years or 0)),
            required_education_levels=levels,
            required_fields_of_study=tuple(
                f.strip() for f in (required_fields_of_study or []) if f and f.strip()
            ),
            required_skills=frozenset(normalize_id(s) for s in (required_skills or [])),
            required_certifications=frozenset(normalize_id(c) for c in (required_certifications or [])),
        )

    @classmethod
    def from_requirement(cls, requirement) -> "RequirementCriteria":
        """Build criteria from a BidRequirement row."""
        return cls.build(
            requirement_id=requirement.id,
            required_experience_years=requirement.required_experience_years,
            required_education_levels=requirement.required_education_levels,
            required_fields_of_study=requirement.required_fields_of_study,
            required_skills=requirement.required_skills,
            required_certifications=requirement.required_certifications,
        )


_BREAKDOWN_BOUNDS = {
    'education_match': EDUCATION_POINTS,
    'experience_years_match': EXPERIENCE_POINTS,
    'skills_match': SKILLS_POINTS,
    'certifications_match': CERTIFICATIONS_POINTS,
}


@dataclass(frozen=True)
class ScoreBreakdown:
    """
    Four-component score of one candidate against one requirement.

    Ranges are enforced on construction, so a breakdown read back from
    storage is validated the same way as a freshly computed one.
    """
    education_match: int = 0
    experience_years_match: int = 0
    skills_match: int = 0
    certifications_match: int = 0

    def __post_init__(self):
        for name, upper in _BREAKDOWN_BOUNDS.items():
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if not 0 <= value <= upper:
                raise ValueError(f"{name}={value} outside [0, {upper}]")
        if self.education_match not in (0, EDUCATION_POINTS):
            raise ValueError(f"education_match must be 0 or {EDUCATION_POINTS}, got {self.education_match}")

    @property
    def total(self) -> int:
        return (
            self.education_match
            + self.experience_years_match
            + self.skills_match
            + self.certifications_match
        )

    def to_dict(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in _BREAKDOWN_BOUNDS}

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ScoreBreakdown":
        data = data or {}
        unknown = set(data) - set(_BREAKDOWN_BOUNDS)
        if unknown:
            raise ValueError(f"Unknown score breakdown keys: {sorted(unknown)}")
        return cls(**{name: int(data.get(name, 0)) for name in _BREAKDOWN_BOUNDS})


@dataclass(frozen=True)
class ScoredCandidate:
    user_id: Any
    breakdown: ScoreBreakdown

    @property
    def total(self) -> int:
        return self.breakdown.total


@dataclass(frozen=True)
class CalculationProgress:
    current: int
    total: int


@dataclass(frozen=True)
class RequirementMatchResult:
    requirement_id: Any
    total_candidates: int
    matches_produced: int


@dataclass
class SolicitationMatchResult:
    solicitation_id: Any
    total_requirements: int
    results: List[RequirementMatchResult] = field(default_factory=list)

    @property
    def total_matches(self) -> int:
        return sum(r.matches_produced for r in self.results)
