#!/usr/bin/env python3
"""
Scoring Function - score one candidate profile against one requirement.

Components:
- Education (0 or 25): binary, any education entry may satisfy
- Experience (0-30): proportional to total years vs required years
- Skills (0-30): share of required skills the candidate holds
- Certifications (0-15): share of required certification types held

A requirement that lists no skills (or no certifications) awards 0 for
that component; it does not grant free points.
"""

from datetime import date
from typing import Iterable, Optional

from core.matching.experience import calculate_total_experience, round_half_up
from core.matching.models import (
    CandidateProfile,
    EducationEntry,
    RequirementCriteria,
    ScoreBreakdown,
    EDUCATION_POINTS,
    EXPERIENCE_POINTS,
    SKILLS_POINTS,
    CERTIFICATIONS_POINTS,
    normalize_id,
)


def _ratio_points(numerator: float, denominator: float, points: int) -> int:
    """round(points * numerator / denominator), clamped to [0, points].

    A zero or negative denominator means the threshold is trivially met.
    """
    if denominator <= 0:
        return points
    value = round_half_up(points * numerator / denominator)
    return max(0, min(points, value))


def _field_matches(candidate_field: Optional[str], required_fields) -> bool:
    candidate = (candidate_field or "").strip().lower()
    if not candidate:
        return False
    for required in required_fields:
        wanted = required.strip().lower()
        if wanted and (wanted in candidate or candidate in wanted):
            return True
    return False


def education_satisfies(
    entry: EducationEntry,
    criteria: RequirementCriteria,
    empty_levels_match_any: bool = False
) -> bool:
    levels = criteria.required_education_levels
    if levels:
        if entry.level not in levels:
            return False
    elif not (empty_levels_match_any and entry.level):
        return False

    if not criteria.required_fields_of_study:
        return True
    return _field_matches(entry.field_of_study, criteria.required_fields_of_study)


def score_education(
    criteria: RequirementCriteria,
    educations: Iterable[EducationEntry],
    empty_levels_match_any: bool = False
) -> int:
    satisfied = any(
        education_satisfies(edu, criteria, empty_levels_match_any)
        for edu in educations
    )
    return EDUCATION_POINTS if satisfied else 0


def score_experience(total_years: int, required_years: int) -> int:
    if total_years >= required_years:
        return EXPERIENCE_POINTS
    return _ratio_points(total_years, required_years, EXPERIENCE_POINTS)


def score_overlap(candidate_ids: Iterable, required_ids, points: int) -> int:
    if not required_ids:
        return 0
    held = {normalize_id(i) for i in candidate_ids if i is not None}
    return _ratio_points(len(held & required_ids), len(required_ids), points)


def score_candidate(
    criteria: RequirementCriteria,
    profile: CandidateProfile,
    today: Optional[date] = None,
    empty_levels_match_any: bool = False
) -> ScoreBreakdown:
    """Compute the score breakdown for one (requirement, candidate) pair.

    Args:
        criteria: Requirement thresholds
        profile: Aggregated candidate profile
        today: Reference date for ongoing jobs (defaults to date.today())
        empty_levels_match_any: Treat a requirement without education levels
            as satisfied by any education entry

    Returns:
        ScoreBreakdown; its ``total`` is the match score
    """
    total_years = calculate_total_experience(profile.experiences, today=today)

    return ScoreBreakdown(
        education_match=score_education(criteria, profile.educations, empty_levels_match_any),
        experience_years_match=score_experience(total_years, criteria.required_experience_years),
        skills_match=score_overlap(profile.skill_ids, criteria.required_skills, SKILLS_POINTS),
        certifications_match=score_overlap(
            profile.certification_ids, criteria.required_certifications, CERTIFICATIONS_POINTS
        ),
    )
