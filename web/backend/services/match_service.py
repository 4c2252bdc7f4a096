#!/usr/bin/env python3
"""
Match service - read models for requirement matches.
"""

import logging
from typing import Any, Dict, List, Optional

from core.matching.exceptions import MatchNotFoundError
from core.matching.models import MatchStatus, ScoreBreakdown
from core.matching.validation import completion_status
from database.models import BidRequirement, BidRequirementMatch, Profile
from database.repository import MatchingRepository
from ..models.responses import (
    BidMatchesResponse,
    CandidateSummary,
    MatchSummary,
    RequirementMatchGroup,
    RequirementSummary,
    ScoreBreakdownModel,
)
from ..utils import safe_datetime_iso, safe_int, safe_str

logger = logging.getLogger(__name__)


def score_label(score: int) -> str:
    """Qualitative band of a match score."""
    if score >= 80:
        return "high"
    elif score >= 60:
        return "medium"
    elif score >= 40:
        return "low"
    else:
        return "very_low"


class MatchService:
    """Service for reading and grouping requirement matches."""

    def __init__(self, repo: MatchingRepository):
        self.repo = repo

    def _load_profiles(self, matches: List[BidRequirementMatch]) -> Dict[Any, Profile]:
        # One query for all candidates instead of one per match
        return self.repo.profiles.get_profiles_by_user_ids({m.user_id for m in matches})

    def get_matches(self, requirement_id: Optional[Any] = None) -> List[MatchSummary]:
        """
        Get matches, best score first.

        Args:
            requirement_id: Restrict to one requirement when given.

        Returns:
            List of match summaries.
        """
        matches = self.repo.matches.get_matches(requirement_id=requirement_id)
        profiles = self._load_profiles(matches)
        return [self._to_match_summary(m, profiles.get(m.user_id)) for m in matches]

    def get_match_detail(self, match_id: Any) -> MatchSummary:
        """
        Get a single match.

        Raises:
            MatchNotFoundError: If match is not found.
        """
        match = self.repo.matches.get_match_by_id(match_id)
        if match is None:
            raise MatchNotFoundError(match_id)
        profile = self.repo.profiles.get_profile(match.user_id)
        return self._to_match_summary(match, profile)

    def get_matches_by_bid(self, bid_id: Any) -> BidMatchesResponse:
        """
        Group a bid's matches by requirement.

        Every requirement of the bid gets a group, including requirements
        without matches. Groups keep the requirement order; matches inside
        a group are sorted by score, highest first.
        """
        requirements = self.repo.requirements.get_for_bid(bid_id)
        matches = self.repo.matches.get_matches_for_bid(bid_id)
        profiles = self._load_profiles(matches)

        by_requirement: Dict[Any, List[MatchSummary]] = {r.id: [] for r in requirements}
        for match in matches:
            by_requirement.setdefault(match.requirement_id, []).append(
                self._to_match_summary(match, profiles.get(match.user_id))
            )

        groups = [
            self._to_group(requirement, by_requirement[requirement.id])
            for requirement in requirements
        ]

        return BidMatchesResponse(
            success=True,
            bid_id=str(bid_id),
            total_requirements=len(groups),
            total_matches=sum(len(g.matches) for g in groups),
            groups=groups,
        )

    def _to_group(self, requirement: BidRequirement, matches: List[MatchSummary]) -> RequirementMatchGroup:
        validated = sum(1 for m in matches if m.status == MatchStatus.VALIDATED.value)
        pending = sum(1 for m in matches if m.status == MatchStatus.PENDING_VALIDATION.value)
        quantity = safe_int(requirement.quantity_needed, 1)

        return RequirementMatchGroup(
            requirement=RequirementSummary(
                requirement_id=str(requirement.id),
                requirement_code=requirement.requirement_code,
                role_title=requirement.role_title,
                full_description=requirement.full_description,
                required_experience_years=safe_int(requirement.required_experience_years),
                quantity_needed=quantity,
            ),
            matches=matches,
            validated_count=validated,
            pending_count=pending,
            completion_status=completion_status(validated, quantity).value,
        )

    def _to_match_summary(self, match: BidRequirementMatch, profile: Optional[Profile]) -> MatchSummary:
        breakdown = ScoreBreakdown.from_dict(match.score_breakdown)
        score = safe_int(match.match_score)

        return MatchSummary(
            match_id=str(match.id),
            requirement_id=str(match.requirement_id),
            candidate=CandidateSummary(
                user_id=str(match.user_id),
                full_name=profile.full_name if profile else None,
                email=profile.email if profile else None,
                position=profile.position if profile else None,
            ),
            match_score=score,
            score_label=score_label(score),
            score_breakdown=ScoreBreakdownModel(**breakdown.to_dict()),
            status=match.status,
            validated_by=safe_str(match.validated_by, None),
            validated_at=safe_datetime_iso(match.validated_at),
            validation_notes=match.validation_notes,
            calculated_at=safe_datetime_iso(match.calculated_at),
        )
