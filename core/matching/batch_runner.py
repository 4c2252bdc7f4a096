#!/usr/bin/env python3
"""
Match Batch Runner - score every active user against requirements.

Two entry points:
- calculate_match: one requirement, all active users
- calculate_match_for_solicitation: every requirement of a bid, strictly
  one after another, reporting progress after each

Each requirement is an all-or-nothing unit: its matches are upserted and
committed together, and any failure rolls them back. Cancellation is
observed between requirements only, so committed work is never left
half-written.
"""

import logging
import threading
from datetime import date
from typing import Any, Callable, List, Optional

from core.config_loader import MatchingConfig
from core.matching.exceptions import (
    CalculationCancelledError,
    EmptySolicitationError,
    InputError,
    NoActiveUsersError,
    PermissionDeniedError,
    RequirementNotFoundError,
)
from core.matching.models import (
    Actor,
    CalculationProgress,
    RequirementCriteria,
    RequirementMatchResult,
    ScoredCandidate,
    SolicitationMatchResult,
    coerce_uuid,
)
from core.matching.persistence import save_scored_candidates
from core.matching.profile_aggregator import ProfileAggregator
from core.matching.scoring import score_candidate

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[CalculationProgress], None]


class MatchBatchRunner:
    """
    Orchestrates aggregation, scoring and persistence of matches.

    Args:
        repo: MatchingRepository bound to a Session
        config: MatchingConfig
        today: Reference date for ongoing jobs (defaults to date.today())
    """

    def __init__(
        self,
        repo,
        config: Optional[MatchingConfig] = None,
        today: Optional[date] = None
    ):
        self.repo = repo
        self.config = config or MatchingConfig()
        self.today = today
        self.aggregator = ProfileAggregator(repo, self.config.privileged_roles)

    def _ensure_can_compute(self, actor: Actor) -> None:
        if not actor.is_privileged(self.config.privileged_roles):
            raise PermissionDeniedError(
                f"Role '{actor.role}' is not allowed to calculate matches"
            )

    def _score_requirement(self, criteria: RequirementCriteria, user_ids: List[Any], actor: Actor) -> List[ScoredCandidate]:
        scored = []
        empty_levels_match_any = self.config.scorer.empty_education_levels_match_any

        for user_id in user_ids:
            profile = self.aggregator.aggregate(user_id, actor)
            breakdown = score_candidate(
                criteria,
                profile,
                today=self.today,
                empty_levels_match_any=empty_levels_match_any,
            )
            logger.debug(f"Requirement {criteria.requirement_id} / user {user_id}: {breakdown.to_dict()} = {breakdown.total}")
            if breakdown.total > 0:
                scored.append(ScoredCandidate(user_id=user_id, breakdown=breakdown))

        return scored

    def calculate_match(self, requirement_id: Any, actor: Actor) -> RequirementMatchResult:
        """Score all active users against one requirement and upsert the matches.

        Args:
            requirement_id: Requirement to match
            actor: Acting user (must hold a privileged role)

        Returns:
            RequirementMatchResult with candidate and match counts

        Raises:
            RequirementNotFoundError: Unknown requirement (nothing written)
            NoActiveUsersError: No profile has the active status
        """
        self._ensure_can_compute(actor)

        try:
            requirement_id = coerce_uuid(requirement_id)
        except ValueError:
            raise RequirementNotFoundError(requirement_id) from None

        requirement = self.repo.requirements.get_by_id(requirement_id)
        if requirement is None:
            raise RequirementNotFoundError(requirement_id)

        user_ids = self.repo.profiles.get_user_ids_by_status(self.config.active_status)
        if not user_ids:
            raise NoActiveUsersError()

        criteria = RequirementCriteria.from_requirement(requirement)

        try:
            scored = self._score_requirement(criteria, user_ids, actor)
            save_scored_candidates(requirement.id, scored, self.repo)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            logger.error(f"Match calculation failed for requirement {requirement_id}; rolled back")
            raise

        logger.info(
            f"Requirement {requirement.requirement_code} ({requirement.role_title}): "
            f"{len(scored)} matches from {len(user_ids)} candidates"
        )

        return RequirementMatchResult(
            requirement_id=requirement.id,
            total_candidates=len(user_ids),
            matches_produced=len(scored),
        )

    def calculate_match_for_solicitation(
        self,
        solicitation_id: Any,
        actor: Actor,
        force_recalculate: bool = False,
        on_progress: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> SolicitationMatchResult:
        """Run calculate_match for every requirement of a bid, in order.

        Args:
            solicitation_id: Bid whose requirements are matched
            actor: Acting user (must hold a privileged role)
            force_recalculate: Delete every existing match of the bid first
            on_progress: Called with CalculationProgress(i, n) after each requirement
            cancel_event: When set, stop before the next requirement

        Returns:
            SolicitationMatchResult with per-requirement results

        Raises:
            EmptySolicitationError: The bid has no requirements
            CalculationCancelledError: cancel_event was set mid-run
        """
        self._ensure_can_compute(actor)

        try:
            solicitation_id = coerce_uuid(solicitation_id)
        except ValueError:
            raise EmptySolicitationError(solicitation_id) from None

        requirements = self.repo.requirements.get_for_bid(solicitation_id)
        if not requirements:
            raise EmptySolicitationError(solicitation_id)

        total = len(requirements)
        requirement_ids = [r.id for r in requirements]

        if force_recalculate:
            try:
                deleted = self.repo.matches.delete_matches_for_requirements(requirement_ids)
                self.repo.commit()
            except Exception:
                self.repo.rollback()
                raise
            logger.info(f"Force recalculation for bid {solicitation_id}: removed {deleted} existing matches")

        result = SolicitationMatchResult(solicitation_id=solicitation_id, total_requirements=total)

        for index, requirement_id in enumerate(requirement_ids, start=1):
            if cancel_event is not None and cancel_event.is_set():
                logger.warning(f"Calculation for bid {solicitation_id} cancelled at {index - 1}/{total}")
                raise CalculationCancelledError(completed=list(result.results), total=total)

            result.results.append(self.calculate_match(requirement_id, actor))

            if on_progress is not None:
                on_progress(CalculationProgress(current=index, total=total))

        logger.info(
            f"Bid {solicitation_id}: {result.total_matches} matches across {total} requirements"
        )

        return result

    def check_existing_matches(self, solicitation_id: Any) -> bool:
        try:
            solicitation_id = coerce_uuid(solicitation_id)
        except ValueError:
            raise InputError(f"Invalid bid id: {solicitation_id!r}") from None
        return self.repo.matches.has_matches_for_bid(solicitation_id)
