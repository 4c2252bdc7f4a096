#!/usr/bin/env python3
"""
Validation Workflow - human review of persisted matches.

    pending_validation --validate--> validated
    pending_validation --reject----> rejected

Re-deciding a validated or rejected match is governed by
ValidationConfig.allow_revalidation. Deletion bypasses the state machine.
"""

import logging
from typing import Any, Optional

from core.config_loader import MatchingConfig
from core.matching.exceptions import (
    InputError,
    InvalidStatusError,
    MatchNotFoundError,
    PermissionDeniedError,
    ValidationConflictError,
)
from core.matching.models import Actor, CompletionStatus, MatchStatus, coerce_uuid

logger = logging.getLogger(__name__)

DECISION_STATUSES = (MatchStatus.VALIDATED, MatchStatus.REJECTED)


def completion_status(validated_count: int, quantity_needed: int) -> CompletionStatus:
    """Staffing state of a requirement from its number of validated matches."""
    if validated_count >= max(1, quantity_needed or 1):
        return CompletionStatus.COMPLETE
    if validated_count > 0:
        return CompletionStatus.PARTIAL
    return CompletionStatus.PENDING


def _parse_decision(status: Any) -> MatchStatus:
    try:
        decision = MatchStatus(status)
    except ValueError:
        raise InvalidStatusError(f"Invalid validation status: {status!r}") from None
    if decision not in DECISION_STATUSES:
        raise InvalidStatusError(
            f"Validation status must be 'validated' or 'rejected', got '{decision.value}'"
        )
    return decision


def _parse_match_id(match_id: Any):
    try:
        return coerce_uuid(match_id)
    except ValueError:
        raise MatchNotFoundError(match_id) from None


class MatchValidationService:
    """Applies reviewer decisions to matches."""

    def __init__(self, repo, config: Optional[MatchingConfig] = None):
        self.repo = repo
        self.config = config or MatchingConfig()

    def _ensure_can_review(self, actor: Actor) -> None:
        if not actor.is_privileged(self.config.privileged_roles):
            raise PermissionDeniedError(f"Role '{actor.role}' is not allowed to review matches")

    def validate_match(
        self,
        match_id: Any,
        status: Any,
        validated_by: Any,
        actor: Actor,
        notes: Optional[str] = None,
    ):
        """
        Record a reviewer decision on a match.

        Args:
            match_id: Match to decide
            status: 'validated' or 'rejected'
            validated_by: Reviewer user id
            actor: Acting user (must hold a privileged role)
            notes: Optional free-text justification

        Returns:
            The updated BidRequirementMatch

        Raises:
            InvalidStatusError: status is not a decision
            MatchNotFoundError: no such match, or a malformed id
            PermissionDeniedError: actor may not review matches
            ValidationConflictError: match already decided and
                re-validation is disabled
        """
        decision = _parse_decision(status)
        self._ensure_can_review(actor)

        try:
            validated_by = coerce_uuid(validated_by)
        except ValueError:
            raise InputError(f"Invalid reviewer id: {validated_by!r}") from None

        match_id = _parse_match_id(match_id)
        match = self.repo.matches.get_match_by_id(match_id)
        if match is None:
            raise MatchNotFoundError(match_id)

        current = MatchStatus(match.status)
        if current.is_terminal:
            if not self.config.validation.allow_revalidation:
                raise ValidationConflictError(
                    f"Match {match_id} is already {current.value}"
                )
            logger.warning(f"Match {match_id} re-decided: {current.value} -> {decision.value} by {validated_by}")

        try:
            self.repo.matches.update_validation(match, decision.value, validated_by, notes)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Match {match_id} {decision.value} by {validated_by}")
        return match

    def delete_match(self, match_id: Any, actor: Actor) -> None:
        """Delete a match regardless of its status."""
        self._ensure_can_review(actor)

        match_id = _parse_match_id(match_id)
        match = self.repo.matches.get_match_by_id(match_id)
        if match is None:
            raise MatchNotFoundError(match_id)

        try:
            self.repo.matches.delete_match(match)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Match {match_id} deleted (was {match.status})")
