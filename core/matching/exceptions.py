#!/usr/bin/env python3
"""
Matching errors.

Every error carries a machine-readable ``kind`` and a human-readable
message so callers can render something meaningful without inspecting
the exception type. Storage errors are not wrapped: SQLAlchemy
exceptions propagate unchanged.
"""

from typing import Any, List, Optional


class MatchingError(Exception):
    """Base exception for matching engine errors."""
    kind = "matching_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"kind": self.kind, "message": self.message}


class InputError(MatchingError):
    """Raised when a caller supplies a missing or invalid identifier or value."""
    kind = "input_error"


class RequirementNotFoundError(InputError):
    """Raised when a requirement is not found."""
    kind = "requirement_not_found"

    def __init__(self, requirement_id: Any):
        super().__init__(f"Requirement {requirement_id} not found")
        self.requirement_id = requirement_id


class EmptySolicitationError(InputError):
    """Raised when a bid has no requirements to match against."""
    kind = "empty_solicitation"

    def __init__(self, solicitation_id: Any):
        super().__init__(f"Bid {solicitation_id} has no requirements")
        self.solicitation_id = solicitation_id


class InvalidStatusError(InputError):
    """Raised when a validation decision is not 'validated' or 'rejected'."""
    kind = "invalid_status"


class NoActiveUsersError(MatchingError):
    """Raised when there is nobody to score."""
    kind = "no_active_users"

    def __init__(self, message: str = "No active users found"):
        super().__init__(message)


class MatchNotFoundError(MatchingError):
    """Raised when a match is not found."""
    kind = "match_not_found"

    def __init__(self, match_id: Any):
        super().__init__(f"Match {match_id} not found")
        self.match_id = match_id


class ValidationConflictError(MatchingError):
    """Raised when re-deciding a match that is already validated or rejected."""
    kind = "validation_conflict"


class PermissionDeniedError(MatchingError):
    """Raised when the acting user's role does not allow an operation."""
    kind = "permission_denied"


class CalculationCancelledError(MatchingError):
    """
    Raised when a bid-wide calculation is cancelled between requirements.

    ``completed`` holds the per-requirement results committed before the
    cancellation was observed.
    """
    kind = "calculation_cancelled"

    def __init__(self, completed: Optional[List[Any]] = None, total: int = 0):
        completed = completed or []
        super().__init__(
            f"Calculation cancelled after {len(completed)}/{total} requirements"
        )
        self.completed = completed
        self.total = total
