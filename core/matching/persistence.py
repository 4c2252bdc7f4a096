#!/usr/bin/env python3
"""
Persistence Operations - Database operations for scored matches.

Upserts scored candidates as BidRequirementMatch rows keyed by
(requirement_id, user_id). Committing is left to the caller so that a
requirement's matches land in one transaction.
"""

import logging
from typing import Any, Iterable, List

from core.matching.models import ScoredCandidate
from database.models import BidRequirementMatch

logger = logging.getLogger(__name__)


def save_scored_candidates(
    requirement_id: Any,
    scored: Iterable[ScoredCandidate],
    repo,
) -> List[BidRequirementMatch]:
    """
    Upsert scored candidates for one requirement.

    Zero-score candidates are skipped; they never produce a row.

    Args:
        requirement_id: Requirement the candidates were scored against
        scored: Scored candidates
        repo: MatchingRepository bound to the current session

    Returns:
        The created or refreshed match rows
    """
    saved = []
    created = 0

    for candidate in scored:
        if candidate.total <= 0:
            continue
        match, is_new = repo.matches.upsert_match(
            requirement_id=requirement_id,
            user_id=candidate.user_id,
            match_score=candidate.total,
            score_breakdown=candidate.breakdown.to_dict(),
        )
        created += int(is_new)
        saved.append(match)

    repo.flush()

    logger.info(
        f"Saved {len(saved)} matches for requirement {requirement_id} "
        f"({created} new, {len(saved) - created} refreshed)"
    )

    return saved
