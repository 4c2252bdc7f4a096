#!/usr/bin/env python3
"""
Bid endpoints - bid-wide matching and grouped match views.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends

from core.config_loader import MatchingConfig
from core.matching.batch_runner import MatchBatchRunner
from core.matching.models import Actor, CalculationProgress
from database.repository import MatchingRepository
from ..dependencies import get_actor, get_matching_config, get_repo
from ..services.match_service import MatchService
from ..models.requests import CalculateBidRequest
from ..models.responses import (
    BidCalculationResponse,
    BidMatchesResponse,
    ExistingMatchesResponse,
    RequirementCalculationResponse,
)
from ..utils import parse_uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/bids", tags=["bids"])


@router.post("/{bid_id}/calculate", response_model=BidCalculationResponse)
def calculate_bid(
    bid_id: str,
    request: Optional[CalculateBidRequest] = None,
    repo: MatchingRepository = Depends(get_repo),
    actor: Actor = Depends(get_actor),
    config: MatchingConfig = Depends(get_matching_config)
):
    """
    Calculate matches for every requirement of a bid, one after another.

    With force_recalculate, every existing match of the bid (including
    reviewed ones) is deleted first.
    """
    request = request or CalculateBidRequest()
    bid_uuid = parse_uuid(bid_id, "bid_id")

    def log_progress(progress: CalculationProgress) -> None:
        logger.info(f"Bid {bid_id}: {progress.current}/{progress.total} requirements processed")

    runner = MatchBatchRunner(repo, config)
    result = runner.calculate_match_for_solicitation(
        bid_uuid,
        actor,
        force_recalculate=request.force_recalculate,
        on_progress=log_progress,
    )

    return BidCalculationResponse(
        success=True,
        bid_id=bid_id,
        total_requirements=result.total_requirements,
        total_matches=result.total_matches,
        results=[
            RequirementCalculationResponse(
                success=True,
                requirement_id=str(r.requirement_id),
                total_candidates=r.total_candidates,
                matches_produced=r.matches_produced,
            )
            for r in result.results
        ],
    )


@router.get("/{bid_id}/matches", response_model=BidMatchesResponse)
def get_bid_matches(
    bid_id: str,
    repo: MatchingRepository = Depends(get_repo)
):
    """
    Get a bid's matches grouped by requirement.

    Each group carries validated and pending counts and whether the
    requirement is fully staffed.
    """
    service = MatchService(repo)
    return service.get_matches_by_bid(parse_uuid(bid_id, "bid_id"))


@router.get("/{bid_id}/matches/exists", response_model=ExistingMatchesResponse)
def check_existing_matches(
    bid_id: str,
    repo: MatchingRepository = Depends(get_repo)
):
    """Whether any requirement of the bid already has matches."""
    runner = MatchBatchRunner(repo)
    has_matches = runner.check_existing_matches(parse_uuid(bid_id, "bid_id"))
    return ExistingMatchesResponse(success=True, bid_id=bid_id, has_matches=has_matches)
