#!/usr/bin/env python3
"""
Requirement endpoints - run matching for a single requirement.
"""

import logging
from fastapi import APIRouter, Depends

from core.config_loader import MatchingConfig
from core.matching.batch_runner import MatchBatchRunner
from core.matching.models import Actor
from database.repository import MatchingRepository
from ..dependencies import get_actor, get_matching_config, get_repo
from ..models.responses import RequirementCalculationResponse
from ..utils import parse_uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/requirements", tags=["requirements"])


@router.post("/{requirement_id}/calculate", response_model=RequirementCalculationResponse)
def calculate_requirement(
    requirement_id: str,
    repo: MatchingRepository = Depends(get_repo),
    actor: Actor = Depends(get_actor),
    config: MatchingConfig = Depends(get_matching_config)
):
    """
    Score every active user against one requirement.

    Existing matches are refreshed in place; reviewer decisions are kept.
    """
    runner = MatchBatchRunner(repo, config)
    result = runner.calculate_match(parse_uuid(requirement_id, "requirement_id"), actor)

    return RequirementCalculationResponse(
        success=True,
        requirement_id=str(result.requirement_id),
        total_candidates=result.total_candidates,
        matches_produced=result.matches_produced,
    )
