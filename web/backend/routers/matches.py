#!/usr/bin/env python3
"""
Match endpoints - view, review and delete requirement matches.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query

from core.config_loader import MatchingConfig
from core.matching.models import Actor
from core.matching.validation import MatchValidationService
from database.repository import MatchingRepository
from ..dependencies import get_actor, get_matching_config, get_repo
from ..services.match_service import MatchService
from ..models.requests import ValidateMatchRequest
from ..models.responses import (
    MatchesResponse,
    MatchDetailResponse,
    DeleteMatchResponse,
)
from ..utils import parse_uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/matches", tags=["matches"])


@router.get("", response_model=MatchesResponse)
def get_matches(
    requirement_id: Optional[str] = Query(default=None, description="Only matches of this requirement"),
    repo: MatchingRepository = Depends(get_repo)
):
    """
    Get a list of requirement matches.

    Returns matches sorted by match score (highest first).
    """
    requirement_uuid = parse_uuid(requirement_id, "requirement_id") if requirement_id else None

    service = MatchService(repo)
    matches = service.get_matches(requirement_id=requirement_uuid)

    return MatchesResponse(
        success=True,
        count=len(matches),
        matches=matches
    )


@router.get("/{match_id}", response_model=MatchDetailResponse)
def get_match_details(
    match_id: str,
    repo: MatchingRepository = Depends(get_repo)
):
    """
    Get detailed information about a specific match.

    Includes the candidate and the per-component score breakdown.
    """
    service = MatchService(repo)
    match = service.get_match_detail(parse_uuid(match_id, "match_id"))
    return MatchDetailResponse(success=True, match=match)


@router.post("/{match_id}/validate", response_model=MatchDetailResponse)
def validate_match(
    match_id: str,
    request: ValidateMatchRequest,
    repo: MatchingRepository = Depends(get_repo),
    actor: Actor = Depends(get_actor),
    config: MatchingConfig = Depends(get_matching_config)
):
    """
    Validate or reject a match.

    The acting user is recorded as the reviewer.
    """
    match_uuid = parse_uuid(match_id, "match_id")

    MatchValidationService(repo, config).validate_match(
        match_uuid,
        request.status,
        validated_by=actor.user_id,
        notes=request.notes,
        actor=actor,
    )

    return MatchDetailResponse(success=True, match=MatchService(repo).get_match_detail(match_uuid))


@router.delete("/{match_id}", response_model=DeleteMatchResponse)
def delete_match(
    match_id: str,
    repo: MatchingRepository = Depends(get_repo),
    actor: Actor = Depends(get_actor),
    config: MatchingConfig = Depends(get_matching_config)
):
    """Delete a match regardless of its status."""
    MatchValidationService(repo, config).delete_match(parse_uuid(match_id, "match_id"), actor=actor)
    return DeleteMatchResponse(success=True, match_id=match_id)
