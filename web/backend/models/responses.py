#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class ScoreBreakdownModel(BaseModel):
    """Four-component score breakdown."""
    education_match: int = Field(ge=0, le=25)
    experience_years_match: int = Field(ge=0, le=30)
    skills_match: int = Field(ge=0, le=30)
    certifications_match: int = Field(ge=0, le=15)


class CandidateSummary(BaseModel):
    user_id: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    position: Optional[str] = None


class MatchSummary(BaseModel):
    """Summary of a requirement match."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "match_id": "550e8400-e29b-41d4-a716-446655440000",
                "requirement_id": "6ba7b810-9dad-11d1-80b4-00c04fd430c8",
                "candidate": {
                    "user_id": "7c9e6679-7425-40de-944b-e07fc1f90ae7",
                    "full_name": "Ana Souza",
                    "email": "ana.souza@example.com",
                    "position": "Software Architect"
                },
                "match_score": 85,
                "score_label": "high",
                "score_breakdown": {
                    "education_match": 25,
                    "experience_years_match": 30,
                    "skills_match": 20,
                    "certifications_match": 10
                },
                "status": "pending_validation",
                "calculated_at": "2026-02-01T12:00:00"
            }
        }
    )

    match_id: str
    requirement_id: str
    candidate: CandidateSummary
    match_score: int = Field(ge=0, le=100)
    score_label: str
    score_breakdown: ScoreBreakdownModel
    status: str
    validated_by: Optional[str] = None
    validated_at: Optional[str] = None
    validation_notes: Optional[str] = None
    calculated_at: Optional[str] = None


class MatchesResponse(BaseModel):
    success: bool
    count: int
    matches: List[MatchSummary]


class MatchDetailResponse(BaseModel):
    success: bool
    match: MatchSummary


class DeleteMatchResponse(BaseModel):
    success: bool
    match_id: str


class RequirementSummary(BaseModel):
    requirement_id: str
    requirement_code: str
    role_title: str
    full_description: Optional[str] = None
    required_experience_years: int
    quantity_needed: int


class RequirementMatchGroup(BaseModel):
    """Matches of one requirement, best score first."""
    requirement: RequirementSummary
    matches: List[MatchSummary]
    validated_count: int
    pending_count: int
    completion_status: str


class BidMatchesResponse(BaseModel):
    success: bool
    bid_id: str
    total_requirements: int
    total_matches: int
    groups: List[RequirementMatchGroup]


class ExistingMatchesResponse(BaseModel):
    success: bool
    bid_id: str
    has_matches: bool


class RequirementCalculationResponse(BaseModel):
    success: bool
    requirement_id: str
    total_candidates: int
    matches_produced: int


class BidCalculationResponse(BaseModel):
    success: bool
    bid_id: str
    total_requirements: int
    total_matches: int
    results: List[RequirementCalculationResponse]
