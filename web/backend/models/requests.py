#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from pydantic import BaseModel, Field
from typing import Literal, Optional


class ValidateMatchRequest(BaseModel):
    """Reviewer decision on a match."""
    status: Literal["validated", "rejected"] = Field(..., description="Decision: validated or rejected")
    notes: Optional[str] = Field(None, max_length=2000, description="Optional justification")


class CalculateBidRequest(BaseModel):
    """Request to calculate matches for every requirement of a bid."""
    force_recalculate: bool = Field(
        default=False,
        description="Delete all existing matches of the bid before recalculating"
    )
