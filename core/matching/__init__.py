#!/usr/bin/env python3
"""
Matching Module - score professionals against bid requirements.

Public API:
- MatchBatchRunner: calculate matches for a requirement or a whole bid
- MatchValidationService: validate, reject and delete matches
- score_candidate: pure scoring function
- calculate_total_experience: total years from employment intervals

Modules:
- models.py: Data structures (ScoreBreakdown, CandidateProfile, ...)
- experience.py: Experience calculator
- scoring.py: Four-component scoring function
- profile_aggregator.py: Candidate profile loading
- persistence.py: Match upserts
- batch_runner.py: Batch orchestration with progress and cancellation
- validation.py: Review state machine
- exceptions.py: Error taxonomy
"""

from core.matching.models import (
    Actor,
    CalculationProgress,
    CandidateProfile,
    CompletionStatus,
    EducationEntry,
    EducationLevel,
    ExperienceInterval,
    MatchStatus,
    RequirementCriteria,
    RequirementMatchResult,
    ScoreBreakdown,
    SolicitationMatchResult,
)
from core.matching.experience import calculate_total_experience
from core.matching.scoring import score_candidate
from core.matching.profile_aggregator import ProfileAggregator
from core.matching.batch_runner import MatchBatchRunner
from core.matching.validation import MatchValidationService, completion_status

__all__ = [
    'Actor',
    'CalculationProgress',
    'CandidateProfile',
    'CompletionStatus',
    'EducationEntry',
    'EducationLevel',
    'ExperienceInterval',
    'MatchStatus',
    'RequirementCriteria',
    'RequirementMatchResult',
    'ScoreBreakdown',
    'SolicitationMatchResult',
    'calculate_total_experience',
    'score_candidate',
    'ProfileAggregator',
    'MatchBatchRunner',
    'MatchValidationService',
    'completion_status',
]
