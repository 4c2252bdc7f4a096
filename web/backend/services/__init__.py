"""Business logic services."""

from .match_service import MatchService, score_label
