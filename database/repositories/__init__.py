from database.repositories.base import BaseRepository
from database.repositories.requirement import RequirementRepository
from database.repositories.profile import ProfileRepository
from database.repositories.match import MatchRepository

__all__ = [
    'BaseRepository',
    'RequirementRepository',
    'ProfileRepository',
    'MatchRepository',
]
