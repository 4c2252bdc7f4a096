import logging

from sqlalchemy.orm import Session

from database.repositories import BaseRepository, RequirementRepository, ProfileRepository, MatchRepository

logger = logging.getLogger(__name__)


class MatchingRepository(BaseRepository):
    """Groups the repositories the matching engine needs around one Session."""

    def __init__(self, db: Session):
        super().__init__(db)
        self.requirements = RequirementRepository(db)
        self.profiles = ProfileRepository(db)
        self.matches = MatchRepository(db)
