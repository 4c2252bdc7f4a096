import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Any, Tuple
from sqlalchemy import select, delete, exists, func
from sqlalchemy.dialects import postgresql, sqlite

from database.models import BidRequirement, BidRequirementMatch
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)

# Dialect-specific INSERT constructs that support ON CONFLICT
_DIALECT_INSERTS = {
    'postgresql': postgresql.insert,
    'sqlite': sqlite.insert,
}


class MatchRepository(BaseRepository):
    def get_match_by_id(self, match_id: Any) -> Optional[BidRequirementMatch]:
        stmt = select(BidRequirementMatch).where(BidRequirementMatch.id == match_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_existing_match(
        self,
        requirement_id: Any,
        user_id: Any
    ) -> Optional[BidRequirementMatch]:
        stmt = select(BidRequirementMatch).where(
            BidRequirementMatch.requirement_id == requirement_id,
            BidRequirementMatch.user_id == user_id
        )
        # Core upserts bypass the identity map, so reload any cached row
        stmt = stmt.execution_options(populate_existing=True)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_matches(
        self,
        requirement_id: Optional[Any] = None
    ) -> List[BidRequirementMatch]:
        stmt = select(BidRequirementMatch)

        if requirement_id is not None:
            stmt = stmt.where(BidRequirementMatch.requirement_id == requirement_id)

        stmt = stmt.order_by(BidRequirementMatch.match_score.desc(), BidRequirementMatch.created_at)
        return self.db.execute(stmt).scalars().all()

    def get_matches_for_bid(self, bid_id: Any) -> List[BidRequirementMatch]:
        stmt = (
            select(BidRequirementMatch)
            .join(BidRequirement, BidRequirement.id == BidRequirementMatch.requirement_id)
            .where(BidRequirement.bid_id == bid_id)
            .order_by(BidRequirementMatch.match_score.desc(), BidRequirementMatch.created_at)
        )
        return self.db.execute(stmt).scalars().all()

    def has_matches_for_bid(self, bid_id: Any) -> bool:
        stmt = select(
            exists().where(
                BidRequirementMatch.requirement_id == BidRequirement.id,
                BidRequirement.bid_id == bid_id
            )
        )
        return bool(self.db.execute(stmt).scalar())

    def upsert_match(
        self,
        requirement_id: Any,
        user_id: Any,
        match_score: int,
        score_breakdown: Dict[str, int],
    ) -> Tuple[BidRequirementMatch, bool]:
        """
        Insert or refresh the match for (requirement_id, user_id).

        Runs as a single INSERT ... ON CONFLICT DO UPDATE so that concurrent
        calculations of the same requirement converge on the last write. An
        existing row keeps its id and validation fields; only the score,
        breakdown and calculation timestamp are replaced.

        Returns:
            (match, created)
        """
        created = self._find_match_id(requirement_id, user_id) is None

        insert = _DIALECT_INSERTS[self.db.get_bind().dialect.name]
        stmt = insert(BidRequirementMatch).values(
            id=uuid.uuid4(),
            requirement_id=requirement_id,
            user_id=user_id,
            match_score=match_score,
            score_breakdown=dict(score_breakdown),
            status='pending_validation',
            calculated_at=datetime.now(timezone.utc),
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=['requirement_id', 'user_id'],
            set_={
                'match_score': stmt.excluded.match_score,
                'score_breakdown': stmt.excluded.score_breakdown,
                'calculated_at': stmt.excluded.calculated_at,
                'updated_at': func.now(),
            }
        )
        self.db.execute(stmt)

        match = self.get_existing_match(requirement_id, user_id)
        return match, created

    def _find_match_id(self, requirement_id: Any, user_id: Any) -> Optional[Any]:
        stmt = select(BidRequirementMatch.id).where(
            BidRequirementMatch.requirement_id == requirement_id,
            BidRequirementMatch.user_id == user_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def update_validation(
        self,
        match: BidRequirementMatch,
        status: str,
        validated_by: Any,
        notes: Optional[str] = None,
    ) -> BidRequirementMatch:
        match.status = status
        match.validated_by = validated_by
        match.validated_at = datetime.now(timezone.utc)
        match.validation_notes = notes
        self.flush()
        return match

    def delete_match(self, match: BidRequirementMatch) -> None:
        self.db.delete(match)
        self.flush()

    def delete_matches_for_requirements(self, requirement_ids: List[Any]) -> int:
        if not requirement_ids:
            return 0

        result = self.db.execute(
            delete(BidRequirementMatch).where(
                BidRequirementMatch.requirement_id.in_(requirement_ids)
            )
        )
        count = result.rowcount or 0

        if count > 0:
            logger.info(f"Deleted {count} matches for {len(requirement_ids)} requirements")

        return count
