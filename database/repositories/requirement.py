import logging
from typing import List, Optional, Any
from sqlalchemy import select

from database.models import BidRequirement
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class RequirementRepository(BaseRepository):
    def get_by_id(self, requirement_id: Any) -> Optional[BidRequirement]:
        stmt = select(BidRequirement).where(BidRequirement.id == requirement_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_for_bid(self, bid_id: Any) -> List[BidRequirement]:
        """Requirements of a bid in processing order (code, then creation time)."""
        stmt = (
            select(BidRequirement)
            .where(BidRequirement.bid_id == bid_id)
            .order_by(BidRequirement.requirement_code, BidRequirement.created_at)
        )
        return self.db.execute(stmt).scalars().all()
