import uuid

from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, UniqueConstraint, Index, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base, JsonType


class BidRequirementMatch(Base):
    """
    Scored pairing of a bid requirement and a candidate professional.

    Tracks:
    - Total score (0-100) and its four-component breakdown
    - Human validation state (pending_validation|validated|rejected)
    - Who validated, when, and why

    At most one row exists per (requirement_id, user_id); recalculation
    updates the existing row in place.
    """
    __tablename__ = 'bid_requirement_matches'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    requirement_id = Column(Uuid, ForeignKey('bid_requirements.id', ondelete='CASCADE'), nullable=False)
    user_id = Column(Uuid, ForeignKey('profiles.user_id', ondelete='CASCADE'), nullable=False)

    match_score = Column(Integer, nullable=False)
    score_breakdown = Column(JsonType, nullable=False, default=dict)

    status = Column(Text, nullable=False, default='pending_validation')
    validated_by = Column(Uuid, ForeignKey('profiles.user_id', ondelete='SET NULL'), nullable=True)
    validated_at = Column(TIMESTAMP(timezone=True), nullable=True)
    validation_notes = Column(Text, nullable=True)

    calculated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    requirement = relationship("BidRequirement", back_populates="matches")
    candidate = relationship("Profile", foreign_keys=[user_id])
    validator = relationship("Profile", foreign_keys=[validated_by])

    __table_args__ = (
        UniqueConstraint('requirement_id', 'user_id', name='uq_bid_requirement_match_req_user'),
        Index('idx_bid_requirement_matches_requirement', 'requirement_id'),
        Index('idx_bid_requirement_matches_user', 'user_id'),
        Index('idx_bid_requirement_matches_score', 'match_score'),
        Index('idx_bid_requirement_matches_status', 'status'),
    )

    def __repr__(self):
        return (
            f"<BidRequirementMatch(id={self.id}, requirement_id={self.requirement_id}, "
            f"user_id={self.user_id}, score={self.match_score}, status='{self.status}')>"
        )
