import uuid

from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, Index, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base, JsonType


class Bid(Base):
    """
    A solicitation ("edital") grouping one or more technical requirements.
    """
    __tablename__ = 'bids'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    bid_code = Column(Text, nullable=False)
    bid_name = Column(Text, nullable=False)
    bid_description = Column(Text)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    requirements = relationship(
        "BidRequirement",
        back_populates="bid",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index('idx_bids_code', 'bid_code'),
    )


class BidRequirement(Base):
    """
    Technical requirement of a bid: a role with education, experience,
    skill and certification thresholds.

    The set-valued thresholds are stored as JSON lists. An empty list means
    the requirement does not constrain that dimension.
    """
    __tablename__ = 'bid_requirements'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    bid_id = Column(Uuid, ForeignKey('bids.id', ondelete='CASCADE'), nullable=False)

    requirement_code = Column(Text, nullable=False)
    role_title = Column(Text, nullable=False)
    full_description = Column(Text, nullable=False, default='')

    required_experience_years = Column(Integer, nullable=False, default=0)
    required_education_levels = Column(JsonType, nullable=False, default=list)
    required_fields_of_study = Column(JsonType, nullable=False, default=list)
    required_skills = Column(JsonType, nullable=False, default=list)  # technical_skills ids
    required_certifications = Column(JsonType, nullable=False, default=list)  # certification_types ids
    keywords = Column(JsonType, nullable=False, default=list)

    quantity_needed = Column(Integer, nullable=False, default=1)

    created_by = Column(Uuid, nullable=True)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    bid = relationship("Bid", back_populates="requirements")
    matches = relationship(
        "BidRequirementMatch",
        back_populates="requirement",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index('idx_bid_requirements_bid', 'bid_id'),
    )

    def __repr__(self):
        return f"<BidRequirement(id={self.id}, code='{self.requirement_code}', role='{self.role_title}')>"
