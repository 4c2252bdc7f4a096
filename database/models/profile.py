import uuid

from sqlalchemy import Column, Integer, Text, Date, TIMESTAMP, ForeignKey, Boolean, Numeric, Index, Uuid, func
from sqlalchemy.orm import relationship

from .base import Base


class Profile(Base):
    """
    Professional profile of an application user.

    Only profiles whose status is 'active' are considered as matching
    candidates.
    """
    __tablename__ = 'profiles'

    user_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    full_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True)
    position = Column(Text)

    role = Column(Text, nullable=False, default='user')  # user|leader|admin
    status = Column(Text, nullable=False, default='active')  # active|inactive|blocked

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    educations = relationship("AcademicEducation", back_populates="profile", cascade="all, delete-orphan")
    experiences = relationship("ProfessionalExperience", back_populates="profile", cascade="all, delete-orphan")
    skills = relationship("UserSkill", back_populates="profile", cascade="all, delete-orphan")
    certifications = relationship("Certification", back_populates="profile", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_profiles_status', 'status'),
    )


class AcademicEducation(Base):
    __tablename__ = 'academic_education'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('profiles.user_id', ondelete='CASCADE'), nullable=False)

    education_level = Column(Text, nullable=False)
    institution_name = Column(Text)
    course_name = Column(Text)
    field_of_study = Column(Text)
    status = Column(Text, nullable=False, default='completed')  # completed|in_progress|incomplete

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    profile = relationship("Profile", back_populates="educations")

    __table_args__ = (
        Index('idx_academic_education_user', 'user_id'),
    )


class ProfessionalExperience(Base):
    __tablename__ = 'professional_experiences'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('profiles.user_id', ondelete='CASCADE'), nullable=False)

    company_name = Column(Text, nullable=False)
    position = Column(Text, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)  # NULL = current job
    is_current = Column(Boolean, nullable=False, default=False)
    description = Column(Text)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    profile = relationship("Profile", back_populates="experiences")

    __table_args__ = (
        Index('idx_professional_experiences_user', 'user_id'),
    )


class TechnicalSkill(Base):
    __tablename__ = 'technical_skills'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False, unique=True)
    category = Column(Text)  # programming_language|framework|methodology|tool|...


class UserSkill(Base):
    __tablename__ = 'user_skills'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('profiles.user_id', ondelete='CASCADE'), nullable=False)
    skill_id = Column(Uuid, ForeignKey('technical_skills.id', ondelete='CASCADE'), nullable=False)

    proficiency_level = Column(Text, default='intermediate')  # basic|intermediate|advanced|expert
    years_of_experience = Column(Numeric(4, 1), default=0)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    profile = relationship("Profile", back_populates="skills")
    technical_skill = relationship("TechnicalSkill")

    __table_args__ = (
        Index('idx_user_skills_user', 'user_id'),
    )


class CertificationType(Base):
    __tablename__ = 'certification_types'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False, unique=True)
    issuer = Column(Text)


class Certification(Base):
    """A certificate held by a user, typed against the certification catalog."""
    __tablename__ = 'certifications'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey('profiles.user_id', ondelete='CASCADE'), nullable=False)
    certification_type_id = Column(Uuid, ForeignKey('certification_types.id', ondelete='SET NULL'))

    name = Column(Text, nullable=False)
    issued_at = Column(Date)
    expires_at = Column(Date)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())

    profile = relationship("Profile", back_populates="certifications")
    certification_type = relationship("CertificationType")

    __table_args__ = (
        Index('idx_certifications_user', 'user_id'),
    )
