#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests can be run with standard Python tools:

    # Run all tests
    python -m pytest tests/ -v

    # Run only tests that need no database
    python -m pytest tests/ -v -m "not db"

Database Setup:
    DB tests run against an in-memory SQLite database created per test,
    so no external service is needed. Set TEST_DATABASE_URL to run them
    against PostgreSQL instead.
"""

import os
import uuid
from datetime import date
from typing import Iterable, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.models import (
    Base,
    Bid,
    BidRequirement,
    Profile,
    AcademicEducation,
    ProfessionalExperience,
    TechnicalSkill,
    UserSkill,
    CertificationType,
    Certification,
)

TEST_DB_URL = os.environ.get("TEST_DATABASE_URL", "sqlite://")


def create_test_engine(url: str = TEST_DB_URL):
    """
    Create an engine with all tables.

    In-memory SQLite is pinned to a single connection so every session
    sees the same database.
    """
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(url)
    Base.metadata.create_all(engine)
    return engine


def create_test_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def drop_test_database(engine):
    Base.metadata.drop_all(engine)
    engine.dispose()


class DataFactory:
    """Inserts bids, requirements and profiles for tests."""

    def __init__(self, session):
        self.session = session
        self._counter = 0

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    def bid(self, **kwargs) -> Bid:
        n = self._next()
        bid = Bid(
            id=kwargs.pop("id", uuid.uuid4()),
            bid_code=kwargs.pop("bid_code", f"BID-{n:03d}"),
            bid_name=kwargs.pop("bid_name", f"Bid {n}"),
            **kwargs
        )
        self.session.add(bid)
        self.session.commit()
        return bid

    def requirement(self, bid: Bid, **kwargs) -> BidRequirement:
        n = self._next()
        requirement = BidRequirement(
            id=kwargs.pop("id", uuid.uuid4()),
            bid_id=bid.id,
            requirement_code=kwargs.pop("requirement_code", f"REQ-{n:03d}"),
            role_title=kwargs.pop("role_title", f"Role {n}"),
            full_description=kwargs.pop("full_description", ""),
            required_experience_years=kwargs.pop("required_experience_years", 0),
            required_education_levels=kwargs.pop("required_education_levels", []),
            required_fields_of_study=kwargs.pop("required_fields_of_study", []),
            required_skills=[str(s) for s in kwargs.pop("required_skills", [])],
            required_certifications=[str(c) for c in kwargs.pop("required_certifications", [])],
            quantity_needed=kwargs.pop("quantity_needed", 1),
            **kwargs
        )
        self.session.add(requirement)
        self.session.commit()
        return requirement

    def skill(self, name: Optional[str] = None) -> TechnicalSkill:
        skill = TechnicalSkill(id=uuid.uuid4(), name=name or f"skill-{self._next()}")
        self.session.add(skill)
        self.session.commit()
        return skill

    def certification_type(self, name: Optional[str] = None) -> CertificationType:
        cert_type = CertificationType(id=uuid.uuid4(), name=name or f"cert-{self._next()}")
        self.session.add(cert_type)
        self.session.commit()
        return cert_type

    def profile(
        self,
        full_name: Optional[str] = None,
        status: str = "active",
        role: str = "user",
        educations: Iterable[tuple] = (),
        experiences: Iterable[tuple] = (),
        skills: Iterable[TechnicalSkill] = (),
        certifications: Iterable[Optional[CertificationType]] = (),
    ) -> Profile:
        """
        Insert a profile with its scoring inputs.

        educations: (level, field_of_study) pairs
        experiences: (start_date, end_date_or_None) pairs
        certifications: CertificationType rows; None inserts an untyped certificate
        """
        n = self._next()
        profile = Profile(
            user_id=uuid.uuid4(),
            full_name=full_name or f"Person {n:03d}",
            email=f"person{n}@example.com",
            role=role,
            status=status,
        )
        self.session.add(profile)
        self.session.flush()

        for level, field in educations:
            self.session.add(AcademicEducation(
                user_id=profile.user_id, education_level=level, field_of_study=field
            ))
        for start, end in experiences:
            self.session.add(ProfessionalExperience(
                user_id=profile.user_id,
                company_name="Acme",
                position="Engineer",
                start_date=start,
                end_date=end,
                is_current=end is None,
            ))
        for skill in skills:
            self.session.add(UserSkill(user_id=profile.user_id, skill_id=skill.id))
        for cert_type in certifications:
            self.session.add(Certification(
                user_id=profile.user_id,
                certification_type_id=cert_type.id if cert_type is not None else None,
                name=cert_type.name if cert_type is not None else "Unlisted certificate",
            ))

        self.session.commit()
        return profile


FIXED_TODAY = date(2024, 6, 15)
