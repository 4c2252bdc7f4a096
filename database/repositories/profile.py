import logging
from typing import Dict, List, Optional, Any, Iterable
from sqlalchemy import select

from database.models import (
    Profile,
    AcademicEducation,
    ProfessionalExperience,
    UserSkill,
    Certification,
)
from database.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ProfileRepository(BaseRepository):
    def get_profile(self, user_id: Any) -> Optional[Profile]:
        stmt = select(Profile).where(Profile.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def get_profiles_by_user_ids(self, user_ids: Iterable[Any]) -> Dict[Any, Profile]:
        user_ids = list(user_ids)
        if not user_ids:
            return {}
        stmt = select(Profile).where(Profile.user_id.in_(user_ids))
        return {p.user_id: p for p in self.db.execute(stmt).scalars().all()}

    def get_user_ids_by_status(self, status: str = 'active') -> List[Any]:
        stmt = (
            select(Profile.user_id)
            .where(Profile.status == status)
            .order_by(Profile.full_name)
        )
        return self.db.execute(stmt).scalars().all()

    def get_educations(self, user_id: Any) -> List[AcademicEducation]:
        stmt = select(AcademicEducation).where(AcademicEducation.user_id == user_id)
        return self.db.execute(stmt).scalars().all()

    def get_experiences(self, user_id: Any) -> List[ProfessionalExperience]:
        stmt = (
            select(ProfessionalExperience)
            .where(ProfessionalExperience.user_id == user_id)
            .order_by(ProfessionalExperience.start_date)
        )
        return self.db.execute(stmt).scalars().all()

    def get_user_skills(self, user_id: Any) -> List[UserSkill]:
        stmt = select(UserSkill).where(UserSkill.user_id == user_id)
        return self.db.execute(stmt).scalars().all()

    def get_certifications(self, user_id: Any) -> List[Certification]:
        stmt = select(Certification).where(Certification.user_id == user_id)
        return self.db.execute(stmt).scalars().all()
