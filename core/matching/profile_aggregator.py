#!/usr/bin/env python3
"""
Profile Aggregator - collect a user's scoring inputs.

Reads the four input categories (education, experience, skills,
certifications) for one user. A category with no rows yields an empty
list; storage errors propagate to the caller.
"""

import logging
from typing import Any, Iterable

from core.matching.exceptions import PermissionDeniedError
from core.matching.models import (
    Actor,
    CandidateProfile,
    EducationEntry,
    ExperienceInterval,
)

logger = logging.getLogger(__name__)

DEFAULT_PRIVILEGED_ROLES = ("leader", "admin")


class ProfileAggregator:
    """Builds CandidateProfile snapshots from the profile tables."""

    def __init__(self, repo, privileged_roles: Iterable[str] = DEFAULT_PRIVILEGED_ROLES):
        self.repo = repo
        self.privileged_roles = tuple(privileged_roles)

    def _check_access(self, user_id: Any, actor: Actor) -> None:
        if actor.is_privileged(self.privileged_roles):
            return
        if str(actor.user_id) == str(user_id):
            return
        raise PermissionDeniedError(
            f"User {actor.user_id} (role={actor.role}) cannot read profile {user_id}"
        )

    def aggregate(self, user_id: Any, actor: Actor) -> CandidateProfile:
        """
        Collect the scoring inputs of one user.

        Args:
            user_id: Profile owner
            actor: Acting user; non-privileged actors may only read themselves

        Returns:
            CandidateProfile snapshot
        """
        self._check_access(user_id, actor)
        profiles = self.repo.profiles

        educations = [
            EducationEntry(level=edu.education_level, field_of_study=edu.field_of_study)
            for edu in profiles.get_educations(user_id) or []
        ]
        experiences = [
            ExperienceInterval(start_date=exp.start_date, end_date=exp.end_date)
            for exp in profiles.get_experiences(user_id) or []
        ]
        skill_ids = [us.skill_id for us in profiles.get_user_skills(user_id) or []]
        certification_ids = [
            cert.certification_type_id
            for cert in profiles.get_certifications(user_id) or []
            if cert.certification_type_id is not None
        ]

        logger.debug(
            f"Aggregated profile {user_id}: {len(educations)} educations, "
            f"{len(experiences)} experiences, {len(skill_ids)} skills, "
            f"{len(certification_ids)} certifications"
        )

        return CandidateProfile(
            user_id=user_id,
            educations=educations,
            experiences=experiences,
            skill_ids=skill_ids,
            certification_ids=certification_ids,
        )
