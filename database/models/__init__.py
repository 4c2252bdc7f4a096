from .base import Base, JsonType
from .bid import Bid, BidRequirement
from .profile import (
    Profile,
    AcademicEducation,
    ProfessionalExperience,
    TechnicalSkill,
    UserSkill,
    CertificationType,
    Certification,
)
from .match import BidRequirementMatch

__all__ = [
    'Base',
    'JsonType',
    'Bid',
    'BidRequirement',
    'Profile',
    'AcademicEducation',
    'ProfessionalExperience',
    'TechnicalSkill',
    'UserSkill',
    'CertificationType',
    'Certification',
    'BidRequirementMatch',
]
