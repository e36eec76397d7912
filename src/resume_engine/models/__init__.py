from resume_engine.models.document import (
    Certification,
    Education,
    EducationKey,
    Experience,
    ExperienceKey,
    Language,
    PersonalInfo,
    StructuredDocument,
    education_key,
    experience_key,
)
from resume_engine.models.preferences import ManagementExperience, TagPreferences

__all__ = [
    "Certification",
    "Education",
    "EducationKey",
    "Experience",
    "ExperienceKey",
    "Language",
    "ManagementExperience",
    "PersonalInfo",
    "StructuredDocument",
    "TagPreferences",
    "education_key",
    "experience_key",
]
