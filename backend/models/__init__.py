from models.resume import (
    Profile,
    PersonalInfo,
    ExperienceEntry,
    EducationEntry,
    ProjectEntry,
    CertificationEntry,
    ReferenceEntry,
    StoredResume,
    normalize_description,
)
from models.template import TemplateDescriptor
from models.generation import (
    RESUME_SCHEMA_VERSION,
    GeneratedResume,
    Structured,
    Recovered,
    RawFallback,
    ParseOutcome,
    ResumeContentResult,
)
from models.ats import ATSResult, DEFAULT_ATS_RESULT
from models.account import Plan, Feature, UserProfile, SessionContext, OTPRecord
from models.builder import BuilderSession, PreviewMode

__all__ = [
    # Resume
    "Profile",
    "PersonalInfo",
    "ExperienceEntry",
    "EducationEntry",
    "ProjectEntry",
    "CertificationEntry",
    "ReferenceEntry",
    "StoredResume",
    "normalize_description",
    # Template
    "TemplateDescriptor",
    # Generation
    "RESUME_SCHEMA_VERSION",
    "GeneratedResume",
    "Structured",
    "Recovered",
    "RawFallback",
    "ParseOutcome",
    "ResumeContentResult",
    # ATS
    "ATSResult",
    "DEFAULT_ATS_RESULT",
    # Account
    "Plan",
    "Feature",
    "UserProfile",
    "SessionContext",
    "OTPRecord",
    # Builder
    "BuilderSession",
    "PreviewMode",
]
