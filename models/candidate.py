from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

LIST_FIELDS = (
    "technical_skills",
    "soft_skills",
    "certifications",
    "languages_known",
    "tags",
)

TEXT_FIELDS = (
    "name",
    "email",
    "phone",
    "current_role",
    "desired_role",
    "current_company",
    "location",
    "total_experience",
    "highest_qualification",
    "degree",
    "summary",
    "resume_text",
)


class Candidate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    name: str = ""
    email: str = ""
    phone: str = ""
    current_role: str = ""
    desired_role: str = ""
    current_company: str = ""
    location: str = ""
    total_experience: str = ""
    highest_qualification: str = ""
    degree: str = ""
    technical_skills: list[str] = []
    soft_skills: list[str] = []
    certifications: list[str] = []
    languages_known: list[str] = []
    summary: str = ""
    resume_text: str = ""
    tags: list[str] = []
    status: Optional[str] = None
    uploaded_at: Optional[str] = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return str(v)

    @field_validator(*TEXT_FIELDS, mode="before")
    @classmethod
    def none_to_empty(cls, v):
        if v is None:
            return ""
        return str(v)

    @field_validator(*LIST_FIELDS, mode="before")
    @classmethod
    def normalise_collection(cls, v) -> list[str]:
        # stores hand back NULL, bare strings or mixed arrays for these columns
        if v is None:
            return []
        if isinstance(v, str):
            return [v] if v.strip() else []
        if not isinstance(v, (list, tuple, set)):
            return []
        return [str(item) for item in v if item is not None and str(item).strip()]

    @field_validator("uploaded_at", mode="before")
    @classmethod
    def stringify_timestamp(cls, v):
        if v is None or v == "":
            return None
        if hasattr(v, "isoformat"):
            return v.isoformat()
        return str(v)


class ScoredCandidate(Candidate):
    relevance_score: float
    match_percentage: int
    matching_keywords: list[str] = []
