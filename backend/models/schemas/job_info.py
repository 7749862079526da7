"""Inputs supplied by the session layer: the job posting and the candidate."""

from pydantic import BaseModel, ConfigDict, field_validator

from services.location import strip_remote_from_location


class JobInfo(BaseModel):
    title: str = ""
    company: str = ""
    location: str = ""
    description: str = ""
    url: str = ""  # stable identifier, used as the cache key when present

    @field_validator("location")
    @classmethod
    def _sanitize_location(cls, v: str) -> str:
        return strip_remote_from_location(v) or v


class CandidateProfile(BaseModel):
    """Opaque candidate record. Passed through untouched; extra keys are kept."""
    model_config = ConfigDict(extra="allow")

    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    work_history: list[dict] = []
    skills: list[str] = []
