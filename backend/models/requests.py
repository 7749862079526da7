from pydantic import BaseModel, Field

from models.schemas.job_info import CandidateProfile, JobInfo
from models.schemas.pipeline_result import PipelineOptions


class KeywordRequest(BaseModel):
    description: str = Field(..., max_length=20000, description="Job description text")
    url: str = Field("", description="Job posting URL, used as the cache key")
    max_keywords: int | None = Field(None, ge=1, le=200)


class TailorRequest(BaseModel):
    job: JobInfo
    candidate: CandidateProfile = CandidateProfile()
    resume_text: str = Field(..., max_length=50000, description="Plain text resume content")
    options: PipelineOptions = PipelineOptions()
