"""Tailoring and pipeline outputs."""

from pydantic import BaseModel, Field

from models.schemas.distribution import DistributionStats
from models.schemas.keyword_set import KeywordSet


class UniqueResumeOutput(BaseModel):
    """What an external unique-résumé generator hands back."""
    unique_text: str
    stats: dict = {}
    content_hash: str = ""


class TailorResult(BaseModel):
    tailored_text: str
    original_text: str = ""
    injected_keywords: list[str] = []
    stats: dict = {}
    unique_hash: str = ""
    strategy: str = ""
    timing_ms: float = 0.0


class StageTimings(BaseModel):
    """Elapsed wall time per stage, in milliseconds."""
    extraction: float = 0.0
    tailoring: float = 0.0
    distribution: float = 0.0
    total: float = 0.0


class PipelineOptions(BaseModel):
    max_keywords: int | None = Field(None, ge=1)
    max_keywords_per_bullet: int | None = Field(None, ge=1)
    target_score: int | None = Field(None, ge=0, le=100)  # advisory


class PipelineResult(BaseModel):
    success: bool = True
    error: str = ""
    keywords: KeywordSet = KeywordSet()
    work_experience_keywords: list[str] = []
    tailored_resume: str = ""
    injected_keywords: list[str] = []
    distribution_stats: DistributionStats = DistributionStats()
    tailor_stats: dict = {}
    unique_hash: str = ""
    timings: StageTimings = StageTimings()
    from_cache: bool = False
    meets_target: bool = False
