"""Pydantic contracts shared by the extraction, distribution and pipeline stages."""

from models.schemas.keyword_set import CacheEntry, KeywordSet
from models.schemas.distribution import (
    DistributionOptions,
    DistributionResult,
    DistributionStats,
    RewriteResult,
)
from models.schemas.job_info import CandidateProfile, JobInfo
from models.schemas.pipeline_result import (
    PipelineOptions,
    PipelineResult,
    StageTimings,
    TailorResult,
    UniqueResumeOutput,
)

__all__ = [
    "CacheEntry",
    "KeywordSet",
    "DistributionOptions",
    "DistributionResult",
    "DistributionStats",
    "RewriteResult",
    "CandidateProfile",
    "JobInfo",
    "PipelineOptions",
    "PipelineResult",
    "StageTimings",
    "TailorResult",
    "UniqueResumeOutput",
]
