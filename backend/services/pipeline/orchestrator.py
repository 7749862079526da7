"""Pipeline orchestrator: extraction -> tailoring -> distribution.

Flow:
    job_info.description
      ├─ extract_keywords_cached(url or fingerprint)   → KeywordSet
      │       (empty → PipelineResult(success=False), stop)
      ├─ strategy.tailor(base_resume, keywords)         → TailorResult
      │       unique generator if configured, else rewrite + full sweep
      └─ distribute_keywords(tailored, high_priority)   → DistributionResult
                       ↓
         PipelineResult (per-stage timings, meets_target)

Every stage is a plain blocking call. Latency targets are advisory: they are
measured and reported, never enforced.
"""

import logging
import random
import time

from config import Settings
from models.schemas.distribution import DistributionOptions
from models.schemas.job_info import CandidateProfile, JobInfo
from models.schemas.keyword_set import KeywordSet
from models.schemas.pipeline_result import (
    PipelineOptions,
    PipelineResult,
    StageTimings,
    TailorResult,
)
from services.keyword_cache import KeywordCache
from services.keyword_distributor import distribute_keywords
from services.keyword_extractor import extract_keywords_cached
from services.pipeline.tailoring import (
    FallbackTailoringStrategy,
    UniqueResumeGenerator,
    UniqueResumeStrategy,
    create_strategy,
)

logger = logging.getLogger(__name__)

NO_KEYWORDS_ERROR = "No keywords extracted"

# Mention targets passed with the high-priority pass (accepted, not applied)
HIGH_PRIORITY_MENTIONS = {"target_mentions": 4, "min_mentions": 3, "max_mentions": 5}


def _elapsed_ms(since: float) -> float:
    return (time.perf_counter() - since) * 1000


class TailoringPipeline:
    """Owns the keyword cache and the tailoring strategy selection."""

    def __init__(
        self,
        settings: Settings,
        cache: KeywordCache | None = None,
        generator: UniqueResumeGenerator | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings
        self.cache = cache if cache is not None else KeywordCache(
            ttl_seconds=settings.cache_ttl_seconds,
            max_entries=settings.cache_max_entries,
        )
        self.generator = generator
        self.rng = rng or random.Random(settings.random_seed)

    def run(
        self,
        job_info: JobInfo,
        candidate_profile: CandidateProfile | None,
        base_resume_text: str,
        options: PipelineOptions | None = None,
    ) -> PipelineResult:
        """Run all stages for one job and return the aggregated result.

        ``candidate_profile`` is opaque to the pipeline; it is accepted so
        callers have one entry point, but nothing here reads it.
        """
        options = options or PipelineOptions()
        max_keywords = options.max_keywords or self.settings.max_keywords
        per_bullet = options.max_keywords_per_bullet or self.settings.max_keywords_per_bullet

        pipeline_start = time.perf_counter()
        timings = StageTimings()
        logger.info(
            "Starting tailoring pipeline for: %s",
            job_info.title or "Unknown Job",
        )

        # --- Stage 1: Extraction (instant when cached) ---
        stage_start = time.perf_counter()
        keywords, from_cache = extract_keywords_cached(
            job_info.description,
            self.cache,
            job_url=job_info.url,
            max_keywords=max_keywords,
        )
        timings.extraction = _elapsed_ms(stage_start)

        if keywords.is_empty:
            logger.warning("No keywords extracted for: %s", job_info.title or job_info.url)
            timings.total = _elapsed_ms(pipeline_start)
            return PipelineResult(
                success=False,
                error=NO_KEYWORDS_ERROR,
                tailored_resume=base_resume_text or "",
                timings=timings,
                from_cache=from_cache,
            )

        # --- Stage 2: Tailoring ---
        stage_start = time.perf_counter()
        tailor_result = self._tailor(base_resume_text or "", keywords, per_bullet)
        timings.tailoring = _elapsed_ms(stage_start)

        # --- Stage 3: High-priority distribution ---
        stage_start = time.perf_counter()
        final_text = tailor_result.tailored_text
        distribution_stats = None
        if keywords.high_priority:
            dist = distribute_keywords(
                final_text,
                keywords.high_priority,
                DistributionOptions(max_keywords_per_bullet=per_bullet, **HIGH_PRIORITY_MENTIONS),
                rng=self.rng,
            )
            final_text = dist.tailored_text
            distribution_stats = dist.stats
        timings.distribution = _elapsed_ms(stage_start)

        timings.total = _elapsed_ms(pipeline_start)
        meets_target = timings.total <= self.settings.target_total_ms
        self._log_timings(timings, from_cache)

        result = PipelineResult(
            success=True,
            keywords=keywords,
            work_experience_keywords=keywords.work_experience,
            tailored_resume=final_text,
            injected_keywords=tailor_result.injected_keywords,
            tailor_stats=tailor_result.stats,
            unique_hash=tailor_result.unique_hash,
            timings=timings,
            from_cache=from_cache,
            meets_target=meets_target,
        )
        if distribution_stats is not None:
            result.distribution_stats = distribution_stats
        return result

    def _tailor(self, resume_text: str, keywords: KeywordSet, per_bullet: int) -> TailorResult:
        strategy = create_strategy(self.generator, max_keywords_per_bullet=per_bullet, rng=self.rng)
        if not isinstance(strategy, UniqueResumeStrategy):
            return strategy.tailor(resume_text, keywords)

        try:
            return strategy.tailor(resume_text, keywords)
        except Exception as e:
            logger.error("Unique résumé generator failed, using fallback tailoring: %s", e)
            fallback = FallbackTailoringStrategy(max_keywords_per_bullet=per_bullet, rng=self.rng)
            return fallback.tailor(resume_text, keywords)

    def _log_timings(self, timings: StageTimings, from_cache: bool) -> None:
        s = self.settings
        logger.info(
            "Timing breakdown: extraction %.0fms%s (target %.0fms), "
            "tailoring %.0fms (target %.0fms), distribution %.0fms, "
            "total %.0fms (target %.0fms)",
            timings.extraction,
            " (cached)" if from_cache else "",
            s.target_extraction_ms,
            timings.tailoring,
            s.target_tailoring_ms,
            timings.distribution,
            timings.total,
            s.target_total_ms,
        )
