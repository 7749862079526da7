"""Tailoring strategies: delegate to a unique-résumé generator, or fall back.

The generator is an optional external capability. It is injected explicitly
(never discovered at runtime); without one, the fallback strategy rewrites
bullets and then distributes every extracted keyword.
"""

import logging
import random
import time
from typing import Protocol, runtime_checkable

from models.schemas.distribution import DistributionOptions
from models.schemas.keyword_set import KeywordSet
from models.schemas.pipeline_result import TailorResult, UniqueResumeOutput
from services.bullet_rewriter import rewrite_bullets
from services.keyword_distributor import distribute_keywords, split_coverage
from services.pipeline.base import BaseTailoringStrategy

logger = logging.getLogger(__name__)

UNIQUE_KEYWORD_LIMIT = 15


@runtime_checkable
class UniqueResumeGenerator(Protocol):
    """External capability producing a job-specific résumé."""

    def generate(self, resume_text: str, keywords: list[str]) -> UniqueResumeOutput:
        ...


class UniqueResumeStrategy(BaseTailoringStrategy):
    strategy_name = "unique"

    def __init__(self, generator: UniqueResumeGenerator) -> None:
        self.generator = generator

    def tailor(self, resume_text: str, keywords: KeywordSet) -> TailorResult:
        start = time.perf_counter()
        top = keywords.high_priority or keywords.all[:UNIQUE_KEYWORD_LIMIT]
        output = self.generator.generate(resume_text, top)
        return TailorResult(
            tailored_text=output.unique_text,
            original_text=resume_text,
            stats=output.stats,
            unique_hash=output.content_hash,
            strategy=self.strategy_name,
            timing_ms=(time.perf_counter() - start) * 1000,
        )


class FallbackTailoringStrategy(BaseTailoringStrategy):
    """Bullet rewrite over the work-experience keywords, then a full
    distribution sweep over every tier."""

    strategy_name = "fallback"

    def __init__(
        self,
        max_keywords_per_bullet: int = 3,
        rng: random.Random | None = None,
    ) -> None:
        self.max_keywords_per_bullet = max_keywords_per_bullet
        self.rng = rng or random.Random()

    def tailor(self, resume_text: str, keywords: KeywordSet) -> TailorResult:
        start = time.perf_counter()
        if not resume_text or not keywords.all:
            return TailorResult(
                tailored_text=resume_text or "",
                original_text=resume_text or "",
                strategy=self.strategy_name,
            )

        resume_lower = resume_text.lower()
        work_keywords = keywords.work_experience or keywords.all[:UNIQUE_KEYWORD_LIMIT]
        missing = [kw for kw in work_keywords if kw.lower() not in resume_lower]

        tailored = resume_text
        injected: list[str] = []
        if missing:
            rewrite = rewrite_bullets(tailored, missing, rng=self.rng)
            tailored = rewrite.tailored_text
            injected.extend(rewrite.injected_keywords)

        sweep = keywords.combined()
        if sweep:
            # Missing keywords are placed in order, so the first `added` are the ones placed
            _, sweep_missing = split_coverage(tailored, sweep)
            dist = distribute_keywords(
                tailored,
                sweep,
                DistributionOptions(max_keywords_per_bullet=self.max_keywords_per_bullet),
                rng=self.rng,
            )
            tailored = dist.tailored_text
            injected.extend(sweep_missing[: dist.stats.added])

        return TailorResult(
            tailored_text=tailored,
            original_text=resume_text,
            injected_keywords=injected,
            stats={
                "total": len(injected),
                "work_experience": len(injected),
                "skills": 0,
            },
            strategy=self.strategy_name,
            timing_ms=(time.perf_counter() - start) * 1000,
        )


def create_strategy(
    generator: UniqueResumeGenerator | None = None,
    max_keywords_per_bullet: int = 3,
    rng: random.Random | None = None,
) -> BaseTailoringStrategy:
    """Select the tailoring strategy from explicit configuration."""
    if generator is not None:
        return UniqueResumeStrategy(generator)
    return FallbackTailoringStrategy(max_keywords_per_bullet=max_keywords_per_bullet, rng=rng)
