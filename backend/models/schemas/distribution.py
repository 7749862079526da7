"""Keyword distribution contracts: options, coverage stats and results."""

from pydantic import BaseModel, Field


class DistributionStats(BaseModel):
    """Coverage counts for one distribution run.

    ``already_present + added + missing == total`` once a run completes.
    """
    total: int = 0
    already_present: int = 0
    added: int = 0
    missing: int = 0


class DistributionOptions(BaseModel):
    max_keywords_per_bullet: int = Field(3, ge=1)
    # Accepted for compatibility with callers that ask for repeated mentions.
    # The distributor does not interpret them (see DESIGN.md).
    target_mentions: int | None = Field(None, ge=1)
    min_mentions: int | None = Field(None, ge=1)
    max_mentions: int | None = Field(None, ge=1)


class DistributionResult(BaseModel):
    tailored_text: str
    stats: DistributionStats = DistributionStats()
    timing_ms: float = 0.0


class RewriteResult(BaseModel):
    """Output of the bullet rewrite pass (no overflow bullets)."""
    tailored_text: str
    injected_keywords: list[str] = []
