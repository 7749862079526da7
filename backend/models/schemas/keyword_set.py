"""Keyword extraction output: a scored, tiered keyword set for one job posting."""

from pydantic import BaseModel


class KeywordSet(BaseModel):
    """Prioritized keywords extracted from a job description.

    ``high_priority + medium_priority + low_priority == all`` in order.
    ``work_experience`` is a separate view (the first 15 of ``all``) and
    overlaps the tiers.
    """
    all: list[str] = []
    high_priority: list[str] = []
    medium_priority: list[str] = []
    low_priority: list[str] = []
    work_experience: list[str] = []
    total: int = 0

    @classmethod
    def empty(cls) -> "KeywordSet":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.total == 0

    def combined(self) -> list[str]:
        """All tiers plus the work-experience view, deduplicated in order."""
        seen: set[str] = set()
        merged: list[str] = []
        for kw in (
            self.high_priority
            + self.medium_priority
            + self.low_priority
            + self.work_experience
        ):
            if kw not in seen:
                seen.add(kw)
                merged.append(kw)
        return merged


class CacheEntry(BaseModel):
    """A cached extraction result and its creation time (epoch seconds)."""
    keywords: KeywordSet
    created_at: float
