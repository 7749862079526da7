"""Shared dependencies for API routes: one cache and pipeline per process."""

from config import settings
from services.keyword_cache import KeywordCache
from services.pipeline.orchestrator import TailoringPipeline

_cache: KeywordCache | None = None
_pipeline: TailoringPipeline | None = None


def get_cache() -> KeywordCache:
    global _cache
    if _cache is None:
        _cache = KeywordCache(
            ttl_seconds=settings.cache_ttl_seconds,
            max_entries=settings.cache_max_entries,
        )
    return _cache


def get_pipeline() -> TailoringPipeline:
    global _pipeline
    if _pipeline is None:
        _pipeline = TailoringPipeline(settings, cache=get_cache())
    return _pipeline
