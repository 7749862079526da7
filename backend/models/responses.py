from pydantic import BaseModel

from models.schemas.keyword_set import KeywordSet


class KeywordResponse(BaseModel):
    keywords: KeywordSet = KeywordSet()
    from_cache: bool = False


class CacheStatus(BaseModel):
    size: int = 0
    max_entries: int = 0
    ttl_seconds: float = 0.0
