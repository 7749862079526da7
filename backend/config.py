import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    max_upload_size_mb: int = 5
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False

    # Keyword extraction / distribution
    max_keywords: int = 35
    max_keywords_per_bullet: int = 3

    # In-memory keyword cache
    cache_ttl_seconds: float = 30 * 60
    cache_max_entries: int = 100

    # Latency targets in ms (advisory, reported but never enforced)
    target_extraction_ms: float = 30
    target_tailoring_ms: float = 50
    target_total_ms: float = 175
    target_coverage_score: int = 95  # advisory, not computed here

    # Fixed seed for phrase/template selection; None = non-deterministic
    random_seed: int | None = None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
