"""Keyword extraction from job descriptions.

Single-pass, dictionary-boosted frequency scoring tuned for speed: technical
terms are boosted, soft skills and recruiting boilerplate are dropped, and
known multi-word phrases get a flat bonus. The sorted result is split into
high/medium/low priority tiers plus a work-experience view used for bullet
injection.
"""

import logging
import math
import re

from models.schemas.keyword_set import KeywordSet
from services.keyword_cache import KeywordCache

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 50
DEFAULT_MAX_KEYWORDS = 35
TECH_BOOST = 5
PHRASE_BONUS = 10
MIN_GENERIC_TOKEN_LENGTH = 5  # non-technical tokens must be longer than 4 chars

HIGH_PRIORITY_RATIO = 0.45
HIGH_PRIORITY_CAP = 15
MEDIUM_PRIORITY_RATIO = 0.35
MEDIUM_PRIORITY_CAP = 10
WORK_EXPERIENCE_LIMIT = 15

# ---------------------------------------------------------------------------
# Generic English function words and recruiting boilerplate
# ---------------------------------------------------------------------------
STOP_WORDS: frozenset[str] = frozenset({
    "a", "an", "the", "and", "or", "but", "in", "on", "at", "to", "for", "of",
    "with", "by", "from", "as", "is", "was", "are", "were", "been", "be",
    "have", "has", "had", "do", "does", "did", "will", "would", "could",
    "should", "may", "might", "must", "can", "need", "this", "that",
    "you", "your", "we", "our", "they", "their",
    # Recruiting boilerplate
    "work", "working", "job", "position", "role", "team", "company",
    "opportunity", "looking", "seeking", "required", "requirements",
    "preferred", "ability", "able", "experience", "years", "year",
    "including", "new", "strong", "excellent", "highly", "etc", "also",
    "via", "across", "ensure", "join",
})

# ---------------------------------------------------------------------------
# Soft skills read as filler when force-injected into a résumé, plus a few
# product names that kept surfacing from unrelated postings.
# ---------------------------------------------------------------------------
SOFT_SKILL_EXCLUSIONS: frozenset[str] = frozenset({
    "collaboration", "communication", "teamwork", "leadership", "initiative",
    "proactive", "ownership", "responsibility", "commitment", "passion",
    "dedication", "motivation", "self-starter", "detail-oriented",
    "problem-solving", "critical thinking", "time management", "adaptability",
    "flexibility", "creativity", "innovation", "interpersonal",
    "organizational", "multitasking", "prioritization", "reliability",
    "accountability", "integrity", "professionalism", "work ethic",
    "positive attitude", "enthusiasm", "driven", "dynamic",
    "results-oriented", "goal-oriented", "mission", "continuous learning",
    "debugging", "testing", "documentation", "system integration",
    # Denylist
    "goodjob", "sidekiq", "canvas", "salesforce",
})

# ---------------------------------------------------------------------------
# Languages, frameworks, platforms, tooling and certifications (boosted)
# ---------------------------------------------------------------------------
TECHNICAL_TERMS: frozenset[str] = frozenset({
    # Languages & runtimes
    "python", "java", "javascript", "typescript", "ruby", "rails", "react",
    "node", "nodejs", ".net", "c#", "go", "scala", "swift", "kotlin",
    "sql", "nosql", "bash", "html", "css", "sass",
    # Cloud & infrastructure
    "aws", "azure", "gcp", "google cloud", "kubernetes", "docker",
    "terraform", "ansible", "lambda", "ecs", "eks", "s3", "rds", "serverless",
    "heroku", "vercel", "netlify", "linux", "unix", "infrastructure",
    "networking", "sre", "devops", "mlops",
    # Data
    "postgresql", "postgres", "mysql", "mongodb", "redis", "elasticsearch",
    "bigquery", "spark", "airflow", "kafka", "dbt", "snowflake", "databricks",
    "etl", "data modeling", "data pipelines", "tableau", "power bi", "looker",
    "pandas", "numpy",
    # ML / AI
    "pytorch", "tensorflow", "scikit-learn", "machine learning",
    "data science", "data engineering", "deep learning", "nlp", "llm",
    "genai", "ai", "ml", "computer vision",
    # Delivery & tooling
    "ci/cd", "github", "gitlab", "jenkins", "circleci", "git", "svn",
    "agile", "scrum", "jira", "confluence", "webpack", "vite",
    # Web & mobile
    "graphql", "rest", "api", "microservices", "nextjs", "vue", "angular",
    "flutter", "react native", "ios", "android", "mobile", "frontend",
    "backend", "fullstack", "full-stack",
    # Security & compliance
    "security", "oauth", "jwt", "encryption", "compliance", "gdpr", "hipaa",
    "soc2", "pci",
    # Certifications
    "prince2", "cbap", "pmp", "certified", "certification",
})

# Matched by substring against the lowercased posting, once each
MULTI_WORD_PHRASES: tuple[str, ...] = (
    "project management", "data science", "machine learning", "deep learning",
    "data engineering", "cloud platform", "google cloud platform",
    "agile/scrum", "a/b testing", "ci/cd", "real-time", "data pipelines",
    "ruby on rails", "node.js", "react.js", "vue.js", "next.js", "full stack",
    "full-stack", "natural language processing", "computer vision",
    "artificial intelligence", ".net core", "software development",
    "full-stack development",
)

_DISALLOWED_CHARS_RE = re.compile(r"[^a-z0-9\s\-/.#+]")


def tokenize(text: str) -> list[str]:
    """Lowercase, strip punctuation (keeping - / . # +) and drop noise tokens."""
    cleaned = _DISALLOWED_CHARS_RE.sub(" ", text.lower())
    return [
        tok for tok in cleaned.split()
        if len(tok) >= 2
        and tok not in STOP_WORDS
        and tok not in SOFT_SKILL_EXCLUSIONS
    ]


def score_terms(text: str) -> dict[str, int]:
    """Score candidate terms in first-seen order.

    Each occurrence sets ``score = (previous_score + 1) * boost``, so repeated
    technical terms grow geometrically (5, 30, 155, ...) while generic terms
    count linearly. This is the legacy formula and is kept for output parity.
    """
    scores: dict[str, int] = {}
    for tok in tokenize(text):
        is_technical = tok in TECHNICAL_TERMS
        if not is_technical and len(tok) < MIN_GENERIC_TOKEN_LENGTH:
            continue
        boost = TECH_BOOST if is_technical else 1
        scores[tok] = (scores.get(tok, 0) + 1) * boost

    text_lower = text.lower()
    for phrase in MULTI_WORD_PHRASES:
        if phrase in text_lower:
            scores[phrase] = scores.get(phrase, 0) + PHRASE_BONUS

    return scores


def partition_keywords(ranked: list[str]) -> KeywordSet:
    """Split a ranked keyword list into priority tiers."""
    n = len(ranked)
    high_count = min(HIGH_PRIORITY_CAP, math.ceil(n * HIGH_PRIORITY_RATIO))
    med_count = min(MEDIUM_PRIORITY_CAP, math.ceil(n * MEDIUM_PRIORITY_RATIO))
    return KeywordSet(
        all=list(ranked),
        high_priority=ranked[:high_count],
        medium_priority=ranked[high_count : high_count + med_count],
        low_priority=ranked[high_count + med_count :],
        work_experience=ranked[:WORK_EXPERIENCE_LIMIT],
        total=n,
    )


def extract_keywords(text: str | None, max_keywords: int = DEFAULT_MAX_KEYWORDS) -> KeywordSet:
    """Extract a prioritized keyword set from a job description.

    Texts shorter than 50 characters are treated as insufficient and yield an
    empty set.
    """
    if not text or len(text) < MIN_TEXT_LENGTH:
        return KeywordSet.empty()

    scores = score_terms(text)
    candidates = [term for term in scores if term not in SOFT_SKILL_EXCLUSIONS]
    # sorted() is stable: ties keep first-seen order
    ranked = sorted(candidates, key=lambda term: scores[term], reverse=True)
    return partition_keywords(ranked[:max_keywords])


def extract_keywords_cached(
    text: str | None,
    cache: KeywordCache,
    job_url: str = "",
    max_keywords: int = DEFAULT_MAX_KEYWORDS,
) -> tuple[KeywordSet, bool]:
    """Extract keywords, serving repeated postings from the cache.

    Returns ``(keywords, from_cache)``. Insufficient input is never cached.
    """
    if not text or len(text) < MIN_TEXT_LENGTH:
        return KeywordSet.empty(), False

    cached = cache.get_for(job_url, text)
    if cached is not None:
        return cached, True

    keywords = extract_keywords(text, max_keywords=max_keywords)
    cache.put_for(job_url, text, keywords)
    logger.debug("Extracted %d keywords (cache size %d)", keywords.total, cache.size())
    return keywords, False
