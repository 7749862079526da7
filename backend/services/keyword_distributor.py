"""Keyword distribution across work-experience bullets.

Keywords already present in the résumé (whole-word, case-insensitive) are
left alone. Missing ones are spread evenly over the experience bullets as a
short trailing clause ("..., leveraging Kafka."). Whatever does not fit is
written into new bullets placed after the first few existing ones.
"""

import logging
import math
import random
import time

from models.schemas.distribution import (
    DistributionOptions,
    DistributionResult,
    DistributionStats,
)
from services.section_parser import (
    bullet_line_indexes,
    contains_whole_word,
    locate_experience_section,
    split_bullet,
)

logger = logging.getLogger(__name__)

CONNECTIVE_PHRASES: tuple[str, ...] = (
    "leveraging", "utilizing", "implementing", "applying", "with expertise in",
    "through", "incorporating", "employing", "using", "via",
)

OVERFLOW_CHUNK_SIZE = 3
OVERFLOW_ANCHOR_BULLET = 5  # new bullets go after the 5th bullet (or the last)
DEFAULT_OVERFLOW_MARKER = "• "

OVERFLOW_TEMPLATES: dict[int, tuple[str, ...]] = {
    1: (
        "Implemented {0} solutions to enhance operational efficiency and delivery outcomes",
        "Adopted {0} to streamline engineering workflows and improve reliability",
        "Championed {0} practices to raise delivery quality across projects",
    ),
    2: (
        "Applied {0} and {1} methodologies to drive cross-functional improvements",
        "Combined {0} and {1} to modernize core systems and reduce turnaround time",
        "Integrated {0} with {1} to strengthen platform capabilities",
    ),
    3: (
        "Delivered {0}, {1}, and {2} initiatives across technical teams",
        "Drove adoption of {0}, {1}, and {2} to accelerate product delivery",
        "Built solutions spanning {0}, {1}, and {2} to support business goals",
    ),
}


def build_injection(keywords: list[str], phrase: str) -> str:
    """Render keywords as a clause appended to a bullet."""
    if len(keywords) == 1:
        return f", {phrase} {keywords[0]}"
    if len(keywords) == 2:
        return f" {phrase} {keywords[0]} and {keywords[1]}"
    return f" {phrase} {', '.join(keywords[:-1])}, and {keywords[-1]}"


def inject_into_bullet(line: str, clause: str) -> str:
    """Append a clause, keeping a trailing period at the very end."""
    stripped = line.rstrip()
    if stripped.endswith("."):
        return stripped[:-1] + clause + "."
    return stripped + clause


def build_overflow_bullet(keywords: list[str], rng: random.Random, prefix: str) -> str:
    templates = OVERFLOW_TEMPLATES[len(keywords)]
    return prefix + rng.choice(templates).format(*keywords)


def split_coverage(resume_text: str, keywords: list[str]) -> tuple[list[str], list[str]]:
    """Split keywords into (present, missing), preserving priority order."""
    present: list[str] = []
    missing: list[str] = []
    for kw in keywords:
        if contains_whole_word(resume_text, kw):
            present.append(kw)
        else:
            missing.append(kw)
    return present, missing


def distribute_keywords(
    resume_text: str,
    keywords: list[str],
    options: DistributionOptions | None = None,
    rng: random.Random | None = None,
) -> DistributionResult:
    """Inject missing keywords into the experience section's bullets.

    Never raises for malformed résumés: without an experience heading or
    without bullets the text comes back unchanged and every missing keyword
    is reported in ``stats.missing``.
    """
    start_time = time.perf_counter()
    options = options or DistributionOptions()
    rng = rng or random.Random()
    resume_text = resume_text or ""

    def _done(text: str, stats: DistributionStats) -> DistributionResult:
        timing_ms = (time.perf_counter() - start_time) * 1000
        return DistributionResult(tailored_text=text, stats=stats, timing_ms=timing_ms)

    if options.target_mentions or options.min_mentions or options.max_mentions:
        logger.debug("Mention-count options are accepted but not applied")

    stats = DistributionStats(total=len(keywords))
    if not keywords:
        return _done(resume_text, stats)

    present, missing = split_coverage(resume_text, keywords)
    stats.already_present = len(present)
    logger.debug("Keywords: %d present, %d missing", len(present), len(missing))

    if not missing:
        return _done(resume_text, stats)

    section = locate_experience_section(resume_text)
    if section is None:
        logger.info("No experience section found, %d keywords left missing", len(missing))
        stats.missing = len(missing)
        return _done(resume_text, stats)

    lines = section.body_lines()
    bullets = bullet_line_indexes(lines)
    if not bullets:
        logger.info("No bullets in experience section, %d keywords left missing", len(missing))
        stats.missing = len(missing)
        return _done(resume_text, stats)

    per_bullet = math.ceil(len(missing) / len(bullets))
    cursor = 0
    for line_idx in bullets:
        if cursor >= len(missing):
            break
        take = min(options.max_keywords_per_bullet, per_bullet, len(missing) - cursor)
        chunk = missing[cursor : cursor + take]
        cursor += take

        clause = build_injection(chunk, rng.choice(CONNECTIVE_PHRASES))
        lines[line_idx] = inject_into_bullet(lines[line_idx], clause)
        stats.added += len(chunk)

    if cursor < len(missing):
        remaining = missing[cursor:]
        anchor = bullets[min(OVERFLOW_ANCHOR_BULLET, len(bullets)) - 1]
        prefix, _ = split_bullet(lines[anchor])
        new_bullets: list[str] = []
        for i in range(0, len(remaining), OVERFLOW_CHUNK_SIZE):
            chunk = remaining[i : i + OVERFLOW_CHUNK_SIZE]
            new_bullets.append(build_overflow_bullet(chunk, rng, prefix or DEFAULT_OVERFLOW_MARKER))
            stats.added += len(chunk)
        lines[anchor + 1 : anchor + 1] = new_bullets

    stats.missing = max(0, len(missing) - stats.added)
    tailored = section.replace_body_lines(lines)

    result = _done(tailored, stats)
    logger.info(
        "Keyword distribution: %d added, %d already present, %d still missing (%.0fms)",
        stats.added, stats.already_present, stats.missing, result.timing_ms,
    )
    return result
