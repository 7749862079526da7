"""Lightweight bullet rewrite used as the first fallback tailoring pass.

Walks experience bullets in order and appends up to three queued keywords
to each using a short template. Unlike the distributor it never creates new
bullets; keywords that do not fit are simply left out.
"""

import logging
import random

from models.schemas.distribution import RewriteResult
from services.section_parser import (
    is_bullet,
    locate_experience_section,
    split_bullet,
)

logger = logging.getLogger(__name__)

REWRITE_PATTERNS: tuple[str, ...] = (
    ", incorporating {} principles",
    " with focus on {}",
    ", leveraging {}",
    " utilizing {} methodologies",
    " through {} implementation",
)

DEFAULT_MAX_PER_BULLET = 3


def _join_keywords(keywords: list[str]) -> str:
    if len(keywords) == 1:
        return keywords[0]
    return ", ".join(keywords[:-1]) + " and " + keywords[-1]


def rewrite_bullets(
    resume_text: str,
    missing_keywords: list[str],
    rng: random.Random | None = None,
    max_per_bullet: int = DEFAULT_MAX_PER_BULLET,
) -> RewriteResult:
    """Append queued keywords to experience bullets.

    A queued keyword that already appears in the bullet line (substring,
    case-insensitive) is consumed without being injected there.
    """
    resume_text = resume_text or ""
    if not missing_keywords:
        return RewriteResult(tailored_text=resume_text)

    section = locate_experience_section(resume_text)
    if section is None:
        return RewriteResult(tailored_text=resume_text)

    rng = rng or random.Random()
    lines = section.body_lines()
    injected: list[str] = []
    cursor = 0

    for i, line in enumerate(lines):
        if cursor >= len(missing_keywords):
            break
        if not is_bullet(line):
            continue

        line_lower = line.lower()
        to_inject: list[str] = []
        while len(to_inject) < max_per_bullet and cursor < len(missing_keywords):
            kw = missing_keywords[cursor]
            if kw.lower() not in line_lower:
                to_inject.append(kw)
            cursor += 1
        if not to_inject:
            continue

        pattern = rng.choice(REWRITE_PATTERNS)
        clause = pattern.replace("{}", _join_keywords(to_inject))
        prefix, content = split_bullet(line)
        content = content.rstrip()
        if content.endswith("."):
            content = content[:-1] + clause + "."
        else:
            content = content + clause
        lines[i] = prefix + content
        injected.extend(to_inject)

    logger.debug("Bullet rewrite injected %d keywords", len(injected))
    return RewriteResult(
        tailored_text=section.replace_body_lines(lines),
        injected_keywords=injected,
    )
