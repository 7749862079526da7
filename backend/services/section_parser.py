"""Résumé section boundaries, bullet detection and whole-word coverage checks."""

import re
from dataclasses import dataclass

# A heading sits alone on its line, optionally indented and followed by a colon.
_HEADING_LINE = r"^[ \t]*(?:{names})[ \t]*:?[ \t\r]*$"

EXPERIENCE_HEADINGS: list[str] = [
    r"professional[ \t]*experience",
    r"work[ \t]*experience",
    r"experience",
    r"employment",
]

NEXT_SECTION_HEADINGS: list[str] = [
    r"skills",
    r"education",
    r"certifications",
    r"projects",
    r"technical[ \t]*proficiencies",
]

EXPERIENCE_HEADING_RE = re.compile(
    _HEADING_LINE.format(names="|".join(EXPERIENCE_HEADINGS)),
    re.IGNORECASE | re.MULTILINE,
)
NEXT_SECTION_RE = re.compile(
    _HEADING_LINE.format(names="|".join(NEXT_SECTION_HEADINGS)),
    re.IGNORECASE | re.MULTILINE,
)

# Bullet markers: trimmed line starts with one of these, then whitespace
BULLET_MARKERS = "-•*▪▸◦‣●"
BULLET_RE = re.compile(rf"^([{re.escape(BULLET_MARKERS)}])\s")


@dataclass(frozen=True)
class SectionSpan:
    """Offsets of the experience section body inside the full text.

    ``start`` is just past the heading line, ``end`` is the start of the next
    recognized heading line (or the end of the document).
    """
    text: str
    start: int
    end: int

    @property
    def before(self) -> str:
        return self.text[: self.start]

    @property
    def body(self) -> str:
        return self.text[self.start : self.end]

    @property
    def after(self) -> str:
        return self.text[self.end :]

    @property
    def line_ending(self) -> str:
        return "\r\n" if "\r\n" in self.text else "\n"

    def body_lines(self) -> list[str]:
        """Body split on the document's own line terminator."""
        return self.body.split(self.line_ending)

    def replace_body(self, new_body: str) -> str:
        """Splice a rewritten body back between the untouched neighbours."""
        return self.before + new_body + self.after

    def replace_body_lines(self, lines: list[str]) -> str:
        return self.replace_body(self.line_ending.join(lines))


def locate_experience_section(text: str) -> SectionSpan | None:
    """Find the experience section body, or None if there is no heading."""
    if not text:
        return None
    heading = EXPERIENCE_HEADING_RE.search(text)
    if heading is None:
        return None

    start = heading.end()
    # Body starts on the line after the heading
    if text.startswith("\r\n", start):
        start += 2
    elif text.startswith("\n", start):
        start += 1

    next_heading = NEXT_SECTION_RE.search(text, start)
    end = next_heading.start() if next_heading else len(text)
    return SectionSpan(text=text, start=start, end=end)


def is_bullet(line: str) -> bool:
    return bool(BULLET_RE.match(line.strip()))


def bullet_line_indexes(lines: list[str]) -> list[int]:
    """Indexes of bullet lines, in document order."""
    return [i for i, line in enumerate(lines) if is_bullet(line)]


def split_bullet(line: str) -> tuple[str, str]:
    """Split a bullet line into (prefix, content).

    The prefix keeps the original indentation, marker and spacing, so the
    line can be rebuilt without changing its look.
    """
    match = re.match(rf"^(\s*[{re.escape(BULLET_MARKERS)}]\s+)(.*)$", line, re.DOTALL)
    if not match:
        return "", line
    return match.group(1), match.group(2)


def whole_word_pattern(term: str) -> re.Pattern:
    """Case-insensitive pattern matching ``term`` as a whole word.

    Boundaries are "not a word character" on each side rather than ``\\b``
    so terms that start or end with punctuation (``c++``, ``.net``, ``c#``)
    still match.
    """
    return re.compile(rf"(?<!\w){re.escape(term)}(?!\w)", re.IGNORECASE)


def contains_whole_word(text: str, term: str) -> bool:
    if not term:
        return False
    return bool(whole_word_pattern(term).search(text))
