"""Location sanitization: a tailored résumé never advertises "Remote".

"Dublin, IE | Remote" -> "Dublin, IE"
"""

import re

_REMOTE_ONLY_RE = re.compile(r"^remote$", re.IGNORECASE)
_REMOTE_WITH_REGION_RE = re.compile(r"^remote\s*[(,\\-]\s*\w+\)?$", re.IGNORECASE)

_REMOTE_TOKEN_RE = re.compile(
    r"\b(remote|work\s*from\s*home|wfh|virtual|fully\s*remote|remote\s*first|remote\s*friendly)\b",
    re.IGNORECASE,
)
_BRACKETED_REMOTE_RE = re.compile(r"\s*[(\[]?\s*(remote|wfh|virtual)\s*[)\]]?\s*", re.IGNORECASE)

_SEP = r"(\||,|/|–|—|-|·)"
_DOUBLE_SEP_RE = re.compile(rf"\s*{_SEP}\s*{_SEP}\s*")
_TRAILING_SEP_RE = re.compile(rf"\s*{_SEP}\s*$")
_LEADING_SEP_RE = re.compile(rf"^\s*{_SEP}\s*")
_MULTI_SPACE_RE = re.compile(r"\s{2,}")


def strip_remote_from_location(raw: str | None) -> str:
    """Remove remote-work markers from a location string.

    Returns ``""`` when nothing but a remote marker is left, so callers can
    fall back to the raw value or a default.
    """
    s = (raw or "").strip()
    if not s:
        return ""

    if _REMOTE_ONLY_RE.match(s) or _REMOTE_WITH_REGION_RE.match(s):
        return ""

    out = _REMOTE_TOKEN_RE.sub("", s)
    out = _BRACKETED_REMOTE_RE.sub("", out)
    out = _DOUBLE_SEP_RE.sub(" | ", out)
    out = _TRAILING_SEP_RE.sub("", out)
    out = _LEADING_SEP_RE.sub("", out)
    out = _MULTI_SPACE_RE.sub(" ", out)
    return out.strip()
