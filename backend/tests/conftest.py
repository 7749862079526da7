"""Shared test configuration, pytest markers and deterministic helpers."""

import random

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: exercises the full HTTP stack"
    )


class FirstChoiceRandom(random.Random):
    """Always picks the first option, so injected text is predictable."""

    def choice(self, seq):
        return seq[0]


@pytest.fixture
def first_choice_rng():
    return FirstChoiceRandom()


RESUME_PDF_LINES = [
    "Jane Roe",
    "EXPERIENCE",
    "Backend Engineer, Acme",
    "- Built internal APIs.",
    "- Maintained payment services",
    "EDUCATION",
    "BSc Computer Science",
]


def build_text_pdf(lines: list[str]) -> bytes:
    """Single-page Helvetica PDF with one text line per entry."""
    ops = ["BT", "/F1 12 Tf", "72 720 Td"]
    for i, line in enumerate(lines):
        escaped = line.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
        if i:
            ops.append("0 -18 Td")
        ops.append(f"({escaped}) Tj")
    ops.append("ET")
    content = "\n".join(ops).encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(content) + content + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref_at = len(out)
    out += b"xref\n0 %d\n0000000000 65535 f \n" % (len(objects) + 1)
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_at)
    return bytes(out)


@pytest.fixture
def resume_pdf() -> bytes:
    return build_text_pdf(RESUME_PDF_LINES)
