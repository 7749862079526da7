import random

import pytest

from models.schemas.distribution import DistributionOptions
from services.keyword_distributor import (
    build_injection,
    distribute_keywords,
    inject_into_bullet,
    split_coverage,
)
from services.section_parser import contains_whole_word, locate_experience_section


TWO_BULLET_RESUME = """Alex Doe
alex@example.com

EXPERIENCE
Software Engineer, Initech
- Built internal dashboards.
- Maintained billing services

SKILLS
Excel
"""

SIX_BULLET_RESUME = """EXPERIENCE
Engineer, Globex
- Bullet one
- Bullet two
- Bullet three
- Bullet four
- Bullet five
- Bullet six

EDUCATION
BSc
"""

FIVE_MISSING = ["python", "kubernetes", "aws", "terraform", "kafka"]


def _section_lines(text):
    return locate_experience_section(text).body.split("\n")


# --- Clause rendering ---

def test_build_injection_forms():
    assert build_injection(["python"], "using") == ", using python"
    assert build_injection(["python", "aws"], "using") == " using python and aws"
    assert build_injection(["python", "aws", "kafka"], "using") == " using python, aws, and kafka"


def test_inject_into_bullet_before_period():
    assert inject_into_bullet("- Built APIs.", ", using aws") == "- Built APIs, using aws."
    assert inject_into_bullet("- Built APIs  ", ", using aws") == "- Built APIs, using aws"


def test_split_coverage_preserves_order():
    present, missing = split_coverage("Python and SQL", ["sql", "aws", "python", "go"])
    assert present == ["sql", "python"]
    assert missing == ["aws", "go"]


# --- Scenarios ---

def test_five_missing_two_bullets_fits_without_overflow(first_choice_rng):
    result = distribute_keywords(
        TWO_BULLET_RESUME, FIVE_MISSING, DistributionOptions(max_keywords_per_bullet=3), rng=first_choice_rng
    )
    expected = TWO_BULLET_RESUME.replace(
        "- Built internal dashboards.",
        "- Built internal dashboards leveraging python, kubernetes, and aws.",
    ).replace(
        "- Maintained billing services",
        "- Maintained billing services leveraging terraform and kafka",
    )
    assert result.tailored_text == expected
    assert result.stats.total == 5
    assert result.stats.added == 5
    assert result.stats.missing == 0
    assert result.stats.already_present == 0


def test_seven_missing_two_bullets_creates_one_overflow_bullet(first_choice_rng):
    keywords = FIVE_MISSING + ["graphql", "snowflake"]
    result = distribute_keywords(TWO_BULLET_RESUME, keywords, rng=first_choice_rng)

    lines = _section_lines(result.tailored_text)
    assert lines[1] == "- Built internal dashboards leveraging python, kubernetes, and aws."
    overflow = [l for l in lines if l.startswith("- Implemented")]
    assert overflow == [
        "- Implemented snowflake solutions to enhance operational efficiency and delivery outcomes"
    ]
    # inserted right after the last (second) existing bullet
    assert lines[3] == overflow[0]
    assert result.stats.added == 7
    assert result.stats.missing == 0


def test_second_bullet_gets_next_three_in_order(first_choice_rng):
    keywords = FIVE_MISSING + ["graphql", "snowflake"]
    result = distribute_keywords(TWO_BULLET_RESUME, keywords, rng=first_choice_rng)
    lines = _section_lines(result.tailored_text)
    assert lines[2] == "- Maintained billing services leveraging terraform, kafka, and graphql"


def test_overflow_inserted_after_fifth_bullet(first_choice_rng):
    keywords = [f"kw{i:02d}" for i in range(1, 21)]
    result = distribute_keywords(SIX_BULLET_RESUME, keywords, rng=first_choice_rng)
    lines = _section_lines(result.tailored_text)

    assert lines[0] == "Engineer, Globex"
    assert lines[5].startswith("- Bullet five leveraging kw13, kw14, and kw15")
    assert lines[6] == "- Applied kw19 and kw20 methodologies to drive cross-functional improvements"
    assert lines[7].startswith("- Bullet six leveraging kw16, kw17, and kw18")
    assert result.stats.added == 20
    assert result.stats.missing == 0


def test_overflow_grouped_in_threes(first_choice_rng):
    keywords = [f"kw{i:02d}" for i in range(1, 11)]
    resume = "EXPERIENCE\n- Only bullet\nSKILLS\nx"
    result = distribute_keywords(resume, keywords, rng=first_choice_rng)
    lines = _section_lines(result.tailored_text)
    assert lines[0] == "- Only bullet leveraging kw01, kw02, and kw03"
    assert lines[1] == "- Delivered kw04, kw05, and kw06 initiatives across technical teams"
    assert lines[2] == "- Delivered kw07, kw08, and kw09 initiatives across technical teams"
    assert lines[3] == "- Implemented kw10 solutions to enhance operational efficiency and delivery outcomes"
    assert result.stats.added == 10


def test_overflow_reuses_anchor_marker_and_indent(first_choice_rng):
    resume = "EXPERIENCE\n  • Ran ops\nSKILLS\nx"
    result = distribute_keywords(
        resume, ["aws", "gcp"], DistributionOptions(max_keywords_per_bullet=1), rng=first_choice_rng
    )
    lines = _section_lines(result.tailored_text)
    assert lines[0] == "  • Ran ops, leveraging aws"
    assert lines[1] == "  • Implemented gcp solutions to enhance operational efficiency and delivery outcomes"


def test_per_bullet_cap_respected(first_choice_rng):
    result = distribute_keywords(
        TWO_BULLET_RESUME, FIVE_MISSING, DistributionOptions(max_keywords_per_bullet=1), rng=first_choice_rng
    )
    lines = _section_lines(result.tailored_text)
    assert lines[1] == "- Built internal dashboards, leveraging python."
    assert lines[2] == "- Maintained billing services, leveraging kubernetes"
    assert result.stats.added == 5


# --- Degraded inputs ---

def test_no_experience_heading_returns_input_unchanged():
    resume = "Alex Doe\nSUMMARY\n- Built dashboards\nSKILLS\nExcel"
    result = distribute_keywords(resume, FIVE_MISSING)
    assert result.tailored_text == resume
    assert result.stats.added == 0
    assert result.stats.missing == result.stats.total == 5


def test_no_bullets_returns_input_unchanged():
    resume = "EXPERIENCE\nWorked on dashboards at Initech.\nSKILLS\nExcel"
    result = distribute_keywords(resume, FIVE_MISSING)
    assert result.tailored_text == resume
    assert result.stats.added == 0
    assert result.stats.missing == 5


def test_empty_keywords():
    result = distribute_keywords(TWO_BULLET_RESUME, [])
    assert result.tailored_text == TWO_BULLET_RESUME
    assert result.stats.total == 0


def test_empty_resume_reports_everything_missing():
    result = distribute_keywords("", ["python", "aws"])
    assert result.tailored_text == ""
    assert result.stats.missing == 2


def test_fully_covered_resume_is_idempotent():
    resume = "EXPERIENCE\n- Built Python services on AWS with Kafka\nSKILLS\nx"
    keywords = ["python", "aws", "kafka"]
    first = distribute_keywords(resume, keywords, rng=random.Random(3))
    second = distribute_keywords(first.tailored_text, keywords, rng=random.Random(3))
    for result in (first, second):
        assert result.stats.added == 0
        assert result.stats.already_present == 3
        assert result.tailored_text == resume


def test_sections_outside_experience_untouched(first_choice_rng):
    resume = TWO_BULLET_RESUME + "\nPROJECTS\n- Side project one\n"
    result = distribute_keywords(resume, FIVE_MISSING + ["graphql", "snowflake"], rng=first_choice_rng)
    section = locate_experience_section(resume)
    assert result.tailored_text.startswith(section.before)
    assert result.tailored_text.endswith(section.after)
    assert result.tailored_text.endswith("- Side project one\n")


def test_distributed_keywords_become_present():
    result = distribute_keywords(TWO_BULLET_RESUME, FIVE_MISSING, rng=random.Random(11))
    for kw in FIVE_MISSING:
        assert contains_whole_word(result.tailored_text, kw)


def test_mention_options_do_not_change_output(first_choice_rng):
    plain = distribute_keywords(TWO_BULLET_RESUME, FIVE_MISSING, rng=first_choice_rng)
    with_mentions = distribute_keywords(
        TWO_BULLET_RESUME,
        FIVE_MISSING,
        DistributionOptions(target_mentions=4, min_mentions=3, max_mentions=5),
        rng=first_choice_rng,
    )
    assert plain.tailored_text == with_mentions.tailored_text


def test_same_seed_same_output():
    a = distribute_keywords(SIX_BULLET_RESUME, [f"kw{i}" for i in range(30)], rng=random.Random(42))
    b = distribute_keywords(SIX_BULLET_RESUME, [f"kw{i}" for i in range(30)], rng=random.Random(42))
    assert a.tailored_text == b.tailored_text


@pytest.mark.parametrize(
    "resume, keywords",
    [
        (TWO_BULLET_RESUME, FIVE_MISSING),
        (TWO_BULLET_RESUME, ["excel", "python", "dashboards", "aws"]),
        (SIX_BULLET_RESUME, [f"kw{i}" for i in range(40)]),
        ("No sections here", ["python"]),
        ("EXPERIENCE\nplain text only", ["python", "aws"]),
        ("", []),
    ],
)
def test_stats_invariant(resume, keywords):
    stats = distribute_keywords(resume, keywords, rng=random.Random(0)).stats
    assert stats.already_present + stats.added + stats.missing == stats.total
    assert stats.total == len(keywords)


def test_crlf_resume_keeps_crlf_line_endings(first_choice_rng):
    resume = "EXPERIENCE\r\n- Built APIs.\r\n- Ran ops\r\nSKILLS\r\nx"
    keywords = ["python", "aws", "kafka", "redis", "docker", "terraform", "etl"]
    result = distribute_keywords(resume, keywords, rng=first_choice_rng)
    assert result.tailored_text == (
        "EXPERIENCE\r\n"
        "- Built APIs leveraging python, aws, and kafka.\r\n"
        "- Ran ops leveraging redis, docker, and terraform\r\n"
        "- Implemented etl solutions to enhance operational efficiency and delivery outcomes\r\n"
        "SKILLS\r\nx"
    )
    assert result.tailored_text.count("\n") == result.tailored_text.count("\r\n")
    assert result.stats.added == 7
