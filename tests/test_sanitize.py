from __future__ import annotations

import pytest

from deepseektrans.pipeline.sanitize import (
    BASIC_RULES,
    EXTENDED_RULES,
    rules_for,
    sanitize,
)


def test_basic_rules_order():
    assert [r.name for r in BASIC_RULES] == [
        "trim",
        "strip_quotes",
        "remove_asterisks",
        "bullets",
        "headings",
        "horizontal_rules",
    ]


def test_quoted_markdown_is_flattened():
    raw = '"**Hello** - world\n---\n# Title"'
    out = sanitize(raw)
    assert out == "Hello - world\n\nTitle"
    assert '"' not in out
    assert "*" not in out
    assert "#" not in out
    assert "---" not in out


def test_bullets_keep_indentation():
    raw = "Meanings:\n- noun\n  - plural\n-not a bullet"
    assert sanitize(raw) == "Meanings:\n• noun\n  • plural\n-not a bullet"


def test_only_one_pair_of_quotes_is_stripped():
    assert sanitize('  ""quoted""  ') == '"quoted"'


def test_inner_quotes_are_kept():
    assert sanitize('He said "hi"') == 'He said "hi'


def test_headings_of_any_level():
    assert sanitize("## Usage\n### Examples") == "Usage\nExamples"


def test_horizontal_rule_with_trailing_spaces():
    assert sanitize("a\n-----   \nb") == "a\n\nb"


@pytest.mark.parametrize("rules", [BASIC_RULES, EXTENDED_RULES])
def test_plain_text_is_idempotent(rules):
    raw = "Bonjour le monde\n• premier point\nFin."
    once = sanitize(raw, rules)
    assert once == raw
    assert sanitize(once, rules) == once


def test_empty_completion():
    assert sanitize("") == ""
    assert sanitize("   \n ") == ""


def test_extended_unwraps_inline_markup():
    raw = "Use `x` and ~~old~~ ==new== *it* **b**"
    assert sanitize(raw, EXTENDED_RULES) == "Use x and old new it b"


def test_extended_keeps_identifiers_and_comparisons():
    raw = "call __init__ and a == b == c"
    assert sanitize(raw, EXTENDED_RULES) == raw


def test_extended_drops_code_blocks_and_images():
    raw = (
        "Intro ![logo](http://a/b.png)\n"
        "```python\n"
        "print(1)\n"
        "```\n"
        "Outro"
    )
    assert sanitize(raw, EXTENDED_RULES) == "Intro \nOutro"


def test_extended_star_bullets_are_not_italic():
    raw = "* one\n* two *three*"
    assert sanitize(raw, EXTENDED_RULES) == "• one\n• two three"


def test_extended_keeps_arithmetic_stars():
    assert sanitize("2 * 3 * 4", EXTENDED_RULES) == "2 * 3 * 4"


def test_extended_handles_spec_example():
    raw = '"**Hello** - world\n---\n# Title"'
    assert sanitize(raw, EXTENDED_RULES) == "Hello - world\n\nTitle"


def test_rules_for_resolves_names():
    assert rules_for("basic") is BASIC_RULES
    assert rules_for("extended") is EXTENDED_RULES
    with pytest.raises(ValueError):
        rules_for("html")
