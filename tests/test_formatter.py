"""Tests for reply rendering and fallbacks."""

import random

import pytest

from companion.models.topic import TopicRecord
from companion.services import formatter


class FixedChoice:
    """Random source stub that always picks the same index."""

    def __init__(self, index):
        self.index = index

    def choice(self, seq):
        return seq[self.index]


def _record(**overrides):
    data = {
        "keywords": ["anxious"],
        "definition": "Anxiety is a feeling of unease.",
        "types": [f"Type {i}" for i in range(1, 7)],
        "root_causes": [f"Cause {i}" for i in range(1, 7)],
        "impacts": [f"Impact {i}" for i in range(1, 7)],
        "immediate_relief": [f"Relief {i}" for i in range(1, 7)],
        "long_term_solutions": [f"Solution {i}" for i in range(1, 7)],
        "when_to_seek_help": "If it lasts for weeks.",
        "resources": [f"Resource {i}" for i in range(1, 7)],
    }
    data.update(overrides)
    return TopicRecord(**data)


@pytest.mark.parametrize("index", range(len(formatter.NORMAL_TEMPLATES)))
def test_each_normal_template_renders(index):
    record = _record()
    text = formatter.format_normal(record, FixedChoice(index))

    assert record.definition in text
    assert "Relief 1" in text
    assert text.endswith("?")
    assert "{" not in text


def test_normal_output_is_one_of_four_shapes():
    record = _record()
    candidates = {formatter.format_normal(record, FixedChoice(i)) for i in range(4)}
    assert len(candidates) == 4

    rng = random.Random(99)
    for _ in range(25):
        assert formatter.format_normal(record, rng) in candidates


def test_normal_uses_default_relief_when_list_is_empty():
    record = _record(immediate_relief=[], long_term_solutions=[], root_causes=[])
    for i in range(4):
        text = formatter.format_normal(record, FixedChoice(i))
        assert "Relief" not in text
    assert formatter.DEFAULT_RELIEF in formatter.format_normal(record, FixedChoice(0))
    assert formatter.DEFAULT_SOLUTION in formatter.format_normal(record, FixedChoice(2))
    assert formatter.DEFAULT_CAUSE in formatter.format_normal(record, FixedChoice(1))


def test_detailed_is_deterministic():
    record = _record()
    assert formatter.format_detailed(record, "Anxiety") == formatter.format_detailed(record, "Anxiety")


def test_detailed_section_order():
    text = formatter.format_detailed(_record(), "Anxiety")
    headers = [
        "**Understanding Anxiety**",
        "**Common Types:**",
        "**Root Causes:**",
        "**How It Can Affect You:**",
        "**Immediate Relief:**",
        "**Long-Term Solutions:**",
        "**When to Seek Help:**",
        "**Resources:**",
    ]
    positions = [text.index(h) for h in headers]
    assert positions == sorted(positions)


def test_detailed_truncates_each_list():
    text = formatter.format_detailed(_record())

    assert "Type 3" in text and "Type 4" not in text
    assert "Cause 4" in text and "Cause 5" not in text
    assert "Impact 4" in text and "Impact 5" not in text
    assert "3. Relief 3" in text and "Relief 4" not in text
    assert "4. Solution 4" in text and "Solution 5" not in text
    assert "Resource 2" in text and "Resource 3" not in text


def test_detailed_short_lists_are_not_padded():
    text = formatter.format_detailed(_record(types=["Only one"], resources=[]))
    assert "• Only one" in text
    assert "**Resources:**" in text
    assert text.rstrip().endswith("**Resources:**")


def test_detailed_with_only_required_fields():
    record = TopicRecord(keywords=["x"], definition="Just a definition.")
    text = formatter.format_detailed(record)
    assert text.startswith("**Understanding**\nJust a definition.")
    assert "**Immediate Relief:**" in text


def test_normal_fallback_choices():
    rng = random.Random(3)
    assert len(formatter.NORMAL_FALLBACKS) == 3
    for _ in range(10):
        assert formatter.normal_fallback(rng) in formatter.NORMAL_FALLBACKS


def test_detailed_fallback_is_fixed():
    assert formatter.detailed_fallback() == formatter.DETAILED_FALLBACK
    assert formatter.detailed_fallback() == formatter.detailed_fallback()


def test_normal_keeps_root_cause_casing():
    record = _record(root_causes=["PTSD after an accident"])
    assert "PTSD after an accident" in formatter.format_normal(record, FixedChoice(1))
