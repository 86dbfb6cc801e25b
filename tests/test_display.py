"""Tests for thought rendering (format_thought, LoggingThoughtSink)."""

import logging

import pytest

from dialectic.actor_critic import LoggingThoughtSink, Role, Thought, format_thought
from dialectic.utils import display_width


def _thought(**overrides) -> Thought:
    data = dict(
        content="Cache the catalog endpoint",
        role=Role.ACTOR,
        next_round_needed=True,
        thought_number=3,
        total_thoughts=5,
    )
    data.update(overrides)
    return Thought(**data)


class TestFormatThought:
    def test_header_has_icon_position_and_round(self):
        text = format_thought(_thought())
        assert "🎭 Actor 3/5 (Round 2)" in text

    def test_critic_icon(self):
        text = format_thought(_thought(role=Role.CRITIC, thought_number=4))
        assert "🔍 Critic 4/5 (Round 2)" in text

    @pytest.mark.parametrize("role", [Role.ACTOR, Role.CRITIC])
    def test_box_lines_share_width(self, role):
        """Every line of the box spans the same number of terminal columns.

        The role icons are wide characters and take two columns.
        """
        text = format_thought(_thought(role=role, content="short\na considerably longer second line"))
        lines = text.splitlines()
        assert lines[0].startswith("┌") and lines[-1].startswith("└")
        assert len({display_width(line) for line in lines}) == 1

    def test_header_only_box_aligned(self):
        text = format_thought(_thought(content="ok"))
        assert len({display_width(line) for line in text.splitlines()}) == 1

    def test_huge_thought_number(self):
        big = 10**400
        text = format_thought(_thought(thought_number=big, total_thoughts=big + 1))
        assert f"(Round {big // 2})" in text

    def test_multiline_content(self):
        text = format_thought(_thought(content="one\ntwo"))
        assert "│ one" in text
        assert "│ two" in text

    def test_no_ansi_without_color(self):
        assert "\033[" not in format_thought(_thought())

    def test_color_wraps_header(self):
        text = format_thought(_thought(), color=True)
        assert "\033[34m" in text
        assert "\033[0m" in text

    def test_integral_float_numbers(self):
        text = format_thought(_thought(thought_number=3.0, total_thoughts=5.0))
        assert "3/5" in text


def test_logging_sink_writes_to_display_logger(caplog):
    sink = LoggingThoughtSink()
    with caplog.at_level(logging.INFO, logger="dialectic.display"):
        sink(_thought())

    assert len(caplog.records) == 1
    assert caplog.records[0].name == "dialectic.display"
    assert "Cache the catalog endpoint" in caplog.records[0].getMessage()
