"""
Tests for mediaflow.validation.selectors

Covers parsing of the selector grammar and resolution against the
reference tracker.
"""

import pytest

from mediaflow.errors import SelectorSyntaxError
from mediaflow.validation.selectors import (
    Selector,
    SelectorOutput,
    is_selector,
    parse_selector,
    resolve_selector,
)
from mediaflow.validation.tracker import ReferenceTracker


@pytest.fixture
def tracker():
    tracker = ReferenceTracker()
    tracker.insert(1)
    tracker.insert(2)
    return tracker


class TestParseSelector:
    def test_every_output(self):
        selector = parse_selector("$2")
        assert selector == Selector(expression="$2", target_id=2, index=None)
        assert selector.output_kind is SelectorOutput.MULTIPLE

    def test_single_output(self):
        selector = parse_selector("$12[0]")
        assert selector.target_id == 12
        assert selector.index == 0
        assert selector.output_kind is SelectorOutput.SINGLE

    @pytest.mark.parametrize("expression", [
        "$", "$a", "$1[", "$1[x]", "$1[0]x", "$-1", "1", "$ 1", "$1\n", "$1[0]\n", "$\u0661",
    ])
    def test_malformed(self, expression):
        with pytest.raises(SelectorSyntaxError) as exc_info:
            parse_selector(expression)
        assert exc_info.value.expression == expression
        assert str(exc_info.value) == f"invalid selector: {expression}"


class TestIsSelector:
    def test_prefix_decides(self):
        assert is_selector("$1")
        assert is_selector("$oops")
        assert not is_selector("clip.mp4")
        assert not is_selector(1)
        assert not is_selector(None)


class TestResolveSelector:
    def test_tracked_target(self, tracker):
        assert resolve_selector("$1", tracker).success

    def test_untracked_target(self, tracker):
        result = resolve_selector("$7", tracker)
        assert not result.success
        assert result.message == "step 7 does not exist!"

    def test_syntax_error_is_a_failure(self, tracker):
        result = resolve_selector("$x", tracker)
        assert not result.success
        assert result.message == "invalid selector: $x"

    def test_trailing_newline_does_not_resolve(self, tracker):
        result = resolve_selector("$1\n", tracker)
        assert not result.success
        assert result.message == "invalid selector: $1\n"

    def test_self_reference(self, tracker):
        result = resolve_selector("$2", tracker, current_step_id=2)
        assert not result.success
        assert result.message == "step 2 cannot reference itself!"

    def test_expected_multiple(self, tracker):
        assert resolve_selector("$1", tracker, expected_output=SelectorOutput.MULTIPLE).success
        result = resolve_selector("$1[0]", tracker, expected_output=SelectorOutput.MULTIPLE)
        assert result.message == "invalid selector params! expected a multiple output"

    def test_expected_single(self, tracker):
        assert resolve_selector("$1[3]", tracker, expected_output=SelectorOutput.SINGLE).success
        result = resolve_selector("$1", tracker, expected_output=SelectorOutput.SINGLE)
        assert result.message == "invalid selector params! expected a single output"

    def test_existence_checked_before_output_kind(self, tracker):
        result = resolve_selector("$9[0]", tracker, expected_output=SelectorOutput.MULTIPLE)
        assert result.message == "step 9 does not exist!"
