"""
Tests for mediaflow.validation.rules

Each rule is called directly with a RuleContext built by the
``make_context`` fixture.
"""

import pytest

from mediaflow.errors import RuleConfigurationError
from mediaflow.steps.registry import StepCategory
from mediaflow.utils.files import MediaPredicates
from mediaflow.validation.rules import (
    MISSING,
    AspectRatio,
    ConditionalPresence,
    FileInputs,
    Identifier,
    OneOf,
    Pad,
    RuleContext,
    SelectorShape,
    StepKind,
    is_absent,
)
from mediaflow.validation.selectors import SelectorOutput


class TestAbsence:
    def test_missing_and_null_are_absent(self):
        assert is_absent(MISSING)
        assert is_absent(None)
        assert not is_absent(0)
        assert not is_absent("")
        assert not is_absent([])


class TestIdentifier:
    def test_valid_id_is_tracked(self, make_context, tracker):
        result = Identifier()(1, make_context())
        assert result.success
        assert tracker.contains(1)

    def test_integral_float_is_accepted(self, make_context, tracker):
        assert Identifier()(2.0, make_context()).success
        assert tracker.contains(2)

    def test_missing(self, make_context):
        assert Identifier()(MISSING, make_context()).message == "id is not defined!"

    @pytest.mark.parametrize("value", [0, -1, -3.0])
    def test_not_positive(self, make_context, tracker, value):
        result = Identifier()(value, make_context())
        assert result.message == "id must be a positive number!"
        assert len(tracker) == 0

    @pytest.mark.parametrize("value", ["1", "abc", True, 1.5, [1]])
    def test_not_a_number(self, make_context, tracker, value):
        result = Identifier()(value, make_context())
        assert not result.success
        assert result.message == f"{value} is not a valid id!"
        assert len(tracker) == 0

    def test_already_used(self, make_context, tracker):
        tracker.insert(4)
        result = Identifier()(4, make_context())
        assert result.message == "id 4 is already used!"


class TestStepKind:
    def test_registered_name(self, make_context):
        assert StepKind()("split", make_context()).success
        assert StepKind()("output", make_context()).success

    def test_unknown_name(self, make_context):
        assert StepKind()("explode", make_context()).message == "'explode' is not a valid step name!"

    def test_missing_name(self, make_context):
        assert StepKind()(MISSING, make_context()).message == "step name is not defined!"

    def test_category_restriction(self, make_context):
        rule = StepKind(category=StepCategory.INSTRUCTION)
        assert rule("concat", make_context()).success
        assert rule("output", make_context()).message == "'output' is not a valid instruction name!"

    def test_needs_registry(self, tracker):
        context = RuleContext(siblings={}, tracker=tracker)
        with pytest.raises(RuleConfigurationError):
            StepKind()("split", context)


class TestFileInputs:
    def test_missing(self, make_context):
        assert FileInputs()(MISSING, make_context()).message == "input is not defined!"

    def test_not_an_array(self, make_context):
        assert FileInputs()("clip.mp4", make_context()).message == "input must be an array!"

    def test_item_not_a_string(self, make_context):
        assert FileInputs()([1], make_context()).message == "input items must be a string!"

    def test_below_minimum(self, make_context):
        result = FileInputs(min=2)(["a.mp4"], make_context())
        assert result.message == "not enough input files! 2 required"

    def test_above_maximum(self, make_context):
        result = FileInputs(max=1)(["a.mp4", "b.mp4"], make_context())
        assert result.message == "too many input files! 1 allowed"

    def test_exactly_at_bounds(self, make_context):
        rule = FileInputs(min=1, max=2)
        assert rule(["a.mp4"], make_context()).success
        assert rule(["a.mp4", "b.mp4"], make_context()).success

    def test_invalid_filename(self, make_context):
        assert FileInputs()(["bad|name.mp4"], make_context()).message == "invalid input file: bad|name.mp4"

    def test_video_only(self, make_context):
        rule = FileInputs(video_only=True)
        assert rule(["clip.MP4"], make_context()).success
        assert rule(["song.mp3"], make_context()).message == "input file must be a video: song.mp3"

    def test_audio_only(self, make_context):
        rule = FileInputs(audio_only=True)
        assert rule(["song.mp3"], make_context()).success
        assert rule(["clip.mp4"], make_context()).message == "input file must be an audio: clip.mp4"

    def test_selector_skips_extension_check(self, make_context, tracker):
        tracker.insert(1)
        assert FileInputs(video_only=True)(["$1"], make_context()).success

    def test_selector_must_be_tracked(self, make_context):
        result = FileInputs(video_only=True)(["$3"], make_context())
        assert result.message == "step 3 does not exist!"

    def test_selector_to_own_step(self, make_context, tracker):
        tracker.insert(2)
        result = FileInputs()(["$2"], make_context(step_id=2))
        assert result.message == "step 2 cannot reference itself!"

    def test_custom_filename_predicate(self, tracker):
        context = RuleContext(
            siblings={},
            tracker=tracker,
            predicates=MediaPredicates(filename_check=lambda name: name.startswith("ok")),
        )
        rule = FileInputs()
        assert rule(["ok.mp4"], context).success
        assert rule(["no.mp4"], context).message == "invalid input file: no.mp4"

    @pytest.mark.parametrize("options", [
        {"min": -1},
        {"max": "2"},
        {"min": 3, "max": 1},
        {"video_only": True, "audio_only": True},
    ])
    def test_bad_options_raise(self, options):
        with pytest.raises(RuleConfigurationError):
            FileInputs(**options)


class TestSelectorShape:
    def test_not_a_selector(self, make_context):
        assert SelectorShape()("clip.mp4", make_context()).message == "invalid selector!"
        assert SelectorShape()(MISSING, make_context()).message == "invalid selector!"

    def test_expected_output(self, make_context, tracker):
        tracker.insert(1)
        rule = SelectorShape(expected_output=SelectorOutput.MULTIPLE)
        assert rule("$1", make_context()).success
        assert rule("$1[0]", make_context()).message == "invalid selector params! expected a multiple output"


class TestConditionalPresence:
    def test_no_options_requires_value(self, make_context):
        rule = ConditionalPresence()
        assert rule(5, make_context()).success
        assert rule(MISSING, make_context()).message == "value is not defined!"

    def test_present_value_passes(self, make_context):
        rule = ConditionalPresence(include_all=["b"])
        assert rule(10, make_context({})).success

    def test_include_all_satisfied(self, make_context):
        rule = ConditionalPresence(include_all=["b", "c"])
        assert rule(MISSING, make_context({"b": 1, "c": 2}, key="a")).success

    def test_include_all_partially_satisfied(self, make_context):
        rule = ConditionalPresence(include_all=["b", "c"])
        result = rule(MISSING, make_context({"b": 1}, key="a"))
        assert result.message == "at least one of the following options must be defined: a, b, c"

    def test_include_any(self, make_context):
        rule = ConditionalPresence(include_any=["b", "c"])
        assert rule(MISSING, make_context({"c": 1}, key="a")).success
        assert not rule(MISSING, make_context({}, key="a")).success

    def test_null_sibling_counts_as_absent(self, make_context):
        rule = ConditionalPresence(include_any=["b"])
        assert not rule(None, make_context({"b": None}, key="a")).success

    @pytest.mark.parametrize("options", [
        {"include_all": []},
        {"include_any": "b"},
        {"include_all": [1]},
        {"include_all": ["b"], "include_any": ["c"]},
    ])
    def test_bad_options_raise(self, options):
        with pytest.raises(RuleConfigurationError):
            ConditionalPresence(**options)


class TestAspectRatio:
    @pytest.mark.parametrize("value", ["16:9", "4:3", "1:1"])
    def test_valid(self, make_context, value):
        assert AspectRatio()(value, make_context()).success

    @pytest.mark.parametrize("value", ["16-9", "16:", ":9", "a:b", "16:9:1", "16:9\n", "\u0661\u0666:\u0669"])
    def test_invalid(self, make_context, value):
        assert AspectRatio()(value, make_context()).message == "invalid aspect-ratio!"

    def test_not_a_string(self, make_context):
        assert AspectRatio()(169, make_context()).message == "aspect-ratio must be a string"

    def test_missing(self, make_context):
        assert AspectRatio()(MISSING, make_context()).message == "aspect-ratio is not defined!"


class TestPad:
    @pytest.mark.parametrize("value", [True, False, "#000000", "ffAA00"])
    def test_valid(self, make_context, value):
        assert Pad()(value, make_context()).success

    @pytest.mark.parametrize("value", ["#fff", "black", "#12345g", "#1234567", "#1a2b3c\n"])
    def test_invalid_color(self, make_context, value):
        assert Pad()(value, make_context()).message == "invalid pad color!"

    def test_wrong_type(self, make_context):
        assert Pad()(1, make_context()).message == "pad must be a boolean or a string"


class TestOneOf:
    def test_choices(self, make_context):
        rule = OneOf(["mp3", "wav"])
        assert rule("mp3", make_context()).success
        assert rule("ogg", make_context()).message == "'ogg' is not one of: mp3, wav"

    def test_empty_choices_raise(self):
        with pytest.raises(RuleConfigurationError):
            OneOf([])
