"""
Tests for mediaflow.validation.engine

Uses small schemas declared here so that every engine path is exercised
independently of the built-in step kinds.
"""

from typing import Annotated, List, Optional

import pytest
from pydantic import BaseModel, Field

from mediaflow.errors import RuleConfigurationError
from mediaflow.validation.engine import apply_rules, build_model, iter_rule_fields, validate_fields
from mediaflow.validation.report import DiagnosticScope
from mediaflow.validation.rules import MISSING, AspectRatio, ConditionalPresence, FieldRule, FileInputs, Pad


class Sample(BaseModel):
    inputs: Annotated[List[str], FileInputs(min=1)]
    width: Annotated[Optional[int], Field(gt=0), ConditionalPresence(include_any=["height"])] = None
    height: Annotated[Optional[int], Field(gt=0), ConditionalPresence(include_any=["width"])] = None
    ratio: Annotated[Optional[str], Field(alias="aspectRatio"), AspectRatio()] = None
    label: Optional[str] = None


class TestIterRuleFields:
    def test_uses_alias_and_keeps_order(self):
        keys = [key for key, _, _ in iter_rule_fields(Sample)]
        assert keys == ["inputs", "width", "height", "aspectRatio", "label"]

    def test_only_rule_metadata_is_returned(self):
        rules = {key: rules for key, _, rules in iter_rule_fields(Sample)}
        assert [type(r) for r in rules["inputs"]] == [FileInputs]
        assert rules["label"] == []


class TestApplyRules:
    def test_absent_optional_without_presence_rule_is_skipped(self, make_context):
        assert apply_rules(MISSING, [Pad()], make_context(), required=False) is None

    def test_absent_required_value_runs_rules(self, make_context):
        assert apply_rules(MISSING, [Pad()], make_context(), required=True) == "pad is not defined!"

    def test_accepted_absence_stops_remaining_rules(self, make_context):
        rules = [ConditionalPresence(include_any=["b"]), Pad()]
        assert apply_rules(MISSING, rules, make_context({"b": 1}), required=False) is None

    def test_first_failure_wins(self, make_context):
        rules = [ConditionalPresence(), Pad()]
        assert apply_rules("red", rules, make_context(), required=False) == "invalid pad color!"


class TestValidateFields:
    def test_valid_values(self, make_context):
        raw = {"inputs": ["a.mp4"], "width": 640}
        diagnostics, failed = validate_fields(Sample, raw, make_context(raw))
        assert diagnostics == []
        assert failed == set()

    def test_one_diagnostic_per_failing_field(self, make_context):
        raw = {"aspectRatio": "wide"}
        diagnostics, failed = validate_fields(Sample, raw, make_context(raw), DiagnosticScope.ARGUMENTS)

        assert [d.subject for d in diagnostics] == ["inputs", "width", "height", "aspectRatio"]
        assert failed == {"inputs", "width", "height", "aspectRatio"}
        assert diagnostics[0].messages == ["input is not defined!"]
        assert diagnostics[1].messages == ["at least one of the following options must be defined: width, height"]
        assert diagnostics[3].messages == ["invalid aspect-ratio!"]
        assert all(d.scope is DiagnosticScope.ARGUMENTS for d in diagnostics)

    def test_contract_violation_propagates(self, make_context):
        class Exploding(BaseModel):
            value: Annotated[Optional[int], _ExplodingRule()] = None

        with pytest.raises(RuleConfigurationError):
            validate_fields(Exploding, {"value": 1}, make_context())


class _ExplodingRule(FieldRule):
    def __call__(self, value, context):
        raise RuleConfigurationError("misconfigured", "Exploding")


class TestBuildModel:
    def test_builds_model(self):
        model, diagnostics = build_model(Sample, {"inputs": ["a.mp4"], "width": 10, "aspectRatio": "4:3"})
        assert diagnostics == []
        assert model.width == 10
        assert model.ratio == "4:3"

    def test_null_values_are_dropped(self):
        model, diagnostics = build_model(Sample, {"inputs": ["a.mp4"], "width": 10, "height": None})
        assert diagnostics == []
        assert model.height is None

    def test_type_errors_become_diagnostics(self):
        model, diagnostics = build_model(Sample, {"inputs": ["a.mp4"], "width": -5})
        assert model is None
        assert len(diagnostics) == 1
        assert diagnostics[0].subject == "width"
        assert diagnostics[0].messages[0].startswith("width: ")

    def test_skipped_keys_are_not_reported_twice(self):
        model, diagnostics = build_model(Sample, {"width": 10}, skip={"inputs"})
        assert model is None
        assert diagnostics == []
