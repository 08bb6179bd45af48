"""
Tests for mediaflow.models
"""

import pytest
from pydantic import ValidationError

from mediaflow.models import Pipeline, Step
from mediaflow.steps.instructions import ConcatArgs, SplitArgs
from mediaflow.steps.registry import StepCategory


def _split(step_id):
    return Step(
        id=step_id,
        name="split",
        category=StepCategory.INSTRUCTION,
        args=SplitArgs(inputs=["clip.mp4"], segmentDuration=5),
    )


class TestPipeline:
    def test_lookup(self):
        pipeline = Pipeline(steps=[_split(1), _split(2)])
        assert len(pipeline) == 2
        assert pipeline.ids() == [1, 2]
        assert pipeline.get_step(2).id == 2
        assert pipeline.get_step(3) is None

    def test_ids_must_be_unique(self):
        with pytest.raises(ValidationError, match="already used"):
            Pipeline(steps=[_split(1), _split(1)])

    def test_must_not_be_empty(self):
        with pytest.raises(ValidationError):
            Pipeline(steps=[])

    def test_is_immutable(self):
        pipeline = Pipeline(steps=[_split(1)])
        with pytest.raises(ValidationError):
            pipeline.steps = []
        with pytest.raises(ValidationError):
            pipeline.steps[0].args.inputs = ["other.mp4"]


class TestStep:
    def test_category_helpers(self):
        step = Step(
            id=1,
            name="concat",
            category=StepCategory.INSTRUCTION,
            args=ConcatArgs(inputs=["a.mp4", "b.mp4"]),
        )
        assert step.is_instruction
        assert not step.is_statement

    def test_args_keep_their_schema(self):
        step = _split(1)
        assert isinstance(step.args, SplitArgs)
        assert step.model_dump(by_alias=True)["args"]["segmentDuration"] == 5.0
