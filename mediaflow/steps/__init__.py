"""
Step kinds available to pipeline documents.

The default registry is populated from the static table below. New kinds
are added by appending a (name, args schema, category, description) entry,
or by registering them on a fresh StepRegistry.
"""

from mediaflow.steps.base import InstructionArgs, StatementArgs, StepArgs
from mediaflow.steps.registry import StepCategory, StepDefinition, StepRegistry
from mediaflow.steps.instructions import (
    ConcatArgs,
    ExtractAudioArgs,
    MergeAudioArgs,
    MuteArgs,
    ResizeArgs,
    SplitArgs,
)
from mediaflow.steps.statements import ForEachArgs, OutputArgs


DEFAULT_STEPS = [
    ("split", SplitArgs, StepCategory.INSTRUCTION, "Split a video into segments"),
    ("concat", ConcatArgs, StepCategory.INSTRUCTION, "Join videos end to end"),
    ("resize", ResizeArgs, StepCategory.INSTRUCTION, "Scale a video, optionally padding it"),
    ("extract-audio", ExtractAudioArgs, StepCategory.INSTRUCTION, "Extract the audio track of a video"),
    ("mute", MuteArgs, StepCategory.INSTRUCTION, "Remove the audio track of videos"),
    ("merge-audio", MergeAudioArgs, StepCategory.INSTRUCTION, "Replace the audio track of a video"),
    ("output", OutputArgs, StepCategory.STATEMENT, "Export selected outputs"),
    ("for-each", ForEachArgs, StepCategory.STATEMENT, "Apply an instruction to each output of a step"),
]


def build_default_registry() -> StepRegistry:
    """Create a frozen registry holding the built-in step kinds."""
    registry = StepRegistry()
    for name, args_model, category, description in DEFAULT_STEPS:
        registry.register(name, args_model, category, description)
    registry.freeze()
    return registry


STEP_REGISTRY = build_default_registry()

__all__ = [
    "StepArgs",
    "InstructionArgs",
    "StatementArgs",
    "StepCategory",
    "StepDefinition",
    "StepRegistry",
    "SplitArgs",
    "ConcatArgs",
    "ResizeArgs",
    "ExtractAudioArgs",
    "MuteArgs",
    "MergeAudioArgs",
    "OutputArgs",
    "ForEachArgs",
    "DEFAULT_STEPS",
    "STEP_REGISTRY",
    "build_default_registry",
]
