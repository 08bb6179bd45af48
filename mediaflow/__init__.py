"""
Mediaflow

Validates media-processing pipeline documents before anything runs: a
document either becomes a typed, immutable Pipeline or is rejected with a
diagnostic tree listing every defect found.
"""

from mediaflow.errors import (
    ConfigurationError,
    DocumentError,
    MediaflowError,
    RegistryError,
    RuleConfigurationError,
    SelectorSyntaxError,
    UnknownStepError,
)
from mediaflow.models import Pipeline, Step
from mediaflow.parser import ParseResult, PipelineParser
from mediaflow.steps import STEP_REGISTRY, StepCategory, StepRegistry

__version__ = "0.3.0"

__all__ = [
    "ConfigurationError",
    "DocumentError",
    "MediaflowError",
    "RegistryError",
    "RuleConfigurationError",
    "SelectorSyntaxError",
    "UnknownStepError",
    "Pipeline",
    "Step",
    "ParseResult",
    "PipelineParser",
    "STEP_REGISTRY",
    "StepCategory",
    "StepRegistry",
]
