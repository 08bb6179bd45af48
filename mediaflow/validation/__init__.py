"""
Validation Module for Mediaflow

Provides the field rules, selector resolution, reference tracking and
diagnostic reporting used by the pipeline parser.
"""

from mediaflow.validation.result import RuleResult
from mediaflow.validation.tracker import ReferenceTracker
from mediaflow.validation.selectors import (
    Selector,
    SelectorOutput,
    is_selector,
    parse_selector,
    resolve_selector,
)
from mediaflow.validation.report import (
    Diagnostic,
    DiagnosticReport,
    DiagnosticScope,
    format_diagnostic,
    format_diagnostics,
)
from mediaflow.validation.rules import (
    MISSING,
    AspectRatio,
    ConditionalPresence,
    FieldRule,
    FileInputs,
    Identifier,
    OneOf,
    Pad,
    RuleContext,
    SelectorShape,
    StepKind,
    is_absent,
)
from mediaflow.validation.engine import build_model, validate_fields

__all__ = [
    "RuleResult",
    "ReferenceTracker",
    "Selector",
    "SelectorOutput",
    "is_selector",
    "parse_selector",
    "resolve_selector",
    "Diagnostic",
    "DiagnosticReport",
    "DiagnosticScope",
    "format_diagnostic",
    "format_diagnostics",
    "MISSING",
    "AspectRatio",
    "ConditionalPresence",
    "FieldRule",
    "FileInputs",
    "Identifier",
    "OneOf",
    "Pad",
    "RuleContext",
    "SelectorShape",
    "StepKind",
    "is_absent",
    "build_model",
    "validate_fields",
]
