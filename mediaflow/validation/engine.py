"""
Rule Engine

Runs the field rules declared on a pydantic schema against a raw mapping,
then lets pydantic build the typed model. Every field is checked, in
declaration order, and every failure is returned; nothing here raises for
a bad document value.
"""

import logging
from typing import Any, Iterator, List, Mapping, Optional, Set, Tuple, Type

from pydantic import BaseModel, ValidationError
from pydantic.fields import FieldInfo

from mediaflow.validation.report import Diagnostic, DiagnosticScope
from mediaflow.validation.rules import (
    MISSING,
    ConditionalPresence,
    FieldRule,
    RuleContext,
    is_absent,
)


logger = logging.getLogger(__name__)


def iter_rule_fields(model: Type[BaseModel]) -> Iterator[Tuple[str, FieldInfo, List[FieldRule]]]:
    """Yield (document key, field info, rules) for each field of a schema."""
    for name, info in model.model_fields.items():
        key = info.alias or name
        rules = [m for m in info.metadata if isinstance(m, FieldRule)]
        yield key, info, rules


def apply_rules(value, rules: List[FieldRule], context: RuleContext, required: bool) -> Optional[str]:
    """Run the rules of one field and return the first failure message."""
    has_presence_rule = any(isinstance(rule, ConditionalPresence) for rule in rules)
    if is_absent(value) and not required and not has_presence_rule:
        return None

    for rule in rules:
        result = rule(value, context)
        if not result.success:
            return result.message or f"invalid value for {context.key}"
        if isinstance(rule, ConditionalPresence) and is_absent(value):
            # Accepted as absent; remaining rules only apply to a value
            return None
    return None


def validate_fields(
    model: Type[BaseModel],
    raw: Mapping[str, Any],
    context: RuleContext,
    scope: DiagnosticScope = DiagnosticScope.FIELD,
) -> Tuple[List[Diagnostic], Set[str]]:
    """Apply every declared rule of ``model`` to ``raw``.

    Returns:
        Tuple of (diagnostics, keys whose rules failed).
    """
    diagnostics: List[Diagnostic] = []
    failed: Set[str] = set()

    for key, info, rules in iter_rule_fields(model):
        if not rules:
            continue
        value = raw.get(key, MISSING) if isinstance(raw, Mapping) else MISSING
        message = apply_rules(value, rules, context.for_field(key), info.is_required())
        if message is not None:
            diagnostics.append(Diagnostic.leaf(key, message, scope))
            failed.add(key)

    return diagnostics, failed


def _error_key(error: dict) -> str:
    loc = error.get("loc") or ()
    return str(loc[0]) if loc else "root"


def _error_path(error: dict) -> str:
    loc = error.get("loc") or ()
    return ".".join(str(part) for part in loc) if loc else "root"


def build_model(
    model: Type[BaseModel],
    raw: Mapping[str, Any],
    skip: Optional[Set[str]] = None,
    scope: DiagnosticScope = DiagnosticScope.FIELD,
) -> Tuple[Optional[BaseModel], List[Diagnostic]]:
    """Validate ``raw`` into ``model`` and fold pydantic errors into diagnostics.

    Errors on keys listed in ``skip`` are dropped: those fields already
    carry a rule diagnostic.
    """
    skip = skip or set()
    data = {key: value for key, value in raw.items() if value is not None}

    try:
        return model.model_validate(data), []
    except ValidationError as e:
        diagnostics = []
        for error in e.errors():
            key = _error_key(error)
            if key in skip:
                continue
            diagnostics.append(Diagnostic.leaf(key, f"{_error_path(error)}: {error['msg']}", scope))
        logger.debug(f"{model.__name__} rejected {len(e.errors())} value(s)")
        return None, diagnostics
