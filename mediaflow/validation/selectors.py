"""
Selectors

A selector lets a step argument point at the output of an earlier step
instead of naming a file:

    $2       every output of step 2
    $2[0]    the first output of step 2

Selectors are parsed and resolved during validation only; the typed
pipeline keeps the original expression strings.

A selector must name a step declared above the one holding it; naming a
later step or the holding step itself fails to resolve.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from mediaflow.errors import SelectorSyntaxError
from mediaflow.validation.result import RuleResult


SELECTOR_PREFIX = "$"
SELECTOR_PATTERN = re.compile(r"\$(?P<target>[0-9]+)(?:\[(?P<index>[0-9]+)\])?")


class SelectorOutput(Enum):
    """Shape of what a selector resolves to."""
    SINGLE = "single"
    MULTIPLE = "multiple"


@dataclass(frozen=True)
class Selector:
    """A parsed selector expression.

    Attributes:
        expression: Original text
        target_id: Id of the referenced step
        index: Output index, or None for every output
    """
    expression: str
    target_id: int
    index: Optional[int] = None

    @property
    def output_kind(self) -> SelectorOutput:
        if self.index is None:
            return SelectorOutput.MULTIPLE
        return SelectorOutput.SINGLE


def is_selector(value) -> bool:
    """Tell a selector apart from a plain filename."""
    return isinstance(value, str) and value.startswith(SELECTOR_PREFIX)


def parse_selector(expression: str) -> Selector:
    """Parse a selector expression.

    Raises:
        SelectorSyntaxError: If the expression does not match the grammar.
    """
    if not is_selector(expression):
        raise SelectorSyntaxError(f"invalid selector: {expression}", expression)

    match = SELECTOR_PATTERN.fullmatch(expression)
    if not match:
        raise SelectorSyntaxError(f"invalid selector: {expression}", expression)

    index = match.group("index")
    return Selector(
        expression=expression,
        target_id=int(match.group("target")),
        index=int(index) if index is not None else None,
    )


def resolve_selector(
    expression: str,
    tracker,
    expected_output: Optional[SelectorOutput] = None,
    current_step_id: Optional[int] = None,
) -> RuleResult:
    """Check a selector against the steps accepted so far.

    Checks run in order and the first failure decides the message: syntax,
    self reference, target tracked, output kind. ``current_step_id`` is the
    step holding the selector; a step cannot consume its own outputs.
    """
    try:
        selector = parse_selector(expression)
    except SelectorSyntaxError as e:
        return RuleResult.fail(str(e))

    if current_step_id is not None and selector.target_id == current_step_id:
        return RuleResult.fail(f"step {selector.target_id} cannot reference itself!")
    if not tracker.contains(selector.target_id):
        return RuleResult.fail(f"step {selector.target_id} does not exist!")

    if expected_output is not None and selector.output_kind != expected_output:
        return RuleResult.fail(
            f"invalid selector params! expected a {expected_output.value} output"
        )

    return RuleResult.ok()
