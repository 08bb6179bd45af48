"""
Field Rules

Composable validation rules attached to argument schemas through
``typing.Annotated`` metadata:

    inputs: Annotated[List[str], FileInputs(min=1, max=1, video_only=True)]

Each rule is a callable ``(value, context) -> RuleResult``. Rules never raise
for a bad document value; they return a failure with a message. A rule whose
own options are wrong raises RuleConfigurationError as soon as it is built.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Tuple

from mediaflow.errors import RuleConfigurationError
from mediaflow.utils.files import MediaPredicates
from mediaflow.validation.result import RuleResult
from mediaflow.validation.selectors import SelectorOutput, is_selector, resolve_selector
from mediaflow.validation.tracker import ReferenceTracker


class _Missing:
    """Marker for a key absent from the document."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


def is_absent(value) -> bool:
    """JSON null counts as absent."""
    return value is MISSING or value is None


def is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class RuleContext:
    """What a rule may look at besides its own value.

    Attributes:
        siblings: Raw values of the object holding the field
        tracker: Step ids accepted so far in this pass
        predicates: Filename and extension checks
        registry: Step registry (used by the step-kind rule)
        key: Document key of the field being checked
        step_id: Id of the step being validated, when known
    """
    siblings: Mapping[str, Any]
    tracker: ReferenceTracker
    predicates: MediaPredicates = field(default_factory=MediaPredicates)
    registry: Any = None
    key: Optional[str] = None
    step_id: Optional[int] = None

    def sibling(self, key: str):
        if not isinstance(self.siblings, Mapping):
            return MISSING
        return self.siblings.get(key, MISSING)

    def has_sibling(self, key: str) -> bool:
        return not is_absent(self.sibling(key))

    def for_field(self, key: str) -> "RuleContext":
        return RuleContext(
            siblings=self.siblings,
            tracker=self.tracker,
            predicates=self.predicates,
            registry=self.registry,
            key=key,
            step_id=self.step_id,
        )


class FieldRule:
    """Base class for field rules."""

    def __call__(self, value, context: RuleContext) -> RuleResult:
        raise NotImplementedError


def _as_names(rule_name: str, option: str, value) -> Optional[Tuple[str, ...]]:
    if value is None:
        return None
    if isinstance(value, str) or not isinstance(value, (list, tuple)) or len(value) == 0:
        raise RuleConfigurationError(
            f'"{rule_name}" rule: "{option}" option must be a list with at least one element!',
            rule_name,
        )
    if not all(isinstance(item, str) for item in value):
        raise RuleConfigurationError(
            f'"{rule_name}" rule: "{option}" option must only contain field names!',
            rule_name,
        )
    return tuple(value)


@dataclass(frozen=True)
class StepKind(FieldRule):
    """The value must name a registered step.

    When ``category`` is set, only steps of that category are accepted.
    """
    category: Any = None

    def __call__(self, value, context: RuleContext) -> RuleResult:
        registry = context.registry
        if registry is None:
            raise RuleConfigurationError('"StepKind" rule needs a step registry in its context', "StepKind")

        if is_absent(value):
            return RuleResult.fail("step name is not defined!")
        if isinstance(value, str) and value in registry.names(self.category):
            return RuleResult.ok()
        if self.category is None:
            return RuleResult.fail(f"'{value}' is not a valid step name!")
        label = getattr(self.category, "value", self.category)
        return RuleResult.fail(f"'{value}' is not a valid {label} name!")


@dataclass(frozen=True)
class Identifier(FieldRule):
    """The value must be a positive, not yet used step id.

    On success the id is inserted into the tracker: this is the only rule
    with a side effect.
    """

    def __call__(self, value, context: RuleContext) -> RuleResult:
        if is_absent(value):
            return RuleResult.fail("id is not defined!")
        if not is_number(value) or (isinstance(value, float) and not value.is_integer()):
            return RuleResult.fail(f"{value} is not a valid id!")
        if value <= 0:
            return RuleResult.fail("id must be a positive number!")

        step_id = int(value)
        if context.tracker.contains(step_id):
            return RuleResult.fail(f"id {step_id} is already used!")
        context.tracker.insert(step_id)
        return RuleResult.ok()


@dataclass(frozen=True)
class FileInputs(FieldRule):
    """The value must be an array of filenames or selectors.

    Options:
        min: Minimum number of inputs
        max: Maximum number of inputs
        video_only: Plain filenames must carry a video extension
        audio_only: Plain filenames must carry an audio extension
    """
    min: Optional[int] = None
    max: Optional[int] = None
    video_only: bool = False
    audio_only: bool = False

    def __post_init__(self):
        for option in ("min", "max"):
            bound = getattr(self, option)
            if bound is not None and (not isinstance(bound, int) or isinstance(bound, bool) or bound < 0):
                raise RuleConfigurationError(
                    f'"FileInputs" rule: "{option}" option must be a non-negative integer!', "FileInputs"
                )
        if self.min is not None and self.max is not None and self.min > self.max:
            raise RuleConfigurationError('"FileInputs" rule: "min" cannot exceed "max"!', "FileInputs")
        if self.video_only and self.audio_only:
            raise RuleConfigurationError(
                '"FileInputs" rule: "video_only" and "audio_only" are mutually exclusive!', "FileInputs"
            )

    def __call__(self, value, context: RuleContext) -> RuleResult:
        if is_absent(value):
            return RuleResult.fail("input is not defined!")
        if not isinstance(value, list):
            return RuleResult.fail("input must be an array!")

        if self.min is not None and len(value) < self.min:
            return RuleResult.fail(f"not enough input files! {self.min} required")
        if self.max is not None and len(value) > self.max:
            return RuleResult.fail(f"too many input files! {self.max} allowed")

        predicates = context.predicates
        for item in value:
            if not isinstance(item, str):
                return RuleResult.fail("input items must be a string!")

            if is_selector(item):
                resolved = resolve_selector(item, context.tracker, current_step_id=context.step_id)
                if not resolved.success:
                    return resolved
                continue

            if not predicates.is_valid_filename(item):
                return RuleResult.fail(f"invalid input file: {item}")
            if self.video_only and not predicates.is_video(item):
                return RuleResult.fail(f"input file must be a video: {item}")
            if self.audio_only and not predicates.is_audio(item):
                return RuleResult.fail(f"input file must be an audio: {item}")

        return RuleResult.ok()


@dataclass(frozen=True)
class SelectorShape(FieldRule):
    """The value must be a selector pointing at an earlier step.

    ``expected_output`` restricts the selector to a single or multiple output.
    """
    expected_output: Optional[SelectorOutput] = None

    def __call__(self, value, context: RuleContext) -> RuleResult:
        if not is_selector(value):
            return RuleResult.fail("invalid selector!")
        return resolve_selector(
            value,
            context.tracker,
            expected_output=self.expected_output,
            current_step_id=context.step_id,
        )


@dataclass(frozen=True)
class ConditionalPresence(FieldRule):
    """Make a field optional, possibly depending on its siblings.

    - A present value always passes
    - With no options, an absent value fails
    - ``include_all=['a', 'b']``: absent passes only if a and b are present
    - ``include_any=['c', 'd']``: absent passes if c or d is present
    """
    include_all: Optional[Sequence[str]] = None
    include_any: Optional[Sequence[str]] = None

    def __post_init__(self):
        object.__setattr__(self, "include_all", _as_names("ConditionalPresence", "include_all", self.include_all))
        object.__setattr__(self, "include_any", _as_names("ConditionalPresence", "include_any", self.include_any))
        if self.include_all is not None and self.include_any is not None:
            raise RuleConfigurationError(
                '"ConditionalPresence" rule: "include_all" and "include_any" are mutually exclusive!',
                "ConditionalPresence",
            )

    def __call__(self, value, context: RuleContext) -> RuleResult:
        if self.include_all is None and self.include_any is None:
            if is_absent(value):
                return RuleResult.fail("value is not defined!")
            return RuleResult.ok()

        if not is_absent(value):
            return RuleResult.ok()

        if self.include_all is not None:
            names = self.include_all
            satisfied = all(context.has_sibling(key) for key in names)
        else:
            names = self.include_any
            satisfied = any(context.has_sibling(key) for key in names)

        if satisfied:
            return RuleResult.ok()
        options = ([context.key] if context.key else []) + list(names)
        return RuleResult.fail(f"at least one of the following options must be defined: {', '.join(options)}")


ASPECT_RATIO_PATTERN = re.compile(r"[0-9]+:[0-9]+")
HEX_COLOR_PATTERN = re.compile(r"#?[0-9a-fA-F]{6}")


@dataclass(frozen=True)
class AspectRatio(FieldRule):
    """The value must look like ``16:9``."""

    def __call__(self, value, context: RuleContext) -> RuleResult:
        if is_absent(value):
            return RuleResult.fail("aspect-ratio is not defined!")
        if not isinstance(value, str):
            return RuleResult.fail("aspect-ratio must be a string")
        if not ASPECT_RATIO_PATTERN.fullmatch(value):
            return RuleResult.fail("invalid aspect-ratio!")
        return RuleResult.ok()


@dataclass(frozen=True)
class Pad(FieldRule):
    """The value must be a boolean or a hex color such as ``#1a2b3c``."""

    def __call__(self, value, context: RuleContext) -> RuleResult:
        if is_absent(value):
            return RuleResult.fail("pad is not defined!")
        if isinstance(value, bool):
            return RuleResult.ok()
        if not isinstance(value, str):
            return RuleResult.fail("pad must be a boolean or a string")
        if not HEX_COLOR_PATTERN.fullmatch(value):
            return RuleResult.fail("invalid pad color!")
        return RuleResult.ok()


@dataclass(frozen=True)
class OneOf(FieldRule):
    """The value must be one of a fixed set of strings."""
    choices: Sequence[str] = ()

    def __post_init__(self):
        object.__setattr__(self, "choices", _as_names("OneOf", "choices", list(self.choices)))

    def __call__(self, value, context: RuleContext) -> RuleResult:
        if is_absent(value):
            return RuleResult.fail("value is not defined!")
        if value not in self.choices:
            return RuleResult.fail(f"'{value}' is not one of: {', '.join(self.choices)}")
        return RuleResult.ok()
