"""
Pipeline Parser

Turns a pipeline document into a validated Pipeline or a diagnostic tree.

    text -> untyped tree -> typed tree (checked by field rules) -> Pipeline | diagnostics

Steps are validated top to bottom. A step id becomes referenceable the
moment its own id passes validation, so selectors may only point at steps
declared above them. A step may not select its own outputs either, even
though its id is already tracked by the time its arguments are checked.
"""

import inspect
import json
import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Tuple

import yaml

from mediaflow.errors import DocumentError
from mediaflow.models import Pipeline, Step
from mediaflow.steps import STEP_REGISTRY, StepRegistry
from mediaflow.utils.files import MediaPredicates
from mediaflow.validation.engine import build_model, validate_fields
from mediaflow.validation.report import (
    Diagnostic,
    DiagnosticReport,
    DiagnosticScope,
    format_diagnostic,
    format_diagnostics,
)
from mediaflow.validation.rules import MISSING, RuleContext, is_absent, is_number
from mediaflow.validation.tracker import ReferenceTracker


logger = logging.getLogger(__name__)

# Document keys
STEPS_KEY = "steps"
ID_KEY = "id"
NAME_KEY = "name"
ARGS_KEY = "args"

DOCUMENT_FORMATS = ("json", "yaml")


@dataclass
class ParseResult:
    """Outcome of a parse pass.

    Attributes:
        pipeline: The validated pipeline, None when diagnostics exist
        diagnostics: Top-level diagnostic nodes, empty on success
        duration_ms: How long the pass took in milliseconds
    """
    pipeline: Optional[Pipeline]
    diagnostics: List[Diagnostic] = field(default_factory=list)
    duration_ms: int = 0

    @property
    def is_valid(self) -> bool:
        return self.pipeline is not None and not self.diagnostics

    def messages(self) -> List[str]:
        return [m for d in self.diagnostics for m in d.all_messages()]

    def format(self) -> str:
        return format_diagnostics(self.diagnostics)

    def report(self, source: str = "<pipeline>") -> DiagnosticReport:
        return DiagnosticReport(
            source=source,
            diagnostics=list(self.diagnostics),
            step_count=len(self.pipeline) if self.pipeline is not None else 0,
            duration_ms=self.duration_ms,
        )


class PipelineParser:
    """Validates pipeline documents against the registered step schemas.

    One parser may be reused for many documents. Each pass gets exclusive
    use of the reference tracker, which is cleared when the pass starts and
    again on every way out of it.
    """

    def __init__(
        self,
        registry: Optional[StepRegistry] = None,
        predicates: Optional[MediaPredicates] = None,
        tracker: Optional[ReferenceTracker] = None,
    ):
        self.registry = registry if registry is not None else STEP_REGISTRY
        self.predicates = predicates if predicates is not None else MediaPredicates()
        self.tracker = tracker if tracker is not None else ReferenceTracker()
        self._lock = threading.Lock()

    async def run(self, source, document_format: str = "json") -> ParseResult:
        """Acquire the document text, then parse it.

        Args:
            source: Document text, or an awaitable resolving to it.
            document_format: 'json' or 'yaml'.

        Raises:
            DocumentError: If the text is not a usable document.
        """
        raw_text = await source if inspect.isawaitable(source) else source
        return self.parse(raw_text, document_format)

    def parse(self, raw_text, document_format: str = "json") -> ParseResult:
        """Parse and validate a pipeline document.

        Returns:
            ParseResult holding either the pipeline or the diagnostics.

        Raises:
            DocumentError: If the text is not a usable document.
            RuleConfigurationError: If an argument schema is misconfigured.
        """
        start = time.time()

        with self._lock:
            self.tracker.reset()
            try:
                document = self._decode(raw_text, document_format)
                pipeline, diagnostics = self._validate_document(document)
            finally:
                self.tracker.reset()

        elapsed_ms = int((time.time() - start) * 1000)
        if diagnostics:
            self._log_diagnostics(diagnostics)
        else:
            logger.info(f"Pipeline validated: {len(pipeline)} step(s) in {elapsed_ms}ms")

        return ParseResult(pipeline=pipeline, diagnostics=diagnostics, duration_ms=elapsed_ms)

    def _decode(self, raw_text, document_format: str) -> Mapping[str, Any]:
        """Decode the text into an untyped tree."""
        if document_format not in DOCUMENT_FORMATS:
            raise ValueError(
                f"Unknown document format: {document_format}. Valid formats: {list(DOCUMENT_FORMATS)}"
            )
        label = document_format.upper()

        if isinstance(raw_text, bytes):
            try:
                raw_text = raw_text.decode("utf-8")
            except UnicodeDecodeError as e:
                raise DocumentError(f"Pipeline file is not valid {label}", document_format) from e
        if not isinstance(raw_text, str):
            raise DocumentError(f"Pipeline file is not valid {label}", document_format)

        if document_format == "json":
            try:
                document = json.loads(raw_text)
            except json.JSONDecodeError as e:
                raise DocumentError(
                    "Pipeline file is not valid JSON", "json", e.lineno, e.colno
                ) from e
            except RecursionError as e:
                raise DocumentError("Pipeline file is nested too deeply", "json") from e
        else:
            try:
                document = yaml.safe_load(raw_text)
            except yaml.YAMLError as e:
                line_number = None
                column = None
                if hasattr(e, "problem_mark") and e.problem_mark:
                    line_number = e.problem_mark.line + 1
                    column = e.problem_mark.column + 1
                raise DocumentError(
                    "Pipeline file is not valid YAML", "yaml", line_number, column
                ) from e
            except RecursionError as e:
                raise DocumentError("Pipeline file is nested too deeply", "yaml") from e

        if document is None:
            raise DocumentError(f"Pipeline file is not valid {label}", document_format)
        if not isinstance(document, Mapping):
            raise DocumentError("Pipeline document must be an object", document_format)
        return document

    def _validate_document(self, document: Mapping[str, Any]) -> Tuple[Optional[Pipeline], List[Diagnostic]]:
        unknown = set(document) - {STEPS_KEY}
        if unknown:
            logger.debug(f"Ignoring unknown pipeline keys: {', '.join(sorted(map(str, unknown)))}")

        raw_steps = document.get(STEPS_KEY, MISSING)
        message = None
        if is_absent(raw_steps):
            message = "steps is not defined!"
        elif not isinstance(raw_steps, list):
            message = "steps must be an array!"
        elif not raw_steps:
            message = "pipeline must contain at least one step!"
        if message:
            return None, [Diagnostic(subject=STEPS_KEY, messages=[message], scope=DiagnosticScope.PIPELINE)]

        steps: List[Step] = []
        diagnostics: List[Diagnostic] = []
        for position, raw_step in enumerate(raw_steps, start=1):
            step, diagnostic = self._validate_step(raw_step, position)
            if diagnostic is not None:
                diagnostics.append(diagnostic)
            else:
                steps.append(step)

        if diagnostics:
            return None, diagnostics
        return Pipeline(steps=steps), []

    def _validate_step(self, raw_step, position: int) -> Tuple[Optional[Step], Optional[Diagnostic]]:
        subject = f"{STEPS_KEY}[{position}]"
        if not isinstance(raw_step, Mapping):
            return None, Diagnostic(subject=subject, messages=["step must be an object!"], scope=DiagnosticScope.STEP)

        raw_id = raw_step.get(ID_KEY, MISSING)
        display_id = raw_id if is_number(raw_id) else None
        context = RuleContext(
            siblings=raw_step,
            tracker=self.tracker,
            predicates=self.predicates,
            registry=self.registry,
        )

        # id and name errors belong to the step itself
        step_errors, _ = validate_fields(Step, raw_step, context)
        node = Diagnostic(
            subject=subject,
            messages=[m for d in step_errors for m in d.messages],
            scope=DiagnosticScope.STEP,
            step_id=display_id,
        )

        name = raw_step.get(NAME_KEY, MISSING)
        if not self.registry.is_registered(name):
            return None, node
        definition = self.registry.resolve(name)

        step_id = int(raw_id) if display_id is not None and not step_errors else None
        args, arg_errors = self._validate_args(definition.args_model, raw_step.get(ARGS_KEY, MISSING), context, step_id)
        if arg_errors:
            node.children.append(Diagnostic(subject=ARGS_KEY, children=arg_errors, scope=DiagnosticScope.ARGUMENTS))

        if node.messages or node.children:
            return None, node
        return Step(id=step_id, name=name, category=definition.category, args=args), None

    def _validate_args(self, args_model, raw_args, context: RuleContext, step_id: Optional[int]):
        if is_absent(raw_args):
            raw_args = {}
        if not isinstance(raw_args, Mapping):
            return None, [Diagnostic.leaf(ARGS_KEY, "args must be an object!", DiagnosticScope.ARGUMENTS)]

        args_context = RuleContext(
            siblings=raw_args,
            tracker=context.tracker,
            predicates=context.predicates,
            registry=context.registry,
            step_id=step_id,
        )
        diagnostics, failed = validate_fields(args_model, raw_args, args_context, DiagnosticScope.ARGUMENTS)
        args, type_errors = build_model(args_model, raw_args, skip=failed, scope=DiagnosticScope.ARGUMENTS)
        diagnostics.extend(type_errors)
        return args, diagnostics

    def _log_diagnostics(self, diagnostics: List[Diagnostic]) -> None:
        logger.error(f"Pipeline rejected: {len(diagnostics)} invalid node(s)")
        for diagnostic in diagnostics:
            logger.error(format_diagnostic(diagnostic).rstrip("\n"))
