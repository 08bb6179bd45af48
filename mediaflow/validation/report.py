"""
Diagnostic Data Models

Defines the Diagnostic tree returned by the parser and DiagnosticReport,
its serialisable wrapper used by the CLI.

The tree mirrors the document: one node per failing step, argument
failures nested under an ``args`` node.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Iterator, List, Optional


class DiagnosticScope(Enum):
    """Where in the document a diagnostic applies."""
    PIPELINE = "pipeline"
    STEP = "step"
    FIELD = "field"
    ARGUMENTS = "arguments"


@dataclass
class Diagnostic:
    """A node of the diagnostic tree.

    Attributes:
        subject: Document key or label of the node (e.g. "steps[2]", "inputs")
        messages: Failure messages attached to this node
        children: Nested diagnostics, in declaration order
        scope: Kind of subject
        step_id: Id of the step this node belongs to, when it is a number
    """
    subject: str
    messages: List[str] = field(default_factory=list)
    children: List["Diagnostic"] = field(default_factory=list)
    scope: DiagnosticScope = DiagnosticScope.FIELD
    step_id: Optional[int] = None

    @classmethod
    def leaf(
        cls,
        subject: str,
        message: str,
        scope: DiagnosticScope = DiagnosticScope.FIELD,
    ) -> "Diagnostic":
        return cls(subject=subject, messages=[message], scope=scope)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def walk(self) -> Iterator["Diagnostic"]:
        """Yield this node and its descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def all_messages(self) -> List[str]:
        return [message for node in self.walk() for message in node.messages]

    def find(self, subject: str) -> Optional["Diagnostic"]:
        for node in self.walk():
            if node.subject == subject:
                return node
        return None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        d = {"subject": self.subject, "scope": self.scope.value}
        if self.step_id is not None:
            d["step_id"] = self.step_id
        if self.messages:
            d["messages"] = list(self.messages)
        if self.children:
            d["children"] = [c.to_dict() for c in self.children]
        return d


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """Render a diagnostic node and its children as indented text.

    Example:
        > Step 2:
          - id 2 is already used!
          - arguments: not enough input files! 2 required
    """
    content = ""

    if diagnostic.scope is DiagnosticScope.STEP:
        if diagnostic.step_id is not None:
            content += f"> Step {diagnostic.step_id}:\n"
        else:
            content += "> Step:\n"
    elif diagnostic.scope is DiagnosticScope.PIPELINE:
        content += "> Pipeline:\n"

    for message in diagnostic.messages:
        if diagnostic.scope is DiagnosticScope.ARGUMENTS:
            content += f"  - arguments: {message}\n"
        else:
            content += f"  - {message}\n"

    for child in diagnostic.children:
        content += format_diagnostic(child)

    return content


def format_diagnostics(diagnostics: List[Diagnostic]) -> str:
    return "".join(format_diagnostic(d) for d in diagnostics)


@dataclass
class DiagnosticReport:
    """Structured report from a parse pass.

    Attributes:
        source: Path or label of the parsed document
        diagnostics: Top-level diagnostic nodes (empty when valid)
        step_count: Number of steps in the accepted pipeline
        error: Document-level error message, if the document could not be read
        timestamp: When validation was performed (UTC)
        duration_ms: How long validation took in milliseconds
    """
    source: str
    diagnostics: List[Diagnostic] = field(default_factory=list)
    step_count: int = 0
    error: Optional[str] = None
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    duration_ms: int = 0

    @property
    def is_valid(self) -> bool:
        return self.error is None and not self.diagnostics

    def messages(self) -> List[str]:
        return [m for d in self.diagnostics for m in d.all_messages()]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "source": self.source,
            "is_valid": self.is_valid,
            "step_count": self.step_count,
            "error": self.error,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "timestamp": self.timestamp,
            "duration_ms": self.duration_ms,
            "summary": {
                "failing_nodes": len(self.diagnostics),
                "messages": len(self.messages()),
            },
        }

    def to_json(self, indent: int = 2) -> str:
        """Serialize report to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def format_human(self) -> str:
        """Format report for human-readable console output."""
        if self.is_valid:
            return f"✅ {self.source}: Valid ({self.step_count} step(s))"

        lines = [f"❌ {self.source}: Failed"]
        if self.error:
            lines.append(f"  - {self.error}")
        rendered = format_diagnostics(self.diagnostics).rstrip("\n")
        if rendered:
            lines.append(rendered)
        return "\n".join(lines)
