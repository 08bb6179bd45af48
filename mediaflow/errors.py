"""
Mediaflow Error Hierarchy

Defines the exceptions raised by the pipeline parser and its collaborators.
Field-level problems in a pipeline document are never raised: they are
collected as Diagnostic objects and returned to the caller. Only the
failures below interrupt a parse pass.

Error Categories:
- Document Errors: the input text is not a usable structured document
- Contract Errors: a rule or registry was set up incorrectly by the schema author
- Selector Errors: a selector expression could not be parsed (caught by rules)
- Configuration Errors: invalid configuration files or values
"""

from typing import Optional


class MediaflowError(Exception):
    """Base exception for all mediaflow errors.

    All mediaflow-specific exceptions inherit from this class,
    allowing for broad exception handling when needed.
    """
    pass


class DocumentError(MediaflowError):
    """The pipeline document could not be read as structured text.

    Raised when:
    - The input is not valid JSON (or YAML when requested)
    - The decoded document is empty
    - The decoded document is not an object
    - The document is nested too deeply to decode

    Attributes:
        document_format: Format the parser tried to decode
        line_number: Line of the syntax error (if known)
        column: Column of the syntax error (if known)
    """

    def __init__(
        self,
        message: str,
        document_format: str = "json",
        line_number: Optional[int] = None,
        column: Optional[int] = None,
    ):
        super().__init__(message)
        self.document_format = document_format
        self.line_number = line_number
        self.column = column


class RuleConfigurationError(MediaflowError):
    """A field rule was configured with invalid options.

    This signals a mistake in an argument schema, not in the pipeline
    document, so it is never folded into the diagnostic tree.

    Attributes:
        rule_name: Name of the misconfigured rule
    """

    def __init__(self, message: str, rule_name: Optional[str] = None):
        super().__init__(message)
        self.rule_name = rule_name


class SelectorSyntaxError(MediaflowError):
    """A selector expression does not follow the selector grammar.

    Attributes:
        expression: The offending expression
    """

    def __init__(self, message: str, expression: Optional[str] = None):
        super().__init__(message)
        self.expression = expression


class RegistryError(MediaflowError):
    """Invalid use of the step registry (duplicate or late registration)."""
    pass


class UnknownStepError(RegistryError, KeyError):
    """Requested step kind is not registered.

    Attributes:
        name: The step kind that was looked up
    """

    def __init__(self, name: str):
        super().__init__(f"Step '{name}' not found")
        self.name = name

    def __str__(self) -> str:
        return self.args[0]


class ConfigurationError(MediaflowError):
    """Invalid configuration file or value.

    Attributes:
        errors: Individual validation messages
    """

    def __init__(self, message: str, errors: Optional[list] = None):
        super().__init__(message)
        self.errors = errors or []
