"""Base classes for step argument schemas."""

from pydantic import BaseModel, ConfigDict


class StepArgs(BaseModel):
    """Arguments of a step.

    Subclasses declare their fields with ``Annotated`` field rules; the
    document keys are the field aliases.
    """
    model_config = ConfigDict(frozen=True, extra="ignore", strict=True)


class InstructionArgs(StepArgs):
    """Arguments of a media-transforming step."""


class StatementArgs(StepArgs):
    """Arguments of a flow-control step."""
