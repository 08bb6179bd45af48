"""
Statement argument schemas.

Statements do not transform media; they decide what happens to the
outputs of other steps.
"""

from typing import Annotated, Optional

from mediaflow.steps.base import StatementArgs
from mediaflow.steps.registry import StepCategory
from mediaflow.validation.rules import SelectorShape, StepKind
from mediaflow.validation.selectors import SelectorOutput


class OutputArgs(StatementArgs):
    """Export the outputs picked by a selector.

    - selector: outputs to keep
    - directory: destination, relative to the workspace (optional)
    """
    selector: Annotated[str, SelectorShape()]
    directory: Optional[str] = None


class ForEachArgs(StatementArgs):
    """Apply an instruction to every output of an earlier step."""
    selector: Annotated[str, SelectorShape(expected_output=SelectorOutput.MULTIPLE)]
    step: Annotated[str, StepKind(category=StepCategory.INSTRUCTION)]
