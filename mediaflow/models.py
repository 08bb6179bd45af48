"""
Typed pipeline models.

A Pipeline is only built once every step has passed validation; it is
immutable and ready to be handed to an executor.
"""

from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, SerializeAsAny, model_validator

from mediaflow.steps.base import StepArgs
from mediaflow.steps.registry import StepCategory
from mediaflow.validation.rules import Identifier, StepKind


class Step(BaseModel):
    """One validated step.

    Attributes:
        id: Unique positive step id
        name: Registered step kind
        category: Instruction or statement
        args: Kind-specific argument model
    """
    model_config = ConfigDict(frozen=True)

    id: Annotated[int, Identifier()]
    name: Annotated[str, StepKind()]
    category: StepCategory
    args: SerializeAsAny[StepArgs]

    @property
    def is_instruction(self) -> bool:
        return self.category is StepCategory.INSTRUCTION

    @property
    def is_statement(self) -> bool:
        return self.category is StepCategory.STATEMENT


class Pipeline(BaseModel):
    """Ordered, non-empty list of steps with distinct ids."""
    model_config = ConfigDict(frozen=True)

    steps: List[Step] = Field(min_length=1)

    @model_validator(mode="after")
    def check_unique_ids(self) -> "Pipeline":
        seen = set()
        for step in self.steps:
            if step.id in seen:
                raise ValueError(f"id {step.id} is already used!")
            seen.add(step.id)
        return self

    def get_step(self, step_id: int) -> Optional[Step]:
        for step in self.steps:
            if step.id == step_id:
                return step
        return None

    def ids(self) -> List[int]:
        return [step.id for step in self.steps]

    def __len__(self) -> int:
        return len(self.steps)
