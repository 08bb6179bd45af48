"""
Step Registry

Catalogue of the step kinds a pipeline may use. Each kind is registered
explicitly with its argument schema and category; the default registry is
built once at import time and frozen.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Type, Union

from pydantic import BaseModel

from mediaflow.errors import RegistryError, UnknownStepError


logger = logging.getLogger(__name__)


class StepCategory(Enum):
    """Instructions transform media, statements control flow."""
    INSTRUCTION = "instruction"
    STATEMENT = "statement"


@dataclass(frozen=True)
class StepDefinition:
    """A registered step kind.

    Attributes:
        name: Value of the step's ``name`` key in documents
        args_model: Pydantic schema of the step's ``args`` object
        category: Instruction or statement
        description: One-line summary shown by ``mediaflow steps``
    """
    name: str
    args_model: Type[BaseModel]
    category: StepCategory
    description: str = ""


class StepRegistry:
    """Maps step names to their definitions."""

    def __init__(self):
        self._definitions: Dict[str, StepDefinition] = {}
        self._frozen = False

    def register(
        self,
        name: str,
        args_model: Type[BaseModel],
        category: StepCategory,
        description: str = "",
    ) -> StepDefinition:
        """Add a step kind.

        Raises:
            RegistryError: If the registry is frozen or the name is taken.
        """
        if self._frozen:
            raise RegistryError(f"Cannot register '{name}': registry is frozen")
        if name in self._definitions:
            raise RegistryError(f"Step '{name}' is already registered")
        if not isinstance(category, StepCategory):
            raise RegistryError(f"Invalid category for step '{name}': {category!r}")

        definition = StepDefinition(name, args_model, category, description)
        self._definitions[name] = definition
        logger.debug(f"Registered {category.value} '{name}' ({args_model.__name__})")
        return definition

    def freeze(self) -> None:
        """Make the registry read-only."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def resolve(self, name: str) -> StepDefinition:
        """Return the definition of a step kind.

        Raises:
            UnknownStepError: If no step is registered under ``name``.
        """
        try:
            return self._definitions[name]
        except (KeyError, TypeError):
            raise UnknownStepError(str(name)) from None

    def is_registered(self, name) -> bool:
        return isinstance(name, str) and name in self._definitions

    def names(self, category: Optional[Union[StepCategory, str]] = None) -> List[str]:
        """Registered names, optionally restricted to one category."""
        if category is None:
            return list(self._definitions)
        category = StepCategory(category)
        return [n for n, d in self._definitions.items() if d.category is category]

    def instructions(self) -> List[StepDefinition]:
        return [d for d in self._definitions.values() if d.category is StepCategory.INSTRUCTION]

    def statements(self) -> List[StepDefinition]:
        return [d for d in self._definitions.values() if d.category is StepCategory.STATEMENT]

    def __contains__(self, name) -> bool:
        return self.is_registered(name)

    def __iter__(self) -> Iterator[StepDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)
