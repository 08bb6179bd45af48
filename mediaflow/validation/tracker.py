"""
Reference Tracker

Records the step ids accepted so far during one parse pass. Steps are
tracked in declaration order, the moment their own id is validated, so a
selector can only point at a step declared above it.
"""

from typing import FrozenSet, Set


class ReferenceTracker:
    """Pass-scoped set of accepted step ids."""

    def __init__(self):
        self._ids: Set[int] = set()

    def reset(self) -> None:
        """Forget every tracked id."""
        self._ids.clear()

    def contains(self, step_id) -> bool:
        return step_id in self._ids

    def insert(self, step_id: int) -> None:
        """Track a step id.

        Raises:
            ValueError: If the id is already tracked. The identifier rule
                checks membership first, so this only fires on misuse.
        """
        if step_id in self._ids:
            raise ValueError(f"Step id {step_id} is already tracked")
        self._ids.add(step_id)

    def ids(self) -> FrozenSet[int]:
        return frozenset(self._ids)

    def __contains__(self, step_id) -> bool:
        return self.contains(step_id)

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"ReferenceTracker({sorted(self._ids)})"
