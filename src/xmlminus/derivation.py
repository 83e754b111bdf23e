from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .grammar import Production
    from .tables import Reduce
    from .tokens import TokenKind


@dataclass(frozen=True, slots=True)
class DerivationStep:
    """One reduction applied by the automaton."""

    sequence: int
    production: Production
    state: int
    lookahead: TokenKind
    label: str

    def __str__(self) -> str:
        return f"{self.label} {self.production}"


class Derivation:
    """Reductions in the order the parser applied them.

    Read front to back this is a rightmost derivation in reverse; the
    augmented start rule is applied but never recorded.
    """

    __slots__ = ("accepted", "steps")

    accepted: bool
    steps: list[DerivationStep]

    def __init__(self) -> None:
        self.accepted = False
        self.steps = []

    def record(self, action: Reduce, state: int, lookahead: TokenKind) -> DerivationStep:
        step = DerivationStep(len(self.steps) + 1, action.production, state, lookahead, action.label)
        self.steps.append(step)
        return step

    @property
    def productions(self) -> list[Production]:
        return [step.production for step in self.steps]

    def rightmost(self) -> list[DerivationStep]:
        """Steps in derivation order, starting from the start symbol."""
        return self.steps[::-1]

    def __iter__(self) -> Iterator[DerivationStep]:
        return iter(self.steps)

    def __len__(self) -> int:
        return len(self.steps)

    def __getitem__(self, index: int) -> DerivationStep:
        return self.steps[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Derivation):
            return NotImplemented
        return self.accepted == other.accepted and self.steps == other.steps

    __hash__ = None  # type: ignore[assignment]  # Unhashable since we define __eq__

    def __repr__(self) -> str:
        return f"Derivation(steps={len(self.steps)}, accepted={self.accepted})"
