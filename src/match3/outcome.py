from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from match3.components.tile import Cell, SpecialKind


class OutcomeKind(Enum):
    INVALID = "invalid"
    RESOLVED = "resolved"
    RESHUFFLED = "reshuffled"


class InvalidReason(Enum):
    NOT_ADJACENT = "not_adjacent"
    NO_MATCH = "no_match"
    NO_SPECIAL = "no_special"


@dataclass(frozen=True, slots=True)
class PassResult:
    """One committed resolution pass, in the order a presentation layer should replay it.

    ``combo_step`` is False for the detonation pass of a direct special activation.
    ``snapshot`` is the grid after gravity and refill.
    """
    depth: int
    removed: FrozenSet[int]
    specials_created: Tuple[Tuple[int, SpecialKind], ...]
    detonated: Tuple[Tuple[int, SpecialKind], ...]
    points: int
    combo_step: bool
    snapshot: Tuple[Optional[Cell], ...]


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    kind: OutcomeKind
    reason: Optional[InvalidReason] = None
    passes: Tuple[PassResult, ...] = field(default_factory=tuple)
    score_delta: int = 0
    combo_count: int = 0

    @property
    def valid(self) -> bool:
        return self.kind is not OutcomeKind.INVALID

    @property
    def specials_created(self) -> Tuple[Tuple[int, SpecialKind], ...]:
        return tuple(spawn for result in self.passes for spawn in result.specials_created)

    @property
    def removed_sets(self) -> Tuple[FrozenSet[int], ...]:
        return tuple(result.removed for result in self.passes)

    @classmethod
    def invalid(cls, reason: InvalidReason) -> "MoveOutcome":
        return cls(kind=OutcomeKind.INVALID, reason=reason)
