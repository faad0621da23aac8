from dataclasses import dataclass
from enum import Enum


class SpecialKind(Enum):
    NONE = "none"
    ROCKET_HORIZONTAL = "rocket-h"
    ROCKET_VERTICAL = "rocket-v"
    BOMB = "bomb"


@dataclass(slots=True)
class TileType:
    """Per-tile token assignment.

    Stores the color (a registered tile type name) and the attached special, if any.
    Active/empty state is handled by ActiveSwitch.
    """
    type_name: str
    special: SpecialKind = SpecialKind.NONE


@dataclass(frozen=True, slots=True)
class Cell:
    """Immutable token value used by grid snapshots."""
    color: str
    special: SpecialKind = SpecialKind.NONE

    @property
    def is_special(self) -> bool:
        return self.special is not SpecialKind.NONE
