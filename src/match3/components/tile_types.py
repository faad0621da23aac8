from dataclasses import dataclass, field
from typing import List


@dataclass(slots=True)
class TileTypes:
    """Canonical tile colors stored on a single entity.

    This component lives alongside TileTypeRegistry (tag). ``spawnable`` is the ordered
    palette the board draws from; a random integer in ``[0, len(spawnable))`` selects a color.
    """
    spawnable: List[str] = field(default_factory=list)

    def spawnable_types(self) -> List[str]:
        return list(self.spawnable)

    def color_at(self, draw: int) -> str:
        """Map a random draw in ``[0, len(spawnable))`` to a tile type name."""
        if not 0 <= draw < len(self.spawnable):
            raise ValueError(f"Color draw {draw} outside [0, {len(self.spawnable)})")
        return self.spawnable[draw]
