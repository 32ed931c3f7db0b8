"""
Voxel world capability and a sparse in-memory implementation.

The detection core only needs to read and write single cells, plus an
optional feedback hook for user-facing confirmation (e.g. a sound cue).
Anything providing get/set satisfies VoxelWorld; GridWorld is the
dict-backed world used by tests and the integration gallery.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Tuple, runtime_checkable

from .materials import (
    AIR,
    CRYING_OBSIDIAN,
    END_PORTAL,
    END_PORTAL_FRAME,
    EYE,
    FIRE,
    NETHER_PORTAL,
    OBSIDIAN,
    STONE,
    WATER,
    BlockState,
)
from .plane import from_uvc
from .types import Coordinate, Plane


class VoxelWorld(Protocol):
    """Narrow world capability consumed by the engine."""

    def get(self, coord: Coordinate) -> BlockState:
        ...

    def set(self, coord: Coordinate, state: BlockState) -> None:
        ...


@runtime_checkable
class FeedbackWorld(VoxelWorld, Protocol):
    """World that can also emit a feedback signal at a position (checked with isinstance)."""

    def emit_feedback(self, coord: Coordinate, signal: str, intensity: float) -> None:
        ...


# ASCII legend for GridWorld.stamp; None leaves the cell untouched
DEFAULT_LEGEND: Dict[str, Optional[BlockState]] = {
    "#": BlockState.of(OBSIDIAN),
    "C": BlockState.of(CRYING_OBSIDIAN),
    "E": BlockState.of(END_PORTAL_FRAME, **{EYE: True}),
    "e": BlockState.of(END_PORTAL_FRAME, **{EYE: False}),
    "P": BlockState.of(END_PORTAL),
    "N": BlockState.of(NETHER_PORTAL),
    "F": BlockState.of(FIRE),
    "S": BlockState.of(STONE),
    "~": BlockState.of(WATER),
    ".": AIR,
    " ": None,
}


class GridWorld:
    """
    Sparse voxel world backed by a dict.

    Cells never written read as `default` (air). Writes through `set` are
    recorded in `mutations`; feedback emissions in `feedback`. Layout
    helpers (`stamp`) write directly and are not recorded.
    """

    def __init__(self, default: BlockState = AIR):
        self.default = default
        self._cells: Dict[Coordinate, BlockState] = {}
        self.mutations: List[Tuple[Coordinate, BlockState]] = []
        self.feedback: List[Tuple[Coordinate, str, float]] = []
        self.reads = 0

    def get(self, coord: Coordinate) -> BlockState:
        self.reads += 1
        return self._cells.get(coord, self.default)

    def set(self, coord: Coordinate, state: BlockState) -> None:
        self.mutations.append((coord, state))
        self._put(coord, state)

    def emit_feedback(self, coord: Coordinate, signal: str, intensity: float) -> None:
        self.feedback.append((coord, signal, intensity))

    def _put(self, coord: Coordinate, state: BlockState) -> None:
        if state == self.default:
            self._cells.pop(coord, None)
        else:
            self._cells[coord] = state

    def fill(self, coords: Iterable[Coordinate], state: BlockState) -> None:
        """Write `state` to every coordinate without recording mutations."""
        for coord in coords:
            self._put(coord, state)

    def stamp(
        self,
        rows: List[str],
        plane: Plane,
        c: int,
        legend: Optional[Mapping[str, Optional[BlockState]]] = None,
        origin: Tuple[int, int] = (0, 0),
    ) -> None:
        """
        Draw an ASCII picture onto a plane.

        Column j maps to u = origin_u + j. The first row is the highest v,
        so row i maps to v = origin_v + (len(rows) - 1 - i).

        Raises:
            ValueError: If a character is not in the legend
        """
        legend = DEFAULT_LEGEND if legend is None else legend
        u0, v0 = origin
        height = len(rows)
        for i, row in enumerate(rows):
            v = v0 + (height - 1 - i)
            for j, ch in enumerate(row):
                if ch not in legend:
                    raise ValueError(f"Unknown legend character {ch!r} in row {i}")
                state = legend[ch]
                if state is None:
                    continue
                self._put(from_uvc(u0 + j, v, c, plane), state)

    def cells_of(self, block: str) -> set:
        """All stored coordinates whose state is of `block`."""
        return {coord for coord, state in self._cells.items() if state.is_of(block)}

    def snapshot(self) -> Dict[Coordinate, BlockState]:
        return dict(self._cells)

    def clear_history(self) -> None:
        self.mutations.clear()
        self.feedback.clear()
        self.reads = 0
