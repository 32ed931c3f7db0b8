"""
Frame discovery on a plane.

Two steps:
1. find_nearest_frame: ring scan outward from an origin for the first cell
   satisfying the frame predicate (Chebyshev radius capped).
2. collect_frame_component: 8-connected BFS over frame cells on the plane,
   holding the constant axis fixed.

Frames are discovered with 8-connectivity so that diagonal-only joints still
form one boundary. The interior flood (interior.py) deliberately uses
4-connectivity; the two traversals are kept separate.

Both steps return negative results (None / empty component) instead of
raising when nothing usable is found or a safety ceiling is hit.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import FrozenSet, Iterator, List, Optional, Tuple

from .limits import MAX_COMPONENT, SEARCH_RADIUS
from .materials import StatePredicate
from .plane import c_of, from_uvc, to_uv, u_of, v_of
from .types import UV, Bounds, Coordinate, Plane, bounds_of
from .world import VoxelWorld

logger = logging.getLogger(__name__)

# 8-connected offsets, counter-clockwise from +u
DIR8 = ((1, 0), (1, -1), (0, -1), (-1, -1), (-1, 0), (-1, 1), (0, 1), (1, 1))


@dataclass(frozen=True)
class FrameComponent:
    """
    Connected frame footprint on a plane.

    - cells: UV keys of every frame cell reached from the seed
    - plane: plane the component lives on
    - c: constant coordinate shared by all cells
    """
    cells: FrozenSet[UV]
    plane: Plane
    c: int

    def __len__(self) -> int:
        return len(self.cells)

    def __bool__(self) -> bool:
        return bool(self.cells)

    def __contains__(self, uv: UV) -> bool:
        return uv in self.cells

    def __iter__(self):
        return iter(self.cells)

    def bounds(self) -> Bounds:
        if not self.cells:
            raise ValueError("Empty frame component has no bounds")
        return bounds_of(self.cells)

    def coordinates(self) -> List[Coordinate]:
        return [from_uvc(cell.u, cell.v, self.c, self.plane) for cell in sorted(self.cells)]


def _ring_offsets(r: int, plane: Plane) -> Iterator[Tuple[int, int]]:
    """
    Offsets of the square ring at Chebyshev distance r, in scan order.

    Horizontal: the two v-extremal rows swept along u, then the u-extremal
    columns without corners. Vertical planes sweep the u-extremal columns
    along v first, then the v-extremal rows without corners.
    """
    if plane.is_vertical:
        for dv in range(-r, r + 1):
            yield (-r, dv)
            yield (r, dv)
        for du in range(-r + 1, r):
            yield (du, -r)
            yield (du, r)
    else:
        for du in range(-r, r + 1):
            yield (du, -r)
            yield (du, r)
        for dv in range(-r + 1, r):
            yield (-r, dv)
            yield (r, dv)


def find_nearest_frame(
    world: VoxelWorld,
    origin: Coordinate,
    plane: Plane,
    is_frame: StatePredicate,
    radius: int = SEARCH_RADIUS,
) -> Optional[Coordinate]:
    """
    Find the nearest frame cell to `origin` on `plane`.

    Args:
        world: World to read
        origin: Search center (returned as-is if it is a frame cell)
        plane: Plane to scan; the origin's constant coordinate is kept
        is_frame: Frame membership predicate
        radius: Largest ring radius to scan

    Returns:
        First frame coordinate in ring scan order, or None if no frame cell
        lies within `radius`.
    """
    if is_frame(world.get(origin)):
        return origin

    c = c_of(origin, plane)
    ou, ov = u_of(origin, plane), v_of(origin, plane)

    for r in range(1, radius + 1):
        for du, dv in _ring_offsets(r, plane):
            candidate = from_uvc(ou + du, ov + dv, c, plane)
            if is_frame(world.get(candidate)):
                return candidate

    return None


def collect_frame_component(
    world: VoxelWorld,
    seed: Coordinate,
    plane: Plane,
    is_frame: StatePredicate,
    max_component: int = MAX_COMPONENT,
) -> FrameComponent:
    """
    Collect the 8-connected frame component containing `seed`.

    The seed is assumed to be a frame cell (find_nearest_frame guarantees
    this). Neighbors are tested with `is_frame` at their 3D coordinate with
    the seed's constant coordinate held fixed.

    Returns:
        FrameComponent with every reachable frame cell, or an empty
        component if more than `max_component` cells are reachable.
    """
    c = c_of(seed, plane)
    start = to_uv(seed, plane)

    seen = {start}
    queue = deque([start])

    while queue:
        u, v = queue.popleft()

        for du, dv in DIR8:
            neighbor = UV(u + du, v + dv)
            if neighbor in seen:
                continue
            if not is_frame(world.get(from_uvc(neighbor.u, neighbor.v, c, plane))):
                continue

            seen.add(neighbor)
            queue.append(neighbor)

            if len(seen) > max_component:
                logger.debug(
                    "Frame component from %s on %s exceeds %d cells",
                    seed, plane.value, max_component,
                )
                return FrameComponent(frozenset(), plane, c)

    return FrameComponent(frozenset(seen), plane, c)
