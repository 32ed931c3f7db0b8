"""
Interior resolution for a frame component.

Default strategy: outside flood.
1. Take the UV bounding box of the frame and grow it by a one-cell moat.
2. Seed a 4-connected flood from every non-frame perimeter cell.
3. Flood through 4-neighbors, never entering frame cells or leaving the box.
4. Interior = cells of the original box that are neither frame nor outside.

The frame was collected with 8-connectivity, but the outside flood moves
with 4-connectivity only, so two frame cells touching at a corner block it.
Diagonal pinholes therefore stay sealed. Do not switch this flood to
8-connectivity.

Alternative strategy: inward flood (flood_interior_inward). Floods from the
origin across non-frame cells and rejects on the first cell that is not an
acceptable interior material or that escapes the frame's bounding box.
Stricter and simpler; it needs world access and an origin inside the cavity.

The flood works on numpy boolean masks over the expanded box.
"""

import logging
from collections import deque
from enum import Enum
from typing import List, Tuple

import numpy as np

from .frame import FrameComponent
from .limits import MAX_AREA, MAX_SPAN
from .materials import StatePredicate
from .plane import from_uvc, to_uv
from .types import UV, Coordinate, Plane, bounds_of
from .world import VoxelWorld

logger = logging.getLogger(__name__)

# 4-connected offsets
DIR4 = ((1, 0), (-1, 0), (0, 1), (0, -1))


class InteriorOutcome(Enum):
    RESOLVED = "resolved"
    EMPTY = "empty"
    AREA_OVERFLOW = "area_overflow"
    SPAN_OVERFLOW = "span_overflow"
    LEAKED = "leaked"
    CONTAMINATED = "contaminated"


def _frame_mask(cells, u_min: int, v_min: int, width: int, height: int) -> np.ndarray:
    """Boolean mask [u, v] of frame cells over a box anchored at (u_min, v_min)."""
    mask = np.zeros((width, height), dtype=bool)
    for cell in cells:
        mask[cell.u - u_min, cell.v - v_min] = True
    return mask


def _flood_outside(frame: np.ndarray) -> np.ndarray:
    """
    4-connected flood from the perimeter of `frame`'s box.

    Returns:
        Boolean mask of cells reached from outside
    """
    width, height = frame.shape
    outside = np.zeros_like(frame)
    queue = deque()

    def enqueue_if_free(i: int, j: int) -> None:
        if not frame[i, j] and not outside[i, j]:
            outside[i, j] = True
            queue.append((i, j))

    # Seed perimeter
    for i in range(width):
        enqueue_if_free(i, 0)
        enqueue_if_free(i, height - 1)
    for j in range(1, height - 1):
        enqueue_if_free(0, j)
        enqueue_if_free(width - 1, j)

    # Flood (4-neighbor, never into frame)
    while queue:
        i, j = queue.popleft()
        for di, dj in DIR4:
            ni, nj = i + di, j + dj
            if ni < 0 or ni >= width or nj < 0 or nj >= height:
                continue
            if outside[ni, nj] or frame[ni, nj]:
                continue
            outside[ni, nj] = True
            queue.append((ni, nj))

    return outside


def enclosed_cells(frame_cells) -> List[UV]:
    """
    UV cells enclosed by `frame_cells` (outside flood, no size ceilings).

    Order is u-major, then v, ascending.
    """
    if not frame_cells:
        return []

    b = bounds_of(frame_cells)

    # Expand bbox with moat
    u_min, v_min = b.min_u - 1, b.min_v - 1
    width, height = b.width + 2, b.height + 2

    frame = _frame_mask(frame_cells, u_min, v_min, width, height)
    outside = _flood_outside(frame)

    # Interior = original bbox cells that are neither frame nor outside
    inner = ~(frame | outside)[1:-1, 1:-1]
    return [UV(int(i) + b.min_u, int(j) + b.min_v) for i, j in np.argwhere(inner)]


def resolve_interior_with_outcome(
    frame_cells,
    plane: Plane,
    c: int,
    max_area: int = MAX_AREA,
    max_span: int = MAX_SPAN,
) -> Tuple[List[Coordinate], InteriorOutcome]:
    """
    Outside-flood interior of a frame footprint, with the reason on failure.

    Args:
        frame_cells: UV keys of the frame component
        plane: Plane of the component
        c: Constant coordinate of the plane slice
        max_area: Interior ceiling
        max_span: Bounding box width/height ceiling

    Returns:
        (interior coordinates, outcome). Coordinates are empty unless the
        outcome is RESOLVED.
    """
    if not frame_cells:
        return [], InteriorOutcome.EMPTY

    b = bounds_of(frame_cells)
    if b.width > max_span or b.height > max_span:
        logger.debug("Frame bbox %dx%d exceeds span %d", b.width, b.height, max_span)
        return [], InteriorOutcome.SPAN_OVERFLOW

    cells = enclosed_cells(frame_cells)
    if not cells:
        return [], InteriorOutcome.EMPTY
    if len(cells) > max_area:
        logger.debug("Interior of %d cells exceeds area %d", len(cells), max_area)
        return [], InteriorOutcome.AREA_OVERFLOW

    return [from_uvc(cell.u, cell.v, c, plane) for cell in cells], InteriorOutcome.RESOLVED


def resolve_interior(
    frame_cells,
    plane: Plane,
    c: int,
    max_area: int = MAX_AREA,
    max_span: int = MAX_SPAN,
) -> List[Coordinate]:
    """
    Interior coordinates enclosed by a frame footprint.

    Returns an empty list when the frame encloses nothing or a ceiling is
    exceeded.
    """
    interior, _ = resolve_interior_with_outcome(frame_cells, plane, c, max_area, max_span)
    return interior


def flood_interior_inward(
    world: VoxelWorld,
    origin: Coordinate,
    component: FrameComponent,
    is_frame: StatePredicate,
    accepts: StatePredicate,
    max_area: int = MAX_AREA,
) -> Tuple[List[Coordinate], InteriorOutcome]:
    """
    Strict inward flood from the origin.

    The flood starts at the origin. When the origin is itself a frame cell,
    each of its 4-neighbors off the frame is tried in turn and the first one
    that resolves wins. The flood crosses 4-connected cells that are not
    frame cells; every visited cell must satisfy `accepts` (else
    CONTAMINATED) and stay inside the frame's bounding box (else LEAKED).
    Enclosed frame cells act as walls and are not part of the result.

    Returns:
        (interior coordinates in visit order, outcome)
    """
    if not component:
        return [], InteriorOutcome.EMPTY

    plane, c = component.plane, component.c
    b = component.bounds()
    origin_uv = to_uv(origin, plane)

    def is_wall(uv: UV) -> bool:
        if uv in component:
            return True
        return is_frame(world.get(from_uvc(uv.u, uv.v, c, plane)))

    def flood_from(start: UV) -> Tuple[List[UV], InteriorOutcome]:
        seen = {start}
        queue = deque([start])
        order: List[UV] = []

        while queue:
            current = queue.popleft()
            if not (b.min_u <= current.u <= b.max_u and b.min_v <= current.v <= b.max_v):
                return [], InteriorOutcome.LEAKED
            if not accepts(world.get(from_uvc(current.u, current.v, c, plane))):
                return [], InteriorOutcome.CONTAMINATED

            order.append(current)
            if len(order) > max_area:
                return [], InteriorOutcome.AREA_OVERFLOW

            for du, dv in DIR4:
                neighbor = UV(current.u + du, current.v + dv)
                if neighbor in seen or is_wall(neighbor):
                    continue
                seen.add(neighbor)
                queue.append(neighbor)

        return order, InteriorOutcome.RESOLVED

    if not is_wall(origin_uv):
        starts = [origin_uv]
    else:
        starts = [UV(origin_uv.u + du, origin_uv.v + dv) for du, dv in DIR4]
        starts = [uv for uv in starts if not is_wall(uv)]
    if not starts:
        return [], InteriorOutcome.EMPTY

    first_failure = None
    for start in starts:
        cells, outcome = flood_from(start)
        if outcome is InteriorOutcome.RESOLVED:
            return [from_uvc(cell.u, cell.v, c, plane) for cell in cells], outcome
        if first_failure is None:
            first_failure = outcome

    return [], first_failure
