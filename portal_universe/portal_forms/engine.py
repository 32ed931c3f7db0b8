"""
Freeform region engine.

find_region tries each plane of a RegionSpec in order:

    seed search -> frame component -> interior -> validation

Any failure moves on to the next plane; the first plane that validates wins.
Nothing is written to the world until a region has fully validated, so a
failed detection leaves the world untouched.

find_and_create materializes a found region (idempotently) and optionally
emits a feedback signal. break_connected_region is the inverse: a 6-connected
flood that clears placed portal cells, independent of planes and frames.
"""

import logging
import math
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from portal_core.frame import collect_frame_component, find_nearest_frame
from portal_core.interior import (
    InteriorOutcome,
    flood_interior_inward,
    resolve_interior_with_outcome,
)
from portal_core.materials import AIR, BlockState
from portal_core.types import FACE_OFFSETS, Coordinate, Plane
from portal_core.world import FeedbackWorld, VoxelWorld

from .spec import InteriorStrategy, RegionSpec

logger = logging.getLogger(__name__)

# Feedback intensity = min(MAX, BASE + PER_CELL * cells)
FEEDBACK_BASE = 0.2
FEEDBACK_PER_CELL = 0.0025
FEEDBACK_MAX = 1.0


class AttemptOutcome(Enum):
    ACCEPTED = "accepted"
    NO_SEED = "no_seed"
    COMPONENT_OVERFLOW = "component_overflow"
    SPAN_OVERFLOW = "span_overflow"
    EMPTY_INTERIOR = "empty_interior"
    AREA_OVERFLOW = "area_overflow"
    LEAKED = "leaked"
    CONTAMINATED = "contaminated"


_INTERIOR_TO_ATTEMPT = {
    InteriorOutcome.EMPTY: AttemptOutcome.EMPTY_INTERIOR,
    InteriorOutcome.AREA_OVERFLOW: AttemptOutcome.AREA_OVERFLOW,
    InteriorOutcome.SPAN_OVERFLOW: AttemptOutcome.SPAN_OVERFLOW,
    InteriorOutcome.LEAKED: AttemptOutcome.LEAKED,
    InteriorOutcome.CONTAMINATED: AttemptOutcome.CONTAMINATED,
}


@dataclass(frozen=True)
class PlaneAttempt:
    """Record of one plane tried by trace_region."""
    plane: Plane
    outcome: AttemptOutcome
    seed: Optional[Coordinate] = None
    component_size: int = 0
    interior_size: int = 0


@dataclass(frozen=True)
class FreeformRegion:
    """
    Validated interior on one plane.

    - plane: plane the frame was found on
    - interior: interior coordinates, all sharing the plane's constant axis
    """
    plane: Plane
    interior: Tuple[Coordinate, ...]

    def __len__(self) -> int:
        return len(self.interior)

    def center(self) -> Tuple[float, float, float]:
        """Coordinate-wise mean of the interior, shifted to block centers."""
        n = len(self.interior)
        if n == 0:
            return (0.5, 0.5, 0.5)
        return (
            sum(p.x for p in self.interior) / n + 0.5,
            sum(p.y for p in self.interior) / n + 0.5,
            sum(p.z for p in self.interior) / n + 0.5,
        )

    def center_block(self) -> Coordinate:
        x, y, z = self.center()
        return Coordinate(math.floor(x), math.floor(y), math.floor(z))


def _attempt_plane(
    world: VoxelWorld, origin: Coordinate, spec: RegionSpec, plane: Plane
) -> Tuple[Optional[FreeformRegion], PlaneAttempt]:
    limits = spec.limits

    seed = find_nearest_frame(world, origin, plane, spec.frame, limits.search_radius)
    if seed is None:
        return None, PlaneAttempt(plane, AttemptOutcome.NO_SEED)

    # Collect the 8-connected frame cells in UV space on this plane
    component = collect_frame_component(world, seed, plane, spec.frame, limits.max_component)
    if not component:
        return None, PlaneAttempt(plane, AttemptOutcome.COMPONENT_OVERFLOW, seed)

    if spec.strategy is InteriorStrategy.INWARD_FLOOD:
        interior, outcome = flood_interior_inward(
            world, origin, component, spec.frame, spec.interior, limits.max_area
        )
    else:
        interior, outcome = resolve_interior_with_outcome(
            component, plane, component.c, limits.max_area, limits.max_span
        )
    if outcome is not InteriorOutcome.RESOLVED:
        return None, PlaneAttempt(
            plane, _INTERIOR_TO_ATTEMPT[outcome], seed, len(component)
        )

    # Every interior cell must already be acceptable; enclosed frame cells are tolerated
    for p in interior:
        state = world.get(p)
        if not (spec.interior(state) or spec.frame(state)):
            logger.debug("Plane %s: interior cell %s holds %r", plane.value, p, state)
            return None, PlaneAttempt(
                plane, AttemptOutcome.CONTAMINATED, seed, len(component), len(interior)
            )

    region = FreeformRegion(plane, tuple(interior))
    return region, PlaneAttempt(
        plane, AttemptOutcome.ACCEPTED, seed, len(component), len(interior)
    )


def trace_region(
    world: VoxelWorld, origin: Coordinate, spec: RegionSpec
) -> Tuple[Optional[FreeformRegion], List[PlaneAttempt]]:
    """
    Find a region and report what happened on every plane tried.

    Returns:
        (region or None, attempts in the order the planes were tried).
        Planes after the accepted one are not attempted.
    """
    attempts: List[PlaneAttempt] = []
    for plane in spec.allowed_planes:
        region, attempt = _attempt_plane(world, origin, spec, plane)
        attempts.append(attempt)
        if region is not None:
            return region, attempts
        logger.debug(
            "%s portal at %s: plane %s rejected (%s)",
            spec.name, origin, plane.value, attempt.outcome.value,
        )
    return None, attempts


def find_region(world: VoxelWorld, origin: Coordinate, spec: RegionSpec) -> Optional[FreeformRegion]:
    """Try each allowed plane; return the first validated region, or None."""
    region, _ = trace_region(world, origin, spec)
    return region


def feedback_intensity(cell_count: int) -> float:
    return min(FEEDBACK_MAX, FEEDBACK_BASE + cell_count * FEEDBACK_PER_CELL)


def find_and_create(
    world: VoxelWorld,
    origin: Coordinate,
    spec: RegionSpec,
    feedback_signal: Optional[str] = None,
) -> bool:
    """
    Find a region and fill it with the plane-oriented portal state.

    Cells that hold a frame block are never replaced. Cells already in the
    target state are left alone, so re-running on a built portal writes
    nothing.

    Args:
        world: World to read and mutate
        origin: Where detection starts (e.g. the cell just activated)
        spec: Region family
        feedback_signal: Optional signal emitted at the region center when
            the world is a FeedbackWorld

    Returns:
        True if a region was found and materialized
    """
    region = find_region(world, origin, spec)
    if region is None:
        return False

    place = spec.oriented_state_for_plane(region.plane)

    placed = 0
    for p in region.interior:
        state = world.get(p)
        if spec.frame(state):
            continue
        if spec.interior(state) and state != place:
            world.set(p, place)
            placed += 1

    logger.info(
        "%s portal on %s: %d interior cells, %d placed",
        spec.name, region.plane.value, len(region), placed,
    )

    if feedback_signal is not None and isinstance(world, FeedbackWorld):
        world.emit_feedback(region.center_block(), feedback_signal, feedback_intensity(len(region)))

    return True


def break_connected_region(
    world: VoxelWorld,
    start: Coordinate,
    target_block: str,
    replacement: BlockState = AIR,
) -> int:
    """
    Clear every cell of `target_block` face-connected to `start`.

    Expansion stops at cells of any other block; planes and frames play no
    part. A frame that splits its cavity (e.g. a divider column) yields
    separate patches from find_and_create, and only the patch containing
    `start` is cleared.

    Returns:
        Number of cells cleared
    """
    if replacement.is_of(target_block):
        raise ValueError(f"Replacement {replacement!r} is itself {target_block!r}")

    queue = deque([start])
    seen = set()
    cleared = 0

    while queue:
        p = queue.popleft()
        if p in seen:
            continue
        seen.add(p)
        if not world.get(p).is_of(target_block):
            continue

        world.set(p, replacement)
        cleared += 1
        for dx, dy, dz in FACE_OFFSETS:
            queue.append(p.offset(dx, dy, dz))

    if cleared:
        logger.info("Cleared %d %s cells from %s", cleared, target_block, start)
    return cleared
