"""
Region families.

A RegionSpec bundles everything the engine needs to detect and build one
family of portal:
- allowed_planes: planes tried from the origin (order matters, first success wins)
- frame: predicate for boundary cells
- interior: predicate for cells allowed inside the frame (air or the same portal)
- portal_block: block name placed into the interior
- oriented_state_for_plane: state to place for a given plane

Specs are immutable values built by factory functions, one per family.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Tuple

from portal_core.limits import DEFAULT_LIMITS, SafetyLimits
from portal_core.materials import (
    AXIS,
    CRYING_OBSIDIAN,
    END_PORTAL,
    END_PORTAL_FRAME,
    EYE,
    FIRE_TAG,
    NETHER_PORTAL,
    OBSIDIAN,
    BlockState,
    StatePredicate,
)
from portal_core.types import Plane


class InteriorStrategy(Enum):
    """How the engine derives the interior from a frame component."""
    OUTSIDE_FLOOD = "outside_flood"
    INWARD_FLOOD = "inward_flood"


@dataclass(frozen=True)
class RegionSpec:
    allowed_planes: Tuple[Plane, ...]
    frame: StatePredicate
    interior: StatePredicate
    portal_block: str
    oriented_state_for_plane: Callable[[Plane], BlockState]
    strategy: InteriorStrategy = InteriorStrategy.OUTSIDE_FLOOD
    limits: SafetyLimits = DEFAULT_LIMITS
    name: str = "custom"

    def __post_init__(self):
        object.__setattr__(self, "allowed_planes", tuple(self.allowed_planes))
        if not self.allowed_planes:
            raise ValueError(f"RegionSpec {self.name!r} needs at least one plane")


def _is_eyed_frame(state: BlockState) -> bool:
    return state.is_of(END_PORTAL_FRAME) and bool(state.get(EYE, False))


def _end_interior(state: BlockState) -> bool:
    return state.is_air or state.is_of(END_PORTAL)


def _nether_frame(state: BlockState) -> bool:
    return state.is_of(OBSIDIAN) or state.is_of(CRYING_OBSIDIAN)


def _nether_interior(state: BlockState) -> bool:
    return state.is_air or state.is_of(NETHER_PORTAL) or state.is_in(FIRE_TAG)


def nether_portal_state(plane: Plane) -> BlockState:
    """Nether portal state for a vertical plane (YZ plane -> axis z, XY plane -> axis x)."""
    axis = "z" if plane is Plane.VERTICAL_X else "x"
    return BlockState.of(NETHER_PORTAL, **{AXIS: axis})


def end_portal_spec(
    strategy: InteriorStrategy = InteriorStrategy.OUTSIDE_FLOOD,
    limits: SafetyLimits = DEFAULT_LIMITS,
) -> RegionSpec:
    """End portal: horizontal only; frame = eyed frames; interior = air or end portal."""
    return RegionSpec(
        allowed_planes=(Plane.HORIZONTAL,),
        frame=_is_eyed_frame,
        interior=_end_interior,
        portal_block=END_PORTAL,
        oriented_state_for_plane=lambda plane: BlockState.of(END_PORTAL),
        strategy=strategy,
        limits=limits,
        name="end",
    )


def nether_portal_spec(
    strategy: InteriorStrategy = InteriorStrategy.OUTSIDE_FLOOD,
    limits: SafetyLimits = DEFAULT_LIMITS,
) -> RegionSpec:
    """
    Nether portal: vertical planes, YZ first then XY.

    Frame = obsidian or crying obsidian; interior = air, existing nether
    portal, or fire.
    """
    return RegionSpec(
        allowed_planes=(Plane.VERTICAL_X, Plane.VERTICAL_Z),
        frame=_nether_frame,
        interior=_nether_interior,
        portal_block=NETHER_PORTAL,
        oriented_state_for_plane=nether_portal_state,
        strategy=strategy,
        limits=limits,
        name="nether",
    )


# Preset factories by family name
PRESETS = {
    "end": end_portal_spec,
    "nether": nether_portal_spec,
}
