"""
Safety ceilings for detection.

Frames are built by users, so every traversal is bounded. A breach is a
negative result (no region on that plane), never an exception.
"""

from dataclasses import dataclass

MAX_AREA = 4096        # max interior cells
MAX_COMPONENT = 8192   # max frame component cells
SEARCH_RADIUS = 24     # ring search radius for the first frame cell
MAX_SPAN = 512         # max bbox extent along u or v


@dataclass(frozen=True)
class SafetyLimits:
    """
    Traversal ceilings carried by every RegionSpec.

    - max_area: interior cells above this reject the plane
    - max_component: frame cells above this abort the component BFS
    - search_radius: Chebyshev radius of the seed ring search
    - max_span: bbox width/height above this skip the outside flood
    """
    max_area: int = MAX_AREA
    max_component: int = MAX_COMPONENT
    search_radius: int = SEARCH_RADIUS
    max_span: int = MAX_SPAN

    def __post_init__(self):
        for name in ("max_area", "max_component", "search_radius", "max_span"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")


DEFAULT_LIMITS = SafetyLimits()
