"""
portal_forms: Region families and the detection engine.

- spec.py: RegionSpec, InteriorStrategy, end/nether presets
- engine.py: find_region, trace_region, find_and_create, break_connected_region
"""

from .engine import (
    AttemptOutcome,
    FreeformRegion,
    PlaneAttempt,
    break_connected_region,
    find_and_create,
    find_region,
    trace_region,
)
from .spec import PRESETS, InteriorStrategy, RegionSpec, end_portal_spec, nether_portal_spec

__all__ = [
    "AttemptOutcome",
    "FreeformRegion",
    "InteriorStrategy",
    "PRESETS",
    "PlaneAttempt",
    "RegionSpec",
    "break_connected_region",
    "end_portal_spec",
    "find_and_create",
    "find_region",
    "nether_portal_spec",
    "trace_region",
]
