"""
portal_core: Core primitives for freeform portal detection.

Provides:
- types: Coordinate, UV, Plane, Bounds
- plane: (u, v, c) mapping for the three fixed planes
- materials: BlockState and block names/tags
- world: VoxelWorld capability and the in-memory GridWorld
- limits: Safety ceilings (SafetyLimits)
- frame: Ring seed search and 8-connected frame components
- interior: 4-connected outside flood (and the strict inward flood)
"""

__all__ = [
    "types",
    "plane",
    "materials",
    "world",
    "limits",
    "frame",
    "interior",
]
