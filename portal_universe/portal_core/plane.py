"""
Plane mapping between 3D voxel coordinates and plane-local (u, v, c).

Every plane fixes exactly one world axis (c) and traverses the other two:

    HORIZONTAL  u=x  v=z  c=y
    VERTICAL_X  u=z  v=y  c=x
    VERTICAL_Z  u=x  v=y  c=z

All functions are pure and total over the integers.
"""

from .types import UV, Coordinate, Plane


def u_of(coord: Coordinate, plane: Plane) -> int:
    if plane is Plane.HORIZONTAL:
        return coord.x
    if plane is Plane.VERTICAL_X:
        return coord.z
    return coord.x


def v_of(coord: Coordinate, plane: Plane) -> int:
    if plane is Plane.HORIZONTAL:
        return coord.z
    return coord.y


def c_of(coord: Coordinate, plane: Plane) -> int:
    if plane is Plane.HORIZONTAL:
        return coord.y
    if plane is Plane.VERTICAL_X:
        return coord.x
    return coord.z


def to_uv(coord: Coordinate, plane: Plane) -> UV:
    """Project a coordinate onto the plane (drops the constant axis)."""
    return UV(u_of(coord, plane), v_of(coord, plane))


def from_uvc(u: int, v: int, c: int, plane: Plane) -> Coordinate:
    """
    Inverse of (u_of, v_of, c_of).

    For any coordinate p and plane P:
        from_uvc(u_of(p, P), v_of(p, P), c_of(p, P), P) == p
    """
    if plane is Plane.HORIZONTAL:
        return Coordinate(u, c, v)
    if plane is Plane.VERTICAL_X:
        return Coordinate(c, v, u)
    return Coordinate(u, v, c)
