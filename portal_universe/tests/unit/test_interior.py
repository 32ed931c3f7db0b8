"""
Unit tests for portal_core/interior.py

Testing the outside flood and the strict inward flood:
- Exact interiors for rings, diagonal joints, concave shapes, islands
- Leaks through 4-connected gaps empty the interior
- Ceilings (area, span) yield empty results with the right outcome
- Random frames agree with scipy's 4-connected hole filling
- Inward flood: leak/contamination rejection, frame-cell origin
"""

import numpy as np
import pytest
from scipy import ndimage

from portal_core.frame import FrameComponent, collect_frame_component
from portal_core.interior import (
    InteriorOutcome,
    enclosed_cells,
    flood_interior_inward,
    resolve_interior,
    resolve_interior_with_outcome,
)
from portal_core.materials import NETHER_PORTAL, OBSIDIAN, block_is
from portal_core.plane import from_uvc
from portal_core.types import UV, Coordinate, Plane
from portal_core.world import GridWorld


is_obsidian = block_is(OBSIDIAN)


def frame_from_rows(rows):
    """UV frame cells for '#' characters; first row is the highest v."""
    height = len(rows)
    return frozenset(
        UV(u, height - 1 - i)
        for i, row in enumerate(rows)
        for u, ch in enumerate(row)
        if ch == "#"
    )


def marked_cells(rows, mark="o"):
    """UV cells carrying `mark` (the expected interior)."""
    height = len(rows)
    return {
        UV(u, height - 1 - i)
        for i, row in enumerate(rows)
        for u, ch in enumerate(row)
        if ch == mark
    }


# =============================================================================
# Outside Flood
# =============================================================================


class TestEnclosedCells:
    """Exact interiors from the outside flood."""

    def test_3x3_ring_single_cell(self):
        rows = ["###", "#o#", "###"]
        assert set(enclosed_cells(frame_from_rows(rows))) == marked_cells(rows)

    def test_diagonal_pinhole_sealed(self):
        """Frame cells touching only at corners still seal the interior."""
        rows = [
            "..#..",
            ".#o#.",
            "#ooo#",
            ".#o#.",
            "..#..",
        ]
        assert set(enclosed_cells(frame_from_rows(rows))) == marked_cells(rows)

    def test_single_diagonal_joint_in_ring(self):
        """A square ring with one corner replaced by a diagonal step."""
        rows = [
            "###.",
            "#oo#",
            "#oo#",
            "####",
        ]
        assert set(enclosed_cells(frame_from_rows(rows))) == marked_cells(rows)

    def test_orthogonal_gap_leaks(self):
        rows = ["###", "#..", "###"]
        assert enclosed_cells(frame_from_rows(rows)) == []

    def test_concave_shape(self):
        rows = [
            "####...",
            "#oo#...",
            "#oo####",
            "#ooooo#",
            "#######",
        ]
        assert set(enclosed_cells(frame_from_rows(rows))) == marked_cells(rows)

    def test_two_cavities(self):
        """A frame with a divider yields both cavities."""
        rows = [
            "#####",
            "#o#o#",
            "#####",
        ]
        assert set(enclosed_cells(frame_from_rows(rows))) == marked_cells(rows)

    def test_order_is_u_major(self):
        rows = ["####", "#oo#", "#oo#", "####"]
        assert enclosed_cells(frame_from_rows(rows)) == [UV(1, 1), UV(1, 2), UV(2, 1), UV(2, 2)]

    def test_line_has_no_interior(self):
        assert enclosed_cells(frozenset(UV(u, 0) for u in range(6))) == []

    def test_empty_frame(self):
        assert enclosed_cells(frozenset()) == []

    def test_negative_coordinates(self):
        ring = frozenset(
            UV(u, v) for u in range(-10, -7) for v in range(-3, 0) if (u, v) != (-9, -2)
        )
        assert enclosed_cells(ring) == [UV(-9, -2)]


class TestAgainstHoleFilling:
    """Outside flood equals scipy's 4-connected binary_fill_holes."""

    @pytest.mark.parametrize("seed", range(12))
    def test_random_frames(self, seed):
        rng = np.random.default_rng(seed)
        grid = rng.random((14, 11)) < 0.45
        # Closed 3x3 ring in the corner so every draw has at least one hole
        grid[0:3, 0:3] = True
        grid[1, 1] = False

        # binary_fill_holes uses the 4-connected cross by default
        expected_mask = ndimage.binary_fill_holes(grid) & ~grid
        expected = {UV(int(u), int(v)) for u, v in np.argwhere(expected_mask)}
        assert UV(1, 1) in expected

        frame = frozenset(UV(int(u), int(v)) for u, v in np.argwhere(grid))
        assert set(enclosed_cells(frame)) == expected

    def test_diagonal_connectivity_differs_from_8_fill(self):
        """With an 8-connected background flood the diamond would leak."""
        rows = ["..#..", ".#.#.", "#...#", ".#.#.", "..#.."]
        frame = frame_from_rows(rows)
        grid = np.zeros((5, 5), dtype=bool)
        for cell in frame:
            grid[cell.u, cell.v] = True
        leaky = ndimage.binary_fill_holes(grid, structure=np.ones((3, 3))) & ~grid
        assert not leaky.any(), "8-connected background reaches the center"
        assert len(enclosed_cells(frame)) == 5


class TestResolveInterior:
    """Coordinate mapping and ceilings."""

    def test_maps_back_to_plane(self):
        frame = frame_from_rows(["###", "#.#", "###"])
        interior = resolve_interior(frame, Plane.VERTICAL_X, 7)
        assert interior == [from_uvc(1, 1, 7, Plane.VERTICAL_X)]
        assert interior == [Coordinate(7, 1, 1)]

    def test_shared_constant(self):
        frame = frame_from_rows(["######", "#....#", "#....#", "######"])
        interior = resolve_interior(frame, Plane.HORIZONTAL, 64)
        assert len(interior) == 8
        assert {p.y for p in interior} == {64}

    def test_accepts_frame_component(self):
        frame = frame_from_rows(["###", "#.#", "###"])
        comp = FrameComponent(frame, Plane.VERTICAL_Z, 2)
        assert resolve_interior(comp, comp.plane, comp.c) == [Coordinate(1, 1, 2)]

    def test_empty_outcome(self):
        interior, outcome = resolve_interior_with_outcome(
            frame_from_rows(["###"]), Plane.HORIZONTAL, 0
        )
        assert interior == [] and outcome is InteriorOutcome.EMPTY

    def test_area_ceiling(self):
        frame = frame_from_rows(["####", "#..#", "#..#", "####"])
        interior, outcome = resolve_interior_with_outcome(frame, Plane.HORIZONTAL, 0, max_area=4)
        assert len(interior) == 4 and outcome is InteriorOutcome.RESOLVED
        interior, outcome = resolve_interior_with_outcome(frame, Plane.HORIZONTAL, 0, max_area=3)
        assert interior == [] and outcome is InteriorOutcome.AREA_OVERFLOW

    def test_span_ceiling(self):
        frame = frame_from_rows(["#####", "#...#", "#####"])
        _, outcome = resolve_interior_with_outcome(frame, Plane.HORIZONTAL, 0, max_span=5)
        assert outcome is InteriorOutcome.RESOLVED
        interior, outcome = resolve_interior_with_outcome(frame, Plane.HORIZONTAL, 0, max_span=4)
        assert interior == [] and outcome is InteriorOutcome.SPAN_OVERFLOW


# =============================================================================
# Inward Flood
# =============================================================================


def stamped(rows, plane=Plane.VERTICAL_Z, c=0):
    world = GridWorld()
    world.stamp(rows, plane, c)
    return world


def component_at(world, seed, plane=Plane.VERTICAL_Z):
    return collect_frame_component(world, seed, plane, is_obsidian)


def accepts_portal_space(state):
    return state.is_air or state.is_of(NETHER_PORTAL)


class TestInwardFlood:
    """Strict flood from the origin."""

    RING = ["####", "#..#", "#..#", "#..#", "####"]

    def test_matches_outside_flood_on_closed_ring(self):
        world = stamped(self.RING)
        comp = component_at(world, Coordinate(0, 0, 0))
        cells, outcome = flood_interior_inward(
            world, Coordinate(1, 1, 0), comp, is_obsidian, accepts_portal_space
        )
        assert outcome is InteriorOutcome.RESOLVED
        assert set(cells) == set(resolve_interior(comp, comp.plane, comp.c))

    def test_origin_outside_leaks(self):
        world = stamped(self.RING)
        comp = component_at(world, Coordinate(0, 0, 0))
        cells, outcome = flood_interior_inward(
            world, Coordinate(-2, 1, 0), comp, is_obsidian, accepts_portal_space
        )
        assert cells == [] and outcome is InteriorOutcome.LEAKED

    def test_gap_leaks(self):
        world = stamped(["###", "#..", "###"])
        comp = component_at(world, Coordinate(0, 0, 0))
        _, outcome = flood_interior_inward(
            world, Coordinate(1, 1, 0), comp, is_obsidian, accepts_portal_space
        )
        assert outcome is InteriorOutcome.LEAKED

    def test_contaminated(self):
        world = stamped(["####", "#.S#", "####"])
        comp = component_at(world, Coordinate(0, 0, 0))
        cells, outcome = flood_interior_inward(
            world, Coordinate(1, 1, 0), comp, is_obsidian, accepts_portal_space
        )
        assert cells == [] and outcome is InteriorOutcome.CONTAMINATED

    def test_frame_origin_tries_neighbors(self):
        """From a bottom-edge frame cell the flood starts at the cell above it."""
        world = stamped(self.RING)
        comp = component_at(world, Coordinate(0, 0, 0))
        cells, outcome = flood_interior_inward(
            world, Coordinate(1, 0, 0), comp, is_obsidian, accepts_portal_space
        )
        assert outcome is InteriorOutcome.RESOLVED
        assert len(cells) == 6

    def test_island_is_a_wall(self):
        world = stamped(["#####", "#...#", "#.#.#", "#...#", "#####"])
        comp = component_at(world, Coordinate(0, 0, 0))
        cells, outcome = flood_interior_inward(
            world, Coordinate(1, 1, 0), comp, is_obsidian, accepts_portal_space
        )
        assert outcome is InteriorOutcome.RESOLVED
        assert Coordinate(2, 2, 0) not in cells
        assert len(cells) == 8

    def test_area_ceiling(self):
        world = stamped(self.RING)
        comp = component_at(world, Coordinate(0, 0, 0))
        _, outcome = flood_interior_inward(
            world, Coordinate(1, 1, 0), comp, is_obsidian, accepts_portal_space, max_area=5
        )
        assert outcome is InteriorOutcome.AREA_OVERFLOW

    def test_empty_component(self):
        world = GridWorld()
        cells, outcome = flood_interior_inward(
            world, Coordinate(0, 0, 0), FrameComponent(frozenset(), Plane.VERTICAL_Z, 0),
            is_obsidian, accepts_portal_space,
        )
        assert cells == [] and outcome is InteriorOutcome.EMPTY
