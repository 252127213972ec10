"""Tests for treemap, sunburst, polar and 3D projection helpers."""

import math

import numpy as np
import pytest

from chartgallery import geometry
from chartgallery.geometry import Rect
from chartgallery.models.records import TreemapItem
from chartgallery.store import SUNBURST_TREE


def _overlap(a: Rect, b: Rect) -> float:
    w = min(a.x + a.width, b.x + b.width) - max(a.x, b.x)
    h = min(a.y + a.height, b.y + b.height) - max(a.y, b.y)
    return max(0.0, w) * max(0.0, h)


class TestSquarify:
    VALUES = [3000, 2800, 2000, 1800, 900, 1500, 1200, 800, 1100, 900, 400, 1600, 700, 500, 1300, 900]

    def test_tiles_cover_rect_proportionally(self):
        bounds = Rect(0, 0, 160, 90)
        tiles = geometry.squarify(self.VALUES, bounds)
        total = sum(self.VALUES)
        assert len(tiles) == len(self.VALUES)
        assert sum(t.area for t in tiles) == pytest.approx(bounds.area)
        for value, tile in zip(self.VALUES, tiles):
            assert tile.area == pytest.approx(bounds.area * value / total)

    def test_tiles_stay_inside_and_do_not_overlap(self):
        bounds = Rect(10, 20, 100, 100)
        tiles = geometry.squarify(self.VALUES, bounds)
        for tile in tiles:
            assert tile.x >= bounds.x - 1e-9
            assert tile.y >= bounds.y - 1e-9
            assert tile.x + tile.width <= bounds.x + bounds.width + 1e-9
            assert tile.y + tile.height <= bounds.y + bounds.height + 1e-9
        for i, a in enumerate(tiles):
            for b in tiles[i + 1:]:
                assert _overlap(a, b) == pytest.approx(0.0, abs=1e-6)

    def test_rows_hold_at_most_three(self):
        tiles = geometry.squarify([4, 3, 2, 1], Rect(0, 0, 200, 100))
        # Wide rect: the first row is a vertical strip of the three largest
        assert tiles[0].x == tiles[1].x == tiles[2].x == 0
        assert tiles[3].x == pytest.approx(tiles[0].width)
        assert tiles[3].height == pytest.approx(100)

    def test_single_value_fills_rect(self):
        assert geometry.squarify([5.0], Rect(0, 0, 4, 3)) == [Rect(0, 0, 4, 3)]

    def test_zero_total(self):
        assert geometry.squarify([0, 0], Rect(0, 0, 1, 1)) == []
        assert geometry.squarify([], Rect(0, 0, 1, 1)) == []

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            geometry.squarify([1, -1], Rect(0, 0, 1, 1))

    def test_treemap_layout_pairs_items(self):
        items = [TreemapItem("a", 1.0, "x"), TreemapItem("b", 3.0, "y")]
        pairs = geometry.treemap_layout(items, Rect(0, 0, 10, 10))
        assert [item.name for item, _ in pairs] == ["a", "b"]
        assert pairs[1][1].area == pytest.approx(75.0)


class TestSunburst:
    def test_layout_angles(self):
        nodes = geometry.sunburst_layout(SUNBURST_TREE)
        by_name = {n.name: n for n in nodes}
        assert by_name["All"].level == 0
        assert by_name["Technology"].start_angle == 0.0
        assert by_name["Technology"].end_angle == pytest.approx(144.0)
        assert by_name["Finance"].start_angle == pytest.approx(144.0)
        assert by_name["Consumer"].end_angle == pytest.approx(360.0)
        assert by_name["Software"].start_angle == 0.0
        assert by_name["Cloud"].level == 3
        assert by_name["Banking"].start_angle == pytest.approx(144.0)

    def test_children_inside_parent(self):
        nodes = geometry.sunburst_layout(SUNBURST_TREE)
        by_name = {n.name: n for n in nodes}
        for node in nodes:
            if node.parent is None:
                continue
            parent = by_name[node.parent]
            assert node.start_angle >= parent.start_angle - 1e-9
            assert node.end_angle <= parent.end_angle + 1e-9

    def test_subtree(self):
        nodes = geometry.sunburst_layout(SUNBURST_TREE)
        names = {n.name for n in geometry.sunburst_subtree(nodes, "Software")}
        assert names == {"Software", "Cloud", "AI/ML", "Security"}
        assert geometry.sunburst_subtree(nodes, "Nope") == []


class TestPolar:
    def test_patterns(self):
        assert geometry.polar_radius(0, 0) == pytest.approx(50)
        assert geometry.polar_radius(0, 22.5) == pytest.approx(80)
        assert geometry.polar_radius(1, 100) == pytest.approx(50)
        assert geometry.polar_radius(2, 90) == pytest.approx(80)
        assert geometry.polar_radius(2, 270) == pytest.approx(0, abs=1e-9)


class TestProjection:
    def test_orthographic_identity_view(self):
        px, py = geometry.project_orthographic(1.0, 2.0, 3.0, 0.0, 0.0)
        assert px == pytest.approx(3.0)
        assert py == pytest.approx(9.0)

    def test_orthographic_zoom_and_arrays(self):
        xs = np.array([1.0, 0.0])
        px, py = geometry.project_orthographic(xs, np.zeros(2), np.zeros(2), 90.0, 90.0, zoom=2.0)
        assert px == pytest.approx(np.array([0.0, 0.0]), abs=1e-9)
        assert py == pytest.approx(np.array([6.0, 0.0]))

    def test_rotation_matrix_is_orthonormal(self):
        m = geometry.rotation_matrix(30.0, 45.0)
        assert m @ m.T == pytest.approx(np.eye(3))
        assert np.linalg.det(m) == pytest.approx(1.0)

    def test_perspective_origin_and_shape(self):
        out = geometry.project_perspective([[0, 0, 0], [1, 0, 0], [0, 1, 0]])
        assert out.shape == (3, 2)
        assert out[0] == pytest.approx(np.array([0.0, 0.0]))

    def test_perspective_divides_by_depth(self):
        near = geometry.project_perspective([[1, 0, -1]], 0.0, 0.0)
        far = geometry.project_perspective([[1, 0, 1]], 0.0, 0.0)
        assert near[0, 0] == pytest.approx(1 / 3)
        assert far[0, 0] == pytest.approx(1 / 5)


class TestFields:
    def test_vortex_field(self):
        vectors = geometry.vortex_field()
        assert len(vectors) == 216
        assert {v.strength for v in vectors} == {"strong", "medium", "weak"}
        for v in vectors:
            assert v.magnitude == pytest.approx(math.sqrt(sum(c * c for c in v.direction)))

    def test_surface_grid(self):
        grid = geometry.surface_grid(30)
        assert grid.shape == (30, 30)
        assert np.abs(grid).max() <= 1.0
        # x = -2pi at row 0
        assert grid[0, 15] == pytest.approx(0.0, abs=1e-9)
