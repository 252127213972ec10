"""Layout and projection helpers for the hand-drawn charts.

Treemap packing, sunburst angles, polar patterns and the 3D rotations used
to draw scatter, surface and vector charts on flat axes.  Everything here is
stateless; renderers call these on every pass.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Sequence

import numpy as np

from chartgallery.models.records import SunburstNode, TreemapItem, Vector3D

_ROW_LIMIT = 4
_ORTHO_SCALE = 3.0


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)


# -- Treemap -------------------------------------------------------------------


def _layout_row(row: list[float], rect: Rect, share: float) -> tuple[list[Rect], Rect]:
    """Lay *row* as a strip taking *share* of the long side of *rect*.

    Returns the row's rectangles and what is left of *rect*.
    """
    row_total = sum(row)
    placed: list[Rect] = []
    if rect.width > rect.height:
        strip = rect.width * share
        offset = 0.0
        for value in row:
            height = rect.height * (value / row_total) if row_total else 0.0
            placed.append(Rect(rect.x, rect.y + offset, strip, height))
            offset += height
        rest = Rect(rect.x + strip, rect.y, rect.width - strip, rect.height)
    else:
        strip = rect.height * share
        offset = 0.0
        for value in row:
            width = rect.width * (value / row_total) if row_total else 0.0
            placed.append(Rect(rect.x + offset, rect.y, width, strip))
            offset += width
        rest = Rect(rect.x, rect.y + strip, rect.width, rect.height - strip)
    return placed, rest


def squarify(values: Sequence[float], rect: Rect) -> list[Rect]:
    """Greedy row-packing treemap layout.

    Values are packed largest first; a row closes when a fourth value
    arrives.  Each row takes ``row_sum / remaining_sum`` of the current
    rectangle so tile areas stay proportional to their values.  The result
    is aligned with *values*.
    """
    if any(v < 0 for v in values):
        raise ValueError("treemap values must be non-negative")
    total = float(sum(values))
    if total <= 0:
        return []

    order = sorted(range(len(values)), key=lambda i: values[i], reverse=True)
    placed: list[Rect] = []
    current = rect
    remaining = total
    row: list[float] = []

    for index in order:
        value = float(values[index])
        row.append(value)
        if len(row) < _ROW_LIMIT:
            continue
        closed = row[:-1]
        closed_sum = sum(closed)
        share = closed_sum / remaining if remaining else 0.0
        rects, current = _layout_row(closed, current, share)
        placed.extend(rects)
        remaining -= closed_sum
        row = [value]

    if row:
        rects, current = _layout_row(row, current, 1.0)
        placed.extend(rects)

    result: list[Rect] = [Rect(0.0, 0.0, 0.0, 0.0)] * len(values)
    for index, tile in zip(order, placed):
        result[index] = tile
    return result


def treemap_layout(items: Sequence[TreemapItem], rect: Rect) -> list[tuple[TreemapItem, Rect]]:
    """Pair each treemap item with its tile."""
    tiles = squarify([item.value for item in items], rect)
    return list(zip(items, tiles))


# -- Sunburst ------------------------------------------------------------------

SunburstTree = Mapping[str, "tuple[float, SunburstTree]"]


def sunburst_layout(
    tree: SunburstTree,
    root: str = "All",
    total: float = 100.0,
) -> list[SunburstNode]:
    """Convert a nested percent tree into ring segments.

    *tree* maps a name to ``(value, children)``; values are percentages of
    *total*.  Children start at their parent's start angle.
    """
    nodes = [SunburstNode(root, None, total, 0, 0.0, 360.0)]

    def _walk(branch: SunburstTree, parent: str, level: int, start: float) -> None:
        angle = start
        for name, (value, children) in branch.items():
            sweep = value / total * 360.0
            nodes.append(SunburstNode(name, parent, value, level, angle, angle + sweep))
            if children:
                _walk(children, name, level + 1, angle)
            angle += sweep

    _walk(tree, root, 1, 0.0)
    return nodes


def sunburst_subtree(nodes: Sequence[SunburstNode], name: str) -> list[SunburstNode]:
    """Return *name* and all of its descendants."""
    by_name = {node.name: node for node in nodes}

    def _descends(node: SunburstNode) -> bool:
        parent = node.parent
        while parent is not None:
            if parent == name:
                return True
            parent = by_name[parent].parent if parent in by_name else None
        return False

    return [node for node in nodes if node.name == name or _descends(node)]


# -- Polar ---------------------------------------------------------------------

POLAR_PATTERNS = ("Petal", "Spiral", "Cardioid")


def polar_radius(pattern_index: int, angle_deg: float) -> float:
    """Radius of the petal, spiral or cardioid pattern at *angle_deg*."""
    theta = math.radians(angle_deg)
    if pattern_index == 0:
        radius = 50 + 30 * math.sin(4 * theta)
    elif pattern_index == 1:
        radius = 30 + angle_deg / 5
    elif pattern_index == 2:
        radius = 40 * (1 + math.sin(theta))
    else:
        radius = 50.0
    return max(0.0, radius)


# -- 3D ------------------------------------------------------------------------


def project_orthographic(x, y, z, rotation_deg: float, elevation_deg: float, zoom: float = 1.0):
    """Rotate about the vertical axis, tilt by elevation and flatten.

    Accepts scalars or numpy arrays; returns ``(px, py)`` with y pointing up.
    """
    rot = math.radians(rotation_deg)
    elev = math.radians(elevation_deg)
    px = x * math.cos(rot) - y * math.sin(rot)
    py = (x * math.sin(rot) + y * math.cos(rot)) * math.sin(elev) + z * math.cos(elev)
    scale = _ORTHO_SCALE * zoom
    return px * scale, py * scale


def rotation_matrix(rot_x_deg: float, rot_z_deg: float) -> np.ndarray:
    """Rotation about Z followed by rotation about X."""
    rx = math.radians(rot_x_deg)
    rz = math.radians(rot_z_deg)
    about_z = np.array([
        [math.cos(rz), -math.sin(rz), 0.0],
        [math.sin(rz), math.cos(rz), 0.0],
        [0.0, 0.0, 1.0],
    ])
    about_x = np.array([
        [1.0, 0.0, 0.0],
        [0.0, math.cos(rx), -math.sin(rx)],
        [0.0, math.sin(rx), math.cos(rx)],
    ])
    return about_x @ about_z


def project_perspective(
    points,
    rot_x_deg: float = 30.0,
    rot_z_deg: float = 45.0,
    scale: float = 1.0,
    distance: float = 4.0,
) -> np.ndarray:
    """Rotate ``(n, 3)`` points and apply a ``1 / (distance + z)`` perspective.

    Returns an ``(n, 2)`` array with y pointing up.
    """
    pts = np.atleast_2d(np.asarray(points, dtype=float))
    rotated = pts @ rotation_matrix(rot_x_deg, rot_z_deg).T
    perspective = 1.0 / (distance + rotated[:, 2])
    return np.column_stack([
        rotated[:, 0] * perspective * scale,
        rotated[:, 1] * perspective * scale,
    ])


def vortex_field(step: float = 0.4) -> list[Vector3D]:
    """Swirling vector field sampled on a [-1, 1] cube."""
    axis = np.arange(-1.0, 1.0 + step / 2, step)
    vectors: list[Vector3D] = []
    for i in axis:
        for j in axis:
            for k in axis:
                angle = math.atan2(j, i)
                radius = math.hypot(i, j)
                direction = (-math.sin(angle) * radius, math.cos(angle) * radius, k * 0.5)
                magnitude = math.sqrt(sum(c * c for c in direction))
                if magnitude > 1.0:
                    strength = "strong"
                elif magnitude > 0.5:
                    strength = "medium"
                else:
                    strength = "weak"
                vectors.append(Vector3D(
                    origin=(float(i), float(j), float(k)),
                    direction=direction,
                    magnitude=magnitude,
                    strength=strength,
                ))
    return vectors


def surface_grid(size: int = 30) -> np.ndarray:
    """``sin(x) cos(y) exp(-r / 5)`` sampled on a *size* x *size* grid over [-2pi, 2pi)."""
    coords = np.arange(size) / size * 4 * np.pi - 2 * np.pi
    x, y = np.meshgrid(coords, coords, indexing="ij")
    return np.sin(x) * np.cos(y) * np.exp(-np.sqrt(x * x + y * y) / 5)
