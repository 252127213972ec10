"""3D charts drawn on flat axes through ``geometry`` projections.

The scatter uses the orthographic projection; the surface and vector field
use the perspective one.  ``rotation`` and ``elevation`` default to the
renderer's view angles.
"""

from __future__ import annotations

import math

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.collections import PolyCollection

from chartgallery import geometry
from chartgallery.errors import InvalidSettingError
from chartgallery.models.catalog import ChartType
from chartgallery.render.base import _COLORS, series_color
from chartgallery.store import CLUSTERS, DataStore

_AXIS_EXTENT = 50.0
_SURFACE_SCALE = 3.0
_VECTOR_LENGTH = 0.2
_STRENGTH_COLORS = {
    "strong": _COLORS["negative"],
    "medium": _COLORS["accent"],
    "weak": _COLORS["primary"],
}


class ThreeDChartsMixin:
    def _view(self, rotation: float | None, elevation: float | None) -> tuple[float, float]:
        rot = self.rotation if rotation is None else float(rotation)
        elev = self.elevation if elevation is None else float(elevation)
        if not (math.isfinite(rot) and math.isfinite(elev)):
            raise InvalidSettingError(f"view angles must be finite, got {rot:g}, {elev:g}")
        return rot, elev

    def scatter_3d_chart(
        self,
        store: DataStore,
        rotation: float | None = None,
        elevation: float | None = None,
    ) -> plt.Figure:
        title = ChartType.SCATTER_3D.label
        fig, ax = plt.subplots(figsize=(8, 8))
        points = store.dataset("points3d")
        if not points:
            return self._placeholder(fig, ax, title)
        rot, elev = self._view(rotation, elevation)

        for axis, label in zip(np.eye(3) * _AXIS_EXTENT, "XYZ"):
            px, py = geometry.project_orthographic(*axis, rot, elev)
            nx, ny = geometry.project_orthographic(*(-axis), rot, elev)
            ax.plot([nx, px], [ny, py], color=_COLORS["neutral"], linewidth=0.8)
            ax.text(px, py, label, fontsize=9, color=_COLORS["neutral"])

        for i, cluster in enumerate(CLUSTERS):
            members = [p for p in points if p.category == cluster]
            if not members:
                continue
            xs = np.array([p.x for p in members])
            ys = np.array([p.y for p in members])
            zs = np.array([p.z for p in members])
            px, py = geometry.project_orthographic(xs, ys, zs, rot, elev)
            ax.scatter(
                px,
                py,
                s=[p.size * 3 for p in members],
                color=series_color(i),
                alpha=0.6,
                edgecolors="none",
                label=cluster,
            )

        ax.set_aspect("equal")
        ax.axis("off")
        ax.set_title(f"{title} (rotation {rot:g}°, elevation {elev:g}°)")
        ax.legend(loc="upper right")

        fig.tight_layout()
        return fig

    def surface_3d_chart(
        self,
        store: DataStore,
        rotation: float | None = None,
        elevation: float | None = None,
    ) -> plt.Figure:
        """``sin x cos y`` damped surface, quads painted back to front."""
        title = ChartType.SURFACE_3D.label
        fig, ax = plt.subplots(figsize=(8, 8))
        grid = store.dataset("surface")
        if grid.size == 0:
            return self._placeholder(fig, ax, title)
        rot, elev = self._view(rotation, elevation)

        rows, cols = grid.shape
        u, v = np.meshgrid(
            np.linspace(-1.0, 1.0, rows), np.linspace(-1.0, 1.0, cols), indexing="ij"
        )
        points = np.column_stack([u.ravel(), v.ravel(), grid.ravel() * 0.5])
        flat = geometry.project_perspective(points, elev, rot, scale=_SURFACE_SCALE)
        depth = (points @ geometry.rotation_matrix(elev, rot).T)[:, 2]

        quads, heights, depths = [], [], []
        for i in range(rows - 1):
            for j in range(cols - 1):
                corners = [i * cols + j, i * cols + j + 1, (i + 1) * cols + j + 1, (i + 1) * cols + j]
                quads.append(flat[corners])
                heights.append(grid.ravel()[corners].mean())
                depths.append(depth[corners].mean())

        order = np.argsort(depths)[::-1]
        collection = PolyCollection(
            [quads[k] for k in order],
            array=np.asarray(heights)[order],
            cmap="viridis",
            edgecolors="face",
            linewidths=0.2,
        )
        ax.add_collection(collection)
        ax.autoscale_view()
        fig.colorbar(collection, ax=ax, shrink=0.7, label="z")

        ax.set_aspect("equal")
        ax.axis("off")
        ax.set_title(f"{title} (rotation {rot:g}°, elevation {elev:g}°)")

        fig.tight_layout()
        return fig

    def vector_3d_chart(
        self,
        store: DataStore,
        rotation: float | None = None,
        elevation: float | None = None,
    ) -> plt.Figure:
        """Vortex field arrows coloured by magnitude class."""
        title = ChartType.VECTOR_3D.label
        fig, ax = plt.subplots(figsize=(8, 8))
        vectors = store.dataset("vectors")
        if not vectors:
            return self._placeholder(fig, ax, title)
        rot, elev = self._view(rotation, elevation)

        origins = np.array([v.origin for v in vectors])
        tips = origins + np.array([v.direction for v in vectors]) * _VECTOR_LENGTH
        start = geometry.project_perspective(origins, elev, rot, scale=_SURFACE_SCALE)
        end = geometry.project_perspective(tips, elev, rot, scale=_SURFACE_SCALE)

        for strength, color in _STRENGTH_COLORS.items():
            mask = np.array([v.strength == strength for v in vectors])
            if not mask.any():
                continue
            delta = end[mask] - start[mask]
            ax.quiver(
                start[mask, 0],
                start[mask, 1],
                delta[:, 0],
                delta[:, 1],
                color=color,
                angles="xy",
                scale_units="xy",
                scale=1,
                width=0.003,
                label=f"{strength} ({int(mask.sum())})",
            )

        everything = np.vstack([start, end])
        pad = 0.1
        ax.set_xlim(everything[:, 0].min() - pad, everything[:, 0].max() + pad)
        ax.set_ylim(everything[:, 1].min() - pad, everything[:, 1].max() + pad)
        ax.set_aspect("equal")
        ax.axis("off")
        ax.set_title(f"{title} (rotation {rot:g}°, elevation {elev:g}°)")
        ax.legend(loc="upper right")

        fig.tight_layout()
        return fig
