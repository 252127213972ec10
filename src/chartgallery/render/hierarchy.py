"""Hierarchical charts: treemap and sunburst."""

from __future__ import annotations

import math

import matplotlib.pyplot as plt
from matplotlib.colors import Normalize
from matplotlib.patches import Rectangle, Wedge

from chartgallery import geometry
from chartgallery.errors import InvalidSettingError
from chartgallery.models.catalog import ChartType
from chartgallery.models.records import SunburstNode
from chartgallery.render.base import _COLORS, series_color
from chartgallery.store import DataStore

_TREEMAP_BOUNDS = geometry.Rect(0.0, 0.0, 100.0, 100.0)
_TREEMAP_COLOR_MODES = ("category", "growth")
_TREEMAP_GROWTH_LIMIT = 50.0
_RING_WIDTH = 0.3
_LABEL_MIN_SWEEP = 12.0


def _focus(nodes: list[SunburstNode], name: str) -> list[SunburstNode]:
    """Re-root *nodes* at *name*, stretching its arc to the full circle."""
    subtree = geometry.sunburst_subtree(nodes, name)
    if not subtree:
        raise InvalidSettingError(f"Unknown sunburst segment: {name!r}")
    root = next(n for n in subtree if n.name == name)
    scale = 360.0 / root.sweep if root.sweep else 0.0
    return [
        SunburstNode(
            name=n.name,
            parent=n.parent if n is not root else None,
            value=n.value,
            level=n.level - root.level,
            start_angle=(n.start_angle - root.start_angle) * scale,
            end_angle=(n.end_angle - root.start_angle) * scale,
        )
        for n in subtree
    ]


class HierarchyChartsMixin:
    def treemap_chart(self, store: DataStore, color_by: str = "category") -> plt.Figure:
        """Company market values packed by the squarify layout.

        ``color_by`` is ``"category"`` (sector colours) or ``"growth"``
        (red to green).
        """
        if color_by not in _TREEMAP_COLOR_MODES:
            raise InvalidSettingError(
                f"color_by must be one of {', '.join(_TREEMAP_COLOR_MODES)}, got {color_by!r}"
            )
        title = ChartType.TREEMAP.label
        fig, ax = plt.subplots(figsize=self.figsize)
        items = store.dataset("treemap")
        if not items:
            return self._placeholder(fig, ax, title)

        sectors = list(dict.fromkeys(item.category for item in items))
        cmap = plt.get_cmap("RdYlGn")
        norm = Normalize(-_TREEMAP_GROWTH_LIMIT, _TREEMAP_GROWTH_LIMIT)
        for item, tile in geometry.treemap_layout(items, _TREEMAP_BOUNDS):
            if color_by == "growth":
                color = cmap(norm(item.growth))
            else:
                color = series_color(sectors.index(item.category))
            ax.add_patch(Rectangle(
                (tile.x, tile.y), tile.width, tile.height,
                facecolor=color, edgecolor="white", linewidth=2,
            ))
            if tile.width > 8 and tile.height > 6:
                cx, cy = tile.center
                ax.text(cx, cy, f"{item.name}\n{item.growth:+.1f}%",
                        ha="center", va="center", fontsize=8)

        ax.set_xlim(0, _TREEMAP_BOUNDS.width)
        ax.set_ylim(_TREEMAP_BOUNDS.height, 0)
        ax.set_xticks([])
        ax.set_yticks([])
        ax.set_title(f"{title} (by {color_by})")
        if color_by == "category":
            for i, sector in enumerate(sectors):
                ax.bar(0, 0, color=series_color(i), label=sector)
            ax.legend(loc="upper left", bbox_to_anchor=(1.01, 1.0))

        fig.tight_layout()
        return fig

    def sunburst_chart(self, store: DataStore, focus: str | None = None) -> plt.Figure:
        """Sector breakdown as concentric rings, optionally zoomed to one segment."""
        title = ChartType.SUNBURST.label
        nodes = store.dataset("sunburst")
        if not nodes:
            return self._empty_figure(ChartType.SUNBURST)
        if focus:
            nodes = _focus(nodes, focus)

        fig, ax = plt.subplots(figsize=self.figsize)
        by_name = {n.name: n for n in nodes}

        def _top(node: SunburstNode) -> str:
            while node.parent in by_name and by_name[node.parent].level > 0:
                node = by_name[node.parent]
            return node.name

        tops = [n.name for n in nodes if n.level == 1]
        for node in nodes:
            if node.level == 0:
                ax.add_patch(Wedge((0, 0), _RING_WIDTH, 0, 360, color=_COLORS["grid"]))
                ax.text(0, 0, node.name, ha="center", va="center", fontsize=9)
                continue
            outer = _RING_WIDTH * (node.level + 1)
            top = _top(node)
            color = series_color(tops.index(top)) if top in tops else _COLORS["neutral"]
            # Angles run clockwise from twelve o'clock.
            ax.add_patch(Wedge(
                (0, 0),
                outer,
                90.0 - node.end_angle,
                90.0 - node.start_angle,
                width=_RING_WIDTH,
                facecolor=color,
                edgecolor="white",
                alpha=max(0.35, 1.0 - 0.2 * (node.level - 1)),
            ))
            if node.sweep >= _LABEL_MIN_SWEEP:
                mid = 90.0 - (node.start_angle + node.end_angle) / 2
                ax.text(
                    *_polar_to_xy(outer - _RING_WIDTH / 2, mid),
                    node.name,
                    ha="center",
                    va="center",
                    fontsize=7,
                )

        depth = max(n.level for n in nodes)
        limit = _RING_WIDTH * (depth + 1) * 1.05
        ax.set_xlim(-limit, limit)
        ax.set_ylim(-limit, limit)
        ax.set_aspect("equal")
        ax.axis("off")
        ax.set_title(f"{title} ({focus})" if focus else title)

        fig.tight_layout()
        return fig


def _polar_to_xy(radius: float, angle_deg: float) -> tuple[float, float]:
    theta = math.radians(angle_deg)
    return radius * math.cos(theta), radius * math.sin(theta)
