"""Special charts: polar, radar, gauge and bubble."""

from __future__ import annotations

import math

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Wedge

from chartgallery.models.catalog import ChartType
from chartgallery.models.records import GaugeReading
from chartgallery.render.base import _COLORS, _STATUS_COLORS, series_color
from chartgallery.store import DataStore

_GAUGE_RADIUS = 1.0
_GAUGE_WIDTH = 0.25


def _gauge_bands(gauge: GaugeReading) -> list[tuple[float, float, str]]:
    """(low, high, label) spans between consecutive thresholds.

    Values below the lowest threshold form an unlabelled band, matching
    ``GaugeReading.status``.
    """
    ordered = sorted(gauge.thresholds, key=lambda t: t.value)
    edges = [gauge.minimum] + [t.value for t in ordered] + [gauge.maximum]
    labels = [""] + [t.label for t in ordered]
    return [
        (edges[i], edges[i + 1], label)
        for i, label in enumerate(labels)
        if edges[i + 1] > edges[i]
    ]


def _value_angle(gauge: GaugeReading, value: float) -> float:
    span = gauge.maximum - gauge.minimum
    fraction = 0.0 if span <= 0 else min(1.0, max(0.0, (value - gauge.minimum) / span))
    return 180.0 - 180.0 * fraction


class SpecialChartsMixin:
    def polar_chart(self, store: DataStore) -> plt.Figure:
        """Petal, spiral and cardioid curves."""
        title = ChartType.POLAR.label
        points = store.dataset("polar")
        if not points:
            return self._empty_figure(ChartType.POLAR)

        fig = plt.figure(figsize=self.figsize)
        ax = fig.add_subplot(projection="polar")
        patterns = list(dict.fromkeys(p.pattern for p in points))
        for i, pattern in enumerate(patterns):
            members = [p for p in points if p.pattern == pattern]
            theta = [math.radians(p.angle) for p in members] + [math.radians(members[0].angle)]
            radius = [p.radius for p in members] + [members[0].radius]
            ax.plot(theta, radius, color=series_color(i), linewidth=1.5, label=pattern)
            ax.fill(theta, radius, color=series_color(i), alpha=0.1)

        ax.set_title(title)
        ax.legend(loc="upper right", bbox_to_anchor=(1.3, 1.1))
        fig.tight_layout()
        return fig

    def radar_chart(self, store: DataStore) -> plt.Figure:
        """Product model scores across eight attributes."""
        title = ChartType.RADAR.label
        profiles = store.dataset("radar")
        if not profiles:
            return self._empty_figure(ChartType.RADAR)

        fig = plt.figure(figsize=self.figsize)
        ax = fig.add_subplot(projection="polar")
        axes = profiles[0].axes
        angles = np.linspace(0, 2 * np.pi, len(axes), endpoint=False).tolist()
        closed = angles + angles[:1]
        for i, profile in enumerate(profiles):
            values = list(profile.values) + profile.values[:1]
            ax.plot(closed, values, color=series_color(i), linewidth=1.5, label=profile.name)
            ax.fill(closed, values, color=series_color(i), alpha=0.15)

        ax.set_xticks(angles)
        ax.set_xticklabels(axes)
        ax.set_ylim(0, 100)
        ax.set_theta_offset(np.pi / 2)
        ax.set_theta_direction(-1)
        ax.set_title(title)
        ax.legend(loc="upper right", bbox_to_anchor=(1.3, 1.1))

        fig.tight_layout()
        return fig

    def gauge_chart(self, store: DataStore) -> plt.Figure:
        """One half-dial per reading, banded by threshold."""
        gauges = store.dataset("gauges")
        if not gauges:
            return self._empty_figure(ChartType.GAUGE)

        cols = min(2, len(gauges))
        rows = math.ceil(len(gauges) / cols)
        fig, axes = plt.subplots(rows, cols, figsize=self.figsize, squeeze=False)
        for ax in axes.flat[len(gauges):]:
            ax.set_visible(False)

        for ax, gauge in zip(axes.flat, gauges):
            for low, high, label in _gauge_bands(gauge):
                ax.add_patch(Wedge(
                    (0, 0),
                    _GAUGE_RADIUS,
                    _value_angle(gauge, high),
                    _value_angle(gauge, low),
                    width=_GAUGE_WIDTH,
                    color=_STATUS_COLORS.get(label, _COLORS["neutral"]),
                    alpha=0.8,
                ))
            needle = math.radians(_value_angle(gauge, gauge.value))
            ax.plot(
                [0, 0.8 * math.cos(needle)],
                [0, 0.8 * math.sin(needle)],
                color="black",
                linewidth=2,
            )
            ax.add_patch(Wedge((0, 0), 0.05, 0, 360, color="black"))
            reading = f"{gauge.value:.0f}%"
            if gauge.status:
                reading += f" ({gauge.status})"
            ax.text(0, -0.15, reading, ha="center", va="center", fontsize=10)
            ax.set_title(gauge.name)
            ax.set_xlim(-1.1, 1.1)
            ax.set_ylim(-0.3, 1.1)
            ax.set_aspect("equal")
            ax.axis("off")

        fig.suptitle(ChartType.GAUGE.label)
        fig.tight_layout()
        return fig

    def bubble_chart(self, store: DataStore) -> plt.Figure:
        """Items sized by volume and outlined by growth direction."""
        title = ChartType.BUBBLE.label
        fig, ax = plt.subplots(figsize=self.figsize)
        bubbles = store.dataset("bubbles")
        if not bubbles:
            return self._placeholder(fig, ax, title)

        categories = sorted({b.category for b in bubbles})
        for i, category in enumerate(categories):
            members = [b for b in bubbles if b.category == category]
            ax.scatter(
                [b.x for b in members],
                [b.y for b in members],
                s=[b.size ** 2 / 2 for b in members],
                color=series_color(i),
                alpha=0.5,
                edgecolors=[
                    _COLORS["positive"] if b.growth >= 0 else _COLORS["negative"]
                    for b in members
                ],
                linewidths=1.5,
                label=f"Category {category}",
            )

        ax.set_xlim(-10, 110)
        ax.set_ylim(-10, 110)
        ax.set_xlabel("X")
        ax.set_ylabel("Y")
        ax.set_title(title)
        ax.legend(markerscale=0.4)
        ax.grid(True, alpha=0.3)

        fig.tight_layout()
        return fig
