"""Advanced charts: heat map, waterfall, box plot, violin, ridgeline and stream graph."""

from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from chartgallery import stats
from chartgallery.models.catalog import ChartType
from chartgallery.render.base import _COLORS, series_color
from chartgallery.store import STREAM_SERIES, WEEKDAYS, DataStore

_RIDGE_BINS = 50
_RIDGE_HEIGHT = 1.4
_VIOLIN_HALF_WIDTH = 0.4


class AdvancedChartsMixin:
    def heat_map_chart(self, store: DataStore) -> plt.Figure:
        """Activity by weekday and hour."""
        title = ChartType.HEAT_MAP.label
        fig, ax = plt.subplots(figsize=self.figsize)
        cells = store.dataset("heat_map")
        if not cells:
            return self._placeholder(fig, ax, title)

        df = pd.DataFrame([c.to_dict() for c in cells])
        pivot = df.pivot(index="x", columns="y", values="value")
        pivot = pivot.reindex([d for d in WEEKDAYS if d in pivot.index])
        pivot = pivot[sorted(pivot.columns)]

        im = ax.imshow(pivot.values, cmap="YlOrRd", aspect="auto", vmin=0, vmax=100)
        ax.set_xticks(range(len(pivot.columns)))
        ax.set_xticklabels([h[:2] for h in pivot.columns], fontsize=8)
        ax.set_yticks(range(len(pivot.index)))
        ax.set_yticklabels(pivot.index)
        ax.set_xlabel("Hour")
        ax.set_title(title)
        fig.colorbar(im, ax=ax, label="Activity")

        fig.tight_layout()
        return fig

    def waterfall_chart(self, store: DataStore) -> plt.Figure:
        """Balance walk from opening to closing with signed changes."""
        title = ChartType.WATERFALL.label
        fig, ax = plt.subplots(figsize=self.figsize)
        steps = store.dataset("waterfall")
        if not steps:
            return self._placeholder(fig, ax, title)

        bottoms, heights, colors = [], [], []
        for step in steps:
            if step.is_total:
                bottoms.append(0.0)
                heights.append(step.running_total)
                colors.append(_COLORS["total"])
            elif step.kind == "increase":
                bottoms.append(step.running_total - step.value)
                heights.append(step.value)
                colors.append(_COLORS["positive"])
            else:
                bottoms.append(step.running_total)
                heights.append(step.value)
                colors.append(_COLORS["negative"])

        x = np.arange(len(steps))
        ax.bar(x, heights, bottom=bottoms, color=colors, width=0.6)
        for i in range(len(steps) - 1):
            level = steps[i].running_total
            ax.plot([i + 0.3, i + 0.7], [level, level], color=_COLORS["neutral"], linewidth=0.8)
        for i, step in enumerate(steps):
            sign = "-" if step.kind == "decrease" else ""
            ax.text(
                i,
                bottoms[i] + heights[i],
                f"{sign}{step.value:,.0f}",
                ha="center",
                va="bottom",
                fontsize=8,
            )

        ax.set_xticks(x)
        ax.set_xticklabels([s.category for s in steps], rotation=30, ha="right")
        ax.set_ylabel("Balance ($)")
        ax.set_title(title)
        ax.grid(True, axis="y", alpha=0.3)

        fig.tight_layout()
        return fig

    def box_plot_chart(self, store: DataStore) -> plt.Figure:
        """Five-number summaries with IQR outliers."""
        title = ChartType.BOX_PLOT.label
        fig, ax = plt.subplots(figsize=self.figsize)
        boxes = store.dataset("box_plots")
        if not boxes:
            return self._placeholder(fig, ax, title)

        ax.bxp(
            [
                {
                    "label": b.category,
                    "whislo": b.minimum,
                    "q1": b.q1,
                    "med": b.median,
                    "q3": b.q3,
                    "whishi": b.maximum,
                    "fliers": b.outliers,
                    "mean": b.mean,
                }
                for b in boxes
            ],
            showmeans=True,
            patch_artist=True,
            boxprops={"facecolor": _COLORS["primary"], "alpha": 0.5},
        )
        ax.set_ylabel("Value")
        ax.set_title(title)
        ax.grid(True, axis="y", alpha=0.3)

        fig.tight_layout()
        return fig

    def violin_chart(self, store: DataStore) -> plt.Figure:
        """Mirrored KDE outlines with quartile markers."""
        title = ChartType.VIOLIN.label
        fig, ax = plt.subplots(figsize=self.figsize)
        violins = store.dataset("violins")
        if not violins:
            return self._placeholder(fig, ax, title)

        peak = max((d for v in violins for _, d in v.curve), default=0.0)
        for i, violin in enumerate(violins):
            ys = np.array([x for x, _ in violin.curve])
            widths = np.array([d for _, d in violin.curve])
            if peak > 0:
                widths = widths / peak * _VIOLIN_HALF_WIDTH
            color = series_color(i)
            ax.fill_betweenx(ys, i - widths, i + widths, color=color, alpha=0.5)
            ax.plot(i - widths, ys, color=color, linewidth=0.8)
            ax.plot(i + widths, ys, color=color, linewidth=0.8)

            q1, median, q3 = violin.quartiles
            ax.vlines(i, q1, q3, color="black", linewidth=4)
            ax.scatter([i], [median], color="white", zorder=3, s=20)

        ax.set_xticks(range(len(violins)))
        ax.set_xticklabels([v.category for v in violins])
        ax.set_ylim(0, 100)
        ax.set_ylabel("Value")
        ax.set_title(title)
        ax.grid(True, axis="y", alpha=0.3)

        fig.tight_layout()
        return fig

    def ridgeline_chart(self, store: DataStore) -> plt.Figure:
        """Overlapping yearly distributions, oldest at the top."""
        title = ChartType.RIDGELINE.label
        fig, ax = plt.subplots(figsize=self.figsize)
        ridges = store.dataset("ridgelines")
        if not ridges:
            return self._placeholder(fig, ax, title)

        centers = (np.arange(_RIDGE_BINS) + 0.5) * 100 / _RIDGE_BINS
        count = len(ridges)
        for i, ridge in enumerate(ridges):
            base = count - 1 - i
            profile = stats.binned_density(ridge.values, bins=_RIDGE_BINS)
            color = series_color(i)
            ax.fill_between(centers, base, base + profile * _RIDGE_HEIGHT,
                            color=color, alpha=0.6, zorder=i)
            ax.plot(centers, base + profile * _RIDGE_HEIGHT, color=color,
                    linewidth=1.0, zorder=i)

        ax.set_yticks([count - 1 - i for i in range(count)])
        ax.set_yticklabels([r.category for r in ridges])
        ax.set_xlim(0, 100)
        ax.set_xlabel("Value")
        ax.set_title(title)

        fig.tight_layout()
        return fig

    def stream_graph_chart(self, store: DataStore) -> plt.Figure:
        """Traffic sources stacked around a centred baseline."""
        title = ChartType.STREAM_GRAPH.label
        fig, ax = plt.subplots(figsize=self.figsize)
        points = store.dataset("stream")
        if not points:
            return self._placeholder(fig, ax, title)

        df = pd.DataFrame(
            [{"date": p.date, "series": p.series, "value": p.value} for p in points]
        )
        pivot = df.pivot(index="date", columns="series", values="value").fillna(0.0)
        order = [s for s in STREAM_SERIES if s in pivot.columns]
        ax.stackplot(
            list(pivot.index),
            *[pivot[s].values for s in order],
            labels=order,
            colors=[series_color(i) for i in range(len(order))],
            baseline="sym",
            alpha=0.8,
        )
        ax.set_xlabel("Date")
        ax.set_ylabel("Visits")
        ax.set_title(title)
        ax.legend(loc="upper left", fontsize=8)
        fig.autofmt_xdate()

        fig.tight_layout()
        return fig
