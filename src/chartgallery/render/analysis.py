"""Analysis charts: pyramid, histogram, density, correlation, multi-line and stacked bar."""

from __future__ import annotations

import math

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from chartgallery import stats
from chartgallery.errors import InvalidSettingError
from chartgallery.models.catalog import ChartType
from chartgallery.render.base import _COLORS, series_color
from chartgallery.store import (
    CORRELATION_VARIABLES,
    DENSITY_GROUPS,
    DEPARTMENTS,
    QUARTERS,
    SERIES_NAMES,
    DataStore,
)

_MAX_BINS = 200


class AnalysisChartsMixin:
    def pyramid_chart(self, store: DataStore) -> plt.Figure:
        """Population by five-year age band, male left and female right."""
        title = ChartType.PYRAMID.label
        fig, ax = plt.subplots(figsize=self.figsize)
        population = store.dataset("population")
        if not population:
            return self._placeholder(fig, ax, title)

        ages = sorted({p.age for p in population})
        male = {p.age: p.count for p in population if p.gender == "Male"}
        female = {p.age: p.count for p in population if p.gender == "Female"}
        y = np.arange(len(ages))
        ax.barh(y, [-male.get(a, 0) / 1000 for a in ages], color=_COLORS["primary"], label="Male")
        ax.barh(y, [female.get(a, 0) / 1000 for a in ages], color="#E91E63", label="Female")

        ax.set_yticks(y)
        ax.set_yticklabels([f"{a}-{a + 4}" for a in ages])
        ax.axvline(0, color="black", linewidth=0.8)
        ticks = ax.get_xticks()
        ax.set_xticks(ticks)
        ax.set_xticklabels([f"{abs(t):.0f}" for t in ticks])
        ax.set_xlabel("Population (thousands)")
        ax.set_title(title)
        ax.legend()
        ax.grid(True, axis="x", alpha=0.3)

        fig.tight_layout()
        return fig

    def histogram_chart(self, store: DataStore, shape: str = "normal", bins: int = 10) -> plt.Figure:
        """Equal-width histogram of a fresh sample with a fitted normal overlay."""
        title = ChartType.HISTOGRAM.label
        if not 1 <= bins <= _MAX_BINS:
            raise InvalidSettingError(f"bins must be between 1 and {_MAX_BINS}, got {bins}")
        values = store.histogram_values(shape)
        table = stats.histogram(values, bins)
        fig, ax = plt.subplots(figsize=self.figsize)
        ax.bar(
            [b.start for b in table],
            [b.frequency for b in table],
            width=[b.end - b.start for b in table],
            align="edge",
            color=_COLORS["primary"],
            alpha=0.7,
            edgecolor="white",
        )
        curve = stats.normal_curve(values, start=0.0, stop=100.0, bin_count=bins)
        span = table[-1].end - table[0].start
        scale = span / 100.0
        ax.plot([x for x, _ in curve], [y * scale for _, y in curve],
                color=_COLORS["accent"], linewidth=1.5, label="Normal fit")

        summary = stats.describe(values)
        ax.axvline(summary.mean, color=_COLORS["negative"], linewidth=1.0,
                   linestyle="--", label=f"Mean {summary.mean:.1f}")
        ax.set_title(f"{title} ({shape}, {summary.shape} skew)")
        ax.set_xlabel("Value")
        ax.set_ylabel("Frequency")
        ax.legend()
        ax.grid(True, axis="y", alpha=0.3)

        fig.tight_layout()
        return fig

    def density_chart(self, store: DataStore, bandwidth: float = 5.0) -> plt.Figure:
        """KDE of each group with its mode marked."""
        title = ChartType.DENSITY.label
        if not (math.isfinite(bandwidth) and bandwidth > 0):
            raise InvalidSettingError(f"bandwidth must be a positive number, got {bandwidth:g}")
        fig, (ax, cum_ax) = plt.subplots(
            1, 2, figsize=self.figsize, gridspec_kw={"width_ratios": [2, 1]}
        )
        for i, group in enumerate(DENSITY_GROUPS):
            values = store.density_values(group)
            curve = stats.density_curve(values, bandwidth=bandwidth)
            xs = [p.x for p in curve]
            color = series_color(i)
            ax.fill_between(xs, [p.density for p in curve], color=color, alpha=0.25)
            ax.plot(xs, [p.density for p in curve], color=color, linewidth=1.5, label=group)
            cum_ax.plot(xs, [p.cumulative for p in curve], color=color, linewidth=1.5)

            summary = stats.describe(values, bandwidth=bandwidth)
            ax.axvline(summary.mode, color=color, linewidth=0.8, linestyle=":")

        ax.set_title(f"{title} (bandwidth {bandwidth:g})")
        ax.set_xlabel("Value")
        ax.set_ylabel("Density")
        ax.legend()
        ax.grid(True, alpha=0.3)
        cum_ax.set_title("Cumulative")
        cum_ax.set_ylim(0, 1.05)
        cum_ax.grid(True, alpha=0.3)

        fig.tight_layout()
        return fig

    def correlation_chart(self, store: DataStore) -> plt.Figure:
        title = ChartType.CORRELATION.label
        fig, ax = plt.subplots(figsize=(10, 8))
        matrix = store.dataset("correlation")
        if matrix.size == 0:
            return self._placeholder(fig, ax, title)

        labels = CORRELATION_VARIABLES[: matrix.shape[0]]
        im = ax.imshow(matrix, cmap="RdBu_r", vmin=-1, vmax=1)
        ax.set_xticks(range(len(labels)))
        ax.set_xticklabels(labels, rotation=45, ha="right")
        ax.set_yticks(range(len(labels)))
        ax.set_yticklabels(labels)
        for i in range(matrix.shape[0]):
            for j in range(matrix.shape[1]):
                val = matrix[i, j]
                ax.text(
                    j,
                    i,
                    f"{val:.2f}",
                    ha="center",
                    va="center",
                    fontsize=7,
                    color="white" if abs(val) > 0.6 else "black",
                )

        ax.set_title(title)
        fig.colorbar(im, ax=ax)
        fig.tight_layout()
        return fig

    def multi_line_chart(self, store: DataStore) -> plt.Figure:
        """Three series over the selected time range."""
        title = ChartType.MULTI_LINE.label
        fig, ax = plt.subplots(figsize=self.figsize)
        points = store.windowed_multi_series()
        if not points:
            return self._placeholder(fig, ax, title)

        df = pd.DataFrame([{"date": p.date, "series": p.series, "value": p.value} for p in points])
        pivot = df.pivot(index="date", columns="series", values="value")
        for i, name in enumerate(s for s in SERIES_NAMES if s in pivot.columns):
            ax.plot(list(pivot.index), pivot[name].values, color=series_color(i),
                    linewidth=1.2, label=name)

        ax.set_title(f"{title} ({store.settings.time_range.value})")
        ax.set_xlabel("Date")
        ax.set_ylabel("Value")
        ax.legend(loc="upper left")
        ax.grid(True, alpha=0.3)
        fig.autofmt_xdate()

        fig.tight_layout()
        return fig

    def stacked_bar_chart(self, store: DataStore) -> plt.Figure:
        """Quarterly profit per department; losses stack below zero."""
        title = ChartType.STACKED_BAR.label
        fig, ax = plt.subplots(figsize=self.figsize)
        profit = store.dataset("profit")
        if not profit:
            return self._placeholder(fig, ax, title)

        df = pd.DataFrame([r.to_dict() for r in profit])
        pivot = df.pivot_table(index="department", columns="quarter", values="profit", aggfunc="sum")
        pivot = pivot.reindex([d for d in DEPARTMENTS if d in pivot.index])
        pivot = pivot[[q for q in QUARTERS if q in pivot.columns]].fillna(0.0)

        x = np.arange(len(pivot.index))
        above = np.zeros(len(x))
        below = np.zeros(len(x))
        for i, quarter in enumerate(pivot.columns):
            values = pivot[quarter].values / 1000
            bottoms = np.where(values >= 0, above, below)
            ax.bar(x, values, bottom=bottoms, color=series_color(i), label=quarter, width=0.6)
            above = above + np.clip(values, 0, None)
            below = below + np.clip(values, None, 0)

        ax.axhline(0, color="black", linewidth=0.8)
        ax.set_xticks(x)
        ax.set_xticklabels(pivot.index)
        ax.set_ylabel("Profit ($k)")
        ax.set_title(title)
        ax.legend()
        ax.grid(True, axis="y", alpha=0.3)

        fig.tight_layout()
        return fig
