"""Basic charts: bar, line, area, point, rectangle, rule and sector."""

from __future__ import annotations

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.patches import Rectangle

from chartgallery.models.catalog import ChartType
from chartgallery.render.base import _COLORS, series_color
from chartgallery.store import CLUSTERS, MONTHS, PRODUCTS, QUARTERS, RULE_THRESHOLDS, DataStore


class BasicChartsMixin:
    """Charts built from a single mark type."""

    def bar_chart(self, store: DataStore) -> plt.Figure:
        """Monthly sales, one bar per channel."""
        title = ChartType.BAR.label
        fig, ax = plt.subplots(figsize=self.figsize)
        sales = store.dataset("sales")
        if not sales:
            return self._placeholder(fig, ax, title)

        df = pd.DataFrame([r.to_dict() for r in sales])
        pivot = df.pivot_table(index="month", columns="category", values="sales", aggfunc="sum")
        pivot = pivot.reindex([m for m in MONTHS if m in pivot.index])

        x = np.arange(len(pivot.index))
        width = 0.8 / max(1, len(pivot.columns))
        for i, channel in enumerate(pivot.columns):
            ax.bar(
                x + (i - (len(pivot.columns) - 1) / 2) * width,
                pivot[channel].values / 1000,
                width=width,
                color=series_color(i),
                label=channel,
            )

        ax.set_xticks(x)
        ax.set_xticklabels(pivot.index)
        ax.set_title(title)
        ax.set_xlabel("Month")
        ax.set_ylabel("Sales ($k)")
        ax.legend()
        ax.grid(True, axis="y", alpha=0.3)

        fig.tight_layout()
        return fig

    def line_chart(self, store: DataStore) -> plt.Figure:
        """Daily temperature with the period average."""
        title = ChartType.LINE.label
        fig, ax = plt.subplots(figsize=self.figsize)
        weather = store.dataset("weather")
        if not weather:
            return self._placeholder(fig, ax, title)

        dates = [w.date for w in weather]
        temps = [w.temperature for w in weather]
        ax.plot(dates, temps, color=_COLORS["primary"], linewidth=1.5, marker="o", markersize=4)
        ax.axhline(
            float(np.mean(temps)),
            color=_COLORS["neutral"],
            linewidth=0.8,
            linestyle="--",
            label=f"Average {np.mean(temps):.1f}°C",
        )

        ax.set_title(title)
        ax.set_xlabel("Date")
        ax.set_ylabel("Temperature (°C)")
        ax.legend(loc="upper left")
        ax.grid(True, alpha=0.3)
        fig.autofmt_xdate()

        fig.tight_layout()
        return fig

    def area_chart(self, store: DataStore) -> plt.Figure:
        """Closing price over the selected time range."""
        title = ChartType.AREA.label
        fig, ax = plt.subplots(figsize=self.figsize)
        candles = store.windowed_stock()
        if not candles:
            return self._placeholder(fig, ax, title)

        dates = [c.date for c in candles]
        closes = np.array([c.close for c in candles])
        floor = float(closes.min()) * 0.95
        ax.fill_between(dates, floor, closes, color=_COLORS["primary"], alpha=0.3)
        ax.plot(dates, closes, color=_COLORS["primary"], linewidth=1.2)
        ax.set_ylim(bottom=floor)

        ax.set_title(title)
        ax.set_xlabel("Date")
        ax.set_ylabel("Close ($)")
        ax.grid(True, alpha=0.3)
        fig.autofmt_xdate()

        fig.tight_layout()
        return fig

    def point_chart(self, store: DataStore) -> plt.Figure:
        title = ChartType.POINT.label
        fig, ax = plt.subplots(figsize=self.figsize)
        points = store.dataset("points3d")
        if not points:
            return self._placeholder(fig, ax, title)

        for i, cluster in enumerate(CLUSTERS):
            members = [p for p in points if p.category == cluster]
            if not members:
                continue
            ax.scatter(
                [p.x for p in members],
                [p.y for p in members],
                s=[p.size * 4 for p in members],
                color=series_color(i),
                alpha=0.6,
                edgecolors="none",
                label=f"{cluster} ({len(members)})",
            )

        ax.set_title(title)
        ax.set_xlabel("X")
        ax.set_ylabel("Y")
        ax.legend()
        ax.grid(True, alpha=0.3)

        fig.tight_layout()
        return fig

    def rectangle_chart(self, store: DataStore) -> plt.Figure:
        """Quarter by product grid, one shaded rectangle per cell."""
        title = ChartType.RECTANGLE.label
        fig, ax = plt.subplots(figsize=self.figsize)
        cells = store.dataset("rectangles")
        if not cells:
            return self._placeholder(fig, ax, title)

        columns = [q for q in QUARTERS if any(c.x == q for c in cells)]
        rows = [p for p in PRODUCTS if any(c.y == p for c in cells)]
        cmap = plt.get_cmap("Blues")
        for cell in cells:
            col = columns.index(cell.x)
            row = rows.index(cell.y)
            shade = cmap(cell.value / 100)
            ax.add_patch(Rectangle((col, row), 0.95, 0.95, facecolor=shade, edgecolor="white"))
            ax.text(
                col + 0.475,
                row + 0.475,
                f"{cell.value:.0f}",
                ha="center",
                va="center",
                fontsize=9,
                color="white" if cell.value > 60 else "black",
            )

        ax.set_xlim(0, len(columns))
        ax.set_ylim(0, len(rows))
        ax.set_xticks([i + 0.475 for i in range(len(columns))])
        ax.set_xticklabels(columns)
        ax.set_yticks([i + 0.475 for i in range(len(rows))])
        ax.set_yticklabels(rows)
        ax.set_title(title)

        fig.tight_layout()
        return fig

    def rule_chart(self, store: DataStore) -> plt.Figure:
        """Metric series against the fixed threshold rules."""
        title = ChartType.RULE.label
        fig, ax = plt.subplots(figsize=self.figsize)
        series = store.dataset("rule_series")
        if not series:
            return self._placeholder(fig, ax, title)

        dates = [p.date for p in series]
        ax.plot(dates, [p.value for p in series], color=_COLORS["primary"], linewidth=1.5)
        rule_colors = (_COLORS["positive"], _COLORS["accent"], _COLORS["negative"])
        for threshold, color in zip(RULE_THRESHOLDS, rule_colors):
            ax.axhline(threshold, color=color, linewidth=1.0, linestyle="--", label=f"{threshold:g}")

        ax.set_title(title)
        ax.set_xlabel("Date")
        ax.set_ylabel("Value")
        ax.legend(title="Thresholds", loc="upper right")
        ax.grid(True, alpha=0.3)
        fig.autofmt_xdate()

        fig.tight_layout()
        return fig

    def sector_chart(self, store: DataStore) -> plt.Figure:
        """Annual sales share per channel as a donut."""
        title = ChartType.SECTOR.label
        fig, ax = plt.subplots(figsize=self.figsize)
        sales = store.dataset("sales")
        if not sales:
            return self._placeholder(fig, ax, title)

        totals = pd.DataFrame([r.to_dict() for r in sales]).groupby("category")["sales"].sum()
        ax.pie(
            totals.values,
            labels=list(totals.index),
            colors=[series_color(i) for i in range(len(totals))],
            autopct="%1.1f%%",
            startangle=90,
            counterclock=False,
            wedgeprops={"width": 0.4, "edgecolor": "white"},
        )
        ax.set_aspect("equal")
        ax.set_title(title)

        fig.tight_layout()
        return fig
