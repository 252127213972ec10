"""Financial charts: candlestick, range, gantt and funnel."""

from __future__ import annotations

import matplotlib.dates as mdates
import matplotlib.pyplot as plt
import numpy as np

from chartgallery import stats
from chartgallery.models.catalog import ChartType
from chartgallery.render.base import _COLORS, series_color
from chartgallery.store import DataStore

_MOVING_AVERAGE_PERIOD = 7
_PRIORITY_EDGES = {
    "low": "#BDBDBD",
    "medium": "#757575",
    "high": "#FF9800",
    "critical": "#F44336",
}


class FinancialChartsMixin:
    def candlestick_chart(self, store: DataStore) -> plt.Figure:
        """OHLC candles with a volume panel, limited to the selected time range."""
        title = ChartType.CANDLESTICK.label
        candles = store.windowed_stock()
        if not candles:
            return self._empty_figure(ChartType.CANDLESTICK)

        fig, (ax, vol_ax) = plt.subplots(
            2,
            1,
            figsize=self.figsize,
            sharex=True,
            gridspec_kw={"height_ratios": [3, 1]},
        )
        dates = mdates.date2num([c.date for c in candles])
        colors = [_COLORS["positive"] if c.is_bullish else _COLORS["negative"] for c in candles]
        bodies = [max(abs(c.close - c.open), 0.01) for c in candles]

        ax.vlines(dates, [c.low for c in candles], [c.high for c in candles],
                  color=colors, linewidth=0.8)
        ax.bar(dates, bodies, bottom=[min(c.open, c.close) for c in candles],
               color=colors, width=0.6)
        vol_ax.bar(dates, [c.volume / 1e6 for c in candles], color=colors, width=0.6, alpha=0.6)

        ax.set_title(f"{title} ({store.settings.time_range.value})")
        ax.set_ylabel("Price ($)")
        ax.grid(True, alpha=0.3)
        vol_ax.set_ylabel("Volume (M)")
        vol_ax.xaxis_date()
        vol_ax.grid(True, alpha=0.3)
        fig.autofmt_xdate()

        fig.tight_layout()
        return fig

    def range_chart(self, store: DataStore) -> plt.Figure:
        """Daily high-low band with the closing price and its 7-day moving average."""
        title = ChartType.RANGE.label
        fig, ax = plt.subplots(figsize=self.figsize)
        candles = store.windowed_stock()
        if not candles:
            return self._placeholder(fig, ax, title)

        dates = [c.date for c in candles]
        ax.fill_between(
            dates,
            [c.low for c in candles],
            [c.high for c in candles],
            color=_COLORS["primary"],
            alpha=0.25,
            label="High / Low",
        )
        ax.plot(dates, [c.close for c in candles], color=_COLORS["primary"],
                linewidth=1.2, label="Close")

        # Averaged over the full history so the window's first days still get a value.
        history = store.dataset("stock")
        closes = [c.close for c in history]
        average = [
            (history[i].date, value)
            for i, value in stats.moving_average(closes, _MOVING_AVERAGE_PERIOD)
            if history[i].date >= dates[0]
        ]
        if average:
            ax.plot([d for d, _ in average], [v for _, v in average], color=_COLORS["negative"],
                    linewidth=1.2, linestyle="--", label=f"{_MOVING_AVERAGE_PERIOD}-day MA")

        ax.set_title(title)
        ax.set_xlabel("Date")
        ax.set_ylabel("Price ($)")
        ax.legend(loc="upper left")
        ax.grid(True, alpha=0.3)
        fig.autofmt_xdate()

        fig.tight_layout()
        return fig

    def gantt_chart(self, store: DataStore) -> plt.Figure:
        """Project plan with progress fill and a marker for today."""
        title = ChartType.GANTT.label
        fig, ax = plt.subplots(figsize=self.figsize)
        tasks = store.dataset("gantt")
        if not tasks:
            return self._placeholder(fig, ax, title)

        categories = list(dict.fromkeys(t.category for t in tasks))
        y = np.arange(len(tasks))
        starts = mdates.date2num([t.start for t in tasks])
        durations = [t.duration_days for t in tasks]

        for i, task in enumerate(tasks):
            color = series_color(categories.index(task.category))
            ax.barh(
                y[i],
                durations[i],
                left=starts[i],
                color=color,
                alpha=0.3,
                edgecolor=_PRIORITY_EDGES.get(task.priority, _COLORS["neutral"]),
                linewidth=1.2,
            )
            ax.barh(y[i], durations[i] * task.progress / 100, left=starts[i], color=color)
            ax.text(
                starts[i] + durations[i] + 0.3,
                y[i],
                f"{task.progress:.0f}% {task.assignee}",
                va="center",
                fontsize=8,
            )

        ax.axvline(mdates.date2num(store.today), color=_COLORS["negative"],
                   linewidth=1.0, linestyle="--", label="Today")
        ax.set_yticks(y)
        ax.set_yticklabels([t.name for t in tasks])
        ax.invert_yaxis()
        ax.xaxis_date()
        ax.set_title(title)
        ax.legend(loc="lower right")
        ax.grid(True, axis="x", alpha=0.3)
        fig.autofmt_xdate()

        fig.tight_layout()
        return fig

    def funnel_chart(self, store: DataStore) -> plt.Figure:
        """Conversion funnel drawn as centred bars."""
        title = ChartType.FUNNEL.label
        fig, ax = plt.subplots(figsize=self.figsize)
        stages = store.dataset("funnel")
        if not stages:
            return self._placeholder(fig, ax, title)

        y = np.arange(len(stages))
        values = np.array([s.value for s in stages])
        ax.barh(y, values, left=-values / 2, color=[series_color(i) for i in y], height=0.7)
        for i, stage in enumerate(stages):
            ax.text(0, y[i], f"{stage.stage}\n{stage.value:,.0f}",
                    ha="center", va="center", color="white", fontsize=9)
            if i > 0:
                ax.text(values[0] / 2 * 1.02, y[i], f"{stage.conversion_rate:.0%} kept",
                        va="center", fontsize=8, color=_COLORS["neutral"])

        ax.set_yticks([])
        ax.set_xticks([])
        ax.invert_yaxis()
        ax.set_xlim(-values.max() / 2 * 1.05, values.max() / 2 * 1.35)
        ax.set_title(title)
        for side in ("top", "right", "left", "bottom"):
            ax.spines[side].set_visible(False)

        fig.tight_layout()
        return fig
