"""Shared plumbing for the matplotlib chart renderer.

Holds the figure defaults, the colour tables, the empty-data placeholder and
the PNG/base64 conversions used by every chart mixin.
"""

from __future__ import annotations

import base64
import inspect
import io
import logging
from pathlib import Path
from typing import Any, Iterable

import matplotlib
import matplotlib.pyplot as plt

from chartgallery.errors import InvalidSettingError
from chartgallery.models.catalog import ChartType
from chartgallery.store import DataStore

# Non-interactive backend for server-side rendering.
matplotlib.use("Agg")

logger = logging.getLogger(__name__)

_DEFAULT_FIGSIZE = (12, 6)
_DEFAULT_DPI = 100
_DEFAULT_ROTATION = 45.0
_DEFAULT_ELEVATION = 30.0
_COLORS = {
    "primary": "#2196F3",
    "secondary": "#9E9E9E",
    "positive": "#4CAF50",
    "negative": "#F44336",
    "accent": "#FF9800",
    "neutral": "#9E9E9E",
    "total": "#3F51B5",
    "grid": "#E0E0E0",
}
_PALETTE = [
    "#2196F3",
    "#4CAF50",
    "#FF9800",
    "#9C27B0",
    "#F44336",
    "#00BCD4",
    "#795548",
    "#607D8B",
]
_STATUS_COLORS = {
    "normal": "#4CAF50",
    "warning": "#FF9800",
    "critical": "#F44336",
}


def series_color(index: int) -> str:
    """Palette colour for the *index*-th series, cycling."""
    return _PALETTE[index % len(_PALETTE)]


class BaseRenderer:
    """Figure lifecycle and dispatch; chart methods come from the mixins."""

    def __init__(
        self,
        figsize: tuple[int, int] = _DEFAULT_FIGSIZE,
        dpi: int = _DEFAULT_DPI,
        rotation: float = _DEFAULT_ROTATION,
        elevation: float = _DEFAULT_ELEVATION,
    ) -> None:
        self.figsize = figsize
        self.dpi = dpi
        self.rotation = rotation
        self.elevation = elevation

    def _placeholder(
        self,
        fig: plt.Figure,
        ax: plt.Axes,
        title: str,
        message: str = "No data available",
    ) -> plt.Figure:
        ax.text(
            0.5,
            0.5,
            message,
            ha="center",
            va="center",
            transform=ax.transAxes,
        )
        ax.set_title(title)
        fig.tight_layout()
        return fig

    def _empty_figure(self, chart: ChartType) -> plt.Figure:
        fig, ax = plt.subplots(figsize=self.figsize)
        return self._placeholder(fig, ax, chart.label)

    # -- Dispatch ----------------------------------------------------------------

    def accepted_options(self, chart_type: ChartType | str) -> set[str]:
        """Option names the chart method for *chart_type* takes."""
        method = getattr(self, ChartType.parse(chart_type).method_name)
        return set(inspect.signature(method).parameters) - {"store"}

    def render(self, chart_type: ChartType | str, store: DataStore, **options: Any) -> plt.Figure:
        """Draw *chart_type* from *store* and return the open figure.

        *options* are forwarded to the chart method; names it does not take
        raise ``InvalidSettingError``. Figures opened by a chart method that
        raises are closed before the error propagates.
        """
        chart = ChartType.parse(chart_type)
        method = getattr(self, chart.method_name)
        unknown = set(options) - self.accepted_options(chart)
        if unknown:
            raise InvalidSettingError(
                f"{chart.value} does not accept option(s): {', '.join(sorted(unknown))}"
            )
        logger.debug("Rendering %s", chart.value)
        before = set(plt.get_fignums())
        try:
            return method(store, **options)
        except Exception:
            for num in set(plt.get_fignums()) - before:
                plt.close(num)
            raise

    def render_png(self, chart_type: ChartType | str, store: DataStore, **options: Any) -> bytes:
        """Render a chart straight to PNG bytes."""
        fig = self.render(chart_type, store, **options)
        buf = io.BytesIO()
        try:
            fig.savefig(buf, dpi=self.dpi, format="png", bbox_inches="tight")
        finally:
            plt.close(fig)
        return buf.getvalue()

    def render_all(
        self,
        store: DataStore,
        chart_types: Iterable[ChartType | str] | None = None,
    ) -> dict[str, str]:
        """Render charts as base64-encoded PNG strings keyed by chart value."""
        selected = list(ChartType) if chart_types is None else [
            ChartType.parse(c) for c in chart_types
        ]
        charts: dict[str, str] = {}
        for chart in selected:
            charts[chart.value] = self.figure_to_base64(self.render(chart, store))
        logger.info("Rendered %d charts", len(charts))
        return charts

    # -- Output ------------------------------------------------------------------

    def figure_to_png(self, fig: plt.Figure, filepath: str | Path) -> None:
        """Save a figure to a PNG file."""
        path = Path(filepath)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(str(path), dpi=self.dpi, format="png", bbox_inches="tight")
        finally:
            plt.close(fig)
        logger.info("Chart saved to %s", filepath)

    def figure_to_base64(self, fig: plt.Figure) -> str:
        """Convert a figure to a base64-encoded PNG string."""
        buf = io.BytesIO()
        try:
            fig.savefig(buf, dpi=self.dpi, format="png", bbox_inches="tight")
        finally:
            plt.close(fig)
        buf.seek(0)
        return base64.b64encode(buf.read()).decode("utf-8")
