"""HTML page assembly from the bundled templates."""

from __future__ import annotations

import html
import urllib.parse
from pathlib import Path

from chartgallery.models.catalog import ChartType, TimeRange, all_categories, charts_by_category
from chartgallery.store import HISTOGRAM_SHAPES, SUNBURST_TREE, DataStore

# Template directory (relative to this file's package)
_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

_VIEW_CONTROLS = [("rotation", "Rotation", None), ("elevation", "Elevation", None)]

# (option, label, choices); ``None`` choices render a number field.
_CHART_CONTROLS: dict[ChartType, list[tuple[str, str, tuple[str, ...] | None]]] = {
    ChartType.HISTOGRAM: [("shape", "Data", HISTOGRAM_SHAPES), ("bins", "Bins", None)],
    ChartType.DENSITY: [("bandwidth", "Bandwidth", None)],
    ChartType.TREEMAP: [("color_by", "Colour by", ("category", "growth"))],
    ChartType.SUNBURST: [("focus", "Focus", ("",) + tuple(SUNBURST_TREE))],
    ChartType.SCATTER_3D: _VIEW_CONTROLS,
    ChartType.SURFACE_3D: _VIEW_CONTROLS,
    ChartType.VECTOR_3D: _VIEW_CONTROLS,
}


def load_template(name: str) -> str:
    """Read an HTML template and substitute the shared stylesheet."""
    page = (_TEMPLATES_DIR / name).read_text(encoding="utf-8")
    css_path = _TEMPLATES_DIR / "_shared.css"
    if css_path.exists():
        page = page.replace("{{SHARED_CSS}}", css_path.read_text(encoding="utf-8"))
    else:
        page = page.replace("{{SHARED_CSS}}", "")
    return page


def fill(page: str, values: dict[str, str]) -> str:
    for key, value in values.items():
        page = page.replace("{{" + key + "}}", value)
    return page


def sidebar_html(selected: ChartType) -> str:
    """Category headings with one link per chart."""
    parts: list[str] = []
    for category in all_categories():
        parts.append(f"    <h2>{html.escape(category.label)}</h2>")
        parts.append("    <ul>")
        for chart in charts_by_category(category):
            active = ' class="active"' if chart is selected else ""
            parts.append(
                f'      <li><a href="/gallery?chart={chart.value}"{active}>'
                f"{html.escape(chart.label)}</a></li>"
            )
        parts.append("    </ul>")
    return "\n".join(parts)


def time_range_options(selected: TimeRange) -> str:
    return "\n".join(
        f'          <option value="{tr.value}"{" selected" if tr is selected else ""}>'
        f"{tr.value.title()}</option>"
        for tr in TimeRange
    )


def chart_controls(chart: ChartType, options: dict[str, str]) -> str:
    """A GET form for the chart's options, prefilled from *options*.

    Charts without options get an empty string.
    """
    controls = _CHART_CONTROLS.get(chart)
    if not controls:
        return ""
    parts = [
        '    <form class="chart-options" method="get" action="/gallery">',
        f'      <input type="hidden" name="chart" value="{chart.value}">',
    ]
    for name, label, choices in controls:
        current = options.get(name, "")
        if choices is None:
            field = (
                f'<input type="number" step="any" name="{name}" '
                f'value="{html.escape(current)}">'
            )
        else:
            items = "".join(
                f'<option value="{html.escape(choice)}"'
                f'{" selected" if choice == current else ""}>'
                f"{html.escape(choice or 'All')}</option>"
                for choice in choices
            )
            field = f'<select name="{name}">{items}</select>'
        parts.append(f"      <label>{label} {field}</label>")
    parts.append("      <button type=\"submit\">Apply</button>")
    parts.append("    </form>")
    return "\n".join(parts)


def gallery_page(store: DataStore, chart: ChartType, options: dict[str, str] | None = None) -> str:
    """The interactive gallery page showing *chart*.

    *options* are raw chart option values; they are forwarded to every
    image request the page makes.
    """
    options = options or {}
    settings = store.settings
    updated = store.last_updated.strftime("%Y-%m-%d %H:%M:%S") if store.last_updated else ""
    query = urllib.parse.urlencode(options)
    src = f"/api/charts/{chart.value}.png?{query}" if query else f"/api/charts/{chart.value}.png"
    return fill(load_template("gallery.html"), {
        "SIDEBAR": sidebar_html(chart),
        "CHART_NAME": chart.value,
        "CHART_LABEL": html.escape(chart.label),
        "DESCRIPTION": html.escape(chart.description),
        "CHART_CONTROLS": chart_controls(chart, options),
        "CHART_SRC": html.escape(src),
        "CHART_QUERY": query,
        "TIME_RANGE_OPTIONS": time_range_options(settings.time_range),
        "AUTO_REFRESH_CHECKED": "checked" if settings.auto_refresh else "",
        "REFRESH_MS": str(int(settings.refresh_interval * 1000)),
        "LAST_UPDATED": updated,
    })
