"""Generate a self-contained HTML chart gallery.

Produces a single HTML file with every chart inlined as a base64 PNG,
grouped by category, viewable offline without a server.
"""

from __future__ import annotations

import html
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable

from chartgallery.models.catalog import ChartType, all_categories
from chartgallery.render import ChartRenderer
from chartgallery.server.pages import fill, load_template
from chartgallery.store import DataStore

logger = logging.getLogger(__name__)


def _figure_html(chart: ChartType, encoded: str) -> str:
    return (
        "      <figure>\n"
        f"        <figcaption>{html.escape(chart.label)}</figcaption>\n"
        f'        <img src="data:image/png;base64,{encoded}" alt="{html.escape(chart.label)}">\n'
        f'        <p class="description">{html.escape(chart.description)}</p>\n'
        "      </figure>"
    )


def generate_gallery_html(
    store: DataStore,
    output_path: str | Path,
    renderer: ChartRenderer | None = None,
    chart_types: Iterable[ChartType | str] | None = None,
) -> Path:
    """Render charts from *store* into one offline HTML page.

    Args:
        store: Data source for every chart.
        output_path: Path to write the HTML file.
        renderer: Renderer to use; a default ``ChartRenderer`` otherwise.
        chart_types: Charts to include; all of them when omitted.

    Returns:
        The path written.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    renderer = renderer or ChartRenderer()

    images = renderer.render_all(store, chart_types)
    sections: list[str] = []
    for category in all_categories():
        figures = [
            _figure_html(chart, images[chart.value])
            for chart in ChartType
            if chart.category is category and chart.value in images
        ]
        if not figures:
            continue
        sections.append(
            '  <section class="gallery-section">\n'
            f"    <h2>{html.escape(category.label)}</h2>\n"
            '    <div class="gallery-grid">\n'
            + "\n".join(figures)
            + "\n    </div>\n  </section>"
        )

    page = fill(load_template("export.html"), {
        "GENERATED": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        "CHART_COUNT": str(len(images)),
        "SECTIONS": "\n".join(sections),
    })
    output_path.write_text(page, encoding="utf-8")
    logger.info("Gallery with %d charts written to %s", len(images), output_path)
    return output_path


def export_charts_png(
    store: DataStore,
    output_dir: str | Path,
    renderer: ChartRenderer | None = None,
    chart_types: Iterable[ChartType | str] | None = None,
) -> list[Path]:
    """Write ``<chart>.png`` for each chart into *output_dir*."""
    output_dir = Path(output_dir)
    renderer = renderer or ChartRenderer()
    selected = list(ChartType) if chart_types is None else [
        ChartType.parse(c) for c in chart_types
    ]
    paths: list[Path] = []
    for chart in selected:
        path = output_dir / f"{chart.value}.png"
        renderer.figure_to_png(renderer.render(chart, store), path)
        paths.append(path)
    return paths
