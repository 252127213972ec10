"""CLI for the chartgallery package.

Commands:
    chartgallery serve          Start the gallery server
    chartgallery list           List the chart types by category
    chartgallery export-html    Generate a self-contained HTML gallery
    chartgallery export-png     Write one PNG per chart
    chartgallery export-csv     Export a dataset to CSV
"""

from __future__ import annotations

import argparse
import logging
import sys

from chartgallery.errors import UnknownChartError, UnknownDatasetError


def _store(args: argparse.Namespace):
    from chartgallery.store import DataStore

    return DataStore(seed=args.seed)


def _cmd_serve(args: argparse.Namespace) -> None:
    """Start the gallery server."""
    from chartgallery.server.app import GalleryServer

    server = GalleryServer(
        store=_store(args),
        port=args.port,
        auto_open=not args.no_browser,
        auto_refresh=not args.no_refresh,
        refresh_interval=args.interval,
    )
    server.serve()


def _cmd_list(args: argparse.Namespace) -> None:
    """Print the chart catalogue."""
    from chartgallery.models.catalog import all_categories, charts_by_category

    for category in all_categories():
        print(category.label)
        for chart in charts_by_category(category):
            print(f"  {chart.value:<14} {chart.label}")


def _cmd_export_html(args: argparse.Namespace) -> None:
    """Generate a self-contained HTML gallery."""
    from chartgallery.export.html_export import generate_gallery_html

    path = generate_gallery_html(_store(args), args.output, chart_types=args.chart)
    print(f"Exported to {path}")


def _cmd_export_png(args: argparse.Namespace) -> None:
    """Write one PNG per chart."""
    from chartgallery.export.html_export import export_charts_png

    paths = export_charts_png(_store(args), args.output, chart_types=args.chart)
    print(f"Exported {len(paths)} charts to {args.output}")


def _cmd_export_csv(args: argparse.Namespace) -> None:
    """Export a dataset to CSV."""
    from chartgallery.export.csv_export import export_dataset_csv

    count = export_dataset_csv(_store(args), args.dataset, args.output)
    print(f"Exported {count} {args.dataset} rows to {args.output}")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="chartgallery",
        description="Gallery of chart types over synthetic data",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # -- serve --
    p_serve = subparsers.add_parser("serve", help="Start the gallery server")
    p_serve.add_argument("--port", type=int, default=5555, help="Server port")
    p_serve.add_argument("--no-browser", action="store_true", help="Don't auto-open browser")
    p_serve.add_argument("--no-refresh", action="store_true", help="Start with auto-refresh off")
    p_serve.add_argument("--interval", type=float, default=None,
                         help="Auto-refresh interval in seconds")
    p_serve.add_argument("--seed", type=int, default=None, help="Random seed")
    p_serve.set_defaults(func=_cmd_serve)

    # -- list --
    p_list = subparsers.add_parser("list", help="List chart types")
    p_list.set_defaults(func=_cmd_list)

    # -- export-html --
    p_html = subparsers.add_parser("export-html", help="Generate self-contained HTML")
    p_html.add_argument("-o", "--output", required=True, help="Output HTML file path")
    p_html.add_argument("--seed", type=int, default=None, help="Random seed")
    p_html.add_argument("--chart", action="append", default=None,
                        help="Chart to include (repeatable; default all)")
    p_html.set_defaults(func=_cmd_export_html)

    # -- export-png --
    p_png = subparsers.add_parser("export-png", help="Write one PNG per chart")
    p_png.add_argument("-o", "--output", required=True, help="Output directory")
    p_png.add_argument("--seed", type=int, default=None, help="Random seed")
    p_png.add_argument("--chart", action="append", default=None,
                       help="Chart to include (repeatable; default all)")
    p_png.set_defaults(func=_cmd_export_png)

    # -- export-csv --
    p_csv = subparsers.add_parser("export-csv", help="Export a dataset to CSV")
    p_csv.add_argument("dataset", help="Dataset name (see /api/data)")
    p_csv.add_argument("-o", "--output", required=True, help="Output CSV file path")
    p_csv.add_argument("--seed", type=int, default=None, help="Random seed")
    p_csv.set_defaults(func=_cmd_export_csv)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    try:
        args.func(args)
    except (UnknownChartError, UnknownDatasetError) as exc:
        parser.error(str(exc))
