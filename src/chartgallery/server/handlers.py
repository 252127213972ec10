"""HTTP request handlers for the gallery server.

Routes:
    GET  /                        → redirect to /gallery
    GET  /gallery                 → gallery page (params: chart, chart options)
    GET  /api/charts              → JSON catalogue grouped by category
    GET  /api/charts/<name>.png   → rendered chart (params: chart options)
    GET  /api/data                → JSON dataset names
    GET  /api/data/<name>         → JSON dataset rows
    GET  /api/settings            → JSON settings
    POST /api/settings            → update settings from a JSON body
    POST /api/refresh             → regenerate every dataset
    POST /api/gauges/randomize    → draw new gauge values
"""

from __future__ import annotations

import http.server
import json
import math
import threading
import urllib.parse
from typing import Any, Callable

from chartgallery.errors import InvalidSettingError, UnknownChartError, UnknownDatasetError
from chartgallery.models.catalog import ChartType, all_categories, charts_by_category
from chartgallery.server.pages import gallery_page

# pyplot keeps global figure state; one render at a time.
_RENDER_LOCK = threading.Lock()


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"not a finite number: {text!r}")
    return value


_OPTION_TYPES: dict[str, Callable[[str], Any]] = {
    "shape": str,
    "bins": int,
    "bandwidth": _finite_float,
    "focus": str,
    "color_by": str,
    "rotation": _finite_float,
    "elevation": _finite_float,
}


def _chart_options(params: dict[str, list[str]]) -> dict[str, Any]:
    """Convert query parameters to typed chart options.

    ``t`` is a cache buster and is ignored.
    """
    options: dict[str, Any] = {}
    for key, values in params.items():
        if key == "t":
            continue
        convert = _OPTION_TYPES.get(key)
        if convert is None:
            raise InvalidSettingError(f"Unknown chart option: {key!r}")
        try:
            options[key] = convert(values[0])
        except ValueError:
            raise InvalidSettingError(f"Invalid value for {key}: {values[0]!r}") from None
    return options


class GalleryRequestHandler(http.server.BaseHTTPRequestHandler):
    """HTTP handler for the gallery server.

    Server-level state is accessed via ``self.server`` which is expected
    to be a ``GalleryHTTPServer`` carrying the store and renderer.
    """

    def do_GET(self) -> None:  # noqa: N802
        parsed = urllib.parse.urlparse(self.path)
        path = parsed.path
        params = urllib.parse.parse_qs(parsed.query)

        if path in ("/", "/index.html"):
            self._redirect("/gallery")
        elif path == "/gallery":
            self._serve_gallery(params)
        elif path == "/api/charts":
            self._send_json(self._catalogue())
        elif path.startswith("/api/charts/") and path.endswith(".png"):
            name = path[len("/api/charts/"):-len(".png")]
            self._serve_chart_png(name, params)
        elif path == "/api/data":
            self._send_json(self._cfg("store").dataset_names())
        elif path.startswith("/api/data/"):
            self._serve_dataset(path.rsplit("/", 1)[-1])
        elif path == "/api/settings":
            self._send_json(self._settings_payload())
        else:
            self._send_json({"error": f"Not found: {path}"}, 404)

    def do_POST(self) -> None:  # noqa: N802
        path = urllib.parse.urlparse(self.path).path
        store = self._cfg("store")

        if path == "/api/settings":
            body = self._read_json()
            if body is None:
                return
            try:
                store.update_settings(body)
            except InvalidSettingError as exc:
                self._send_json({"error": str(exc)}, 400)
                return
            self._send_json(self._settings_payload())
        elif path == "/api/refresh":
            store.refresh_all()
            self._send_json(self._settings_payload())
        elif path == "/api/gauges/randomize":
            store.randomize_gauges()
            self._send_json(store.dataset_rows("gauges"))
        else:
            self._send_json({"error": f"Not found: {path}"}, 404)

    # -- Helpers ---------------------------------------------------------------

    def _cfg(self, key: str) -> Any:
        """Access server-level configuration."""
        return getattr(self.server, key, None)

    def _redirect(self, target: str) -> None:
        self.send_response(302)
        self.send_header("Location", target)
        self.end_headers()

    def _send_json(self, data: object, status: int = 200) -> None:
        body = json.dumps(data).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _send_html(self, html: str) -> None:
        body = html.encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _send_png(self, data: bytes) -> None:
        self.send_response(200)
        self.send_header("Content-Type", "image/png")
        self.send_header("Content-Length", str(len(data)))
        self.send_header("Cache-Control", "no-store")
        self.end_headers()
        self.wfile.write(data)

    def _read_json(self) -> dict | None:
        """Parse the request body as a JSON object, answering 400 otherwise."""
        try:
            length = int(self.headers.get("Content-Length") or 0)
        except ValueError:
            length = -1
        if length < 0:
            self._send_json({"error": "Invalid Content-Length header"}, 400)
            return None
        raw = self.rfile.read(length) if length else b""
        if not raw:
            return {}
        try:
            body = json.loads(raw)
        except (UnicodeDecodeError, json.JSONDecodeError):
            self._send_json({"error": "Request body is not valid JSON"}, 400)
            return None
        if not isinstance(body, dict):
            self._send_json({"error": "Request body must be a JSON object"}, 400)
            return None
        return body

    def _settings_payload(self) -> dict[str, Any]:
        store = self._cfg("store")
        payload = store.settings.to_dict()
        updated = store.last_updated
        payload["last_updated"] = updated.strftime("%Y-%m-%d %H:%M:%S") if updated else None
        return payload

    @staticmethod
    def _catalogue() -> list[dict[str, Any]]:
        return [
            {
                "category": category.value,
                "label": category.label,
                "charts": [
                    {
                        "name": chart.value,
                        "label": chart.label,
                        "description": chart.description,
                    }
                    for chart in charts_by_category(category)
                ],
            }
            for category in all_categories()
        ]

    # -- Pages -----------------------------------------------------------------

    def _serve_gallery(self, params: dict) -> None:
        store = self._cfg("store")
        name = (params.get("chart") or [None])[0]
        if name is None:
            chart = store.settings.selected_chart
        else:
            try:
                chart = ChartType.parse(name)
            except UnknownChartError as exc:
                self._send_json({"error": str(exc)}, 404)
                return
        option_params = {k: v for k, v in params.items() if k not in ("chart", "t")}
        try:
            _chart_options(option_params)
            unknown = set(option_params) - self._cfg("renderer").accepted_options(chart)
            if unknown:
                raise InvalidSettingError(
                    f"{chart.value} does not accept option(s): {', '.join(sorted(unknown))}"
                )
        except InvalidSettingError as exc:
            self._send_json({"error": str(exc)}, 400)
            return
        if name is not None:
            store.update_settings({"selected_chart": chart.value})
        options = {key: values[0] for key, values in option_params.items()}
        self._send_html(gallery_page(store, chart, options))

    # -- API -------------------------------------------------------------------

    def _serve_chart_png(self, name: str, params: dict) -> None:
        try:
            chart = ChartType.parse(name)
        except UnknownChartError as exc:
            self._send_json({"error": str(exc)}, 404)
            return
        try:
            options = _chart_options(params)
            with _RENDER_LOCK:
                png = self._cfg("renderer").render_png(chart, self._cfg("store"), **options)
        except InvalidSettingError as exc:
            self._send_json({"error": str(exc)}, 400)
            return
        self._send_png(png)

    def _serve_dataset(self, name: str) -> None:
        try:
            rows = self._cfg("store").dataset_rows(name)
        except UnknownDatasetError as exc:
            self._send_json({"error": str(exc)}, 404)
            return
        self._send_json(rows)

    def log_message(self, format: str, *args: object) -> None:
        """Suppress per-request logging."""
        pass
