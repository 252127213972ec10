"""Tests for the gallery server."""

from __future__ import annotations

import http.client
import json
import threading
import time
import urllib.error
import urllib.request

import pytest

from chartgallery.errors import InvalidSettingError
from chartgallery.models.catalog import ChartType, TimeRange
from chartgallery.server.app import GalleryHTTPServer, GalleryServer
from chartgallery.server.handlers import GalleryRequestHandler, _chart_options
from chartgallery.server.pages import (
    chart_controls,
    gallery_page,
    sidebar_html,
    time_range_options,
)


class TestGalleryServerInit:
    """Test GalleryServer initialization."""

    def test_default_init(self):
        server = GalleryServer()
        assert server.port == 5555
        assert server.auto_open is True
        assert server.auto_refresh is True
        assert server.refresh_interval is None
        assert server.store is not None
        assert server.renderer is not None

    def test_custom_init(self, store, renderer):
        server = GalleryServer(
            store=store,
            renderer=renderer,
            port=9999,
            auto_open=False,
            auto_refresh=False,
            refresh_interval=1.5,
        )
        assert server.port == 9999
        assert server.store is store
        assert server.renderer is renderer
        assert server.auto_refresh is False

    def test_build_server_attaches_state(self, store, renderer):
        server = GalleryServer(store=store, renderer=renderer, port=0, auto_open=False)
        httpd = server.build_server(host="127.0.0.1")
        try:
            assert httpd.store is store
            assert httpd.renderer is renderer
            assert httpd.server_address[1] != 0
        finally:
            httpd.server_close()


class TestChartOptions:
    def test_converts_types_and_ignores_cache_buster(self):
        options = _chart_options({"bins": ["12"], "bandwidth": ["2.5"], "t": ["123"]})
        assert options == {"bins": 12, "bandwidth": 2.5}

    def test_unknown_option(self):
        with pytest.raises(InvalidSettingError):
            _chart_options({"colour": ["red"]})

    def test_bad_value(self):
        with pytest.raises(InvalidSettingError):
            _chart_options({"bins": ["many"]})

    @pytest.mark.parametrize("key, value", [
        ("rotation", "inf"),
        ("elevation", "-inf"),
        ("bandwidth", "nan"),
    ])
    def test_non_finite_floats(self, key, value):
        with pytest.raises(InvalidSettingError, match=key):
            _chart_options({key: [value]})


class TestPages:
    def test_sidebar_marks_selection(self):
        html = sidebar_html(ChartType.GAUGE)
        assert '<a href="/gallery?chart=gauge" class="active">Gauge Chart</a>' in html
        assert html.count("<h2>") == 7
        assert html.count("<li>") == len(ChartType)

    def test_time_range_options(self):
        html = time_range_options(TimeRange.YEAR)
        assert '<option value="year" selected>Year</option>' in html
        assert html.count("<option") == len(TimeRange)

    def test_gallery_page_has_no_placeholders(self, store):
        page = gallery_page(store, ChartType.TREEMAP)
        assert "{{" not in page
        assert "/api/charts/" in page
        assert "5000" in page

    def test_gallery_page_forwards_options(self, store):
        page = gallery_page(store, ChartType.HISTOGRAM, {"shape": "skewed", "bins": "5"})
        assert 'src="/api/charts/histogram.png?shape=skewed&amp;bins=5"' in page
        assert 'var CHART_QUERY = "shape=skewed&bins=5";' in page
        assert '<option value="skewed" selected>skewed</option>' in page
        assert 'name="bins" value="5"' in page

    def test_gallery_page_without_options(self, store):
        page = gallery_page(store, ChartType.BAR)
        assert 'src="/api/charts/bar.png"' in page
        assert 'var CHART_QUERY = "";' in page
        assert "chart-options" not in page

    def test_chart_controls(self):
        html = chart_controls(ChartType.SUNBURST, {"focus": "Finance"})
        assert '<input type="hidden" name="chart" value="sunburst">' in html
        assert '<option value="">All</option>' in html
        assert '<option value="Finance" selected>Finance</option>' in html
        assert chart_controls(ChartType.GAUGE, {}) == ""


class TestGalleryHTTPServer:
    """Test the HTTP server with actual requests."""

    @pytest.fixture()
    def running_server(self, store, renderer):
        """Start a real HTTP server in a thread."""
        httpd = GalleryHTTPServer(("", 0), GalleryRequestHandler)
        httpd.store = store
        httpd.renderer = renderer

        port = httpd.server_address[1]
        thread = threading.Thread(target=httpd.serve_forever, daemon=True)
        thread.start()
        time.sleep(0.2)  # Let server start
        yield port
        httpd.shutdown()
        httpd.server_close()

    @staticmethod
    def _get(port, path):
        return urllib.request.urlopen(f"http://localhost:{port}{path}")

    @staticmethod
    def _post(port, path, payload=None, raw=None):
        data = raw if raw is not None else json.dumps(payload or {}).encode()
        req = urllib.request.Request(
            f"http://localhost:{port}{path}",
            data=data,
            method="POST",
            headers={"Content-Type": "application/json"},
        )
        return urllib.request.urlopen(req)

    def test_root_redirect(self, running_server):
        port = running_server
        resp = self._get(port, "/")
        # urllib follows the redirect to the gallery page
        assert resp.geturl().endswith("/gallery")
        assert resp.status == 200

    def test_gallery_page(self, running_server, store):
        resp = self._get(running_server, "/gallery?chart=box-plot")
        html = resp.read().decode()
        assert resp.headers["Content-Type"].startswith("text/html")
        assert "Box Plot" in html
        assert 'class="active"' in html
        assert store.settings.selected_chart is ChartType.BOX_PLOT

    def test_gallery_unknown_chart(self, running_server):
        with pytest.raises(urllib.error.HTTPError) as exc_info:
            self._get(running_server, "/gallery?chart=spaghetti")
        assert exc_info.value.code == 404

    def test_gallery_forwards_chart_options(self, running_server):
        resp = self._get(running_server, "/gallery?chart=histogram&shape=skewed&bins=5")
        html = resp.read().decode()
        assert 'src="/api/charts/histogram.png?shape=skewed&amp;bins=5"' in html
        assert 'var CHART_QUERY = "shape=skewed&bins=5";' in html

    @pytest.mark.parametrize("query", [
        "chart=bar&bins=5",
        "chart=density&bandwidth=inf",
        "chart=histogram&colour=red",
    ])
    def test_gallery_rejects_bad_options(self, running_server, store, query):
        with pytest.raises(urllib.error.HTTPError) as exc_info:
            self._get(running_server, f"/gallery?{query}")
        assert exc_info.value.code == 400
        assert store.settings.selected_chart is ChartType.BAR

    def test_api_charts(self, running_server):
        data = json.loads(self._get(running_server, "/api/charts").read())
        assert len(data) == 7
        assert data[0]["category"] == "basic"
        assert data[0]["charts"][0] == {
            "name": "bar",
            "label": ChartType.BAR.label,
            "description": ChartType.BAR.description,
        }
        assert sum(len(group["charts"]) for group in data) == 32

    def test_chart_png(self, running_server):
        resp = self._get(running_server, "/api/charts/waterfall.png?t=1")
        assert resp.headers["Content-Type"] == "image/png"
        assert resp.headers["Cache-Control"] == "no-store"
        assert resp.read()[:4] == b"\x89PNG"

    def test_chart_png_with_options(self, running_server):
        resp = self._get(running_server, "/api/charts/histogram.png?shape=skewed&bins=5")
        assert resp.read()[:4] == b"\x89PNG"

    def test_chart_png_unknown_chart(self, running_server):
        with pytest.raises(urllib.error.HTTPError) as exc_info:
            self._get(running_server, "/api/charts/spaghetti.png")
        assert exc_info.value.code == 404

    def test_chart_png_bad_option(self, running_server):
        with pytest.raises(urllib.error.HTTPError) as exc_info:
            self._get(running_server, "/api/charts/bar.png?bins=4")
        assert exc_info.value.code == 400
        assert "bins" in json.loads(exc_info.value.read())["error"]

    @pytest.mark.parametrize("path", [
        "/api/charts/scatter_3d.png?rotation=inf",
        "/api/charts/surface_3d.png?elevation=nan",
        "/api/charts/density.png?bandwidth=nan",
        "/api/charts/histogram.png?bins=100000000",
    ])
    def test_chart_png_rejects_out_of_range_options(self, running_server, path):
        with pytest.raises(urllib.error.HTTPError) as exc_info:
            self._get(running_server, path)
        assert exc_info.value.code == 400
        assert "error" in json.loads(exc_info.value.read())

    def test_api_data(self, running_server, store):
        names = json.loads(self._get(running_server, "/api/data").read())
        assert names == store.dataset_names()
        rows = json.loads(self._get(running_server, "/api/data/funnel").read())
        assert [r["stage"] for r in rows] == ["Visitors", "Sign-ups", "Active Users", "Purchases"]

    def test_api_data_unknown(self, running_server):
        with pytest.raises(urllib.error.HTTPError) as exc_info:
            self._get(running_server, "/api/data/lottery")
        assert exc_info.value.code == 404

    def test_get_settings(self, running_server):
        data = json.loads(self._get(running_server, "/api/settings").read())
        assert data["time_range"] == "month"
        assert data["auto_refresh"] is True
        assert data["selected_chart"] == "bar"
        assert data["last_updated"]

    def test_post_settings(self, running_server, store):
        resp = self._post(running_server, "/api/settings",
                          {"auto_refresh": False, "time_range": "week"})
        data = json.loads(resp.read())
        assert data["auto_refresh"] is False
        assert data["time_range"] == "week"
        assert store.settings.time_range is TimeRange.WEEK

    def test_post_settings_invalid(self, running_server, store):
        with pytest.raises(urllib.error.HTTPError) as exc_info:
            self._post(running_server, "/api/settings", {"time_range": "decade"})
        assert exc_info.value.code == 400
        assert store.settings.time_range is TimeRange.MONTH

    @pytest.mark.parametrize("raw", [b"{not json", b"[1, 2]"])
    def test_post_settings_bad_body(self, running_server, raw):
        with pytest.raises(urllib.error.HTTPError) as exc_info:
            self._post(running_server, "/api/settings", raw=raw)
        assert exc_info.value.code == 400

    def test_post_settings_bad_content_length(self, running_server):
        conn = http.client.HTTPConnection("localhost", running_server, timeout=5)
        try:
            conn.putrequest("POST", "/api/settings")
            conn.putheader("Content-Length", "lots")
            conn.endheaders()
            resp = conn.getresponse()
            assert resp.status == 400
            assert "Content-Length" in json.loads(resp.read())["error"]
        finally:
            conn.close()

    def test_post_refresh(self, running_server, store):
        before = store.dataset_rows("sales")
        data = json.loads(self._post(running_server, "/api/refresh").read())
        assert "last_updated" in data
        assert store.dataset_rows("sales") != before

    def test_post_randomize_gauges(self, running_server, store):
        rows = json.loads(self._post(running_server, "/api/gauges/randomize").read())
        assert [r["name"] for r in rows] == [g.name for g in store.gauges]

    def test_404_for_unknown_path(self, running_server):
        with pytest.raises(urllib.error.HTTPError) as exc_info:
            self._get(running_server, "/nonexistent")
        assert exc_info.value.code == 404

    def test_404_for_unknown_post(self, running_server):
        with pytest.raises(urllib.error.HTTPError) as exc_info:
            self._post(running_server, "/api/nonexistent")
        assert exc_info.value.code == 404
