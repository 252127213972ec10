"""Local chart gallery server.

Serves the gallery page and PNG renders of every chart from one shared
``DataStore``, with a background ``RefreshTimer`` appending live stock and
weather samples while auto-refresh is on.
"""

from __future__ import annotations

import http.server
import socketserver
import webbrowser

from chartgallery.models.catalog import ChartType
from chartgallery.refresh import RefreshTimer
from chartgallery.render import ChartRenderer
from chartgallery.server.handlers import GalleryRequestHandler
from chartgallery.store import DataStore


class GalleryHTTPServer(socketserver.ThreadingMixIn, http.server.HTTPServer):
    """Threaded HTTP server with gallery state attached."""

    daemon_threads = True

    # These attributes are set by GalleryServer and accessed by the handler
    store: DataStore | None = None
    renderer: ChartRenderer | None = None


class GalleryServer:
    """Chart gallery server.

    Usage::

        server = GalleryServer(port=5555)
        server.serve()

        # Reproducible data, no live updates
        server = GalleryServer(store=DataStore(seed=1), auto_refresh=False)
        server.serve()
    """

    def __init__(
        self,
        store: DataStore | None = None,
        renderer: ChartRenderer | None = None,
        port: int = 5555,
        auto_open: bool = True,
        auto_refresh: bool = True,
        refresh_interval: float | None = None,
    ) -> None:
        self.store = store or DataStore()
        self.renderer = renderer or ChartRenderer()
        self.port = port
        self.auto_open = auto_open
        self.auto_refresh = auto_refresh
        self.refresh_interval = refresh_interval

    def build_server(self, host: str = "") -> GalleryHTTPServer:
        """Create the HTTP server with the store and renderer attached."""
        server = GalleryHTTPServer((host, self.port), GalleryRequestHandler)
        server.store = self.store
        server.renderer = self.renderer
        return server

    def serve(self) -> None:
        """Start the HTTP server and the refresh timer (blocking)."""
        server = self.build_server()
        settings = self.store.settings
        if self.refresh_interval is not None:
            settings.refresh_interval = self.refresh_interval
        settings.auto_refresh = self.auto_refresh
        # Ticks are no-ops while auto_refresh is off.
        timer = RefreshTimer(self.store)

        url = f"http://localhost:{server.server_address[1]}"
        refresh = f"every {settings.refresh_interval:g}s" if settings.auto_refresh else "off"
        print("Chart Gallery")
        print(f"  Charts:  {len(ChartType)} chart types, "
              f"{len(self.store.dataset_names())} datasets")
        print(f"  Refresh: {refresh}")
        print(f"  URL:     {url}")
        print("\nPress Ctrl+C to stop.\n")

        if self.auto_open:
            webbrowser.open(f"{url}/gallery")

        timer.start()
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nStopped.")
        finally:
            timer.stop()
            server.server_close()
