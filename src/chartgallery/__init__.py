"""Gallery of chart types over synthetic, periodically refreshed data.

Quick start::

    from chartgallery import GalleryServer
    server = GalleryServer(port=5555)
    server.serve()
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from chartgallery.models.catalog import ChartCategory, ChartType, TimeRange
from chartgallery.refresh import RefreshTimer
from chartgallery.render import ChartRenderer
from chartgallery.server.app import GalleryServer
from chartgallery.store import DataStore, GallerySettings

try:
    __version__ = version("chartgallery")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "ChartCategory",
    "ChartRenderer",
    "ChartType",
    "DataStore",
    "GalleryServer",
    "GallerySettings",
    "RefreshTimer",
    "TimeRange",
    "__version__",
]
