"""Matplotlib rendering of every gallery chart.

``ChartRenderer`` combines one mixin per chart category with the figure
plumbing in :mod:`chartgallery.render.base`.  Each chart is a method named
``<chart value>_chart`` taking the store and returning an open figure.
"""

from chartgallery.render.advanced import AdvancedChartsMixin
from chartgallery.render.analysis import AnalysisChartsMixin
from chartgallery.render.base import BaseRenderer
from chartgallery.render.basic import BasicChartsMixin
from chartgallery.render.financial import FinancialChartsMixin
from chartgallery.render.hierarchy import HierarchyChartsMixin
from chartgallery.render.special import SpecialChartsMixin
from chartgallery.render.three_d import ThreeDChartsMixin


class ChartRenderer(
    BasicChartsMixin,
    AdvancedChartsMixin,
    FinancialChartsMixin,
    AnalysisChartsMixin,
    SpecialChartsMixin,
    HierarchyChartsMixin,
    ThreeDChartsMixin,
    BaseRenderer,
):
    """Renders gallery charts from a ``DataStore``.

    Usage::

        renderer = ChartRenderer()
        fig = renderer.render("candlestick", store)
        png = renderer.render_png("treemap", store, color_by="growth")
    """


__all__ = ["ChartRenderer"]
