"""Chart catalogue: the chart types shown by the gallery and their grouping.

Categories are listed in sidebar order and chart types in the order they
appear within their category.
"""

from __future__ import annotations

from enum import Enum

from chartgallery.errors import UnknownChartError


class ChartCategory(str, Enum):
    """Sidebar sections of the gallery."""

    BASIC = "basic"
    ADVANCED = "advanced"
    FINANCIAL = "financial"
    ANALYSIS = "analysis"
    SPECIAL = "special"
    HIERARCHY = "hierarchy"
    THREE_D = "three_d"

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    ChartCategory.BASIC: "Basic Charts",
    ChartCategory.ADVANCED: "Advanced Charts",
    ChartCategory.FINANCIAL: "Financial Charts",
    ChartCategory.ANALYSIS: "Analysis Charts",
    ChartCategory.SPECIAL: "Special Charts",
    ChartCategory.HIERARCHY: "Hierarchical Charts",
    ChartCategory.THREE_D: "3D Charts",
}


class ChartType(str, Enum):
    """Every chart the gallery can render."""

    # basic
    BAR = "bar"
    LINE = "line"
    AREA = "area"
    POINT = "point"
    RECTANGLE = "rectangle"
    RULE = "rule"
    SECTOR = "sector"
    # advanced
    HEAT_MAP = "heat_map"
    WATERFALL = "waterfall"
    BOX_PLOT = "box_plot"
    VIOLIN = "violin"
    RIDGELINE = "ridgeline"
    STREAM_GRAPH = "stream_graph"
    # financial
    CANDLESTICK = "candlestick"
    RANGE = "range"
    GANTT = "gantt"
    FUNNEL = "funnel"
    # analysis
    PYRAMID = "pyramid"
    HISTOGRAM = "histogram"
    DENSITY = "density"
    CORRELATION = "correlation"
    MULTI_LINE = "multi_line"
    STACKED_BAR = "stacked_bar"
    # special
    POLAR = "polar"
    RADAR = "radar"
    GAUGE = "gauge"
    BUBBLE = "bubble"
    # hierarchy
    TREEMAP = "treemap"
    SUNBURST = "sunburst"
    # 3D
    SCATTER_3D = "scatter_3d"
    SURFACE_3D = "surface_3d"
    VECTOR_3D = "vector_3d"

    @property
    def label(self) -> str:
        return _CHART_LABELS[self]

    @property
    def category(self) -> ChartCategory:
        return _CHART_CATEGORIES[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS.get(self, _GENERIC_DESCRIPTION)

    @property
    def method_name(self) -> str:
        """Name of the ``ChartRenderer`` method that draws this chart."""
        return f"{self.value}_chart"

    @classmethod
    def parse(cls, name: str | ChartType) -> ChartType:
        """Resolve ``"box_plot"``, ``"box-plot"`` or ``"BOX_PLOT"`` to a member."""
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower().replace("-", "_")
        try:
            return cls(key)
        except ValueError:
            raise UnknownChartError(str(name)) from None


_CHART_LABELS = {
    ChartType.BAR: "Bar Chart",
    ChartType.LINE: "Line Chart",
    ChartType.AREA: "Area Chart",
    ChartType.POINT: "Point Chart",
    ChartType.RECTANGLE: "Rectangle Chart",
    ChartType.RULE: "Rule Chart",
    ChartType.SECTOR: "Sector Chart",
    ChartType.HEAT_MAP: "Heat Map",
    ChartType.WATERFALL: "Waterfall Chart",
    ChartType.BOX_PLOT: "Box Plot",
    ChartType.VIOLIN: "Violin Plot",
    ChartType.RIDGELINE: "Ridgeline Chart",
    ChartType.STREAM_GRAPH: "Stream Graph",
    ChartType.CANDLESTICK: "Candlestick",
    ChartType.RANGE: "Range Chart",
    ChartType.GANTT: "Gantt Chart",
    ChartType.FUNNEL: "Funnel Chart",
    ChartType.PYRAMID: "Population Pyramid",
    ChartType.HISTOGRAM: "Histogram",
    ChartType.DENSITY: "Density Plot",
    ChartType.CORRELATION: "Correlation Matrix",
    ChartType.MULTI_LINE: "Multi Line",
    ChartType.STACKED_BAR: "Stacked Bar",
    ChartType.POLAR: "Polar Chart",
    ChartType.RADAR: "Radar Chart",
    ChartType.GAUGE: "Gauge Chart",
    ChartType.BUBBLE: "Bubble Chart",
    ChartType.TREEMAP: "Treemap",
    ChartType.SUNBURST: "Sunburst Chart",
    ChartType.SCATTER_3D: "3D Scatter",
    ChartType.SURFACE_3D: "3D Surface",
    ChartType.VECTOR_3D: "3D Vector Field",
}

_CHART_CATEGORIES = {
    ChartType.BAR: ChartCategory.BASIC,
    ChartType.LINE: ChartCategory.BASIC,
    ChartType.AREA: ChartCategory.BASIC,
    ChartType.POINT: ChartCategory.BASIC,
    ChartType.RECTANGLE: ChartCategory.BASIC,
    ChartType.RULE: ChartCategory.BASIC,
    ChartType.SECTOR: ChartCategory.BASIC,
    ChartType.HEAT_MAP: ChartCategory.ADVANCED,
    ChartType.WATERFALL: ChartCategory.ADVANCED,
    ChartType.BOX_PLOT: ChartCategory.ADVANCED,
    ChartType.VIOLIN: ChartCategory.ADVANCED,
    ChartType.RIDGELINE: ChartCategory.ADVANCED,
    ChartType.STREAM_GRAPH: ChartCategory.ADVANCED,
    ChartType.CANDLESTICK: ChartCategory.FINANCIAL,
    ChartType.RANGE: ChartCategory.FINANCIAL,
    ChartType.GANTT: ChartCategory.FINANCIAL,
    ChartType.FUNNEL: ChartCategory.FINANCIAL,
    ChartType.PYRAMID: ChartCategory.ANALYSIS,
    ChartType.HISTOGRAM: ChartCategory.ANALYSIS,
    ChartType.DENSITY: ChartCategory.ANALYSIS,
    ChartType.CORRELATION: ChartCategory.ANALYSIS,
    ChartType.MULTI_LINE: ChartCategory.ANALYSIS,
    ChartType.STACKED_BAR: ChartCategory.ANALYSIS,
    ChartType.POLAR: ChartCategory.SPECIAL,
    ChartType.RADAR: ChartCategory.SPECIAL,
    ChartType.GAUGE: ChartCategory.SPECIAL,
    ChartType.BUBBLE: ChartCategory.SPECIAL,
    ChartType.TREEMAP: ChartCategory.HIERARCHY,
    ChartType.SUNBURST: ChartCategory.HIERARCHY,
    ChartType.SCATTER_3D: ChartCategory.THREE_D,
    ChartType.SURFACE_3D: ChartCategory.THREE_D,
    ChartType.VECTOR_3D: ChartCategory.THREE_D,
}

_GENERIC_DESCRIPTION = "This chart visualizes its sample data effectively."

_DESCRIPTIONS = {
    ChartType.BAR: (
        "Bar charts compare values across categories; "
        "the height of each bar is its value."
    ),
    ChartType.LINE: (
        "Line charts show how data changes over time and make trends easy to spot."
    ),
    ChartType.AREA: (
        "Area charts are line charts with the region under the line filled "
        "to emphasize volume."
    ),
    ChartType.POINT: (
        "Scatter plots show the relationship between two variables and "
        "help reveal correlation."
    ),
    ChartType.SECTOR: "Pie charts show the share each part takes of the whole.",
    ChartType.HEAT_MAP: (
        "Heat maps encode values as color so patterns can be read at a glance."
    ),
    ChartType.CANDLESTICK: (
        "Candlestick charts show the open, close, high and low price of each period."
    ),
}


class TimeRange(str, Enum):
    """Window applied to the time-series datasets."""

    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    ALL = "all"

    @property
    def days(self) -> int | None:
        """Number of trailing days kept, or ``None`` for no limit."""
        return _TIME_RANGE_DAYS[self]


_TIME_RANGE_DAYS = {
    TimeRange.WEEK: 7,
    TimeRange.MONTH: 30,
    TimeRange.QUARTER: 90,
    TimeRange.YEAR: 365,
    TimeRange.ALL: None,
}


def charts_by_category(category: ChartCategory | str) -> list[ChartType]:
    """Return the chart types of *category* in declaration order."""
    category = ChartCategory(category)
    return [chart for chart in ChartType if chart.category is category]


def all_categories() -> list[ChartCategory]:
    """Return every category in sidebar order."""
    return list(ChartCategory)
