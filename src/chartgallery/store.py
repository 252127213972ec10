"""Observable in-memory store holding every chart's sample data.

One ``DataStore`` is created per gallery.  It generates synthetic data at
construction, regenerates it on demand, and applies the periodic real-time
update (one new stock candle and one new weather sample per tick) when
auto-refresh is on.  Observers registered with :meth:`DataStore.subscribe`
are called after each change.

The HTTP server threads and the refresh timer share one store, so every
public method holds the store lock.
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Callable

import numpy as np

from chartgallery import geometry, stats
from chartgallery.errors import InvalidSettingError, UnknownChartError, UnknownDatasetError
from chartgallery.models.catalog import (
    ChartCategory,
    ChartType,
    TimeRange,
    all_categories,
    charts_by_category,
)
from chartgallery.models.records import (
    BoxStats,
    Bubble,
    FunnelStage,
    GanttTask,
    GaugeReading,
    GaugeThreshold,
    HeatCell,
    Point3D,
    PolarPoint,
    PopulationRecord,
    ProfitRecord,
    RadarProfile,
    RidgeSeries,
    SalesRecord,
    SeriesPoint,
    StockCandle,
    StreamPoint,
    SunburstNode,
    TreemapItem,
    Vector3D,
    ViolinSeries,
    WaterfallStep,
    WeatherSample,
)

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL = 5.0
STOCK_HISTORY_CAP = 365
WEATHER_HISTORY_CAP = 30

MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
SALES_CHANNELS = ["Online", "Offline", "Mobile"]
DEPARTMENTS = ["Sales", "Marketing", "Engineering", "Design", "HR"]
QUARTERS = ["Q1", "Q2", "Q3", "Q4"]
GENDERS = ["Male", "Female"]
WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
SERIES_NAMES = ["Series 1", "Series 2", "Series 3"]
CLUSTERS = ["Cluster A", "Cluster B", "Cluster C"]
PRODUCTS = ["Product A", "Product B", "Product C", "Product D", "Product E"]
DISTRIBUTION_GROUPS = ["Group A", "Group B", "Group C", "Group D"]
RIDGE_YEARS = ["2020", "2021", "2022", "2023", "2024"]
STREAM_SERIES = ["Social", "Search", "Direct", "Email", "Ads"]
RADAR_AXES = ["Speed", "Durability", "Design", "Price",
              "Efficiency", "Safety", "Convenience", "Technology"]
CORRELATION_VARIABLES = ["Revenue", "Cost", "Profit", "Customers", "Satisfaction",
                         "Retention", "Ad Spend", "Headcount", "Market Share", "Growth"]
HISTOGRAM_SHAPES = ("random", "normal", "bimodal", "skewed")
RULE_THRESHOLDS = (30.0, 60.0, 85.0)

# (mean, std_dev) per density group
DENSITY_GROUPS = {
    "Group A": (30.0, 10.0),
    "Group B": (50.0, 15.0),
    "Group C": (70.0, 8.0),
}

# (name, base value, sector, base growth %)
_COMPANIES = [
    ("Apple", 3000, "Technology", 15.2),
    ("Microsoft", 2800, "Technology", 12.5),
    ("Google", 2000, "Technology", 18.7),
    ("Amazon", 1800, "Technology", 22.3),
    ("Meta", 900, "Technology", -5.2),
    ("JP Morgan", 1500, "Finance", 8.5),
    ("Bank of America", 1200, "Finance", 6.3),
    ("Wells Fargo", 800, "Finance", 4.2),
    ("Johnson & Johnson", 1100, "Healthcare", 7.8),
    ("Pfizer", 900, "Healthcare", 12.1),
    ("Moderna", 400, "Healthcare", -25.3),
    ("Tesla", 1600, "Consumer", 45.6),
    ("Nike", 700, "Consumer", 9.2),
    ("Starbucks", 500, "Consumer", 11.5),
    ("ExxonMobil", 1300, "Energy", 35.2),
    ("Chevron", 900, "Energy", 28.7),
]

# name -> (percent, children)
SUNBURST_TREE: dict[str, tuple[float, dict]] = {
    "Technology": (40.0, {
        "Software": (20.0, {
            "Cloud": (10.0, {}),
            "AI/ML": (7.0, {}),
            "Security": (3.0, {}),
        }),
        "Hardware": (15.0, {}),
        "Services": (5.0, {}),
    }),
    "Finance": (25.0, {
        "Banking": (15.0, {}),
        "Insurance": (7.0, {}),
        "Investment": (3.0, {}),
    }),
    "Healthcare": (20.0, {}),
    "Consumer": (15.0, {}),
}

# (name, category, start offset, end offset, progress %, dependencies, assignee, priority)
_PROJECT_PLAN = [
    ("Requirements Analysis", "Planning", -30, -25, 100, [], "Kim", "high"),
    ("Project Planning", "Planning", -25, -20, 100, ["Requirements Analysis"], "Kim", "high"),
    ("UI/UX Design", "Design", -20, -10, 100, ["Project Planning"], "Lee", "medium"),
    ("Prototyping", "Design", -10, -5, 100, ["UI/UX Design"], "Lee", "medium"),
    ("Backend Development", "Development", -5, 10, 60, ["Prototyping"], "Park", "critical"),
    ("Frontend Development", "Development", 0, 15, 30, ["Prototyping"], "Choi", "critical"),
    ("API Integration", "Development", 10, 20, 0,
     ["Backend Development", "Frontend Development"], "Park", "high"),
    ("Unit Testing", "Testing", 15, 20, 0, ["API Integration"], "Jung", "medium"),
    ("Integration Testing", "Testing", 20, 25, 0, ["Unit Testing"], "Jung", "high"),
    ("Release Prep", "Deployment", 25, 27, 0, ["Integration Testing"], "Kang", "critical"),
    ("Production Release", "Deployment", 27, 30, 0, ["Release Prep"], "Kang", "critical"),
]

_FUNNEL = [("Visitors", 10000.0), ("Sign-ups", 5000.0),
           ("Active Users", 3000.0), ("Purchases", 1000.0)]

_GAUGE_THRESHOLDS = [
    GaugeThreshold(50.0, "normal"),
    GaugeThreshold(80.0, "warning"),
    GaugeThreshold(90.0, "critical"),
]

Observer = Callable[["DataStore"], None]


@dataclass
class GallerySettings:
    """User-adjustable gallery settings."""

    time_range: TimeRange = TimeRange.MONTH
    auto_refresh: bool = True
    selected_chart: ChartType = ChartType.BAR
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL

    def to_dict(self) -> dict[str, Any]:
        return {
            "time_range": self.time_range.value,
            "auto_refresh": self.auto_refresh,
            "selected_chart": self.selected_chart.value,
            "refresh_interval": self.refresh_interval,
        }


class DataStore:
    """Holds every dataset and the gallery settings.

    Usage::

        store = DataStore(seed=7)
        store.subscribe(lambda s: print("updated", s.last_updated))
        store.tick()          # append one stock/weather sample
        store.refresh_all()   # regenerate everything
    """

    def __init__(
        self,
        seed: int | None = None,
        settings: GallerySettings | None = None,
        today: date | None = None,
    ) -> None:
        self.settings = settings or GallerySettings()
        self._rng = np.random.default_rng(seed)
        self._today = today
        self._lock = threading.RLock()
        self._observers: list[Observer] = []
        self.last_updated: datetime | None = None

        self.sales: list[SalesRecord] = []
        self.profit: list[ProfitRecord] = []
        self.stock: list[StockCandle] = []
        self.population: list[PopulationRecord] = []
        self.weather: list[WeatherSample] = []
        self.points3d: list[Point3D] = []
        self.heat_map: list[HeatCell] = []
        self.multi_series: list[SeriesPoint] = []
        self.rectangles: list[HeatCell] = []
        self.rule_series: list[SeriesPoint] = []
        self.waterfall: list[WaterfallStep] = []
        self.box_plots: list[BoxStats] = []
        self.violins: list[ViolinSeries] = []
        self.ridgelines: list[RidgeSeries] = []
        self.stream: list[StreamPoint] = []
        self.radar: list[RadarProfile] = []
        self.treemap: list[TreemapItem] = []
        self.gantt: list[GanttTask] = []
        self.sunburst: list[SunburstNode] = []
        self.gauges: list[GaugeReading] = []
        self.funnel: list[FunnelStage] = []
        self.polar: list[PolarPoint] = []
        self.bubbles: list[Bubble] = []
        self.correlation: np.ndarray = np.zeros((0, 0))
        self.vectors: list[Vector3D] = []
        self.surface: np.ndarray = np.zeros((0, 0))

        self.load_initial_data()

    # -- Generation ------------------------------------------------------------

    @property
    def today(self) -> date:
        return self._today or date.today()

    def _uniform(self, low: float, high: float) -> float:
        return float(self._rng.uniform(low, high))

    def _choice(self, options: list[str]) -> str:
        return options[int(self._rng.integers(len(options)))]

    def load_initial_data(self) -> None:
        """Regenerate every dataset."""
        with self._lock:
            self._generate_sales()
            self._generate_profit()
            self._generate_stock()
            self._generate_population()
            self._generate_weather()
            self._generate_points3d()
            self._generate_heat_map()
            self._generate_multi_series()
            self._generate_rectangles()
            self._generate_rule_series()
            self._generate_waterfall()
            self._generate_box_plots()
            self._generate_violins()
            self._generate_ridgelines()
            self._generate_stream()
            self._generate_radar()
            self._generate_treemap()
            self._generate_gantt()
            self._generate_sunburst()
            self._generate_gauges()
            self._generate_funnel()
            self._generate_polar()
            self._generate_bubbles()
            self._generate_correlation()
            self.vectors = geometry.vortex_field()
            self.surface = geometry.surface_grid()
            self.last_updated = datetime.now()
        logger.debug("Generated %d datasets", len(self.dataset_names()))

    def _generate_sales(self) -> None:
        self.sales = [
            SalesRecord(month, self._uniform(100_000, 500_000), 2024, channel)
            for month in MONTHS
            for channel in SALES_CHANNELS
        ]

    def _generate_profit(self) -> None:
        self.profit = [
            ProfitRecord(dept, self._uniform(-50_000, 200_000), quarter)
            for dept in DEPARTMENTS
            for quarter in QUARTERS
        ]

    def _generate_stock(self) -> None:
        start = self.today - timedelta(days=STOCK_HISTORY_CAP)
        candles: list[StockCandle] = []
        for i in range(STOCK_HISTORY_CAP):
            open_ = self._uniform(100, 200)
            close = open_ + self._uniform(-10, 10)
            candles.append(StockCandle(
                date=start + timedelta(days=i),
                open=open_,
                high=max(open_, close) + self._uniform(0, 5),
                low=min(open_, close) - self._uniform(0, 5),
                close=close,
                volume=int(self._rng.integers(1_000_000, 10_000_001)),
            ))
        self.stock = candles

    def _generate_population(self) -> None:
        self.population = [
            PopulationRecord(age, int(self._rng.integers(10_000, 50_001)), gender)
            for age in range(0, 100, 5)
            for gender in GENDERS
        ]

    def _new_weather(self, day: date) -> WeatherSample:
        return WeatherSample(
            date=day,
            temperature=self._uniform(-10, 35),
            humidity=self._uniform(30, 90),
            precipitation=self._uniform(0, 50),
        )

    def _generate_weather(self) -> None:
        start = self.today - timedelta(days=WEATHER_HISTORY_CAP)
        self.weather = [
            self._new_weather(start + timedelta(days=i))
            for i in range(WEATHER_HISTORY_CAP)
        ]

    def _generate_points3d(self) -> None:
        self.points3d = [
            Point3D(
                x=self._uniform(-50, 50),
                y=self._uniform(-50, 50),
                z=self._uniform(-50, 50),
                category=self._choice(CLUSTERS),
                size=self._uniform(5, 20),
                temperature=self._uniform(0, 100),
            )
            for _ in range(200)
        ]

    def _generate_heat_map(self) -> None:
        self.heat_map = [
            HeatCell(day, f"{hour:02d}:00", self._uniform(0, 100))
            for day in WEEKDAYS
            for hour in range(24)
        ]

    def _generate_multi_series(self) -> None:
        start = self.today - timedelta(days=90)
        offsets = {name: 50.0 * i for i, name in enumerate(SERIES_NAMES)}
        self.multi_series = [
            SeriesPoint(start + timedelta(days=i), name, self._uniform(50, 150) + offsets[name])
            for i in range(90)
            for name in SERIES_NAMES
        ]

    def _generate_rectangles(self) -> None:
        self.rectangles = [
            HeatCell(quarter, product, self._uniform(10, 100))
            for quarter in QUARTERS
            for product in PRODUCTS[:4]
        ]

    def _generate_rule_series(self) -> None:
        start = self.today - timedelta(days=30)
        self.rule_series = [
            SeriesPoint(
                start + timedelta(days=day),
                "Metric",
                50 + math.sin(day / 5) * 30 + self._uniform(-10, 10),
            )
            for day in range(30)
        ]

    def _generate_waterfall(self) -> None:
        running = 10_000.0
        steps = [WaterfallStep("Opening Balance", running, "start", running)]

        def _apply(changes: list[tuple[str, float]]) -> None:
            nonlocal running
            for category, change in changes:
                running += change
                kind = "increase" if change >= 0 else "decrease"
                steps.append(WaterfallStep(category, abs(change), kind, running))

        _apply([("Revenue", 5000), ("Costs", -3000), ("Investment Income", 2000),
                ("Operating Expenses", -1500), ("Other Income", 800)])
        steps.append(WaterfallStep("Subtotal", running, "subtotal", running))
        _apply([("Taxes", -2000), ("Bonus", 1000)])
        steps.append(WaterfallStep("Closing Balance", running, "end", running))
        self.waterfall = steps

    def _generate_box_plots(self) -> None:
        self.box_plots = [
            stats.box_stats(product, self._rng.uniform(0, 100, 100))
            for product in PRODUCTS
        ]

    def _distribution(self, group: str, n: int = 100) -> np.ndarray:
        """Sample one of the four violin/histogram shapes."""
        if group == "normal":
            return stats.normal_samples(self._rng, n, 50, 15, clip=(0, 100))
        if group == "bimodal":
            low = self._rng.uniform(20, 40, n)
            high = self._rng.uniform(60, 80, n)
            return np.where(self._rng.random(n) < 0.5, low, high)
        if group == "skewed":
            return self._rng.random(n) ** 2 * 100
        if group == "uniform":
            return self._rng.uniform(10, 90, n)
        return self._rng.uniform(0, 100, n)

    def _generate_violins(self) -> None:
        shapes = dict(zip(DISTRIBUTION_GROUPS, ("normal", "bimodal", "skewed", "uniform")))
        violins: list[ViolinSeries] = []
        for group, shape in shapes.items():
            values = sorted(float(v) for v in self._distribution(shape))
            violins.append(ViolinSeries(
                category=group,
                values=values,
                quartiles=stats.quartiles(values),
                curve=stats.violin_curve(values),
            ))
        self.violins = violins

    def _generate_ridgelines(self) -> None:
        self.ridgelines = [
            RidgeSeries(
                category=year,
                values=[float(v) for v in stats.normal_samples(
                    self._rng, 200, 50.0 + i * 5, 15.0 - i * 2, clip=(0, 100))],
                offset=i * 50.0,
            )
            for i, year in enumerate(RIDGE_YEARS)
        ]

    def _generate_stream(self) -> None:
        # (level, amplitude, frequency, use cosine, noise)
        patterns = {
            "Social": (30, 10, 0.3, False, 5),
            "Search": (40, 15, 0.2, True, 5),
            "Direct": (25, 8, 0.4, False, 3),
            "Email": (20, 12, 0.25, True, 4),
            "Ads": (35, 20, 0.35, False, 6),
        }
        points = 50
        start = self.today - timedelta(days=points)
        stream: list[StreamPoint] = []
        for name in STREAM_SERIES:
            level, amplitude, freq, use_cos, noise = patterns[name]
            wave = np.cos if use_cos else np.sin
            for i in range(points):
                value = level + wave(i * freq) * amplitude + self._uniform(-noise, noise)
                value = max(5.0, float(value))
                stream.append(StreamPoint(start + timedelta(days=i), name, value, -value / 2))
        self.stream = stream

    def _generate_radar(self) -> None:
        ranges = {"Model A": (60, 100), "Model B": (50, 90), "Model C": (55, 95)}
        self.radar = [
            RadarProfile(name, list(RADAR_AXES),
                         [self._uniform(low, high) for _ in RADAR_AXES])
            for name, (low, high) in ranges.items()
        ]

    def _generate_treemap(self) -> None:
        self.treemap = [
            TreemapItem(
                name=name,
                value=base * self._uniform(0.9, 1.1),
                category=sector,
                growth=growth + self._uniform(-2, 2),
            )
            for name, base, sector, growth in _COMPANIES
        ]

    def _generate_gantt(self) -> None:
        today = self.today
        self.gantt = [
            GanttTask(
                name=name,
                category=category,
                start=today + timedelta(days=start),
                end=today + timedelta(days=end),
                progress=float(progress),
                dependencies=list(deps),
                assignee=assignee,
                priority=priority,
            )
            for name, category, start, end, progress, deps, assignee, priority in _PROJECT_PLAN
        ]

    def _generate_sunburst(self) -> None:
        self.sunburst = geometry.sunburst_layout(SUNBURST_TREE)

    def _generate_gauges(self) -> None:
        self.gauges = [
            GaugeReading("CPU Usage", 75.0, 0.0, 100.0, list(_GAUGE_THRESHOLDS)),
            GaugeReading("Memory Usage", self._uniform(30, 95), 0.0, 100.0, list(_GAUGE_THRESHOLDS)),
            GaugeReading("Disk Usage", self._uniform(20, 90), 0.0, 100.0, list(_GAUGE_THRESHOLDS)),
            GaugeReading("Network Load", self._uniform(10, 99), 0.0, 100.0, list(_GAUGE_THRESHOLDS)),
        ]

    def _generate_funnel(self) -> None:
        stages: list[FunnelStage] = []
        for index, (stage, value) in enumerate(_FUNNEL):
            conversion = value / _FUNNEL[index - 1][1] if index > 0 else 1.0
            stages.append(FunnelStage(stage, value, conversion, 1.0 - conversion))
        self.funnel = stages

    def _generate_polar(self) -> None:
        self.polar = [
            PolarPoint(float(angle), geometry.polar_radius(index, angle), pattern)
            for index, pattern in enumerate(geometry.POLAR_PATTERNS)
            for angle in range(0, 360, 5)
        ]

    def _generate_bubbles(self) -> None:
        self.bubbles = [
            Bubble(
                x=self._uniform(0, 100),
                y=self._uniform(0, 100),
                size=self._uniform(10, 50),
                category=self._choice(["A", "B", "C"]),
                label=f"Item {i + 1}",
                growth=self._uniform(-20, 20),
            )
            for i in range(50)
        ]

    def _generate_correlation(self) -> None:
        size = len(CORRELATION_VARIABLES)
        upper = np.triu(self._rng.uniform(-1, 1, (size, size)), k=1)
        matrix = upper + upper.T
        np.fill_diagonal(matrix, 1.0)
        self.correlation = matrix

    def histogram_values(self, shape: str = "normal", n: int = 1000) -> np.ndarray:
        """Fresh sample for the histogram chart in one of ``HISTOGRAM_SHAPES``."""
        if shape not in HISTOGRAM_SHAPES:
            raise InvalidSettingError(
                f"Unknown histogram shape {shape!r}; expected one of {', '.join(HISTOGRAM_SHAPES)}"
            )
        with self._lock:
            return self._distribution(shape, n)

    def density_values(self, group: str, n: int = 100) -> np.ndarray:
        """Fresh Box-Muller sample for one density group."""
        mean, std_dev = DENSITY_GROUPS.get(group, (50.0, 12.0))
        with self._lock:
            return stats.normal_samples(self._rng, n, mean, std_dev)

    # -- Real-time updates -----------------------------------------------------

    def tick(self) -> bool:
        """Append one stock candle and one weather sample.

        Does nothing unless auto-refresh is enabled.  Returns ``True`` when
        an update was applied.
        """
        with self._lock:
            if not self.settings.auto_refresh:
                return False
            updated = False
            if self.stock:
                last = self.stock[-1]
                close = last.close + self._uniform(-5, 5)
                high = max(last.close + self._uniform(0, 8), last.close, close)
                low = min(last.close - self._uniform(0, 8), last.close, close)
                self.stock.append(StockCandle(
                    date=last.date + timedelta(days=1),
                    open=last.close,
                    high=high,
                    low=low,
                    close=close,
                    volume=int(self._rng.integers(1_000_000, 10_000_001)),
                ))
                if len(self.stock) > STOCK_HISTORY_CAP:
                    del self.stock[0]
                updated = True
            if self.weather:
                self.weather.append(self._new_weather(self.weather[-1].date + timedelta(days=1)))
                if len(self.weather) > WEATHER_HISTORY_CAP:
                    del self.weather[0]
                updated = True
            if updated:
                self.last_updated = datetime.now()
        if updated:
            self._notify()
        return updated

    def refresh_all(self) -> None:
        """Regenerate every dataset and notify observers."""
        self.load_initial_data()
        logger.info("All chart data regenerated")
        self._notify()

    def randomize_gauges(self) -> None:
        """Draw a fresh value within range for every gauge."""
        with self._lock:
            for gauge in self.gauges:
                gauge.value = self._uniform(gauge.minimum, gauge.maximum)
        self._notify()

    # -- Settings --------------------------------------------------------------

    def set_time_range(self, time_range: TimeRange | str) -> None:
        """Select a time range and regenerate the data."""
        try:
            value = TimeRange(time_range)
        except ValueError:
            raise InvalidSettingError(f"Unknown time range: {time_range!r}") from None
        with self._lock:
            self.settings.time_range = value
        self.refresh_all()

    def update_settings(self, changes: dict[str, Any]) -> GallerySettings:
        """Apply a partial settings update (as posted by the settings form).

        Every value is validated before any is applied.
        """
        unknown = set(changes) - {"auto_refresh", "time_range", "selected_chart"}
        if unknown:
            raise InvalidSettingError(f"Unknown setting(s): {', '.join(sorted(unknown))}")

        if "auto_refresh" in changes and not isinstance(changes["auto_refresh"], bool):
            raise InvalidSettingError("auto_refresh must be a boolean")
        chart = None
        if "selected_chart" in changes:
            try:
                chart = ChartType.parse(changes["selected_chart"])
            except UnknownChartError as exc:
                raise InvalidSettingError(str(exc)) from None
        time_range = None
        if "time_range" in changes:
            try:
                time_range = TimeRange(changes["time_range"])
            except ValueError:
                raise InvalidSettingError(
                    f"Unknown time range: {changes['time_range']!r}"
                ) from None

        with self._lock:
            if "auto_refresh" in changes:
                self.settings.auto_refresh = changes["auto_refresh"]
            if chart is not None:
                self.settings.selected_chart = chart
            range_changed = time_range is not None and time_range is not self.settings.time_range
        if range_changed:
            self.set_time_range(time_range)
        else:
            self._notify()
        return self.settings

    def _window(self, items: list) -> list:
        days = self.settings.time_range.days
        if days is None or not items:
            return list(items)
        cutoff = items[-1].date - timedelta(days=days - 1)
        return [item for item in items if item.date >= cutoff]

    def windowed_stock(self) -> list[StockCandle]:
        """Stock candles within the selected time range."""
        with self._lock:
            return self._window(self.stock)

    def windowed_multi_series(self) -> list[SeriesPoint]:
        """Multi-series points within the selected time range."""
        with self._lock:
            return self._window(self.multi_series)

    # -- Observers -------------------------------------------------------------

    def subscribe(self, callback: Observer) -> None:
        with self._lock:
            if callback not in self._observers:
                self._observers.append(callback)

    def unsubscribe(self, callback: Observer) -> None:
        with self._lock:
            if callback in self._observers:
                self._observers.remove(callback)

    def _notify(self) -> None:
        with self._lock:
            observers = list(self._observers)
        for callback in observers:
            callback(self)

    # -- Named access ----------------------------------------------------------

    _DATASETS = (
        "sales",
        "profit",
        "stock",
        "population",
        "weather",
        "points3d",
        "heat_map",
        "multi_series",
        "rectangles",
        "rule_series",
        "waterfall",
        "box_plots",
        "violins",
        "ridgelines",
        "stream",
        "radar",
        "treemap",
        "gantt",
        "sunburst",
        "gauges",
        "funnel",
        "polar",
        "bubbles",
        "correlation",
        "vectors",
        "surface",
    )

    def dataset_names(self) -> list[str]:
        return list(self._DATASETS)

    def dataset(self, name: str) -> Any:
        """Return a snapshot of the named dataset."""
        if name not in self._DATASETS:
            raise UnknownDatasetError(name)
        with self._lock:
            value = getattr(self, name)
            return value.copy() if isinstance(value, np.ndarray) else list(value)

    def dataset_rows(self, name: str) -> list[dict[str, Any]]:
        """Flatten the named dataset into JSON/CSV friendly dict rows."""
        data = self.dataset(name)
        if name == "correlation":
            return [
                {"variable": var, **{other: round(float(v), 4)
                                     for other, v in zip(CORRELATION_VARIABLES, row)}}
                for var, row in zip(CORRELATION_VARIABLES, data)
            ]
        if name == "surface":
            return [
                {"row": i, "col": j, "z": round(float(z), 6)}
                for (i, j), z in np.ndenumerate(data)
            ]
        return [record.to_dict() for record in data]

    # -- Catalogue -------------------------------------------------------------

    @staticmethod
    def charts_by_category(category: ChartCategory | str) -> list[ChartType]:
        return charts_by_category(category)

    @staticmethod
    def all_categories() -> list[ChartCategory]:
        return all_categories()
