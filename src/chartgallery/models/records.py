"""Value records backing each chart.

Records are plain dataclasses created fresh on every generation pass.  All
numeric fields are float since this is a charting package where float
precision is sufficient.  ``to_dict`` produces JSON/CSV friendly rows with
dates as ISO 8601 strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any


def _iso(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass
class SalesRecord:
    month: str
    sales: float
    year: int
    category: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "sales": round(self.sales, 2),
            "year": self.year,
            "category": self.category,
        }


@dataclass
class ProfitRecord:
    department: str
    profit: float
    quarter: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "department": self.department,
            "profit": round(self.profit, 2),
            "quarter": self.quarter,
        }


@dataclass
class StockCandle:
    """Daily OHLCV candle.  ``low``/``high`` always bracket open and close."""

    date: date
    open: float
    high: float
    low: float
    close: float
    volume: int

    @property
    def is_bullish(self) -> bool:
        return self.close >= self.open

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": _iso(self.date),
            "open": round(self.open, 4),
            "high": round(self.high, 4),
            "low": round(self.low, 4),
            "close": round(self.close, 4),
            "volume": self.volume,
        }


@dataclass
class PopulationRecord:
    age: int
    count: int
    gender: str

    def to_dict(self) -> dict[str, Any]:
        return {"age": self.age, "count": self.count, "gender": self.gender}


@dataclass
class WeatherSample:
    date: date
    temperature: float
    humidity: float
    precipitation: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": _iso(self.date),
            "temperature": round(self.temperature, 2),
            "humidity": round(self.humidity, 2),
            "precipitation": round(self.precipitation, 2),
        }


@dataclass
class Point3D:
    x: float
    y: float
    z: float
    category: str
    size: float
    temperature: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "x": round(self.x, 4),
            "y": round(self.y, 4),
            "z": round(self.z, 4),
            "category": self.category,
            "size": round(self.size, 2),
            "temperature": round(self.temperature, 2),
        }


@dataclass
class HeatCell:
    x: str
    y: str
    value: float

    def to_dict(self) -> dict[str, Any]:
        return {"x": self.x, "y": self.y, "value": round(self.value, 2)}


@dataclass
class SeriesPoint:
    """One observation of a named series (multi-line and rule charts)."""

    date: date
    series: str
    value: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": _iso(self.date),
            "series": self.series,
            "value": round(self.value, 4),
        }


@dataclass
class WaterfallStep:
    """A waterfall bar.  ``kind`` is start, increase, decrease, subtotal or end.

    ``value`` is the absolute change for increase/decrease steps and the
    balance for start/subtotal/end steps.
    """

    category: str
    value: float
    kind: str
    running_total: float

    @property
    def is_total(self) -> bool:
        return self.kind in ("start", "subtotal", "end")

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "value": round(self.value, 2),
            "kind": self.kind,
            "running_total": round(self.running_total, 2),
        }


@dataclass
class BoxStats:
    category: str
    minimum: float
    q1: float
    median: float
    q3: float
    maximum: float
    outliers: list[float] = field(default_factory=list)
    mean: float = 0.0

    @property
    def iqr(self) -> float:
        return self.q3 - self.q1

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "minimum": round(self.minimum, 4),
            "q1": round(self.q1, 4),
            "median": round(self.median, 4),
            "q3": round(self.q3, 4),
            "maximum": round(self.maximum, 4),
            "outliers": [round(v, 4) for v in self.outliers],
            "mean": round(self.mean, 4),
        }


@dataclass
class RadarProfile:
    name: str
    axes: list[str]
    values: list[float]

    def to_dict(self) -> dict[str, Any]:
        row: dict[str, Any] = {"name": self.name}
        for axis, value in zip(self.axes, self.values):
            row[axis] = round(value, 2)
        return row


@dataclass
class TreemapItem:
    name: str
    value: float
    category: str
    growth: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "value": round(self.value, 2),
            "category": self.category,
            "growth": round(self.growth, 2),
        }


@dataclass
class GanttTask:
    name: str
    category: str
    start: date
    end: date
    progress: float
    dependencies: list[str] = field(default_factory=list)
    assignee: str = ""
    priority: str = "medium"  # low, medium, high, critical

    @property
    def duration_days(self) -> int:
        return (self.end - self.start).days

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "category": self.category,
            "start": _iso(self.start),
            "end": _iso(self.end),
            "progress": self.progress,
            "dependencies": "; ".join(self.dependencies),
            "assignee": self.assignee,
            "priority": self.priority,
            "duration_days": self.duration_days,
        }


@dataclass
class SunburstNode:
    name: str
    parent: str | None
    value: float
    level: int
    start_angle: float
    end_angle: float

    @property
    def sweep(self) -> float:
        return self.end_angle - self.start_angle

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "parent": self.parent,
            "value": self.value,
            "level": self.level,
            "start_angle": round(self.start_angle, 4),
            "end_angle": round(self.end_angle, 4),
        }


@dataclass
class GaugeThreshold:
    value: float
    label: str


@dataclass
class GaugeReading:
    name: str
    value: float
    minimum: float = 0.0
    maximum: float = 100.0
    thresholds: list[GaugeThreshold] = field(default_factory=list)

    @property
    def fraction(self) -> float:
        """Position of ``value`` within [minimum, maximum], clamped to [0, 1]."""
        span = self.maximum - self.minimum
        if span <= 0:
            return 0.0
        return min(1.0, max(0.0, (self.value - self.minimum) / span))

    @property
    def status(self) -> str:
        """Label of the highest threshold reached; empty below the lowest one."""
        label = ""
        for threshold in sorted(self.thresholds, key=lambda t: t.value):
            if self.value >= threshold.value:
                label = threshold.label
        return label

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "value": round(self.value, 2),
            "minimum": self.minimum,
            "maximum": self.maximum,
            "status": self.status,
            "thresholds": "; ".join(f"{t.label}@{t.value:g}" for t in self.thresholds),
        }


@dataclass
class FunnelStage:
    stage: str
    value: float
    conversion_rate: float
    dropoff_rate: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "stage": self.stage,
            "value": self.value,
            "conversion_rate": round(self.conversion_rate, 4),
            "dropoff_rate": round(self.dropoff_rate, 4),
        }


@dataclass
class HistogramBin:
    label: str
    start: float
    end: float
    frequency: int
    normalized: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "start": round(self.start, 4),
            "end": round(self.end, 4),
            "frequency": self.frequency,
            "normalized": round(self.normalized, 6),
        }


@dataclass
class DensityPoint:
    x: float
    density: float
    cumulative: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "x": round(self.x, 4),
            "density": round(self.density, 8),
            "cumulative": round(self.cumulative, 6),
        }


@dataclass
class Bubble:
    x: float
    y: float
    size: float
    category: str
    label: str
    growth: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "x": round(self.x, 4),
            "y": round(self.y, 4),
            "size": round(self.size, 2),
            "category": self.category,
            "label": self.label,
            "growth": round(self.growth, 2),
        }


@dataclass
class Vector3D:
    origin: tuple[float, float, float]
    direction: tuple[float, float, float]
    magnitude: float
    strength: str  # strong, medium, weak

    def to_dict(self) -> dict[str, Any]:
        ox, oy, oz = self.origin
        dx, dy, dz = self.direction
        return {
            "x": round(ox, 4), "y": round(oy, 4), "z": round(oz, 4),
            "dx": round(dx, 4), "dy": round(dy, 4), "dz": round(dz, 4),
            "magnitude": round(self.magnitude, 4),
            "strength": self.strength,
        }


@dataclass
class ViolinSeries:
    category: str
    values: list[float]
    quartiles: tuple[float, float, float]
    curve: list[tuple[float, float]]

    def to_dict(self) -> dict[str, Any]:
        q1, median, q3 = self.quartiles
        return {
            "category": self.category,
            "count": len(self.values),
            "q1": round(q1, 4),
            "median": round(median, 4),
            "q3": round(q3, 4),
        }


@dataclass
class RidgeSeries:
    category: str
    values: list[float]
    offset: float

    def to_dict(self) -> dict[str, Any]:
        n = len(self.values)
        return {
            "category": self.category,
            "count": n,
            "mean": round(sum(self.values) / n, 4) if n else 0.0,
            "offset": self.offset,
        }


@dataclass
class StreamPoint:
    date: date
    series: str
    value: float
    baseline: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": _iso(self.date),
            "series": self.series,
            "value": round(self.value, 4),
            "baseline": round(self.baseline, 4),
        }


@dataclass
class PolarPoint:
    angle: float
    radius: float
    pattern: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "angle": self.angle,
            "radius": round(self.radius, 4),
            "pattern": self.pattern,
        }
