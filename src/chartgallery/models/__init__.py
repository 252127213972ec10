"""Chart data models."""

from chartgallery.models.catalog import ChartCategory, ChartType, TimeRange
from chartgallery.models.records import (
    BoxStats,
    Bubble,
    DensityPoint,
    FunnelStage,
    GanttTask,
    GaugeReading,
    GaugeThreshold,
    HeatCell,
    HistogramBin,
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

__all__ = [
    "BoxStats",
    "Bubble",
    "ChartCategory",
    "ChartType",
    "DensityPoint",
    "FunnelStage",
    "GanttTask",
    "GaugeReading",
    "GaugeThreshold",
    "HeatCell",
    "HistogramBin",
    "Point3D",
    "PolarPoint",
    "PopulationRecord",
    "ProfitRecord",
    "RadarProfile",
    "RidgeSeries",
    "SalesRecord",
    "SeriesPoint",
    "StockCandle",
    "StreamPoint",
    "SunburstNode",
    "TimeRange",
    "TreemapItem",
    "Vector3D",
    "ViolinSeries",
    "WaterfallStep",
    "WeatherSample",
]
