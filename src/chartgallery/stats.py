"""Sampling and descriptive statistics used by the distribution charts.

Covers Box-Muller normal sampling, Gaussian kernel density estimation,
index-based quartiles with 1.5 x IQR outlier fences, equal-width histograms,
the trailing moving average drawn on the range chart, and the small helpers
the histogram, violin, ridgeline and density charts overlay on top of them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd

from chartgallery.models.records import BoxStats, DensityPoint, HistogramBin

_SQRT_TWO_PI = math.sqrt(2.0 * math.pi)
_IQR_FENCE = 1.5
_SKEW_TOLERANCE = 0.2


# -- Sampling ------------------------------------------------------------------


def normal_sample(rng: np.random.Generator, mean: float, std_dev: float) -> float:
    """Draw one normal value with the Box-Muller transform."""
    u1 = 1.0 - rng.random()  # (0, 1] keeps log finite
    u2 = rng.random()
    z0 = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
    return z0 * std_dev + mean


def normal_samples(
    rng: np.random.Generator,
    n: int,
    mean: float,
    std_dev: float,
    clip: tuple[float, float] | None = None,
) -> np.ndarray:
    """Vectorised Box-Muller draws, optionally clipped to a closed range."""
    u1 = 1.0 - rng.random(n)
    u2 = rng.random(n)
    z = np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)
    values = mean + z * std_dev
    if clip is not None:
        values = np.clip(values, clip[0], clip[1])
    return values


# -- Kernel density ------------------------------------------------------------


def gaussian_kernel(x, xi, bandwidth: float):
    """Gaussian kernel of width *bandwidth* centred on *xi*, evaluated at *x*."""
    diff = (np.asarray(x, dtype=float) - xi) / bandwidth
    return np.exp(-0.5 * diff * diff) / (bandwidth * _SQRT_TWO_PI)


def kde(samples: Sequence[float], grid: Sequence[float], bandwidth: float) -> np.ndarray:
    """Gaussian kernel density estimate of *samples* at each point of *grid*."""
    if bandwidth <= 0:
        raise ValueError(f"bandwidth must be positive, got {bandwidth}")
    grid_arr = np.asarray(grid, dtype=float)
    sample_arr = np.asarray(samples, dtype=float)
    if sample_arr.size == 0:
        return np.zeros_like(grid_arr)
    kernels = gaussian_kernel(grid_arr[:, None], sample_arr[None, :], bandwidth)
    return kernels.mean(axis=1)


def density_curve(
    samples: Sequence[float],
    bandwidth: float = 5.0,
    start: float = 0.0,
    stop: float = 100.0,
    count: int = 200,
) -> list[DensityPoint]:
    """Evaluate the KDE on an evenly spaced grid with a running cumulative.

    The cumulative starts at 0, adds ``density / count`` per subsequent grid
    point and is capped at 1.
    """
    grid = np.linspace(start, stop, count)
    density = kde(samples, grid, bandwidth)
    running = np.concatenate([[0.0], np.cumsum(density[1:]) / count])
    cumulative = np.minimum(1.0, running)
    return [
        DensityPoint(x=float(x), density=float(d), cumulative=float(c))
        for x, d, c in zip(grid, density, cumulative)
    ]


def violin_curve(
    values: Sequence[float],
    bandwidth: float = 5.0,
    start: float = 0.0,
    stop: float = 100.0,
    step: float = 2.0,
) -> list[tuple[float, float]]:
    """KDE outline of a violin body sampled every *step* over [start, stop]."""
    xs = np.arange(start, stop + step / 2, step)
    ys = kde(values, xs, bandwidth)
    return [(float(x), float(y)) for x, y in zip(xs, ys)]


# -- Quartiles and box plots ---------------------------------------------------


def quartiles(sorted_values: Sequence[float]) -> tuple[float, float, float]:
    """Index-based (Q1, median, Q3) of an already sorted sequence."""
    n = len(sorted_values)
    if n == 0:
        raise ValueError("quartiles of an empty sequence")
    return (
        float(sorted_values[n // 4]),
        float(sorted_values[n // 2]),
        float(sorted_values[(n * 3) // 4]),
    )


def box_stats(category: str, values: Sequence[float]) -> BoxStats:
    """Five-number summary with values beyond 1.5 x IQR split out as outliers.

    Whiskers are the extremes of the values kept inside the fences.
    """
    ordered = sorted(float(v) for v in values)
    q1, median, q3 = quartiles(ordered)
    iqr = q3 - q1
    lower = q1 - _IQR_FENCE * iqr
    upper = q3 + _IQR_FENCE * iqr

    outliers = [v for v in ordered if v < lower or v > upper]
    kept = [v for v in ordered if lower <= v <= upper]

    return BoxStats(
        category=category,
        minimum=kept[0] if kept else 0.0,
        q1=q1,
        median=median,
        q3=q3,
        maximum=kept[-1] if kept else 100.0,
        outliers=outliers,
        mean=sum(ordered) / len(ordered),
    )


# -- Histograms ----------------------------------------------------------------


def histogram(values: Sequence[float], bin_count: int = 10) -> list[HistogramBin]:
    """Equal-width bins spanning [min, max] of *values*.

    Bin membership is inclusive at both edges, so a value sitting exactly on
    an inner edge counts towards both neighbouring bins.
    """
    if bin_count < 1:
        raise ValueError(f"bin_count must be at least 1, got {bin_count}")
    arr = np.asarray(values, dtype=float)
    lo = float(arr.min()) if arr.size else 0.0
    hi = float(arr.max()) if arr.size else 100.0
    if math.isclose(lo, hi):
        lo, hi = lo - 0.5, hi + 0.5

    edges = np.linspace(lo, hi, bin_count + 1)
    bins: list[HistogramBin] = []
    for start, end in zip(edges[:-1], edges[1:]):
        frequency = int(np.count_nonzero((arr >= start) & (arr <= end)))
        bins.append(
            HistogramBin(
                label=f"{start:.0f}-{end:.0f}",
                start=float(start),
                end=float(end),
                frequency=frequency,
                normalized=frequency / arr.size if arr.size else 0.0,
            )
        )
    return bins


def normal_curve(
    values: Sequence[float],
    start: float = 0.0,
    stop: float = 100.0,
    bin_count: int = 10,
) -> list[tuple[float, float]]:
    """Fitted normal pdf scaled to overlay a *bin_count* histogram of *values*."""
    arr = np.asarray(values, dtype=float)
    xs = np.arange(start, stop, 1.0)
    if arr.size == 0:
        return [(float(x), 0.0) for x in xs]
    mean = float(arr.mean())
    std_dev = float(arr.std())
    if std_dev == 0:
        return [(float(x), 0.0) for x in xs]
    pdf = np.exp(-0.5 * ((xs - mean) / std_dev) ** 2) / (std_dev * _SQRT_TWO_PI)
    scale = arr.size * 100.0 / bin_count
    return [(float(x), float(y)) for x, y in zip(xs, pdf * scale)]


def binned_density(
    values: Sequence[float],
    bins: int = 50,
    upper: float = 100.0,
) -> np.ndarray:
    """Ridgeline profile: counts over [0, upper) normalised to a peak of 1."""
    counts = np.zeros(bins)
    for value in values:
        index = int(value / upper * bins)
        if 0 <= index < bins:
            counts[index] += 1
    peak = counts.max() if bins else 0.0
    if peak == 0:
        return counts
    return counts / peak


def moving_average(values: Sequence[float], period: int = 7) -> list[tuple[int, float]]:
    """Trailing mean of the *period* values before each index.

    Returns ``(index, average)`` pairs starting at index *period*; a series
    no longer than *period* gives an empty list.
    """
    if period < 1:
        raise ValueError(f"period must be at least 1, got {period}")
    series = pd.Series(values, dtype=float)
    if len(series) <= period:
        return []
    averages = series.rolling(window=period).mean().shift(1).iloc[period:]
    return [(int(i), float(v)) for i, v in averages.items()]


# -- Summaries -----------------------------------------------------------------


@dataclass
class DistributionSummary:
    mean: float
    mode: float
    skewness: float
    shape: str  # left, symmetric, right


def describe(values: Sequence[float], bandwidth: float = 5.0) -> DistributionSummary:
    """Mean, KDE mode and skewness of a sample."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        raise ValueError("cannot describe an empty sample")
    mean = float(arr.mean())
    std_dev = float(arr.std())

    grid = np.linspace(float(arr.min()), float(arr.max()), 200)
    mode = float(grid[int(np.argmax(kde(arr, grid, bandwidth)))])

    skewness = float(np.mean((arr - mean) ** 3) / std_dev**3) if std_dev > 0 else 0.0
    if skewness > _SKEW_TOLERANCE:
        shape = "right"
    elif skewness < -_SKEW_TOLERANCE:
        shape = "left"
    else:
        shape = "symmetric"
    return DistributionSummary(mean=mean, mode=mode, skewness=skewness, shape=shape)
