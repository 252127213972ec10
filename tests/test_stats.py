"""Tests for sampling, KDE, quartile and histogram routines."""

import math

import numpy as np
import pytest

from chartgallery import stats


class TestSampling:
    def test_normal_sample_is_reproducible(self):
        a = stats.normal_sample(np.random.default_rng(3), 50.0, 10.0)
        b = stats.normal_sample(np.random.default_rng(3), 50.0, 10.0)
        assert a == b

    def test_normal_samples_moments(self):
        values = stats.normal_samples(np.random.default_rng(0), 20_000, 30.0, 5.0)
        assert values.mean() == pytest.approx(30.0, abs=0.2)
        assert values.std() == pytest.approx(5.0, abs=0.2)

    def test_normal_samples_clip(self):
        values = stats.normal_samples(np.random.default_rng(0), 5_000, 50.0, 40.0, clip=(0, 100))
        assert values.min() >= 0
        assert values.max() <= 100


class TestKernelDensity:
    def test_kernel_peak(self):
        assert stats.gaussian_kernel(2.0, 2.0, 0.5) == pytest.approx(1 / (0.5 * math.sqrt(2 * math.pi)))

    def test_kde_integrates_to_one(self):
        grid = np.linspace(-50, 150, 4001)
        density = stats.kde([40.0, 50.0, 60.0], grid, 5.0)
        assert density.sum() * (grid[1] - grid[0]) == pytest.approx(1.0, abs=1e-3)

    def test_kde_rejects_bad_bandwidth(self):
        with pytest.raises(ValueError):
            stats.kde([1.0], [0.0], 0.0)

    def test_kde_empty_samples(self):
        assert stats.kde([], [0.0, 1.0], 1.0).tolist() == [0.0, 0.0]

    def test_density_curve_cumulative(self):
        curve = stats.density_curve([20.0, 50.0, 80.0], bandwidth=5.0)
        assert len(curve) == 200
        assert curve[0].cumulative == 0.0
        cumulative = [p.cumulative for p in curve]
        assert all(b >= a for a, b in zip(cumulative, cumulative[1:]))
        assert max(cumulative) <= 1.0

    def test_violin_curve_grid(self):
        curve = stats.violin_curve([50.0] * 10)
        assert curve[0][0] == 0.0
        assert curve[-1][0] == 100.0
        assert len(curve) == 51
        peak_x = max(curve, key=lambda p: p[1])[0]
        assert peak_x == 50.0


class TestQuartiles:
    def test_index_based(self):
        assert stats.quartiles([1, 2, 3, 4, 5, 6, 7, 8]) == (3.0, 5.0, 7.0)

    def test_empty(self):
        with pytest.raises(ValueError):
            stats.quartiles([])

    def test_box_stats_outlier(self):
        box = stats.box_stats("A", [100, *range(1, 11)])
        assert (box.q1, box.median, box.q3) == (3.0, 6.0, 9.0)
        assert box.outliers == [100.0]
        assert box.minimum == 1.0
        assert box.maximum == 10.0
        assert box.mean == pytest.approx(155 / 11)
        assert box.iqr == 6.0

    def test_box_stats_no_outliers(self):
        box = stats.box_stats("B", [5.0, 5.0, 5.0, 5.0])
        assert box.outliers == []
        assert box.minimum == box.maximum == 5.0


class TestHistogram:
    def test_inclusive_edges(self):
        bins = stats.histogram([0.0, 5.0, 10.0], bin_count=2)
        assert [b.label for b in bins] == ["0-5", "5-10"]
        assert [b.frequency for b in bins] == [2, 2]
        assert bins[0].normalized == pytest.approx(2 / 3)

    def test_constant_input_widened(self):
        bins = stats.histogram([3.0, 3.0, 3.0], bin_count=1)
        assert bins[0].start == 2.5
        assert bins[0].end == 3.5
        assert bins[0].frequency == 3

    def test_empty_input(self):
        bins = stats.histogram([], bin_count=4)
        assert [b.frequency for b in bins] == [0, 0, 0, 0]
        assert bins[0].start == 0.0
        assert bins[-1].end == 100.0

    def test_bad_bin_count(self):
        with pytest.raises(ValueError):
            stats.histogram([1.0], bin_count=0)

    def test_normal_curve_scaling(self):
        values = np.random.default_rng(1).normal(50, 10, 1000)
        curve = dict(stats.normal_curve(values, bin_count=10))
        assert len(curve) == 100
        assert curve[50.0] == pytest.approx(1000 * 10 / (values.std() * math.sqrt(2 * math.pi)), rel=0.05)

    def test_normal_curve_constant(self):
        assert all(y == 0.0 for _, y in stats.normal_curve([7.0, 7.0]))

    def test_binned_density(self):
        profile = stats.binned_density([10.0, 10.5, 90.0, 150.0, -20.0], bins=10)
        assert profile.max() == 1.0
        assert profile[1] == 1.0
        assert profile[9] == 0.5
        assert profile.sum() == 1.5

    def test_binned_density_empty(self):
        assert stats.binned_density([], bins=5).tolist() == [0.0] * 5


class TestDescribe:
    def test_symmetric(self):
        values = np.random.default_rng(2).normal(50, 10, 5000)
        summary = stats.describe(values)
        assert summary.shape == "symmetric"
        assert summary.mode == pytest.approx(50, abs=5)

    def test_right_skew(self):
        values = np.random.default_rng(2).exponential(10, 5000)
        assert stats.describe(values).shape == "right"

    def test_left_skew(self):
        values = 100 - np.random.default_rng(2).exponential(10, 5000)
        assert stats.describe(values).shape == "left"

    def test_empty(self):
        with pytest.raises(ValueError):
            stats.describe([])


class TestMovingAverage:
    def test_trailing_window(self):
        values = [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
        result = stats.moving_average(values, period=3)
        # Each point averages the three values before it.
        assert result == [(3, pytest.approx(2.0)), (4, pytest.approx(3.0)), (5, pytest.approx(4.0))]

    def test_default_period(self):
        result = stats.moving_average(list(range(10)))
        assert [i for i, _ in result] == [7, 8, 9]
        assert result[0][1] == pytest.approx(3.0)

    @pytest.mark.parametrize("values", [[], [1.0, 2.0], [1.0] * 7])
    def test_short_series(self, values):
        assert stats.moving_average(values) == []

    def test_bad_period(self):
        with pytest.raises(ValueError):
            stats.moving_average([1.0, 2.0], period=0)
