"""Tests for the observable data store."""

from datetime import timedelta

import numpy as np
import pytest

from chartgallery.errors import InvalidSettingError, UnknownDatasetError
from chartgallery.models.catalog import ChartCategory, ChartType, TimeRange
from chartgallery.store import (
    CORRELATION_VARIABLES,
    STOCK_HISTORY_CAP,
    WEATHER_HISTORY_CAP,
    DataStore,
    GallerySettings,
)

from conftest import TODAY


class TestGeneration:
    def test_sizes(self, store):
        assert len(store.sales) == 36
        assert len(store.profit) == 20
        assert len(store.stock) == STOCK_HISTORY_CAP
        assert len(store.population) == 40
        assert len(store.weather) == WEATHER_HISTORY_CAP
        assert len(store.points3d) == 200
        assert len(store.heat_map) == 7 * 24
        assert len(store.multi_series) == 270
        assert len(store.rectangles) == 16
        assert len(store.rule_series) == 30
        assert len(store.box_plots) == 5
        assert len(store.violins) == 4
        assert len(store.ridgelines) == 5
        assert len(store.stream) == 250
        assert len(store.radar) == 3
        assert len(store.treemap) == 16
        assert len(store.gantt) == 11
        assert len(store.gauges) == 4
        assert len(store.funnel) == 4
        assert len(store.polar) == 3 * 72
        assert len(store.bubbles) == 50
        assert len(store.vectors) == 216
        assert store.surface.shape == (30, 30)

    def test_value_ranges(self, store):
        assert all(100_000 <= r.sales <= 500_000 for r in store.sales)
        assert all(-50_000 <= r.profit <= 200_000 for r in store.profit)
        assert all(10_000 <= r.count <= 50_000 for r in store.population)
        assert all(-10 <= w.temperature <= 35 for w in store.weather)
        assert all(30 <= w.humidity <= 90 for w in store.weather)
        assert all(0 <= w.precipitation <= 50 for w in store.weather)
        assert all(-50 <= c <= 50 for p in store.points3d for c in (p.x, p.y, p.z))
        assert all(5 <= p.size <= 20 for p in store.points3d)
        assert all(0 <= c.value <= 100 for c in store.heat_map)
        assert all(10 <= c.value <= 100 for c in store.rectangles)
        assert all(0 <= b.x <= 100 and 0 <= b.y <= 100 for b in store.bubbles)
        assert all(10 <= b.size <= 50 and -20 <= b.growth <= 20 for b in store.bubbles)
        assert all(5 <= p.value for p in store.stream)

    def test_stock_candles(self, store):
        for candle in store.stock:
            assert 100 <= candle.open <= 200
            assert abs(candle.close - candle.open) <= 10
            assert candle.low <= min(candle.open, candle.close)
            assert candle.high >= max(candle.open, candle.close)
            assert 1_000_000 <= candle.volume <= 10_000_000
        assert store.stock[-1].date == TODAY - timedelta(days=1)
        dates = [c.date for c in store.stock]
        assert dates == sorted(dates)

    def test_multi_series_offsets(self, store):
        for name, offset in (("Series 1", 0), ("Series 2", 50), ("Series 3", 100)):
            values = [p.value for p in store.multi_series if p.series == name]
            assert min(values) >= 50 + offset
            assert max(values) <= 150 + offset

    def test_radar_ranges(self, store):
        ranges = {"Model A": (60, 100), "Model B": (50, 90), "Model C": (55, 95)}
        for profile in store.radar:
            low, high = ranges[profile.name]
            assert len(profile.values) == 8
            assert all(low <= v <= high for v in profile.values)

    def test_waterfall_running_total(self, store):
        steps = store.waterfall
        assert steps[0].kind == "start"
        assert steps[0].running_total == 10_000
        assert [s.kind for s in steps].count("subtotal") == 1
        assert steps[-1].kind == "end"
        assert steps[-1].running_total == 10_000 + 5000 - 3000 + 2000 - 1500 + 800 - 2000 + 1000

    def test_funnel_rates(self, store):
        rates = [round(s.conversion_rate, 4) for s in store.funnel]
        assert rates == [1.0, 0.5, 0.6, 0.3333]
        assert store.funnel[1].dropoff_rate == pytest.approx(0.5)

    def test_gauges(self, store):
        names = [g.name for g in store.gauges]
        assert names == ["CPU Usage", "Memory Usage", "Disk Usage", "Network Load"]
        assert store.gauges[0].value == 75.0
        assert all(g.minimum <= g.value <= g.maximum for g in store.gauges)

    def test_correlation_matrix(self, store):
        m = store.correlation
        assert m.shape == (len(CORRELATION_VARIABLES),) * 2
        assert np.allclose(m, m.T)
        assert np.all(np.diag(m) == 1.0)
        off = m[~np.eye(len(m), dtype=bool)]
        assert off.min() >= -1 and off.max() <= 1

    def test_treemap_jitter(self, store):
        apple = next(t for t in store.treemap if t.name == "Apple")
        assert 2700 <= apple.value <= 3300
        assert 13.2 <= apple.growth <= 17.2

    def test_gantt_relative_to_today(self, store):
        first = store.gantt[0]
        assert first.start == TODAY - timedelta(days=30)
        assert first.progress == 100.0

    def test_seed_is_reproducible(self):
        a = DataStore(seed=7, today=TODAY)
        b = DataStore(seed=7, today=TODAY)
        assert a.dataset_rows("sales") == b.dataset_rows("sales")
        assert np.array_equal(a.correlation, b.correlation)

    def test_histogram_values(self, store):
        for shape in ("random", "normal", "bimodal", "skewed"):
            values = store.histogram_values(shape, n=500)
            assert len(values) == 500
            assert values.min() >= 0 and values.max() <= 100

    def test_histogram_unknown_shape(self, store):
        with pytest.raises(InvalidSettingError):
            store.histogram_values("triangular")

    def test_density_values(self, store):
        values = store.density_values("Group C", n=2000)
        assert values.mean() == pytest.approx(70, abs=1.0)


class TestTick:
    def test_tick_appends_and_caps(self, store):
        last_stock = store.stock[-1]
        last_weather = store.weather[-1]
        assert store.tick() is True
        assert len(store.stock) == STOCK_HISTORY_CAP
        assert len(store.weather) == WEATHER_HISTORY_CAP
        new = store.stock[-1]
        assert new.date == last_stock.date + timedelta(days=1)
        assert new.open == last_stock.close
        assert abs(new.close - last_stock.close) <= 5
        assert new.low <= min(new.open, new.close)
        assert new.high >= max(new.open, new.close)
        assert store.weather[-1].date == last_weather.date + timedelta(days=1)

    def test_tick_drops_from_front(self, store):
        second = store.stock[1].date
        store.tick()
        assert store.stock[0].date == second

    def test_tick_respects_auto_refresh(self, store):
        store.settings.auto_refresh = False
        before = list(store.stock)
        assert store.tick() is False
        assert store.stock == before

    def test_tick_on_empty_series(self, store):
        store.stock = []
        store.weather = []
        assert store.tick() is False
        assert store.stock == []

    def test_tick_below_cap_grows(self, store):
        store.weather = store.weather[:5]
        store.tick()
        assert len(store.weather) == 6

    def test_tick_notifies(self, store):
        seen = []
        store.subscribe(seen.append)
        store.tick()
        assert seen == [store]


class TestObservers:
    def test_refresh_all_notifies(self, store):
        calls = []
        store.subscribe(lambda s: calls.append(s.last_updated))
        store.refresh_all()
        assert len(calls) == 1

    def test_subscribe_once(self, store):
        calls = []
        store.subscribe(calls.append)
        store.subscribe(calls.append)
        store.randomize_gauges()
        assert len(calls) == 1

    def test_unsubscribe(self, store):
        calls = []
        store.subscribe(calls.append)
        store.unsubscribe(calls.append)
        store.unsubscribe(calls.append)
        store.refresh_all()
        assert calls == []

    def test_randomize_gauges(self, store):
        store.randomize_gauges()
        assert all(g.minimum <= g.value <= g.maximum for g in store.gauges)


class TestSettings:
    def test_defaults(self):
        settings = GallerySettings()
        assert settings.time_range is TimeRange.MONTH
        assert settings.auto_refresh is True
        assert settings.selected_chart is ChartType.BAR
        assert settings.to_dict()["time_range"] == "month"

    def test_set_time_range_regenerates(self, store):
        before = store.dataset_rows("sales")
        store.set_time_range("week")
        assert store.settings.time_range is TimeRange.WEEK
        assert store.dataset_rows("sales") != before

    def test_set_time_range_invalid(self, store):
        with pytest.raises(InvalidSettingError):
            store.set_time_range("decade")

    def test_update_settings(self, store):
        settings = store.update_settings(
            {"auto_refresh": False, "selected_chart": "box-plot", "time_range": "year"}
        )
        assert settings.auto_refresh is False
        assert settings.selected_chart is ChartType.BOX_PLOT
        assert settings.time_range is TimeRange.YEAR

    @pytest.mark.parametrize("changes", [
        {"color": "red"},
        {"auto_refresh": "yes"},
        {"selected_chart": "spaghetti"},
        {"time_range": "decade"},
    ])
    def test_update_settings_invalid(self, store, changes):
        with pytest.raises(InvalidSettingError):
            store.update_settings(changes)

    def test_update_settings_is_atomic(self, store):
        with pytest.raises(InvalidSettingError):
            store.update_settings({"auto_refresh": False, "time_range": "decade"})
        assert store.settings.auto_refresh is True

    def test_windowed_stock(self, store):
        store.settings.time_range = TimeRange.WEEK
        window = store.windowed_stock()
        assert len(window) == 7
        assert window[-1] == store.stock[-1]
        store.settings.time_range = TimeRange.ALL
        assert len(store.windowed_stock()) == STOCK_HISTORY_CAP

    def test_windowed_multi_series(self, store):
        store.settings.time_range = TimeRange.MONTH
        assert len(store.windowed_multi_series()) == 30 * 3


class TestNamedAccess:
    def test_dataset_names(self, store):
        names = store.dataset_names()
        assert "stock" in names
        assert "surface" in names
        assert len(names) == 26

    def test_dataset_returns_copy(self, store):
        data = store.dataset("sales")
        data.clear()
        assert len(store.sales) == 36
        matrix = store.dataset("correlation")
        matrix[0, 0] = 5.0
        assert store.correlation[0, 0] == 1.0

    def test_unknown_dataset(self, store):
        with pytest.raises(UnknownDatasetError):
            store.dataset("lottery")
        with pytest.raises(LookupError):
            store.dataset_rows("lottery")

    def test_rows(self, store):
        rows = store.dataset_rows("stock")
        assert set(rows[0]) == {"date", "open", "high", "low", "close", "volume"}
        assert rows[0]["date"] == store.stock[0].date.isoformat()

    def test_correlation_rows(self, store):
        rows = store.dataset_rows("correlation")
        assert len(rows) == 10
        assert rows[0]["variable"] == "Revenue"
        assert rows[0]["Revenue"] == 1.0

    def test_surface_rows(self, store):
        rows = store.dataset_rows("surface")
        assert len(rows) == 900
        assert set(rows[0]) == {"row", "col", "z"}

    def test_catalogue_delegates(self):
        assert DataStore.all_categories()[0] is ChartCategory.BASIC
        assert DataStore.charts_by_category("financial")[0] is ChartType.CANDLESTICK
