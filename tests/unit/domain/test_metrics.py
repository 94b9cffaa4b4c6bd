"""Unit tests for the metrics derived from a price series."""

import pytest

from src.domain.entities.stock_price import EMPTY_METRICS, DerivedMetrics, PriceSeries
from src.domain.services.metrics import (
    derive_metrics,
    describe_metrics,
    format_percent_change,
    format_price_change,
)

from conftest import make_series


class TestDeriveMetrics:
    def test_empty_series_returns_marker(self, date_range):
        result = derive_metrics(PriceSeries(ticker="AAPL", date_range=date_range))
        assert result is EMPTY_METRICS
        assert not result

    def test_uses_closes_for_anchor_points(self, date_range):
        metrics = derive_metrics(make_series("AAPL", [100.0, 95.0, 110.0], date_range))
        assert isinstance(metrics, DerivedMetrics)
        assert metrics.open_price == 100.0
        assert metrics.close_price == 110.0
        assert metrics.period_high == 111.0
        assert metrics.period_low == 94.0
        assert metrics.avg_volume == pytest.approx(2000.0)
        assert metrics.percent_change == 10.0
        assert metrics.price_change == 10.0

    def test_percent_change_rounded_to_two_decimals(self, date_range):
        metrics = derive_metrics(make_series("TSLA", [300.0, 290.24], date_range))
        assert metrics.percent_change == -3.25

    def test_zero_open_price_does_not_raise(self, date_range):
        metrics = derive_metrics(make_series("ZERO", [0.0, 5.0], date_range))
        assert metrics.percent_change is None
        assert format_percent_change(metrics.percent_change) == "N/A"

    def test_derive_is_deterministic(self, date_range):
        series = make_series("NVDA", [130.0, 135.0, 140.0], date_range)
        assert derive_metrics(series) == derive_metrics(series)


class TestFormatting:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (10.0, "+10.00%"),
            (0.0, "+0.00%"),
            (-0.0, "+0.00%"),
            (-0.001, "+0.00%"),
            (-3.254, "-3.25%"),
            (None, "N/A"),
        ],
    )
    def test_format_percent_change(self, value, expected):
        assert format_percent_change(value) == expected

    def test_ten_percent_from_series(self, date_range):
        metrics = derive_metrics(make_series("AAPL", [100.0, 110.0], date_range))
        assert format_percent_change(metrics.percent_change) == "+10.00%"
        assert format_price_change(metrics.price_change) == "10.00"

    def test_describe_metrics_mentions_period_and_change(self, date_range):
        metrics = derive_metrics(make_series("AAPL", [100.0, 110.0], date_range))
        text = describe_metrics(metrics, date_range)
        assert "Period: 2025-01-01 to 2025-01-31" in text
        assert "Opening Price: $100.0" in text
        assert "Price Change: +10.00%" in text

    def test_describe_empty_metrics_notes_missing_data(self, date_range):
        text = describe_metrics(EMPTY_METRICS, date_range)
        assert "No price data" in text


class TestNegligibleChanges:
    def test_tiny_drop_renders_as_unsigned_zero_percent(self, date_range):
        metrics = derive_metrics(make_series("AAPL", [1000.0, 999.99], date_range))
        assert format_percent_change(metrics.percent_change) == "+0.00%"
        assert format_price_change(metrics.price_change) == "-0.01"

    def test_tiny_drop_renders_as_unsigned_zero_price(self, date_range):
        metrics = derive_metrics(make_series("AAPL", [100.0, 99.999], date_range))
        assert format_price_change(metrics.price_change) == "0.00"
        assert format_percent_change(metrics.percent_change) == "+0.00%"

    @pytest.mark.parametrize("value", [-0.0, -0.004])
    def test_format_price_change_drops_negative_zero(self, value):
        assert format_price_change(value) == "0.00"
