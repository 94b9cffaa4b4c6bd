"""
Domain service: summary statistics over a daily price series.

Both anchor points use closing prices, so intraday open noise on the first
day does not skew the period change.  derive_metrics never raises: an empty
series yields EMPTY_METRICS, which renders as "N/A".
"""

from typing import Optional

from src.domain.entities.stock_price import (
    EMPTY_METRICS,
    DateRange,
    DerivedMetrics,
    MetricsOrEmpty,
    PriceSeries,
)

NOT_AVAILABLE = "N/A"


def _unsigned_zero(value: float) -> float:
    # round() keeps the sign of tiny losses: -0.0 must display as +0.00
    return value + 0.0


def derive_metrics(series: PriceSeries) -> MetricsOrEmpty:
    if series.is_empty:
        return EMPTY_METRICS

    points = series.points
    open_price = points[0].close
    close_price = points[-1].close
    change = close_price - open_price

    percent_change: Optional[float] = None
    if open_price:
        percent_change = _unsigned_zero(round(change / open_price * 100, 2))

    return DerivedMetrics(
        open_price=open_price,
        close_price=close_price,
        period_high=max(p.high for p in points),
        period_low=min(p.low for p in points),
        avg_volume=sum(p.volume for p in points) / len(points),
        percent_change=percent_change,
        price_change=_unsigned_zero(round(change, 2)),
    )


def format_percent_change(value: Optional[float]) -> str:
    """Sign-prefixed, two decimals: 10 -> '+10.00%', -3.254 -> '-3.25%'."""
    if value is None:
        return NOT_AVAILABLE
    value = _unsigned_zero(round(value, 2))
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.2f}%"


def format_price_change(value: Optional[float]) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{_unsigned_zero(round(value, 2)):.2f}"


def describe_metrics(metrics: MetricsOrEmpty, date_range: DateRange) -> str:
    """Human-readable block handed to the language model."""
    if not isinstance(metrics, DerivedMetrics):
        return (
            f"Period: {date_range.start_str} to {date_range.end_str}\n"
            "No price data is available for this period."
        )
    return "\n".join(
        [
            f"Period: {date_range.start_str} to {date_range.end_str}",
            f"Opening Price: ${metrics.open_price}",
            f"Closing Price: ${metrics.close_price}",
            f"Period High: ${metrics.period_high}",
            f"Period Low: ${metrics.period_low}",
            f"Average Volume: {metrics.avg_volume:,.0f}",
            f"Price Change: {format_percent_change(metrics.percent_change)}",
        ]
    )
