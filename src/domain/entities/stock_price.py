"""
Domain entities for daily price data and the metrics derived from it.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Union

DEFAULT_LOOKBACK_DAYS = 30
DEFAULT_LAG_DAYS = 1


@dataclass(frozen=True)
class DateRange:
    """Inclusive [start, end] window of trading days."""

    start: date
    end: date

    @classmethod
    def trailing(
        cls,
        today: Optional[date] = None,
        lookback_days: int = DEFAULT_LOOKBACK_DAYS,
        lag_days: int = DEFAULT_LAG_DAYS,
    ) -> "DateRange":
        """Window ending *lag_days* before today, so the incomplete session is excluded."""
        today = today or date.today()
        return cls(
            start=today - timedelta(days=lookback_days),
            end=today - timedelta(days=lag_days),
        )

    @classmethod
    def parse(cls, start: str, end: str) -> "DateRange":
        """Build a range from two YYYY-MM-DD strings."""
        return cls(start=date.fromisoformat(start), end=date.fromisoformat(end))

    @property
    def start_str(self) -> str:
        return self.start.isoformat()

    @property
    def end_str(self) -> str:
        return self.end.isoformat()


@dataclass(frozen=True)
class PricePoint:
    date: date
    open: float
    high: float
    low: float
    close: float
    volume: float


@dataclass(frozen=True)
class PriceSeries:
    """Daily points for one ticker, ascending by date.  Empty means "no data"."""

    ticker: str
    date_range: DateRange
    points: tuple[PricePoint, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.points

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class DerivedMetrics:
    open_price: float
    close_price: float
    period_high: float
    period_low: float
    avg_volume: float
    percent_change: Optional[float]
    price_change: float


class EmptyMetrics:
    """Marker for a series with no points; rendered as "N/A" placeholders."""

    _instance: Optional["EmptyMetrics"] = None

    def __new__(cls) -> "EmptyMetrics":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "EMPTY_METRICS"


EMPTY_METRICS = EmptyMetrics()

MetricsOrEmpty = Union[DerivedMetrics, EmptyMetrics]
