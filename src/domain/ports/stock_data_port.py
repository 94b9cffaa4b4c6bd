"""
Port (interface) for daily price-series providers.
Infrastructure adapters (PolygonPriceSeriesFetcher, YFinancePriceSeriesFetcher)
must implement this interface.
"""

from abc import ABC, abstractmethod

from src.domain.entities.stock_price import DateRange, PriceSeries


class IPriceSeriesFetcher(ABC):
    @abstractmethod
    def fetch(self, ticker: str, date_range: DateRange) -> PriceSeries:
        """Return ascending daily OHLCV points for *ticker* over *date_range*.

        An empty but well-formed result is returned as an empty PriceSeries.

        Raises:
            UpstreamUnavailable: transport error or non-success status.
            MalformedResponse:   payload cannot be decoded into price points.
        """
        ...

    def close(self) -> None:
        """Release transport resources (HTTP connection pools).  No-op by default."""
        return None
