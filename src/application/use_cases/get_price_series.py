"""
Use-case: retrieve the daily price series for a given symbol.
Depends only on Domain ports and entities: no infrastructure imports.
"""

from typing import Optional

from src.domain.entities.stock_price import DateRange, PriceSeries
from src.domain.entities.ticker import normalize_ticker
from src.domain.ports.stock_data_port import IPriceSeriesFetcher


class GetPriceSeriesUseCase:
    def __init__(self, fetcher: IPriceSeriesFetcher) -> None:
        self._fetcher = fetcher

    def execute(self, symbol: str, date_range: Optional[DateRange] = None) -> PriceSeries:
        """Fetch daily prices for *symbol* (normalized) over *date_range*.

        Args:
            symbol:     Ticker symbol (case-insensitive).
            date_range: Defaults to the trailing 30-day window ending yesterday.

        Raises:
            ValueError: if *symbol* is blank.
            UpstreamUnavailable / MalformedResponse from the fetcher.
        """
        ticker = normalize_ticker(symbol)
        if not ticker:
            raise ValueError("symbol must be a non-empty string")
        return self._fetcher.fetch(ticker, date_range or DateRange.trailing())
