"""
Infrastructure adapter: yfinance -> IPriceSeriesFetcher.
Alternate provider selected with PRICE_PROVIDER=yfinance.  All yfinance-specific
details (Ticker.history(), exclusive end date) are confined here; the rest of
the codebase depends only on IPriceSeriesFetcher.
"""

import logging
from datetime import timedelta

import yfinance as yf

from src.domain.entities.stock_price import DateRange, PricePoint, PriceSeries
from src.domain.errors import MalformedResponse, UpstreamUnavailable
from src.domain.ports.stock_data_port import IPriceSeriesFetcher

logger = logging.getLogger(__name__)


class YFinancePriceSeriesFetcher(IPriceSeriesFetcher):
    """Fetches adjusted daily prices from Yahoo Finance via the yfinance library."""

    def fetch(self, ticker: str, date_range: DateRange) -> PriceSeries:
        try:
            history = yf.Ticker(ticker).history(
                start=date_range.start_str,
                # yfinance treats end as exclusive
                end=(date_range.end + timedelta(days=1)).isoformat(),
                interval="1d",
                auto_adjust=True,
            )
        except Exception as exc:
            raise UpstreamUnavailable(f"yfinance request failed for {ticker!r}: {exc}") from exc

        if history.empty:
            return PriceSeries(ticker=ticker, date_range=date_range)

        try:
            points = tuple(
                PricePoint(
                    date=index.date(),
                    open=round(float(row["Open"]), 4),
                    high=round(float(row["High"]), 4),
                    low=round(float(row["Low"]), 4),
                    close=round(float(row["Close"]), 4),
                    volume=float(row["Volume"]),
                )
                for index, row in history.sort_index().iterrows()
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise MalformedResponse(f"Unexpected yfinance history for {ticker!r}: {exc}") from exc

        logger.info("yfinance returned %d daily points for %s", len(points), ticker)
        return PriceSeries(ticker=ticker, date_range=date_range, points=points)
