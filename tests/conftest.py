"""Test configuration helpers, fakes and fixtures."""

from datetime import date, timedelta
from typing import Any, Dict, Optional

import pytest
from langchain_core.messages import AIMessage

from src.domain.entities.stock_price import DateRange, PricePoint, PriceSeries
from src.domain.errors import UpstreamUnavailable
from src.domain.ports.llm_port import ILanguageModel
from src.domain.ports.stock_data_port import IPriceSeriesFetcher

SAMPLE_REPLY = (
    "SUMMARY: The stock rallied steadily over the period.\n\n"
    "TECHNICAL: Price holds above the 20-day moving average.\n\n"
    "RECOMMENDATION: BUY - momentum remains constructive."
)


def make_series(ticker: str, closes, date_range: Optional[DateRange] = None) -> PriceSeries:
    """Daily series with the given closes; high/low bracket the close by 1."""
    date_range = date_range or DateRange(start=date(2025, 1, 1), end=date(2025, 1, 31))
    points = tuple(
        PricePoint(
            date=date_range.start + timedelta(days=i),
            open=close,
            high=close + 1,
            low=close - 1,
            close=close,
            volume=1000 * (i + 1),
        )
        for i, close in enumerate(closes)
    )
    return PriceSeries(ticker=ticker, date_range=date_range, points=points)


class FakeFetcher(IPriceSeriesFetcher):
    """Serves canned closes per ticker; tickers listed in *failing* raise UpstreamUnavailable."""

    def __init__(self, closes: Dict[str, list], failing: Optional[set] = None) -> None:
        self.closes = closes
        self.failing = failing or set()
        self.calls: list = []
        self.closed = False

    def fetch(self, ticker: str, date_range: DateRange) -> PriceSeries:
        self.calls.append(ticker)
        if ticker in self.failing:
            raise UpstreamUnavailable(f"price service down for {ticker}")
        return make_series(ticker, self.closes.get(ticker, []), date_range)

    def close(self) -> None:
        self.closed = True


class FakeLanguageModel(ILanguageModel):
    """Returns *reply* for every call, or raises *error* when set."""

    def __init__(self, reply: Any = SAMPLE_REPLY, error: Optional[Exception] = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list = []

    def invoke(self, messages: list[Any]) -> Any:
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.reply)


@pytest.fixture
def date_range() -> DateRange:
    return DateRange(start=date(2025, 1, 1), end=date(2025, 1, 31))


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher(
        {
            "AAPL": [100.0, 104.0, 110.0],
            "TSLA": [250.0, 240.0],
            "NVDA": [130.0, 135.0, 140.0, 138.0],
        }
    )


@pytest.fixture
def llm() -> FakeLanguageModel:
    return FakeLanguageModel()
