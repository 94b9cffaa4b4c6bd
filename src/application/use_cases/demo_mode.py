"""
Use-case: demo mode, driven entirely by cached sample content.

Demo output is the intended content rather than a failure fallback, so its
entries carry used_fallback=False.
"""

from typing import Optional

from src.application.report.samples import SAMPLE_TICKERS, populate_with_samples
from src.application.use_cases.generate_report import GenerateReportUseCase
from src.domain.entities.report import Report, ReportMode
from src.domain.entities.stock_price import DateRange
from src.domain.entities.ticker import TickerSet, normalize_ticker


class DemoModeAdapter:
    sample_tickers = SAMPLE_TICKERS

    def __init__(self, report_use_case: GenerateReportUseCase) -> None:
        self._report_use_case = report_use_case

    def populate(self, ticker_set: TickerSet) -> bool:
        """Fill an empty *ticker_set* with the sample tickers; returns whether it changed."""
        return populate_with_samples(ticker_set)

    def load_sample(self, ticker_set: TickerSet, symbol: str) -> bool:
        """Add a single sample ticker, as the demo-stock shortcuts do.

        Symbols without a cached sample are ignored.
        """
        ticker = normalize_ticker(symbol)
        if ticker not in self.sample_tickers:
            return False
        return ticker_set.add(ticker)

    def generate(self, ticker_set: TickerSet, date_range: Optional[DateRange] = None) -> Report:
        self.populate(ticker_set)
        return self._report_use_case.execute(ticker_set, date_range, mode=ReportMode.DEMO)
