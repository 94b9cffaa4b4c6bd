"""
Use-case: standalone analysis of one ticker, outside a full report.

Unlike report generation there is no cached fallback here: a failed model
call returns the "analysis unavailable" body together with the error text.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from src.application.analysis.client import AnalysisClient
from src.application.analysis.parser import parse_analysis
from src.application.report.samples import unavailable_analysis
from src.domain.entities.analysis import AnalysisResult
from src.domain.entities.stock_price import EMPTY_METRICS, DateRange, MetricsOrEmpty, PriceSeries
from src.domain.entities.ticker import normalize_ticker
from src.domain.errors import UpstreamFailure
from src.domain.ports.stock_data_port import IPriceSeriesFetcher
from src.domain.services.metrics import derive_metrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StockAnalysis:
    ticker: str
    analysis: AnalysisResult
    metrics: MetricsOrEmpty
    raw_text: Optional[str] = None
    error: Optional[str] = None


class AnalyzeStockUseCase:
    def __init__(self, fetcher: IPriceSeriesFetcher, client: AnalysisClient) -> None:
        self._fetcher = fetcher
        self._client = client

    def execute(
        self,
        symbol: str,
        series: Optional[PriceSeries] = None,
        date_range: Optional[DateRange] = None,
    ) -> StockAnalysis:
        """Analyze *symbol*, fetching its series first unless *series* is supplied.

        Raises:
            ValueError: if *symbol* is blank.
        """
        ticker = normalize_ticker(symbol)
        if not ticker:
            raise ValueError("ticker is required")
        date_range = date_range or (series.date_range if series else DateRange.trailing())

        try:
            if series is None:
                series = self._fetcher.fetch(ticker, date_range)
            metrics = derive_metrics(series)
            text = self._client.analyze(ticker, metrics, date_range)
        except UpstreamFailure as exc:
            logger.warning("Analysis unavailable for %s: %s", ticker, exc)
            return StockAnalysis(
                ticker=ticker,
                analysis=unavailable_analysis(ticker),
                metrics=derive_metrics(series) if series is not None else EMPTY_METRICS,
                error=str(exc),
            )

        return StockAnalysis(
            ticker=ticker,
            analysis=parse_analysis(text),
            metrics=metrics,
            raw_text=text,
        )
