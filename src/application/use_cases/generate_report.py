"""
Use-case: generate the multi-ticker market report.

Tickers are processed one after another in TickerSet order; each run of the
per-ticker pipeline completes before the next starts, so entry order always
matches selection order.  No per-ticker failure escapes execute(): the
pipeline converts upstream errors into fallback entries, and anything that
still escapes a run is converted here.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from src.application.report.pipeline import fallback_report
from src.application.report.samples import demo_analysis, populate_with_samples
from src.domain.entities.report import Report, ReportMode, TickerReport
from src.domain.entities.results import FailureKind, StageFailure
from src.domain.entities.stock_price import DateRange
from src.domain.entities.ticker import TickerSet
from src.domain.errors import EmptyTickerSet
from src.domain.ports.observability_port import IObservabilityHandler, NullObservabilityHandler

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GenerateReportUseCase:
    def __init__(
        self,
        pipeline: Any,
        observability: Optional[IObservabilityHandler] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """
        Args:
            pipeline:      Compiled graph returned by build_ticker_pipeline().
            observability: IObservabilityHandler implementation (e.g. Langfuse adapter).
            clock:         Source of the report timestamp.
        """
        self._pipeline = pipeline
        self._observability = observability or NullObservabilityHandler()
        self._clock = clock

    def execute(
        self,
        ticker_set: TickerSet,
        date_range: Optional[DateRange] = None,
        mode: ReportMode | str = ReportMode.LIVE,
    ) -> Report:
        """Build a report for every ticker in *ticker_set*.

        In demo mode an empty *ticker_set* is first filled with the sample
        tickers, and no network call is made.

        Raises:
            EmptyTickerSet: live mode with no ticker selected.
        """
        mode = ReportMode(mode)
        date_range = date_range or DateRange.trailing()

        if mode is ReportMode.DEMO:
            populate_with_samples(ticker_set)
            entries = [
                TickerReport(ticker=ticker, analysis=demo_analysis(ticker))
                for ticker in ticker_set
            ]
        else:
            if ticker_set.is_empty:
                raise EmptyTickerSet("At least one ticker is required for a live report")
            try:
                entries = [self._run_ticker(ticker, date_range) for ticker in ticker_set]
            finally:
                self._observability.flush()

        report = Report(
            generated_at=self._clock(),
            date_range=date_range,
            mode=mode,
            entries=tuple(entries),
        )
        logger.info(
            "Generated %s report for %s (%d fallback)",
            mode.value,
            ", ".join(report.tickers),
            report.fallback_count,
        )
        return report

    def _run_ticker(self, ticker: str, date_range: DateRange) -> TickerReport:
        try:
            state = self._pipeline.invoke(
                {"ticker": ticker, "date_range": date_range},
                config=self._run_config(ticker),
            )
            return state["report"]
        except Exception as exc:
            logger.exception("Report pipeline crashed for %s", ticker)
            failure = StageFailure(stage="pipeline", kind=FailureKind.UNEXPECTED, message=str(exc))
            return fallback_report(ticker, failure)

    def _run_config(self, ticker: str) -> dict:
        config: dict = {
            "run_name": f"ticker-report:{ticker}",
            "metadata": {
                "ticker": ticker,
                "langfuse_tags": ["stock-report"],
            },
        }
        callback = self._observability.as_callback()
        if callback is not None:
            config["callbacks"] = [callback]
        return config
