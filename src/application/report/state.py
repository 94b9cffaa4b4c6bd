"""
LangGraph state for the per-ticker report pipeline.
langgraph is the orchestration framework and is allowed in the application layer.
"""

from typing import Optional, TypedDict

from src.domain.entities.analysis import AnalysisResult
from src.domain.entities.report import TickerReport
from src.domain.entities.results import StageFailure
from src.domain.entities.stock_price import DateRange, MetricsOrEmpty, PriceSeries


class TickerPipelineState(TypedDict, total=False):
    """State threaded through Fetch -> Derive -> Analyze -> Parse -> Assemble.

    failure: set by the first stage that returns Failed; routes the run to the
             fallback node, which produces the cached report entry.
    report:  the finished TickerReport, written by assemble or fallback.
    """

    ticker: str
    date_range: DateRange
    series: PriceSeries
    metrics: MetricsOrEmpty
    analysis_text: str
    analysis: AnalysisResult
    failure: Optional[StageFailure]
    report: TickerReport
